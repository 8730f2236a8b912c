import dataclasses

import pytest

from metrics.base import AnalysisPhase
from metrics.classify import Outcome, OutcomeKind
from metrics.measurement import finish_measurement, format_value, start_measurement


@pytest.mark.parametrize(
    "v, s",
    [
        (0.0003332881882246533, "0.0003332881882246533"),
        (0.006121378742186943, "0.006121378742186943"),
        (1e-05, "0.00001"),
        (5.0, "5"),
        (123.456, "123.456"),
        (1e22, "10000000000000000000000"),
        (-2.5, "-2.5"),
        (float("nan"), "NaN"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
    ],
)
def test_format_value(v, s):
    assert format_value(v) == s


def test_start_is_running(fixed_clock):
    m = start_measurement()
    assert m.phase is AnalysisPhase.RUNNING
    assert m.started_at == fixed_clock
    assert m.finished_at is None


@pytest.mark.parametrize(
    "kind, phase", [(OutcomeKind.SUCCESS, AnalysisPhase.SUCCESSFUL), (OutcomeKind.FAILURE, AnalysisPhase.FAILED)]
)
def test_finish_with_value(fixed_clock, kind, phase):
    started = start_measurement()
    m = finish_measurement(started, Outcome(kind, value=0.25))
    assert m.phase is phase
    assert m.value == "0.25"
    assert m.message == ""
    assert m.finished_at == fixed_clock
    assert started.phase is AnalysisPhase.RUNNING


@pytest.mark.parametrize(
    "kind",
    [OutcomeKind.QUERY_ERROR, OutcomeKind.AUTH_ERROR, OutcomeKind.TRANSPORT_ERROR, OutcomeKind.INCONCLUSIVE],
)
def test_errors_finish_as_error_phase(fixed_clock, kind):
    m = finish_measurement(start_measurement(), Outcome(kind, value=1.0, message="went wrong"))
    assert m.phase is AnalysisPhase.ERROR
    assert m.message == "went wrong"
    assert m.value == ""
    assert m.finished_at is not None


def test_measurement_is_frozen(fixed_clock):
    m = finish_measurement(start_measurement(), Outcome(OutcomeKind.SUCCESS, value=1.0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.phase = AnalysisPhase.FAILED
