from __future__ import annotations

from dataclasses import replace

from core import clock

from .base import AnalysisPhase, Measurement, format_value
from .classify import Outcome, OutcomeKind


def start_measurement() -> Measurement:
    return Measurement(phase=AnalysisPhase.RUNNING, started_at=clock.now())


def finish_measurement(m: Measurement, outcome: Outcome) -> Measurement:
    finished_at = clock.now()
    if outcome.kind is OutcomeKind.SUCCESS or outcome.kind is OutcomeKind.FAILURE:
        phase = AnalysisPhase.SUCCESSFUL if outcome.kind is OutcomeKind.SUCCESS else AnalysisPhase.FAILED
        value = "" if outcome.value is None else format_value(outcome.value)
        return replace(m, phase=phase, value=value, finished_at=finished_at)
    return replace(m, phase=AnalysisPhase.ERROR, message=outcome.message, finished_at=finished_at)
