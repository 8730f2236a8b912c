from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from providers.datadog import DatadogTransportError, RawResponse

from .base import MetricQuerySpec, format_value
from .decode import DecodedSeriesResponse, DecodeError, decode_response
from .evaluate import Evaluator, evaluate

AUTH_ERROR_CODES = {401, 403}


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    QUERY_ERROR = "query_error"
    AUTH_ERROR = "auth_error"
    TRANSPORT_ERROR = "transport_error"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    value: Optional[float] = None
    message: str = ""

    @property
    def is_error(self) -> bool:
        return self.kind not in (OutcomeKind.SUCCESS, OutcomeKind.FAILURE)


def _query_error(message: str) -> Outcome:
    return Outcome(OutcomeKind.QUERY_ERROR, message=message)


def last_value(decoded: DecodedSeriesResponse) -> Optional[float]:
    """Value of the last point, by position, of the first series."""
    if not decoded.series or not decoded.series[0].pointlist:
        return None
    return decoded.series[0].pointlist[-1].value


def evaluate_conditions(value: float, metric: MetricQuerySpec, evaluator: Evaluator = evaluate) -> Outcome:
    success, failure = metric.success_condition.strip(), metric.failure_condition.strip()
    if not success and not failure:
        return Outcome(OutcomeKind.SUCCESS, value=value)

    bindings = {"result": value}
    try:
        # success wins when both conditions would match
        if success and evaluator(success, bindings):
            return Outcome(OutcomeKind.SUCCESS, value=value)
        if failure and evaluator(failure, bindings):
            return Outcome(OutcomeKind.FAILURE, value=value)
    except Exception as e:  # injected evaluators may raise anything
        return _query_error(str(e) or e.__class__.__name__)

    if not failure:
        return Outcome(OutcomeKind.FAILURE, value=value)
    if not success:
        return Outcome(OutcomeKind.SUCCESS, value=value)
    return Outcome(
        OutcomeKind.INCONCLUSIVE,
        value=value,
        message=f"value {format_value(value)} matched neither success nor failure condition",
    )


def classify(
    response: Union[RawResponse, DatadogTransportError],
    metric: MetricQuerySpec,
    evaluator: Evaluator = evaluate,
) -> Outcome:
    if isinstance(response, DatadogTransportError):
        return Outcome(OutcomeKind.TRANSPORT_ERROR, message=f"failed to query Datadog: {response}")

    status = response.status_code
    if status in AUTH_ERROR_CODES:
        return Outcome(
            OutcomeKind.AUTH_ERROR,
            message=f"received authentication error response code: {status} {response.text}",
        )
    if not 200 <= status < 300:
        return _query_error(f"received non 2xx response code: {status} {response.text}")

    try:
        decoded = decode_response(response.body)
    except DecodeError as e:
        return _query_error(str(e))

    if decoded.error_message and not decoded.series:
        return _query_error(f"Datadog returned an error: {decoded.error_message}")

    value = last_value(decoded)
    if value is None:
        return _query_error(f"Datadog returned no value: {response.text}")
    return evaluate_conditions(value, metric, evaluator)
