from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from core.logging_cfg import metric_logger
from core.window import compute_window
from providers.datadog import DatadogTransportError, RawResponse, query_metric

from .base import AnalysisRun, Measurement, MetricQuerySpec
from .classify import Outcome, OutcomeKind, classify
from .evaluate import Evaluator, evaluate
from .measurement import finish_measurement, start_measurement

PROVIDER_TYPE = "Datadog"


class DatadogProvider:
    """
    Evaluates a metric against Datadog's timeseries query API.

    `run` never raises: transport, auth, query and expression problems all
    come back as an Error measurement with a message.
    """

    def __init__(
        self,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
        evaluator: Evaluator = evaluate,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.logger = logger
        self.evaluator = evaluator
        self.session = session
        self.timeout = timeout

    def type(self) -> str:
        return PROVIDER_TYPE

    def _log(self, analysis_run: AnalysisRun, metric: MetricQuerySpec) -> logging.LoggerAdapter:
        return metric_logger(self.logger, metric=metric.name, run=analysis_run.name)

    def _outcome(self, metric: MetricQuerySpec) -> Outcome:
        try:
            window = compute_window(metric.interval)
        except ValueError as e:
            return Outcome(OutcomeKind.QUERY_ERROR, message=str(e))

        response: Union[RawResponse, DatadogTransportError]
        try:
            response = query_metric(metric, window, session=self.session, timeout=self.timeout)
        except DatadogTransportError as e:
            response = e
        return classify(response, metric, self.evaluator)

    def run(self, analysis_run: AnalysisRun, metric: MetricQuerySpec) -> Measurement:
        log = self._log(analysis_run, metric)
        measurement = start_measurement()
        outcome = self._outcome(metric)
        if outcome.is_error:
            log.warning("measurement error (%s): %s", outcome.kind.value, outcome.message)
        else:
            log.info("measurement %s with value %s", outcome.kind.value, outcome.value)
        return finish_measurement(measurement, outcome)

    def resume(self, analysis_run: AnalysisRun, metric: MetricQuerySpec, measurement: Measurement) -> Measurement:
        self._log(analysis_run, metric).warning("Datadog provider should not execute the Resume method")
        return measurement

    def terminate(self, analysis_run: AnalysisRun, metric: MetricQuerySpec, measurement: Measurement) -> Measurement:
        self._log(analysis_run, metric).warning("Datadog provider should not execute the Terminate method")
        return measurement

    def garbage_collect(self, analysis_run: AnalysisRun, metric: MetricQuerySpec, limit: int) -> None:
        return None

    def get_metadata(self, metric: MetricQuerySpec) -> Dict[str, Any] | None:
        return None
