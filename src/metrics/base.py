from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union


class AnalysisPhase(str, Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCESSFUL = "Successful"
    FAILED = "Failed"
    ERROR = "Error"
    INCONCLUSIVE = "Inconclusive"


@dataclass(frozen=True)
class MetricQuerySpec:
    query: str
    name: str = ""
    interval: Optional[Union[int, str]] = None
    api_key: str = ""
    app_key: str = ""
    address: str = ""
    success_condition: str = ""
    failure_condition: str = ""


@dataclass(frozen=True)
class AnalysisRun:
    name: str = ""
    namespace: str = ""


@dataclass(frozen=True)
class Measurement:
    phase: AnalysisPhase
    started_at: datetime
    value: str = ""
    message: str = ""
    finished_at: Optional[datetime] = None


class Provider(Protocol):
    def type(self) -> str: ...

    def run(self, analysis_run: AnalysisRun, metric: MetricQuerySpec) -> Measurement: ...

    def resume(self, analysis_run: AnalysisRun, metric: MetricQuerySpec, measurement: Measurement) -> Measurement: ...

    def terminate(
        self, analysis_run: AnalysisRun, metric: MetricQuerySpec, measurement: Measurement
    ) -> Measurement: ...

    def garbage_collect(self, analysis_run: AnalysisRun, metric: MetricQuerySpec, limit: int) -> None: ...

    def get_metadata(self, metric: MetricQuerySpec) -> Dict[str, Any] | None: ...


def format_value(v: float) -> str:
    """
    Shortest round-trip decimal form of `v`, without exponent.

    0.0003332881882246533 -> "0.0003332881882246533", 1e-05 -> "0.00001",
    5.0 -> "5".
    """
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    s = format(Decimal(repr(v)), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s

