from typing import Any, Callable, Dict

from .base import AnalysisPhase, AnalysisRun, Measurement, MetricQuerySpec, Provider
from .datadog import PROVIDER_TYPE as DATADOG, DatadogProvider

__all__ = [
    "AnalysisPhase",
    "AnalysisRun",
    "DatadogProvider",
    "Measurement",
    "MetricQuerySpec",
    "Provider",
    "new_provider",
    "provider_registry",
]


def provider_registry() -> Dict[str, Callable[..., Provider]]:
    return {
        DATADOG: DatadogProvider,
    }


def new_provider(kind: str, **kwargs: Any) -> Provider:
    factories = provider_registry()
    if kind not in factories:
        raise ValueError(f"unknown metric provider type: {kind!r}")
    return factories[kind](**kwargs)
