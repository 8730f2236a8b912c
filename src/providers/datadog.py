from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

import requests
import urllib3

if TYPE_CHECKING:
    from core.window import TimeWindow
    from metrics.base import MetricQuerySpec

DEFAULT_ADDRESS = "https://api.datadoghq.com"
QUERY_PATH = "/api/v1/query"
API_KEY_HEADER = "DD-API-KEY"
APP_KEY_HEADER = "DD-APPLICATION-KEY"

log = logging.getLogger(__name__)

# urllib3 lets some URL parsing errors through requests unwrapped
_TRANSPORT_ERRORS = (requests.RequestException, urllib3.exceptions.HTTPError, ValueError, UnicodeError)


class DatadogError(RuntimeError):
    pass


class DatadogTransportError(DatadogError):
    pass


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def _address(spec: MetricQuerySpec) -> str:
    addr = spec.address or os.getenv("DATADOG_ADDRESS") or DEFAULT_ADDRESS
    return addr.rstrip("/")


def _api_key(spec: MetricQuerySpec) -> str:
    # Support both names
    return spec.api_key or os.getenv("DD_API_KEY") or os.getenv("DATADOG_API_KEY") or ""


def _app_key(spec: MetricQuerySpec) -> str:
    return spec.app_key or os.getenv("DD_APP_KEY") or os.getenv("DATADOG_APP_KEY") or ""


def default_timeout() -> float:
    try:
        return float(os.getenv("DATADOG_TIMEOUT", "30"))
    except ValueError:
        return 30.0


def build_request(spec: MetricQuerySpec, window: TimeWindow) -> Dict[str, Any]:
    return {
        "url": _address(spec) + QUERY_PATH,
        "params": {"query": spec.query, "from": str(window.start), "to": str(window.end)},
        "headers": {
            "Content-Type": "application/json",
            API_KEY_HEADER: _api_key(spec),
            APP_KEY_HEADER: _app_key(spec),
        },
    }


def _exchange(session: Any, request: Dict[str, Any], timeout: float) -> RawResponse:
    try:
        resp = session.get(request["url"], params=request["params"], headers=request["headers"], timeout=timeout)
    except _TRANSPORT_ERRORS as e:
        raise DatadogTransportError(f"{e.__class__.__name__}: {e}") from e
    try:
        return RawResponse(status_code=int(resp.status_code), body=resp.content or b"")
    except _TRANSPORT_ERRORS as e:
        # body streaming can still fail after headers arrived
        raise DatadogTransportError(f"{e.__class__.__name__}: {e}") from e
    finally:
        resp.close()


def query_metric(
    spec: MetricQuerySpec,
    window: TimeWindow,
    session: Optional[Any] = None,
    timeout: Optional[float] = None,
) -> RawResponse:
    """
    Run one Datadog timeseries query for `window`.

    Any completed HTTP exchange is returned as a RawResponse, whatever its
    status code. Connection, DNS and timeout failures raise
    DatadogTransportError. There is no retry.
    """
    request = build_request(spec, window)
    timeout = default_timeout() if timeout is None else timeout
    log.debug("GET %s query=%r from=%s to=%s", request["url"], spec.query, window.start, window.end)
    if session is not None:
        return _exchange(session, request, timeout)
    with requests.Session() as s:
        return _exchange(s, request, timeout)
