from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


class DecodeError(ValueError):
    pass


@dataclass(frozen=True)
class Point:
    timestamp_ms: int
    value: Optional[float]


@dataclass(frozen=True)
class Series:
    pointlist: Tuple[Point, ...] = ()


@dataclass(frozen=True)
class DecodedSeriesResponse:
    status: str = ""
    series: Tuple[Series, ...] = ()
    error_message: Optional[str] = None


def _number(v: Any, what: str) -> float:
    # bool is an int subclass; true/false are not samples
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise DecodeError(f"Could not parse JSON body: {what} is not a number: {v!r}")
    try:
        return float(v)
    except OverflowError as e:
        raise DecodeError(f"Could not parse JSON body: {what} out of range") from e


def _point(raw: Any) -> Point:
    if not isinstance(raw, list) or len(raw) < 2:
        raise DecodeError(f"Could not parse JSON body: point is not a [timestamp, value] pair: {raw!r}")
    ts = _number(raw[0], "timestamp")
    if not math.isfinite(ts):
        raise DecodeError(f"Could not parse JSON body: invalid timestamp {raw[0]!r}")
    value = None if raw[1] is None else _number(raw[1], "value")
    return Point(timestamp_ms=int(ts), value=value)


def _series(raw: Any) -> Series:
    if not isinstance(raw, dict):
        raise DecodeError("Could not parse JSON body: series entry is not an object")
    points = raw.get("pointlist")
    if points is None:
        points = []
    if not isinstance(points, list):
        raise DecodeError("Could not parse JSON body: pointlist is not a list")
    return Series(pointlist=tuple(_point(p) for p in points))


def _error_message(obj: dict) -> Optional[str]:
    err = obj.get("error")
    if err:
        return str(err)
    errs = obj.get("errors")
    if isinstance(errs, list) and errs:
        return "; ".join(str(e) for e in errs)
    return None


def decode_response(body: bytes | str) -> DecodedSeriesResponse:
    try:
        obj = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Could not parse JSON body: {e}") from e
    if not isinstance(obj, dict):
        raise DecodeError(f"Could not parse JSON body: expected an object, got {type(obj).__name__}")

    raw_series = obj.get("series")
    if raw_series is None:
        raw_series = []
    if not isinstance(raw_series, list):
        raise DecodeError("Could not parse JSON body: series is not a list")

    series: List[Series] = [_series(s) for s in raw_series]
    return DecodedSeriesResponse(
        status=str(obj.get("status") or ""),
        series=tuple(series),
        error_message=_error_message(obj),
    )
