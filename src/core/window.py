from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from . import clock

DEFAULT_INTERVAL_SECONDS = 300

_DURATION = re.compile(r"(\d+)(h|m|s)")
_UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}


@dataclass(frozen=True)
class TimeWindow:
    start: int
    end: int


def parse_interval(value: Optional[Union[int, str]]) -> int:
    """
    Normalize an interval to seconds.

    Accepts None, an int, a digit string, or a duration such as "10m" or
    "1h30m". Missing or non-positive values fall back to the default.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_INTERVAL_SECONDS
    if isinstance(value, int):
        return value if value > 0 else DEFAULT_INTERVAL_SECONDS

    text = str(value).strip().lower()
    if not text:
        return DEFAULT_INTERVAL_SECONDS
    if text.isdigit():
        secs = int(text)
    else:
        parts = _DURATION.findall(text)
        if not parts or "".join(n + u for n, u in parts) != text:
            raise ValueError(f"invalid interval: {value!r}")
        secs = sum(int(n) * _UNIT_SECONDS[u] for n, u in parts)
    return secs if secs > 0 else DEFAULT_INTERVAL_SECONDS


def compute_window(interval: Optional[Union[int, str]] = None) -> TimeWindow:
    secs = parse_interval(interval)
    to = clock.unix_now()
    return TimeWindow(start=to - secs, end=to)
