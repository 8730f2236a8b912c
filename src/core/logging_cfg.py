from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    # 0 = silent (default), 1 = INFO, 2 = DEBUG
    level_map = {"0": logging.CRITICAL, "1": logging.INFO, "2": logging.DEBUG}
    lvl = level_map.get(os.getenv("LOG_LEVEL", "0"), logging.CRITICAL)

    log_file: Optional[str] = os.getenv("LOG_FILE")
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(lvl)


class _MetricAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Any) -> Any:
        ctx = " ".join(f"{k}={v}" for k, v in (self.extra or {}).items() if v)
        return (f"[{ctx}] {msg}" if ctx else msg), kwargs


def metric_logger(
    base: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None, **fields: Any
) -> logging.LoggerAdapter:
    """Logger labelled with metric/run fields, e.g. ``[metric=error-rate run=canary-1]``."""
    if isinstance(base, logging.LoggerAdapter):
        merged = {**(base.extra or {}), **fields}
        return _MetricAdapter(base.logger, merged)
    return _MetricAdapter(base or logging.getLogger("metrics"), fields)
