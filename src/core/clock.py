from __future__ import annotations

from datetime import datetime, timezone


def now() -> datetime:
    return datetime.now(timezone.utc)


def unix_now() -> int:
    # Resolved through the module global so tests can pin `now`
    return int(now().timestamp())
