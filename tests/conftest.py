from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

import core.clock as clock

FIXED_UNIX = 1599076435
API_KEY = "a63676c75786a66c3832753378667878"
APP_KEY = "71747a306331793561613434626c6b6538677377"


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, status_code=200, body="", exc=None):
        self.status_code, self.body, self.exc = status_code, body, exc
        self.calls = []
        self.responses = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(SimpleNamespace(url=url, params=params, headers=headers, timeout=timeout))
        if self.exc is not None:
            raise self.exc
        r = FakeResponse(self.status_code, self.body)
        self.responses.append(r)
        return r

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture
def fixed_clock(monkeypatch):
    t = datetime.fromtimestamp(FIXED_UNIX, tz=timezone.utc)
    monkeypatch.setattr(clock, "now", lambda: t)
    return t
