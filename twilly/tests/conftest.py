"""
twilly test configuration.

No test talks to Twilio: every Client is built on an httpx.MockTransport
that serves queued responses and records the requests it receives.
"""
from __future__ import annotations

import json
import os
from typing import Any

import httpx
import pytest

# ── Environment defaults ──────────────────────────────────────────────────
# These must be set before any twilly settings are read.

os.environ.setdefault("TWILLY_LOG_LEVEL", "WARNING")
os.environ.setdefault("TWILLY_BULK_DELAY", "0")
os.environ.setdefault("TWILLY_TIMEOUT", "5")

ACCOUNT_SID = "AC" + "a" * 32
AUTH_TOKEN = "b" * 32


# ── Fake Twilio ───────────────────────────────────────────────────────────

class FakeTwilio:
    """Serves queued responses in order and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Any] = []

    def queue(
        self,
        status: int = 200,
        json_body: Any = None,
        *,
        content: bytes | None = None,
    ) -> None:
        if content is None:
            content = b"" if json_body is None else json.dumps(json_body).encode()
        self._responses.append((status, content))

    def fail(self, exc_type: type[httpx.RequestError] = httpx.ConnectError) -> None:
        """Queue a transport failure instead of a response."""
        self._responses.append(exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        queued = self._responses.pop(0)
        if isinstance(queued, type):
            raise queued("connection refused", request=request)
        status, content = queued
        return httpx.Response(status, content=content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def form(self, index: int = -1) -> dict[str, str]:
        """The form body of a recorded request as a dict."""
        request = self.requests[index]
        return dict(httpx.QueryParams(request.content.decode()))


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Fresh settings per test, without credentials leaking in from the shell."""
    from twilly.core.config import _reset_config

    monkeypatch.delenv("TWILIO_ACCOUNT_SID", raising=False)
    monkeypatch.delenv("TWILIO_AUTH_TOKEN", raising=False)
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def credentials():
    from twilly.core.credentials import Credentials
    return Credentials.build(ACCOUNT_SID, AUTH_TOKEN)


@pytest.fixture
def fake_twilio():
    return FakeTwilio()


@pytest.fixture
def twilio(credentials, fake_twilio):
    """A Client whose requests are served by fake_twilio."""
    from twilly.client import Client
    return Client(credentials, transport=httpx.MockTransport(fake_twilio.handler))
