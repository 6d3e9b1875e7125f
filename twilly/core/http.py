"""
twilly.core.http
─────────────────
HTTP primitives shared by the dispatch layer and the resource modules:
status constants, the method enum, and the base URLs of the Twilio APIs
this package talks to.
"""
from __future__ import annotations

from enum import Enum


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the client and shell reason about."""

    # 2xx
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    PRECONDITION_FAILED = 412
    TOO_MANY_REQUESTS = 429

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


def is_success(status: int) -> bool:
    return 200 <= status < 300


# ── Methods ────────────────────────────────────────────────────────────────

class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def uses_query(self) -> bool:
        """GET carries parameters in the query string; all others in a form body."""
        return self is Method.GET


# ── Base URLs ──────────────────────────────────────────────────────────────

API_BASE = "https://api.twilio.com"
CONVERSATIONS_BASE = "https://conversations.twilio.com/v1"
SYNC_BASE = "https://sync.twilio.com/v1"
SERVERLESS_BASE = "https://serverless.twilio.com/v1"


__all__ = [
    "HTTP",
    "is_success",
    "Method",
    "API_BASE",
    "CONVERSATIONS_BASE",
    "SYNC_BASE",
    "SERVERLESS_BASE",
]
