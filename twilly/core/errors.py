"""
twilly.core.errors
───────────────────
Error taxonomy for every Twilio call. Each failure is exactly one of four
kinds: the request never got a response (network), Twilio answered with an
error envelope (api), a body could not be read into the expected shape
(parse), or the caller's arguments were rejected before sending (validation).

Credential and settings problems are not part of that taxonomy; they raise
ConfigurationError at construction time.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from twilly.core.http import HTTP


# ── Api error body ────────────────────────────────────────────────────────────

class TwilioApiError(BaseModel):
    """Error envelope returned by Twilio with any non-2xx status."""

    code: int
    message: str
    more_info: str
    status: int

    def __str__(self) -> str:
        return (
            f"{self.status} from Twilio. ({self.code}) {self.message}. "
            f"For more info see: {self.more_info}"
        )


# ── Kinds ─────────────────────────────────────────────────────────────────────

class ErrorKind(str, Enum):
    NETWORK = "network"
    API = "api"
    PARSE = "parse"
    VALIDATION = "validation"


# ── Base error ────────────────────────────────────────────────────────────────

class TwilioError(Exception):
    """
    Base class for every error raised by a Twilio call. Every error has:
    - kind: one of the four ErrorKind values
    - code: stable machine-readable string (snake_case)
    - user_message: the human-readable rendering, also str(error)
    - detail: internal context (the underlying cause where there is one)
    """

    kind: ErrorKind
    code: str = "twilio_error"

    def __init__(
        self,
        user_message: str,
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(user_message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "kind": self.kind.value,
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class NetworkError(TwilioError):
    """No response was received (DNS, connect, TLS, timeout, broken stream)."""
    kind = ErrorKind.NETWORK
    code = "network_error"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            f"Network error reaching Twilio: {cause}",
            detail=repr(cause),
        )


class ApiError(TwilioError):
    """Twilio responded with a non-2xx status and a well-formed error body."""
    kind = ErrorKind.API
    code = "api_error"

    def __init__(self, error: TwilioApiError) -> None:
        self.error = error
        super().__init__(f"Error: {error}", twilio_code=error.code)

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def twilio_code(self) -> int:
        return self.error.code

    @property
    def more_info(self) -> str:
        return self.error.more_info

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["error"]["twilio"] = self.error.model_dump()
        return d


class ParseError(TwilioError):
    """A response body could not be read into the expected shape."""
    kind = ErrorKind.PARSE
    code = "parse_error"

    def __init__(self, cause: BaseException, status: int | None = None) -> None:
        self.cause = cause
        self.status = status
        super().__init__(f"Unable to parse response: {cause}", detail=repr(cause))


class ValidationError(TwilioError):
    """Caller-supplied arguments were rejected before any request was sent."""
    kind = ErrorKind.VALIDATION
    code = "validation_error"

    def __init__(self, message: str, fields: dict | None = None) -> None:
        self.fields = fields or {}
        super().__init__(f"Validation error for provided arguments: {message}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class ConfigurationError(ValueError):
    """Invalid credentials or settings detected at construction."""


# ── Predicates ────────────────────────────────────────────────────────────────

def is_not_found(error: BaseException) -> bool:
    """True when *error* is a Twilio api error carrying status 404."""
    return isinstance(error, ApiError) and error.status == HTTP.NOT_FOUND


__all__ = [
    "TwilioApiError",
    "ErrorKind",
    "TwilioError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "ValidationError",
    "ConfigurationError",
    "is_not_found",
]
