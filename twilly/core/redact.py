"""
twilly.core.redact
───────────────────
Secret redaction for log records. Auth tokens travel in every request as
HTTP basic auth, so anything that could carry them is scrubbed before a log
line is rendered.
"""
from __future__ import annotations

import re
from typing import Any

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "auth_token", "authtoken", "password", "secret", "token",
    "authorization", "auth", "api_key", "credential", "credentials",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Basic auth header values
    (re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.I), "Basic [REDACTED]"),
    # Credentials embedded in a URL
    (re.compile(r"(https?://)[^:/@\s]+:[^@\s]+@", re.I), r"\1[REDACTED]@"),
    # Generic key=value secrets
    (re.compile(r"(auth_?token|password|secret)\s*=\s*[^\s&\"']+", re.I), r"\1=[REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def scrub_string(text: str) -> str:
    """Apply the inline patterns to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _scrub(value: Any, keys: frozenset[str], deep: bool) -> Any:
    if isinstance(value, str):
        return scrub_string(value)
    if not deep:
        return value
    if isinstance(value, dict):
        return redact_dict(value, keys, deep=True)
    if isinstance(value, (list, tuple)):
        return type(value)(_scrub(item, keys, deep) for item in value)
    return value


def redact_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
    *,
    deep: bool = True,
) -> dict[str, Any]:
    """
    Copy of *data* with the values of sensitive keys replaced by REDACTED
    and every string value pattern-scrubbed. Containers are walked when
    *deep* is True.
    """
    keys = _SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {
        key: REDACTED if key.lower() in keys else _scrub(value, keys, deep)
        for key, value in data.items()
    }


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor; runs ahead of the renderer."""
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
