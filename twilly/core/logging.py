"""
twilly.core.logging
────────────────────
Structured logs for the client. The library itself only logs at debug
level (one event per request, response and page), so a default WARNING
threshold keeps the terminal client quiet.

Minimal stack: structlog over the stdlib root logger (stderr)
Configure via: TWILLY_LOG_LEVEL, TWILLY_LOG_FORMAT=console|json
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from twilly.core.config import get_config
from twilly.core.redact import structlog_redact_processor


# ── Configuration ─────────────────────────────────────────────────────────────

def _configure_structlog(level: str | None = None) -> None:
    settings = get_config()
    log_level = (level or settings.log_level).upper()
    numeric_level = getattr(logging, log_level, logging.WARNING)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog_redact_processor,
    ]

    if settings.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stdout belongs to the terminal client's menus
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [
        h for h in root_logger.handlers if not getattr(h, "_twilly", False)
    ]
    handler._twilly = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def configure_logging(level: str | None = None) -> None:
    """
    (Re)configure logging explicitly, e.g. from a --log-level flag.
    get_logger() calls this lazily with the configured defaults.
    """
    global _configured
    _configure_structlog(level)
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.debug("twilio.request", method="GET", url=url)
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name or __name__)


def bind_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to the current async/thread context.
    All subsequent log calls in this context will include these fields.

    Usage:
        bind_context(account_sid=client.account_sid)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


__all__ = ["configure_logging", "get_logger", "bind_context"]
