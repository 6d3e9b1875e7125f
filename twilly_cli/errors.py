"""
twilly_cli.errors
──────────────────
How the terminal client reacts to a failed Twilio call: a 404 is reported
and the menu carries on; anything else ends the session.
"""
from __future__ import annotations

import sys
from collections.abc import Awaitable
from typing import NoReturn, TypeVar

from twilly.core.errors import TwilioError, is_not_found

T = TypeVar("T")


def fatal(error: BaseException) -> NoReturn:
    print(error, file=sys.stderr)
    raise SystemExit(1)


def report(error: TwilioError, not_found_message: str) -> None:
    """Print *not_found_message* for a 404; any other error is fatal."""
    if is_not_found(error):
        print(not_found_message)
        print()
        return
    fatal(error)


async def or_exit(call: Awaitable[T]) -> T:
    """
    Await a Twilio call whose failure leaves nothing sensible to do.

    Usage:
        accounts = await or_exit(twilio.accounts().list())
    """
    try:
        return await call
    except TwilioError as exc:
        fatal(exc)


__all__ = ["fatal", "report", "or_exit"]
