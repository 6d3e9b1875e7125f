"""
twilly_cli.pacing
──────────────────
Fixed delay between the requests of a bulk flow (close all, delete all) so
large batches stay clear of Twilio's concurrency limits.

Configure via: TWILLY_BULK_DELAY (seconds, default 1)
"""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import TypeVar

from twilly.core.config import get_config

T = TypeVar("T")


class Pacer:
    def __init__(self, delay: float | None = None) -> None:
        self.delay = get_config().bulk_delay_seconds if delay is None else delay

    async def pause(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    async def each(self, items: Iterable[T]) -> AsyncIterator[T]:
        """Yield *items* one by one, pausing before every item but the first."""
        for position, item in enumerate(items):
            if position:
                await self.pause()
            yield item


__all__ = ["Pacer"]
