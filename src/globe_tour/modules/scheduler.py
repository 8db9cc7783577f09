"""Scheduler backed by an asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Callable

from globe_tour.core.interfaces import Scheduler, TimerHandle


class AsyncioTimerHandle(TimerHandle):
    """Wraps ``asyncio.TimerHandle``."""

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Timers on an asyncio loop; all callbacks run on the loop's thread.

    Args:
        loop: Loop to schedule on. Defaults to the running loop, so the
            scheduler must be created from inside a coroutine when omitted.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def now_ms(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = self._loop.call_later(max(0.0, delay_ms) / 1000.0, callback)
        return AsyncioTimerHandle(handle)
