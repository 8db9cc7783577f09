"""Manually advanced virtual clock."""

from __future__ import annotations

import heapq
import itertools
from typing import Callable

from globe_tour.core.interfaces import Scheduler, TimerHandle


class ManualTimerHandle(TimerHandle):
    """Handle for a timer on a ``ManualScheduler``."""

    def __init__(self, due_ms: float, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic scheduler whose clock only moves when told to.

    Timers fire in order of due time, ties broken by scheduling order.
    Timers scheduled by a callback fire within the same ``advance`` call
    when they fall due before its target time.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._queue: list[tuple[float, int, ManualTimerHandle]] = []
        self._seq = itertools.count()
        self._fired = 0

    def now_ms(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = ManualTimerHandle(self._now + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Timers scheduled and not cancelled."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    @property
    def fired(self) -> int:
        return self._fired

    def next_due(self) -> float | None:
        for due, _, handle in sorted(self._queue):
            if not handle.cancelled:
                return due
        return None

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward by ``delta_ms``; returns callbacks fired."""
        if delta_ms < 0:
            raise ValueError("Cannot move a clock backwards")
        return self.advance_to(self._now + delta_ms)

    def advance_to(self, target_ms: float) -> int:
        """Move the clock to ``target_ms``, firing everything due on the way."""
        if target_ms < self._now:
            raise ValueError(f"Cannot move clock from {self._now} back to {target_ms}")
        fired = 0
        while self._queue and self._queue[0][0] <= target_ms:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            fired += 1
        self._now = target_ms
        self._fired += fired
        return fired
