"""Generation-tagged timer registry.

Each component that schedules work owns one ``TimerRegistry``. Every
callback is wrapped with the generation that was current when it was
scheduled; ``cancel_all()`` cancels the underlying handles *and* bumps
the generation, so a callback that slips past cancellation (or a
scheduler that ignores ``cancel``) still cannot run after teardown.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from globe_tour.core.interfaces import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class TimerRegistry:
    """Tracks the outstanding timers of a single owner."""

    def __init__(self, scheduler: Scheduler, owner: str = "timers") -> None:
        self._scheduler = scheduler
        self._owner = owner
        self._generation = 0
        self._ids = itertools.count(1)
        self._handles: dict[int, TimerHandle] = {}
        self._tags: dict[int, str] = {}

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active_count(self) -> int:
        """Number of timers scheduled but not yet fired or cancelled."""
        return len(self._handles)

    def active_tags(self) -> list[str]:
        return [self._tags[timer_id] for timer_id in sorted(self._handles)]

    def schedule(
        self,
        delay_ms: float,
        callback: Callable[[], None],
        tag: str = "",
    ) -> int:
        """Schedule ``callback`` and return the timer id."""
        timer_id = next(self._ids)
        generation = self._generation

        def fire() -> None:
            if generation != self._generation:
                logger.debug(
                    "%s: dropped stale timer %d (%s)", self._owner, timer_id, tag
                )
                return
            if self._handles.pop(timer_id, None) is None:
                return
            self._tags.pop(timer_id, None)
            callback()

        self._handles[timer_id] = self._scheduler.call_later(delay_ms, fire)
        self._tags[timer_id] = tag
        return timer_id

    def cancel(self, timer_id: int | None) -> bool:
        """Cancel one timer. Returns True if it was still pending."""
        if timer_id is None:
            return False
        handle = self._handles.pop(timer_id, None)
        self._tags.pop(timer_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer and invalidate the current generation.

        Returns:
            How many timers were pending.
        """
        pending = len(self._handles)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._tags.clear()
        self._generation += 1
        if pending:
            logger.debug("%s: cancelled %d pending timers", self._owner, pending)
        return pending
