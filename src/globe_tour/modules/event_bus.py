"""Event bus for tour engine observability.

A bounded buffer of ``TourEvent`` objects that the engine emits and
hosts, the CLI and tests consume. Like every other engine component it
is driven from the scheduler's single thread, so it holds no lock.

Usage::

    from globe_tour.modules.event_bus import TourEventBus

    bus = TourEventBus()
    bus.subscribe(print)
    bus.emit_simple(TourEventType.arrival, clock_ms=0.0, payload={...})

    events = bus.get_events(since_step=42)
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable

from globe_tour.schemas.events import TourEvent, TourEventType
from globe_tour.utils.config import DEFAULT_MAX_EVENTS

logger = logging.getLogger(__name__)


class TourEventBus:
    """Bounded buffer of structured tour events with subscribers.

    Parameters
    ----------
    max_events : int
        Maximum events retained in memory (oldest are dropped).
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS) -> None:
        self._events: deque[TourEvent] = deque(maxlen=max_events)
        self._subscribers: list[Callable[[TourEvent], None]] = []
        self._last_step = 0

    def emit(self, event: TourEvent) -> None:
        """Record an event and notify subscribers.

        A failing subscriber is logged and skipped; it never interrupts
        the engine operation that emitted the event.
        """
        self._events.append(event)
        self._last_step = max(self._last_step, event.step)
        logger.debug(
            "TourEvent: type=%s step=%d t=%.1f",
            event.event_type.value,
            event.step,
            event.clock_ms,
        )
        for cb in list(self._subscribers):
            try:
                cb(event)
            except Exception as e:
                logger.warning("Event subscriber error: %s", e)

    def emit_simple(
        self,
        event_type: TourEventType,
        clock_ms: float = 0.0,
        payload: dict[str, Any] | None = None,
    ) -> TourEvent:
        """Build, number and emit a TourEvent in one call."""
        event = TourEvent(
            event_type=event_type,
            step=self._last_step + 1,
            clock_ms=clock_ms,
            payload=payload or {},
        )
        self.emit(event)
        return event

    def get_events(self, since_step: int = 0) -> list[TourEvent]:
        """Return retained events with step >= since_step."""
        return [e for e in self._events if e.step >= since_step]

    def get_events_by_type(
        self,
        event_type: TourEventType,
        limit: int | None = None,
    ) -> list[TourEvent]:
        matching = [e for e in self._events if e.event_type == event_type]
        return matching if limit is None else matching[-limit:]

    @property
    def event_count(self) -> int:
        return len(self._events)

    @property
    def latest_step(self) -> int:
        return self._last_step

    def subscribe(self, callback: Callable[[TourEvent], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[TourEvent], None]) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def snapshot(self) -> list[dict[str, Any]]:
        """All retained events as JSON-ready dicts."""
        return [e.model_dump(mode="json") for e in self._events]
