"""Viewport tracking with breakpoint change notifications.

Replaces a process-wide window singleton: the host owns a
``ViewportMonitor``, feeds it resize events and hands it to the engine.
"""

from __future__ import annotations

import logging
from typing import Callable

from globe_tour.core.interfaces import Viewport
from globe_tour.utils.config import BREAKPOINTS
from globe_tour.utils.profiles import profile_for_width

logger = logging.getLogger(__name__)


class ViewportMonitor(Viewport):
    """Holds the viewport size and notifies when the breakpoint flips."""

    def __init__(self, width: int = 1920, height: int = 1080) -> None:
        self._width = width
        self._height = height
        self._breakpoint = profile_for_width(width).name
        self._subscribers: list[Callable[[str], None]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def breakpoint(self) -> str:
        return self._breakpoint

    @property
    def portrait(self) -> bool:
        return self._height > self._width

    @property
    def landscape(self) -> bool:
        return self._width > self._height

    def matches(self, name: str) -> bool:
        """Max-width breakpoint test: ``matches("sm")`` is width < 640."""
        if name not in BREAKPOINTS:
            raise ValueError(f"Unknown breakpoint: {name}")
        return self._width < BREAKPOINTS[name]

    def resize(self, width: int, height: int) -> bool:
        """Record a new size. Returns True when the breakpoint changed."""
        self._width = width
        self._height = height
        breakpoint = profile_for_width(width).name
        if breakpoint == self._breakpoint:
            return False
        logger.debug("Breakpoint %s -> %s (%dx%d)", self._breakpoint, breakpoint, width, height)
        self._breakpoint = breakpoint
        for callback in list(self._subscribers):
            callback(breakpoint)
        return True

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return unsubscribe
