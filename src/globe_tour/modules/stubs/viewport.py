"""Fixed viewport whose breakpoint is set directly."""

from __future__ import annotations

from typing import Callable

from globe_tour.core.interfaces import Viewport


class StaticViewport(Viewport):
    """Viewport stub: ``set_breakpoint`` notifies subscribers on change."""

    def __init__(self, breakpoint: str = "large") -> None:
        self._breakpoint = breakpoint
        self._subscribers: list[Callable[[str], None]] = []

    @property
    def breakpoint(self) -> str:
        return self._breakpoint

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def set_breakpoint(self, breakpoint: str) -> None:
        if breakpoint == self._breakpoint:
            return
        self._breakpoint = breakpoint
        for callback in list(self._subscribers):
            callback(breakpoint)

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
