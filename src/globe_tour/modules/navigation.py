"""Navigation state: the ordered tour and the active index.

All index arithmetic wraps with ``((i % n) + n) % n`` so any integer is a
valid request. Change notification compares locations by value
``(name, lat, lng)``; providers may hand back new but equal objects on
every poll and that must not re-trigger a transition.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from globe_tour.schemas import Location

logger = logging.getLogger(__name__)

LocationChangedListener = Callable[[Location | None, Location], None]


def wrap_index(index: int, length: int) -> int:
    """Normalize ``index`` into ``[0, length)``."""
    return ((index % length) + length) % length


class NavigationState:
    """Owns the location sequence and the current index.

    ``location_changed(prev, curr)`` listeners run synchronously inside
    the operation that moved the index, before it returns. ``prev`` is
    ``None`` only for the first activation.
    """

    def __init__(self, sequence: Iterable[Location] | None = None) -> None:
        self._sequence: list[Location] = list(sequence or [])
        self._current_index = 0
        self._previous_location: Location | None = None
        self._active_location: Location | None = None
        self._listeners: list[LocationChangedListener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def sequence(self) -> list[Location]:
        return list(self._sequence)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current(self) -> Location | None:
        if not self._sequence:
            return None
        return self._sequence[self._current_index]

    @property
    def previous_location(self) -> Location | None:
        """The location that was active before the latest transition."""
        return self._previous_location

    @property
    def active_location(self) -> Location | None:
        """The last location announced to listeners."""
        return self._active_location

    def __len__(self) -> int:
        return len(self._sequence)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: LocationChangedListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: LocationChangedListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self) -> Location | None:
        """Announce the current location if nothing has been announced yet."""
        return self.goto(self._current_index)

    def next(self) -> Location | None:
        return self.goto(self._current_index + 1)

    def prev(self) -> Location | None:
        return self.goto(self._current_index - 1)

    def goto(self, index: int) -> Location | None:
        """Move to ``index`` (wrapped). No-op on an empty sequence."""
        if not self._sequence:
            return None
        self._current_index = wrap_index(index, len(self._sequence))
        current = self._sequence[self._current_index]
        self._announce(current)
        return current

    def goto_by_value(self, location: Location) -> Location | None:
        """Move to the first entry at the same coordinates as ``location``."""
        for index, candidate in enumerate(self._sequence):
            if candidate.same_coordinates(location):
                return self.goto(index)
        logger.debug("No tour entry at (%s, %s)", location.lat, location.lng)
        return None

    def set_sequence(self, sequence: Iterable[Location]) -> Location | None:
        """Replace the sequence, keeping the active location if it survives.

        Returns the current location after the swap. Listeners are only
        notified when the active location differs by value, so a refresh
        that returns equal data is silent.
        """
        self._sequence = list(sequence)
        if not self._sequence:
            self._current_index = 0
            return None

        index = 0
        if self._active_location is not None:
            for i, candidate in enumerate(self._sequence):
                if candidate.same_place(self._active_location):
                    index = i
                    break
        self._current_index = index
        if self._active_location is None:
            return self._sequence[index]
        return self.goto(index)

    def _announce(self, current: Location) -> None:
        previous = self._active_location
        if previous is not None and current.same_place(previous):
            # Keep the newest instance so later reads see fresh contact data
            self._active_location = current
            return

        self._previous_location = previous
        self._active_location = current
        logger.debug(
            "Location changed: %s -> %s",
            previous.name if previous else None,
            current.name,
        )
        for listener in list(self._listeners):
            listener(previous, current)
