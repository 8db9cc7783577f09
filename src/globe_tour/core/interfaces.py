"""Abstract base classes for every collaborator the engine consumes.

The engine depends only on these interfaces and the schemas, never on
concrete implementations, so renderers, data sources, clocks and
viewports can be swapped freely (including deterministic test doubles).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from globe_tour.schemas import Arc, Label, Location, LocationDataset, Ring


# =============================================================================
# Timing Interfaces
# =============================================================================


class TimerHandle(ABC):
    """A scheduled one-shot callback that can be cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Single-threaded source of time and one-shot timers.

    Implementations might include:
    - asyncio event loop timers
    - A virtual clock advanced manually (tests, simulations)
    """

    @abstractmethod
    def now_ms(self) -> float:
        """Current time in milliseconds on this scheduler's clock."""
        ...

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds (negative values run asap).
            callback: Zero-argument callable.

        Returns:
            Handle that can cancel the callback before it runs.
        """
        ...


# =============================================================================
# Rendering Interface
# =============================================================================


class RenderSink(ABC):
    """Declarative 3D globe renderer.

    The engine pushes complete scene collections; a sink never has to
    diff or retain engine state.
    """

    @abstractmethod
    def set_active_location(self, lat: float, lng: float) -> None:
        ...

    @abstractmethod
    def set_camera_pose(
        self,
        lat: float,
        lng: float,
        altitude: float,
        duration_ms: float,
    ) -> None:
        """Move the camera, animating over ``duration_ms``."""
        ...

    @abstractmethod
    def set_arcs(self, arcs: list[Arc]) -> None:
        ...

    @abstractmethod
    def set_rings(self, rings: list[Ring]) -> None:
        """Replace the live rings.

        The set only changes on spawn and clear. Between those the sink
        fades each ring itself, once per frame, with
        ``ring_color(ring.elapsed_fraction(now_ms))`` from
        ``globe_tour.modules.choreographer``. ``Ring.color`` is the
        unfaded base color.
        """
        ...

    @abstractmethod
    def set_labels(self, labels: list[Label]) -> None:
        ...

    @abstractmethod
    def set_markers(self, locations: list[Location]) -> None:
        ...

    @abstractmethod
    def on_ready(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked once the renderer can accept data.

        If the sink is already ready the callback runs immediately.
        """
        ...

    @abstractmethod
    def destroy(self) -> None:
        """Release renderer resources. The sink is unusable afterwards."""
        ...


# =============================================================================
# Data Interface
# =============================================================================


class LocationProvider(ABC):
    """Source of tour locations and their points of interest."""

    @abstractmethod
    def load(self) -> LocationDataset:
        """Produce the dataset.

        Raises:
            ProviderError: (or any exception) when the data is unavailable.
                The engine treats failures as an empty dataset.
        """
        ...


# =============================================================================
# Host Interface
# =============================================================================


class Viewport(ABC):
    """Current breakpoint plus change notifications."""

    @property
    @abstractmethod
    def breakpoint(self) -> str:
        """Name of the active display profile (``small`` or ``large``)."""
        ...

    @abstractmethod
    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Call ``callback(breakpoint)`` whenever the breakpoint changes.

        Returns:
            A function that removes the subscription.
        """
        ...
