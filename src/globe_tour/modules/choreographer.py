"""Arc and ring choreography for location transitions.

A transition from A to B produces:

- an arc A->B, spawned immediately and cleared after the full dash cycle
  ``flight * (1 + gap / (length + gap))``;
- a ring at A, spawned immediately and cleared after
  ``flight * relative_length``;
- a ring at B, spawned after ``flight`` and cleared
  ``flight * relative_length`` later.

Arcs and rings are members of sets; every one carries its own clear
timer. A new transition appends to the sets and never cancels the
timers of an earlier cascade.

Rings fade as ``sqrt(1 - t)`` over their lifetime. The engine only pushes
the ring set on spawn and clear, so sinks evaluate ``ring_color`` per
frame against each ring's ``elapsed_fraction``.
"""

from __future__ import annotations

import itertools
import logging
import math
from typing import TYPE_CHECKING, Callable

from globe_tour.core.timers import TimerRegistry
from globe_tour.schemas import Arc, ArcConfig, Location, Ring

if TYPE_CHECKING:
    from globe_tour.core.interfaces import Scheduler

logger = logging.getLogger(__name__)


def ring_opacity(t: float) -> float:
    """Opacity of a ring at elapsed fraction ``t`` of its lifetime."""
    t = min(1.0, max(0.0, t))
    return math.sqrt(1 - t)


def ring_color(t: float) -> str:
    """White with the ring fade applied, as an ``rgba`` string."""
    return f"rgba(255,255,255,{ring_opacity(t)})"


SceneListener = Callable[[str, object], None]


class TransitionChoreographer:
    """Schedules and clears the arc/ring cascade of each transition.

    Args:
        scheduler: Clock and timer source.
        config: Arc and ring timing.
        on_arcs: Receives the full arc list whenever it changes.
        on_rings: Receives the full ring list whenever it changes.
        on_event: Optional ``(kind, item)`` observer, where kind is one of
            ``arc_spawned``, ``arc_cleared``, ``ring_spawned``,
            ``ring_cleared``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: ArcConfig,
        on_arcs: Callable[[list[Arc]], None],
        on_rings: Callable[[list[Ring]], None],
        on_event: SceneListener | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._timers = TimerRegistry(scheduler, owner="choreographer")
        self._config = config
        self._on_arcs = on_arcs
        self._on_rings = on_rings
        self._on_event = on_event
        self._arcs: dict[int, Arc] = {}
        self._rings: dict[int, Ring] = {}
        self._ids = itertools.count(1)
        self._transitions = 0

    @property
    def config(self) -> ArcConfig:
        return self._config

    @property
    def arcs(self) -> list[Arc]:
        return list(self._arcs.values())

    @property
    def rings(self) -> list[Ring]:
        return list(self._rings.values())

    @property
    def pending_timers(self) -> int:
        return self._timers.active_count

    @property
    def transition_count(self) -> int:
        return self._transitions

    def reconfigure(self, config: ArcConfig) -> None:
        """Use new timings for future cascades; in-flight ones are untouched."""
        self._config = config

    # ------------------------------------------------------------------
    # Cascades
    # ------------------------------------------------------------------

    def arrive(self, location: Location) -> Ring:
        """First activation: a single ring pulse, no arc."""
        ring = self._spawn_ring(location)
        logger.debug("Arrival pulse at %s", location.name)
        return ring

    def transition(self, origin: Location, destination: Location) -> Arc:
        """Start the cascade for a move from ``origin`` to ``destination``."""
        config = self._config
        self._transitions += 1

        arc = self._spawn_arc(origin, destination)
        self._spawn_ring(origin, config)
        self._timers.schedule(
            config.flight_time_ms,
            lambda: self._spawn_ring(destination, config),
            tag="ring-spawn",
        )
        logger.debug(
            "Transition %s -> %s (arc lifetime %.2f ms)",
            origin.name,
            destination.name,
            arc.lifetime_ms,
        )
        return arc

    def cancel_all(self) -> int:
        """Cancel every outstanding spawn/clear timer. Teardown only."""
        return self._timers.cancel_all()

    def ring_colors(self) -> list[str]:
        """Current color of each live ring, following the fade curve."""
        now = self._scheduler.now_ms()
        return [ring_color(ring.elapsed_fraction(now)) for ring in self._rings.values()]

    # ------------------------------------------------------------------
    # Spawning and clearing
    # ------------------------------------------------------------------

    def _spawn_arc(self, origin: Location, destination: Location) -> Arc:
        config = self._config
        lifetime = config.full_animation_time_ms
        arc = Arc(
            arc_id=next(self._ids),
            start_lat=origin.lat,
            start_lng=origin.lng,
            end_lat=destination.lat,
            end_lng=destination.lng,
            color=config.arc_color,
            spawned_at=self._scheduler.now_ms(),
            lifetime_ms=lifetime,
        )
        self._arcs[arc.arc_id] = arc
        self._timers.schedule(lifetime, lambda: self._clear_arc(arc.arc_id), tag="arc-clear")
        self._notify("arc_spawned", arc)
        self._on_arcs(self.arcs)
        return arc

    def _spawn_ring(self, location: Location, config: ArcConfig | None = None) -> Ring:
        config = config or self._config
        lifetime = config.ring_lifetime_ms
        ring = Ring(
            ring_id=next(self._ids),
            lat=location.lat,
            lng=location.lng,
            spawned_at=self._scheduler.now_ms(),
            lifetime_ms=lifetime,
            num_rings=config.num_rings,
            color=config.ring_color,
        )
        self._rings[ring.ring_id] = ring
        self._timers.schedule(lifetime, lambda: self._clear_ring(ring.ring_id), tag="ring-clear")
        self._notify("ring_spawned", ring)
        self._on_rings(self.rings)
        return ring

    def _clear_arc(self, arc_id: int) -> None:
        arc = self._arcs.pop(arc_id, None)
        if arc is None:
            return
        self._notify("arc_cleared", arc)
        self._on_arcs(self.arcs)

    def _clear_ring(self, ring_id: int) -> None:
        ring = self._rings.pop(ring_id, None)
        if ring is None:
            return
        self._notify("ring_cleared", ring)
        self._on_rings(self.rings)

    def _notify(self, kind: str, item: object) -> None:
        if self._on_event is not None:
            self._on_event(kind, item)
