"""Tour engine - wires navigation, autoplay, choreography and labels.

Per tick the data flows one way:

1. Input or timer event
2. NavigationState / AutoplayScheduler
3. TransitionChoreographer (index changed) and label resolution
   (active location changed)
4. Scene data pushed to the render sink

All collaborators are injected, so the engine runs identically against a
real renderer on an asyncio loop or a recording sink on a virtual clock.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from globe_tour.modules.autoplay import AutoplayScheduler, AutoplayState
from globe_tour.modules.choreographer import TransitionChoreographer
from globe_tour.modules.event_bus import TourEventBus
from globe_tour.modules.labels import LabelCollisionResolver, build_labels
from globe_tour.modules.navigation import NavigationState
from globe_tour.schemas import (
    Arc,
    CameraPose,
    Label,
    Location,
    LocationDataset,
    Ring,
    TourConfig,
    TourEventType,
)
from globe_tour.utils.logging import LogCategory, StructuredLogger, get_logger
from globe_tour.utils.profiles import DisplayProfile, create_default_config, get_profile

if TYPE_CHECKING:
    from globe_tour.core.interfaces import (
        LocationProvider,
        RenderSink,
        Scheduler,
        Viewport,
    )

logger = logging.getLogger(__name__)

SinkFactory = Callable[[DisplayProfile], "RenderSink"]


class EngineStatus(str, Enum):
    """Lifecycle of a TourEngine."""

    IDLE = "idle"                  # Constructed, not mounted
    WAITING = "waiting"            # Sink created, waiting for on_ready
    READY = "ready"                # Sink ready, scene live
    FALLBACK = "fallback"          # Sink failed; static fallback, no retries
    DESTROYED = "destroyed"


class TourEngine:
    """Composition root of the tour.

    Args:
        sink_factory: Builds a render sink for a display profile. Called on
            mount and again whenever the viewport breakpoint changes.
        provider: Source of locations and points of interest.
        scheduler: Clock and timer source shared by all components.
        config: Engine configuration (defaults when omitted).
        viewport: Optional breakpoint source. Without one the ``large``
            profile is used and the sink is never recreated.
        event_bus: Optional bus for structured events.
        on_render_failure: Called once with the exception if the sink
            cannot be created.
        responsive: Take label size and camera altitude from the active
            display profile instead of ``config``.
        structured_logger: Category logger for session-level records.
    """

    def __init__(
        self,
        sink_factory: SinkFactory,
        provider: LocationProvider,
        scheduler: Scheduler,
        config: TourConfig | None = None,
        viewport: Viewport | None = None,
        event_bus: TourEventBus | None = None,
        on_render_failure: Callable[[Exception], None] | None = None,
        responsive: bool = True,
        structured_logger: StructuredLogger | None = None,
    ) -> None:
        self._sink_factory = sink_factory
        self._provider = provider
        self._scheduler = scheduler
        self._viewport = viewport
        self._bus = event_bus or TourEventBus()
        self._on_render_failure = on_render_failure
        self._responsive = responsive and viewport is not None
        self._log = structured_logger or get_logger()

        self._base_config = config or TourConfig()
        self._profile = get_profile(viewport.breakpoint if viewport else "large")
        self._config = self._effective_config()

        self._navigation = NavigationState()
        self._navigation.add_listener(self._on_location_changed)
        self._choreographer = TransitionChoreographer(
            scheduler,
            self._config.arcs,
            on_arcs=self._push_arcs,
            on_rings=self._push_rings,
            on_event=self._on_scene_event,
        )
        self._autoplay = AutoplayScheduler(
            scheduler,
            self._config.autoplay,
            advance=self._navigation.next,
            on_state_change=self._on_autoplay_state,
        )
        self._resolver = LabelCollisionResolver(
            cell_size_deg=self._config.labels.cell_size_deg,
            max_nudges=self._config.labels.max_nudges,
        )

        self._status = EngineStatus.IDLE
        self._dataset = LocationDataset.empty()
        self._labels: list[Label] = []
        self._camera = CameraPose(
            lat=self._config.camera.initial_latitude,
            lng=0.0,
            altitude=self._config.camera.altitude,
        )
        self._sink: RenderSink | None = None
        self._sink_generation = 0
        self._sink_ready = False
        self._autoplay_started = False
        self._unsubscribe_viewport: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def config(self) -> TourConfig:
        return self._config

    @property
    def profile(self) -> DisplayProfile:
        return self._profile

    @property
    def navigation(self) -> NavigationState:
        return self._navigation

    @property
    def autoplay(self) -> AutoplayScheduler:
        return self._autoplay

    @property
    def choreographer(self) -> TransitionChoreographer:
        return self._choreographer

    @property
    def event_bus(self) -> TourEventBus:
        return self._bus

    @property
    def dataset(self) -> LocationDataset:
        return self._dataset

    @property
    def labels(self) -> list[Label]:
        return list(self._labels)

    @property
    def camera(self) -> CameraPose:
        return self._camera

    @property
    def sink(self) -> RenderSink | None:
        return self._sink

    @property
    def active_location(self) -> Location | None:
        return self._navigation.active_location

    def snapshot(self) -> dict[str, Any]:
        """Current scene as plain data."""
        active = self.active_location
        return {
            "status": self._status.value,
            "clock_ms": self._scheduler.now_ms(),
            "index": self._navigation.current_index,
            "active": active.name if active else None,
            "camera": self._camera.model_dump(),
            "arcs": len(self._choreographer.arcs),
            "rings": len(self._choreographer.rings),
            "labels": [(l.text, l.orientation.value) for l in self._labels],
            "autoplay": self._autoplay.state.value,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        """Load data, create the render sink and wait for it to be ready."""
        if self._status is not EngineStatus.IDLE:
            logger.debug("mount() ignored in status %s", self._status.value)
            return

        self._dataset = self._load_dataset()
        self._navigation.set_sequence(self._dataset.locations)
        if self._viewport is not None:
            self._unsubscribe_viewport = self._viewport.subscribe(self._on_breakpoint_changed)
        self._log.info(
            LogCategory.SYSTEM,
            f"Mounting tour with {len(self._navigation)} locations",
            clock_ms=self._scheduler.now_ms(),
            profile=self._profile.name,
        )
        self._create_sink()

    def destroy(self) -> None:
        """Cancel every timer, release the sink and ignore further input."""
        if self._status is EngineStatus.DESTROYED:
            return
        self._autoplay.dispose()
        cancelled = self._choreographer.cancel_all()
        if self._unsubscribe_viewport is not None:
            self._unsubscribe_viewport()
            self._unsubscribe_viewport = None
        self._release_sink()
        self._status = EngineStatus.DESTROYED
        self._emit(TourEventType.engine_destroyed, {"cancelled_timers": cancelled})
        self._log.info(LogCategory.SYSTEM, "Tour destroyed", clock_ms=self._scheduler.now_ms())

    def refresh(self) -> None:
        """Re-poll the provider. Equal data leaves the scene untouched."""
        if self._status is EngineStatus.DESTROYED:
            return
        self._dataset = self._load_dataset()
        before = self._navigation.active_location
        self._navigation.set_sequence(self._dataset.locations)
        self._with_sink(lambda sink: sink.set_markers(self._navigation.sequence))
        after = self._navigation.active_location
        if before is None:
            # First usable data after an empty or failed load
            if self._sink_ready or self._status is EngineStatus.FALLBACK:
                self._navigation.activate()
                self._start_autoplay_once()
        elif after is not None and after.same_place(before):
            # Same stop, but its points of interest may have changed
            self._update_labels(after)

    def reconfigure(self, config: TourConfig) -> None:
        """Apply a new configuration to every component."""
        self._base_config = config
        self._config = self._effective_config()
        self._autoplay.reconfigure(self._config.autoplay)
        self._choreographer.reconfigure(self._config.arcs)
        self._resolver = LabelCollisionResolver(
            cell_size_deg=self._config.labels.cell_size_deg,
            max_nudges=self._config.labels.max_nudges,
        )
        active = self._navigation.active_location
        if active is not None:
            self._update_labels(active)

    # ------------------------------------------------------------------
    # Host input
    # ------------------------------------------------------------------

    def handle_advance(self, direction: int) -> Location | None:
        """Keyboard left/right. Counts as an interaction for autoplay."""
        if self._status is EngineStatus.DESTROYED:
            return None
        self._autoplay.notify_interaction()
        if direction > 0:
            return self._navigation.next()
        if direction < 0:
            return self._navigation.prev()
        return self._navigation.current

    def handle_interaction(self) -> None:
        """Pointer, touch or click anywhere on the globe."""
        if self._status is EngineStatus.DESTROYED:
            return
        self._autoplay.notify_interaction()

    def set_visible(self, visible: bool) -> None:
        """Host page visibility changed."""
        if self._status is EngineStatus.DESTROYED:
            return
        self._autoplay.set_visible(visible)

    def goto(self, index: int) -> Location | None:
        if self._status is EngineStatus.DESTROYED:
            return None
        return self._navigation.goto(index)

    def goto_location(self, location: Location) -> Location | None:
        if self._status is EngineStatus.DESTROYED:
            return None
        return self._navigation.goto_by_value(location)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def _load_dataset(self) -> LocationDataset:
        try:
            dataset = self._provider.load()
        except Exception as e:
            logger.warning("Location provider failed, continuing with no locations: %s", e)
            self._log.warning(LogCategory.DATA, f"Provider failed: {e}")
            self._emit(TourEventType.data_load_failed, {"error": str(e)})
            return LocationDataset.empty()
        self._emit(
            TourEventType.data_loaded,
            {"locations": len(dataset.locations), "points": len(dataset.points)},
        )
        return dataset

    # ------------------------------------------------------------------
    # Render sink management
    # ------------------------------------------------------------------

    def _create_sink(self) -> bool:
        self._sink_generation += 1
        generation = self._sink_generation
        self._sink_ready = False
        try:
            sink = self._sink_factory(self._profile)
        except Exception as e:
            self._enter_fallback(e)
            return False
        self._sink = sink
        self._status = EngineStatus.WAITING
        sink.on_ready(lambda: self._on_sink_ready(generation))
        return True

    def _release_sink(self) -> None:
        sink, self._sink = self._sink, None
        self._sink_ready = False
        self._sink_generation += 1
        if sink is None:
            return
        try:
            sink.destroy()
        except Exception as e:
            logger.warning("Render sink destroy failed: %s", e)

    def _enter_fallback(self, error: Exception) -> None:
        if self._status is EngineStatus.FALLBACK:
            return
        self._status = EngineStatus.FALLBACK
        self._autoplay.stop()
        logger.error("Render sink unavailable, using static fallback: %s", error)
        self._log.error(LogCategory.RENDER, f"Render sink failed: {error}")
        self._emit(TourEventType.render_fallback, {"error": str(error)})
        if self._on_render_failure is not None:
            self._on_render_failure(error)
        # The session still starts so later moves are real transitions
        self._navigation.activate()

    def _on_sink_ready(self, generation: int) -> None:
        if generation != self._sink_generation or self._status is EngineStatus.DESTROYED:
            return
        self._sink_ready = True
        self._status = EngineStatus.READY
        self._emit(TourEventType.sink_ready, {"profile": self._profile.name})

        self._with_sink(lambda sink: sink.set_markers(self._navigation.sequence))
        if self._navigation.active_location is None:
            self._with_sink(lambda sink: sink.set_camera_pose(
                self._camera.lat, self._camera.lng, self._camera.altitude, 0.0
            ))
            self._navigation.activate()
        else:
            self._restore_scene()
        self._start_autoplay_once()

    def _start_autoplay_once(self) -> None:
        """Autoplay starts once per engine, on a live sink with more than one stop."""
        if self._autoplay_started or self._status is not EngineStatus.READY:
            return
        if len(self._navigation) <= 1:
            return
        self._autoplay_started = True
        self._autoplay.start()

    def _restore_scene(self) -> None:
        camera = self._camera
        active = self._navigation.active_location

        def push(sink: RenderSink) -> None:
            if active is not None:
                sink.set_active_location(active.lat, active.lng)
            sink.set_camera_pose(camera.lat, camera.lng, camera.altitude, 0.0)
            sink.set_labels(self._labels)
            sink.set_arcs(self._choreographer.arcs)
            sink.set_rings(self._choreographer.rings)

        self._with_sink(push)

    def _on_breakpoint_changed(self, breakpoint: str) -> None:
        if self._status in (EngineStatus.DESTROYED, EngineStatus.FALLBACK):
            return
        try:
            profile = get_profile(breakpoint)
        except ValueError:
            logger.warning("Ignoring unknown breakpoint %r", breakpoint)
            return
        if profile.name == self._profile.name:
            return

        self._profile = profile
        self._config = self._effective_config()
        self._camera = self._camera.model_copy(
            update={"altitude": self._config.camera.altitude, "duration_ms": 0.0}
        )
        active = self._navigation.active_location
        if active is not None:
            self._labels = self._place_labels(active)
        self._log.info(
            LogCategory.VIEWPORT,
            f"Breakpoint changed to {profile.name}; recreating renderer",
            clock_ms=self._scheduler.now_ms(),
        )
        self._release_sink()
        if self._create_sink():
            self._emit(TourEventType.sink_recreated, {"profile": profile.name})

    def _with_sink(self, action: Callable[[RenderSink], None]) -> None:
        if self._sink is None or not self._sink_ready:
            return
        action(self._sink)

    def _push_arcs(self, arcs: list[Arc]) -> None:
        self._with_sink(lambda sink: sink.set_arcs(arcs))

    def _push_rings(self, rings: list[Ring]) -> None:
        self._with_sink(lambda sink: sink.set_rings(rings))

    # ------------------------------------------------------------------
    # Reactions
    # ------------------------------------------------------------------

    def _on_location_changed(self, previous: Location | None, current: Location) -> None:
        self._camera = CameraPose(
            lat=current.lat,
            lng=current.lng,
            altitude=self._config.camera.altitude,
            duration_ms=self._config.camera.animation_duration_ms,
        )
        camera = self._camera
        self._with_sink(lambda sink: sink.set_active_location(current.lat, current.lng))
        self._with_sink(lambda sink: sink.set_camera_pose(
            camera.lat, camera.lng, camera.altitude, camera.duration_ms
        ))
        self._update_labels(current)

        if previous is None:
            self._choreographer.arrive(current)
            self._emit(TourEventType.arrival, {"location": current.id})
        else:
            self._choreographer.transition(previous, current)
            self._emit(
                TourEventType.location_changed,
                {"from": previous.id, "to": current.id, "index": self._navigation.current_index},
            )
        self._log.info(
            LogCategory.NAVIGATION,
            f"Now showing {current.name}",
            location_id=current.id,
            clock_ms=self._scheduler.now_ms(),
        )

    def _update_labels(self, location: Location) -> None:
        self._labels = self._place_labels(location)
        labels = self._labels
        self._with_sink(lambda sink: sink.set_labels(labels))
        self._emit(TourEventType.labels_updated, {"location": location.id, "count": len(labels)})
        self._log.debug(
            LogCategory.LABELS,
            f"Placed {len(labels)} labels",
            location_id=location.id,
            clock_ms=self._scheduler.now_ms(),
        )

    def _place_labels(self, location: Location) -> list[Label]:
        candidates = build_labels(
            location,
            self._dataset.points,
            size=self._config.labels.size,
            dot_radius=self._config.labels.dot_radius,
        )
        return self._resolver.resolve(candidates)

    def _on_scene_event(self, kind: str, item: object) -> None:
        self._emit(TourEventType(kind), item.model_dump() if hasattr(item, "model_dump") else {})
        self._log.debug(
            LogCategory.CHOREOGRAPHY,
            kind.replace("_", " ").capitalize(),
            clock_ms=self._scheduler.now_ms(),
        )

    def _on_autoplay_state(self, state: AutoplayState) -> None:
        self._emit(TourEventType.autoplay_state, {"state": state.value})
        self._log.debug(
            LogCategory.AUTOPLAY,
            f"Autoplay {state.value}",
            clock_ms=self._scheduler.now_ms(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _effective_config(self) -> TourConfig:
        if not self._responsive:
            return self._base_config
        return create_default_config(
            is_small_screen=self._profile.name == "small",
            base=self._base_config,
        )

    def _emit(self, event_type: TourEventType, payload: dict[str, Any]) -> None:
        self._bus.emit_simple(event_type, clock_ms=self._scheduler.now_ms(), payload=payload)
