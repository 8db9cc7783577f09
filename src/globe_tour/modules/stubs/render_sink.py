"""Render sinks for tests and headless runs."""

from __future__ import annotations

from typing import Any, Callable

from globe_tour.core.errors import RenderSinkError
from globe_tour.core.interfaces import RenderSink
from globe_tour.schemas import Arc, CameraPose, Label, Location, Ring


class RecordingRenderSink(RenderSink):
    """Keeps the latest scene and a call log instead of drawing.

    Args:
        ready: Become ready immediately. When False, call ``mark_ready()``.
        on_call: Optional observer of every ``(method, payload)`` call.
    """

    def __init__(
        self,
        ready: bool = True,
        on_call: Callable[[str, Any], None] | None = None,
    ) -> None:
        self._ready = ready
        self._ready_callbacks: list[Callable[[], None]] = []
        self._on_call = on_call
        self.destroyed = False
        self.calls: list[tuple[str, Any]] = []

        self.active_location: tuple[float, float] | None = None
        self.camera: CameraPose | None = None
        self.arcs: list[Arc] = []
        self.rings: list[Ring] = []
        self.labels: list[Label] = []
        self.markers: list[Location] = []

    def _record(self, method: str, payload: Any) -> None:
        if self.destroyed:
            raise RenderSinkError(f"{method} called on a destroyed sink")
        self.calls.append((method, payload))
        if self._on_call is not None:
            self._on_call(method, payload)

    def calls_to(self, method: str) -> list[Any]:
        return [payload for name, payload in self.calls if name == method]

    def set_active_location(self, lat: float, lng: float) -> None:
        self.active_location = (lat, lng)
        self._record("set_active_location", self.active_location)

    def set_camera_pose(
        self,
        lat: float,
        lng: float,
        altitude: float,
        duration_ms: float,
    ) -> None:
        self.camera = CameraPose(lat=lat, lng=lng, altitude=altitude, duration_ms=duration_ms)
        self._record("set_camera_pose", self.camera)

    def set_arcs(self, arcs: list[Arc]) -> None:
        self.arcs = list(arcs)
        self._record("set_arcs", self.arcs)

    def set_rings(self, rings: list[Ring]) -> None:
        self.rings = list(rings)
        self._record("set_rings", self.rings)

    def set_labels(self, labels: list[Label]) -> None:
        self.labels = list(labels)
        self._record("set_labels", self.labels)

    def set_markers(self, locations: list[Location]) -> None:
        self.markers = list(locations)
        self._record("set_markers", self.markers)

    def on_ready(self, callback: Callable[[], None]) -> None:
        if self._ready:
            callback()
        else:
            self._ready_callbacks.append(callback)

    def mark_ready(self) -> None:
        self._ready = True
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            callback()

    def destroy(self) -> None:
        self.destroyed = True
        self._ready_callbacks.clear()

