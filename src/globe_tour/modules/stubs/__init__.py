"""Deterministic stand-ins for the engine's external collaborators."""

from globe_tour.modules.stubs.render_sink import RecordingRenderSink
from globe_tour.modules.stubs.scheduler import ManualScheduler, ManualTimerHandle
from globe_tour.modules.stubs.viewport import StaticViewport

__all__ = [
    "ManualScheduler",
    "ManualTimerHandle",
    "RecordingRenderSink",
    "StaticViewport",
]
