"""Core interfaces, errors and timer bookkeeping."""

from globe_tour.core.errors import ProviderError, RenderSinkError, TourError
from globe_tour.core.interfaces import (
    LocationProvider,
    RenderSink,
    Scheduler,
    TimerHandle,
    Viewport,
)
from globe_tour.core.timers import TimerRegistry

__all__ = [
    "LocationProvider",
    "ProviderError",
    "RenderSink",
    "RenderSinkError",
    "Scheduler",
    "TimerHandle",
    "TimerRegistry",
    "TourError",
    "Viewport",
]
