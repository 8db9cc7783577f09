"""Module implementations."""

from globe_tour.modules.autoplay import AutoplayScheduler, AutoplayState
from globe_tour.modules.choreographer import (
    TransitionChoreographer,
    ring_color,
    ring_opacity,
)
from globe_tour.modules.event_bus import TourEventBus
from globe_tour.modules.labels import LabelCollisionResolver, build_labels
from globe_tour.modules.navigation import NavigationState, wrap_index
from globe_tour.modules.providers import (
    HttpLocationProvider,
    JsonFileLocationProvider,
    StaticLocationProvider,
    parse_dataset,
)
from globe_tour.modules.scheduler import AsyncioScheduler
from globe_tour.modules.viewport import ViewportMonitor

__all__ = [
    "AsyncioScheduler",
    "AutoplayScheduler",
    "AutoplayState",
    "HttpLocationProvider",
    "JsonFileLocationProvider",
    "LabelCollisionResolver",
    "NavigationState",
    "StaticLocationProvider",
    "TourEventBus",
    "TransitionChoreographer",
    "ViewportMonitor",
    "build_labels",
    "parse_dataset",
    "ring_color",
    "ring_opacity",
    "wrap_index",
]
