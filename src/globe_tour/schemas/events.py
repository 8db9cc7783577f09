"""Structured tour events for observability.

Every navigation, animation and lifecycle decision the engine makes is
published as a typed ``TourEvent`` so hosts and tests can inspect what
happened without scraping logs.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TourEventType(str, Enum):
    """Semantic event types emitted by the tour engine."""

    location_changed = "location_changed"
    arrival = "arrival"
    arc_spawned = "arc_spawned"
    arc_cleared = "arc_cleared"
    ring_spawned = "ring_spawned"
    ring_cleared = "ring_cleared"
    labels_updated = "labels_updated"
    autoplay_state = "autoplay_state"
    data_loaded = "data_loaded"
    data_load_failed = "data_load_failed"
    sink_ready = "sink_ready"
    sink_recreated = "sink_recreated"
    render_fallback = "render_fallback"
    engine_destroyed = "engine_destroyed"


class TourEvent(BaseModel):
    """A single engine event."""

    event_type: TourEventType
    timestamp: datetime = Field(default_factory=datetime.now)
    step: int = Field(default=0, description="Monotonic event sequence number")
    clock_ms: float = Field(default=0.0, description="Scheduler time when emitted")
    payload: dict[str, Any] = Field(default_factory=dict)
