"""Declarative scene data pushed to the render sink."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LabelOrientation(str, Enum):
    """Side of the dot on which a label's text is drawn."""

    BOTTOM = "bottom"
    TOP = "top"
    RIGHT = "right"
    LEFT = "left"


class Arc(BaseModel):
    """A travel arc between two locations, alive for one full dash cycle."""

    arc_id: int
    start_lat: float
    start_lng: float
    end_lat: float
    end_lng: float
    color: str = "rgba(255, 255, 255, 1)"
    spawned_at: float = Field(..., description="Scheduler time (ms) at spawn")
    lifetime_ms: float

    model_config = ConfigDict(frozen=True)


class Ring(BaseModel):
    """A fading pulse at a single location.

    ``color`` is the base color. Renderers apply the fade per frame from
    ``elapsed_fraction``.
    """

    ring_id: int
    lat: float
    lng: float
    spawned_at: float = Field(..., description="Scheduler time (ms) at spawn")
    lifetime_ms: float
    num_rings: int = Field(default=5, ge=1, description="Concentric pulses drawn")
    color: str = "#ffffff"

    model_config = ConfigDict(frozen=True)

    def elapsed_fraction(self, now_ms: float) -> float:
        """Fraction of this ring's lifetime that has passed, clamped to [0, 1]."""
        if self.lifetime_ms <= 0:
            return 1.0
        t = (now_ms - self.spawned_at) / self.lifetime_ms
        return min(1.0, max(0.0, t))


class Label(BaseModel):
    """A point-of-interest label placed around the active location."""

    lat: float
    lng: float
    text: str
    size: float = 0.75
    dot_radius: float = 0.3
    orientation: LabelOrientation = LabelOrientation.BOTTOM

    model_config = ConfigDict(frozen=True)


class CameraPose(BaseModel):
    """Point of view requested from the renderer."""

    lat: float
    lng: float
    altitude: float
    duration_ms: float = 0.0

    model_config = ConfigDict(frozen=True)
