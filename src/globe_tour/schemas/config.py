"""Engine configuration contracts.

All configuration objects are frozen: changing behaviour means building
a new object and handing it to the owning component, which reconfigures
itself explicitly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from globe_tour.utils.config import (
    DEFAULT_ANIMATION_DURATION_MS,
    DEFAULT_ARC_COLOR,
    DEFAULT_AUTOPLAY_INTERVAL_MS,
    DEFAULT_CAMERA_ALTITUDE,
    DEFAULT_CAMERA_LATITUDE,
    DEFAULT_DASH_GAP,
    DEFAULT_DASH_LENGTH,
    DEFAULT_FLIGHT_TIME_MS,
    DEFAULT_LABEL_CELL_SIZE_DEG,
    DEFAULT_LABEL_DOT_RADIUS,
    DEFAULT_LABEL_SIZE,
    DEFAULT_MAX_LABEL_NUDGES,
    DEFAULT_NUM_RINGS,
    DEFAULT_RELATIVE_LENGTH,
    DEFAULT_RESUME_DELAY_MS,
    DEFAULT_RING_COLOR,
)


class AutoplayConfig(BaseModel):
    """Timer-driven advancement settings."""

    enabled: bool = True
    interval_ms: int = Field(default=DEFAULT_AUTOPLAY_INTERVAL_MS, gt=0)
    pause_on_interaction: bool = True
    resume_delay_ms: int | None = Field(default=DEFAULT_RESUME_DELAY_MS, ge=0)

    model_config = ConfigDict(frozen=True)


class ArcConfig(BaseModel):
    """Arc and ring animation timing."""

    flight_time_ms: float = Field(default=DEFAULT_FLIGHT_TIME_MS, gt=0)
    dash_length: float = Field(default=DEFAULT_DASH_LENGTH, gt=0)
    dash_gap: float = Field(default=DEFAULT_DASH_GAP, ge=0)
    relative_length: float = Field(default=DEFAULT_RELATIVE_LENGTH, gt=0)
    num_rings: int = Field(default=DEFAULT_NUM_RINGS, ge=1)
    arc_color: str = DEFAULT_ARC_COLOR
    ring_color: str = DEFAULT_RING_COLOR

    model_config = ConfigDict(frozen=True)

    @property
    def full_animation_time_ms(self) -> float:
        """Time for the whole dash pattern (dash + gap) to leave the arc."""
        return self.flight_time_ms * (
            1 + self.dash_gap / (self.dash_length + self.dash_gap)
        )

    @property
    def ring_lifetime_ms(self) -> float:
        return self.flight_time_ms * self.relative_length


class LabelConfig(BaseModel):
    """Label placement settings."""

    cell_size_deg: float = Field(default=DEFAULT_LABEL_CELL_SIZE_DEG, gt=0)
    max_nudges: int = Field(default=DEFAULT_MAX_LABEL_NUDGES, ge=0)
    size: float = Field(default=DEFAULT_LABEL_SIZE, gt=0)
    dot_radius: float = Field(default=DEFAULT_LABEL_DOT_RADIUS, ge=0)

    model_config = ConfigDict(frozen=True)


class CameraConfig(BaseModel):
    """Camera moves between locations."""

    altitude: float = Field(default=DEFAULT_CAMERA_ALTITUDE, gt=0)
    initial_latitude: float = Field(default=DEFAULT_CAMERA_LATITUDE, ge=-90, le=90)
    animation_duration_ms: float = Field(default=DEFAULT_ANIMATION_DURATION_MS, ge=0)

    model_config = ConfigDict(frozen=True)


# camelCase option names accepted by TourConfig.from_mapping
_OPTION_PATHS: dict[str, tuple[str, str]] = {
    "autoPlay": ("autoplay", "enabled"),
    "intervalMs": ("autoplay", "interval_ms"),
    "autoPlayInterval": ("autoplay", "interval_ms"),
    "pauseOnInteraction": ("autoplay", "pause_on_interaction"),
    "autoPlayPauseOnInteraction": ("autoplay", "pause_on_interaction"),
    "resumeDelayMs": ("autoplay", "resume_delay_ms"),
    "autoPlayResumeDelay": ("autoplay", "resume_delay_ms"),
    "flightTimeMs": ("arcs", "flight_time_ms"),
    "arcFlightTime": ("arcs", "flight_time_ms"),
    "dashLength": ("arcs", "dash_length"),
    "arcDashLength": ("arcs", "dash_length"),
    "dashGap": ("arcs", "dash_gap"),
    "arcDashGap": ("arcs", "dash_gap"),
    "relativeLength": ("arcs", "relative_length"),
    "arcRelativeLength": ("arcs", "relative_length"),
    "numRings": ("arcs", "num_rings"),
    "arcNumRings": ("arcs", "num_rings"),
    "arcColor": ("arcs", "arc_color"),
    "ringColorLocation": ("arcs", "ring_color"),
    "labelCellSizeDeg": ("labels", "cell_size_deg"),
    "labelSize": ("labels", "size"),
    "labelDotRadius": ("labels", "dot_radius"),
    "povAltitude": ("camera", "altitude"),
    "povLatitude": ("camera", "initial_latitude"),
    "animationDuration": ("camera", "animation_duration_ms"),
}


class TourConfig(BaseModel):
    """Complete engine configuration."""

    autoplay: AutoplayConfig = Field(default_factory=AutoplayConfig)
    arcs: ArcConfig = Field(default_factory=ArcConfig)
    labels: LabelConfig = Field(default_factory=LabelConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_options(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if not any(key in _OPTION_PATHS for key in data):
            return data
        return _nest_options(data)

    @classmethod
    def from_mapping(cls, options: dict[str, Any]) -> TourConfig:
        """Build a config from flat camelCase options or nested sections.

        Unknown keys raise a ``ValueError`` so typos do not silently fall
        back to defaults.
        """
        unknown = [
            key for key in options
            if key not in _OPTION_PATHS and key not in cls.model_fields
        ]
        if unknown:
            raise ValueError(f"Unknown tour options: {', '.join(sorted(unknown))}")
        return cls.model_validate(options)

    def with_autoplay(self, **changes: Any) -> TourConfig:
        """Copy of this config with autoplay fields replaced."""
        autoplay = AutoplayConfig.model_validate(
            {**self.autoplay.model_dump(), **changes}
        )
        return self.model_copy(update={"autoplay": autoplay})


def _nest_options(data: dict[str, Any]) -> dict[str, Any]:
    nested: dict[str, dict[str, Any]] = {}
    for key, value in data.items():
        if key in _OPTION_PATHS:
            section, field_name = _OPTION_PATHS[key]
            nested.setdefault(section, {})[field_name] = value
        elif isinstance(value, dict):
            nested.setdefault(key, {}).update(value)
        else:
            nested[key] = value
    return nested
