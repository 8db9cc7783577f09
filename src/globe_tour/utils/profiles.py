"""Responsive display profiles.

Profiles hold the presentation values that depend on the viewport
breakpoint (label size, camera altitude, ring and arc geometry). The
engine picks one whenever the render sink is (re)created; timing values
live in ``TourConfig`` and never change with the breakpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from globe_tour.schemas.config import CameraConfig, LabelConfig, TourConfig
from globe_tour.utils.config import SMALL_SCREEN_MAX_WIDTH


class ProfileName(str, Enum):
    """Available display profiles."""

    SMALL = "small"   # Viewport width <= 768px
    LARGE = "large"   # Everything wider


@dataclass(frozen=True)
class DisplayProfile:
    """Presentation values for one breakpoint."""

    name: str
    description: str

    label_size: float
    label_dot_radius: float
    camera_altitude: float
    camera_latitude: float
    ring_max_radius: float
    ring_propagation_speed: float
    arc_stroke: float
    arc_altitude_autoscale: float

    # Vertical offset of the globe as a fraction of the viewport height
    globe_top_ratio: float


# ============================================================================
# Profile Definitions
# ============================================================================

SMALL_PROFILE = DisplayProfile(
    name="small",
    description="Phones and narrow windows",
    label_size=0.25,
    label_dot_radius=0.1,
    camera_altitude=0.2,
    camera_latitude=21.0,
    ring_max_radius=2.0,
    ring_propagation_speed=2.0,
    arc_stroke=0.05,
    arc_altitude_autoscale=0.2,
    globe_top_ratio=1.72,
)

LARGE_PROFILE = DisplayProfile(
    name="large",
    description="Tablets in landscape and desktops",
    label_size=0.75,
    label_dot_radius=0.3,
    camera_altitude=0.8,
    camera_latitude=36.0,
    ring_max_radius=4.0,
    ring_propagation_speed=4.0,
    arc_stroke=0.2,
    arc_altitude_autoscale=0.3,
    globe_top_ratio=0.9,
)

PROFILES: dict[str, DisplayProfile] = {
    "small": SMALL_PROFILE,
    "large": LARGE_PROFILE,
}


def get_profile(name: str) -> DisplayProfile:
    """Get a display profile by name (case-insensitive).

    Raises:
        ValueError: If the profile name is not found.
    """
    name_lower = name.lower()
    if name_lower not in PROFILES:
        available = ", ".join(PROFILES.keys())
        raise ValueError(f"Unknown profile: {name}. Available: {available}")
    return PROFILES[name_lower]


def list_profiles() -> list[tuple[str, str]]:
    """List available profiles as (name, description) tuples."""
    return [(p.name, p.description) for p in PROFILES.values()]


def profile_for_width(width: int) -> DisplayProfile:
    """Pick the profile for a viewport width in pixels."""
    if width <= SMALL_SCREEN_MAX_WIDTH:
        return SMALL_PROFILE
    return LARGE_PROFILE


def create_default_config(
    is_small_screen: bool = False,
    base: TourConfig | None = None,
) -> TourConfig:
    """Default engine config with the breakpoint-dependent values filled in.

    Only the label and camera sections depend on the screen; the rest is
    taken from ``base`` (or the defaults) unchanged.
    """
    base = base or TourConfig()
    profile = SMALL_PROFILE if is_small_screen else LARGE_PROFILE
    labels = LabelConfig.model_validate({
        **base.labels.model_dump(),
        "size": profile.label_size,
        "dot_radius": profile.label_dot_radius,
    })
    camera = CameraConfig.model_validate({
        **base.camera.model_dump(),
        "altitude": profile.camera_altitude,
        "initial_latitude": profile.camera_latitude,
    })
    return base.model_copy(update={"labels": labels, "camera": camera})

