"""Data contracts for the globe tour engine."""

from globe_tour.schemas.config import (
    ArcConfig,
    AutoplayConfig,
    CameraConfig,
    LabelConfig,
    TourConfig,
)
from globe_tour.schemas.events import TourEvent, TourEventType
from globe_tour.schemas.locations import (
    Contact,
    Location,
    LocationDataset,
    PointOfInterest,
    derive_location_id,
)
from globe_tour.schemas.scene import Arc, CameraPose, Label, LabelOrientation, Ring

__all__ = [
    "Arc",
    "ArcConfig",
    "AutoplayConfig",
    "CameraConfig",
    "CameraPose",
    "Contact",
    "Label",
    "LabelConfig",
    "LabelOrientation",
    "Location",
    "LocationDataset",
    "PointOfInterest",
    "Ring",
    "TourConfig",
    "TourEvent",
    "TourEventType",
    "derive_location_id",
]
