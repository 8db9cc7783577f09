"""Location and point-of-interest data contracts."""

from __future__ import annotations

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


def _slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.strip().lower()).strip("-")
    return slug or "location"


def derive_location_id(name: str, lat: float, lng: float) -> str:
    """Build a stable identifier from a location's name and coordinates."""
    return f"{_slugify(name)}@{float(lat):.4f},{float(lng):.4f}"


class Contact(BaseModel):
    """Optional contact details attached to a location."""

    phone: str | None = None
    email: str | None = None

    model_config = ConfigDict(frozen=True)


class Location(BaseModel):
    """A stop on the tour.

    Coordinates may arrive as numeric strings and are normalized to
    floats. Identity for change detection is the value key
    ``(name, lat, lng)``; two instances describing the same place are
    interchangeable even when they are distinct objects.
    """

    id: str = Field(..., description="Stable identifier, derived when absent")
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "location"),
        description="Display name of the location",
    )
    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lng: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    contact: Contact | None = Field(default=None, description="Optional contact details")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _fill_derived_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        name = data.get("name", data.get("location"))
        # Flat phone/email keys are folded into the contact record
        if "contact" not in data and ("phone" in data or "email" in data):
            data["contact"] = {
                "phone": data.pop("phone", None),
                "email": data.pop("email", None),
            }
        if not data.get("id") and name is not None:
            try:
                data["id"] = derive_location_id(name, float(data["lat"]), float(data["lng"]))
            except (KeyError, TypeError, ValueError):
                # Leave validation of the coordinates to the field rules
                pass
        return data

    @property
    def value_key(self) -> tuple[str, float, float]:
        """The tuple that defines this location's identity."""
        return (self.name, float(self.lat), float(self.lng))

    def same_place(self, other: Location | None) -> bool:
        """Compare by value, never by object identity."""
        if other is None:
            return False
        return self.value_key == other.value_key

    def same_coordinates(self, other: Location) -> bool:
        return float(self.lat) == float(other.lat) and float(self.lng) == float(other.lng)


class PointOfInterest(BaseModel):
    """A port or other landmark shown as a label around its parent location."""

    name: str = Field(..., validation_alias=AliasChoices("name", "port"))
    city: str = Field(default="")
    parent_location_id: str = Field(
        ...,
        validation_alias=AliasChoices("parent_location_id", "parentLocationId", "location"),
        description="Id (or name) of the owning location",
    )
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def belongs_to(self, location: Location) -> bool:
        return self.parent_location_id in (location.id, location.name)


class LocationDataset(BaseModel):
    """Everything a provider hands to the engine."""

    locations: list[Location] = Field(default_factory=list)
    points: list[PointOfInterest] = Field(
        default_factory=list,
        validation_alias=AliasChoices("points", "ports"),
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def empty(cls) -> LocationDataset:
        return cls()

    def points_for(self, location: Location) -> list[PointOfInterest]:
        """Points of interest attached to ``location``, in dataset order."""
        return [p for p in self.points if p.belongs_to(location)]
