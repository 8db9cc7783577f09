"""Tests for data contracts and configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from globe_tour.schemas import (
    ArcConfig,
    AutoplayConfig,
    Location,
    LocationDataset,
    PointOfInterest,
    Ring,
    TourConfig,
    TourEvent,
    TourEventType,
    derive_location_id,
)
from globe_tour.utils.profiles import (
    PROFILES,
    create_default_config,
    get_profile,
    list_profiles,
    profile_for_width,
)


class TestLocation:
    """Location parsing and value identity."""

    def test_derived_id(self):
        loc = Location(name="Los Angeles", lat=34.0522, lng=-118.2437)
        assert loc.id == "los-angeles@34.0522,-118.2437"
        assert derive_location_id("Los Angeles", 34.0522, -118.2437) == loc.id

    def test_explicit_id_kept(self):
        loc = Location(id="hq", name="Houston", lat=29.76, lng=-95.37)
        assert loc.id == "hq"

    def test_string_coordinates_coerced(self):
        loc = Location.model_validate({"location": "Houston", "lat": "29.7604", "lng": "-95.3698"})
        assert loc.lat == pytest.approx(29.7604)
        assert isinstance(loc.lng, float)

    def test_contact_folded(self):
        loc = Location.model_validate(
            {"name": "Houston", "lat": 1, "lng": 2, "phone": "555", "email": "a@b.c"}
        )
        assert loc.contact.phone == "555"
        assert loc.contact.email == "a@b.c"

    def test_value_equality_ignores_contact(self):
        a = Location(name="A", lat=1, lng=2)
        b = Location.model_validate({"name": "A", "lat": "1", "lng": "2", "email": "x@y.z"})
        assert a.same_place(b)
        assert not a.same_place(None)
        assert not a.same_place(Location(name="B", lat=1, lng=2))

    @pytest.mark.parametrize("lat,lng", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range_rejected(self, lat, lng):
        with pytest.raises(ValidationError):
            Location(name="X", lat=lat, lng=lng)

    def test_frozen(self):
        loc = Location(name="A", lat=1, lng=2)
        with pytest.raises(ValidationError):
            loc.lat = 3


class TestDataset:
    """Dataset aliases and lookups."""

    def test_ports_alias(self):
        dataset = LocationDataset.model_validate({
            "locations": [{"name": "A", "lat": 1, "lng": 1}],
            "ports": [{"port": "P", "location": "A", "lat": 1.1, "lng": 1.1}],
        })
        assert dataset.points[0].name == "P"
        assert dataset.points_for(dataset.locations[0]) == dataset.points

    def test_point_belongs_by_id(self):
        loc = Location(name="A", lat=1, lng=1)
        point = PointOfInterest(name="P", parent_location_id=loc.id, lat=1, lng=1)
        assert point.belongs_to(loc)


class TestConfig:
    """Configuration defaults and flat option parsing."""

    def test_defaults(self):
        config = TourConfig()
        assert config.autoplay.interval_ms == 7000
        assert config.autoplay.resume_delay_ms == 60000
        assert config.arcs.num_rings == 5
        assert config.labels.cell_size_deg == 5.0

    def test_ring_lifetime(self):
        assert ArcConfig(flight_time_ms=2000, relative_length=0.4).ring_lifetime_ms == pytest.approx(800)

    def test_flat_options(self):
        config = TourConfig.from_mapping({
            "intervalMs": 5000,
            "pauseOnInteraction": True,
            "resumeDelayMs": 60000,
            "flightTimeMs": 1500,
            "dashLength": 0.5,
            "dashGap": 1,
            "relativeLength": 0.3,
            "numRings": 3,
            "labelCellSizeDeg": 2.5,
        })
        assert config.autoplay.interval_ms == 5000
        assert config.arcs.flight_time_ms == 1500
        assert config.arcs.dash_gap == 1
        assert config.arcs.num_rings == 3
        assert config.labels.cell_size_deg == 2.5

    def test_legacy_option_names(self):
        config = TourConfig.from_mapping({"autoPlayInterval": 9000, "arcFlightTime": 1000})
        assert config.autoplay.interval_ms == 9000
        assert config.arcs.flight_time_ms == 1000

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError, match="intervalMS"):
            TourConfig.from_mapping({"intervalMS": 5000})

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValidationError):
            AutoplayConfig(interval_ms=0)

    def test_with_autoplay(self):
        config = TourConfig().with_autoplay(interval_ms=5000, resume_delay_ms=None)
        assert config.autoplay.interval_ms == 5000
        assert config.autoplay.resume_delay_ms is None
        assert config.arcs == TourConfig().arcs


class TestRing:
    def test_elapsed_fraction(self):
        ring = Ring(ring_id=1, lat=0, lng=0, spawned_at=1000, lifetime_ms=800)
        assert ring.elapsed_fraction(1000) == 0
        assert ring.elapsed_fraction(1400) == pytest.approx(0.5)
        assert ring.elapsed_fraction(5000) == 1.0


class TestProfiles:
    """Display profile registry."""

    def test_lookup(self):
        assert get_profile("SMALL") is PROFILES["small"]
        with pytest.raises(ValueError):
            get_profile("medium")

    def test_list(self):
        assert [name for name, _ in list_profiles()] == ["small", "large"]

    @pytest.mark.parametrize("width,expected", [(320, "small"), (768, "small"), (769, "large"), (1920, "large")])
    def test_profile_for_width(self, width, expected):
        assert profile_for_width(width).name == expected

    def test_small_screen_config(self):
        base = TourConfig.from_mapping({"intervalMs": 5000})
        config = create_default_config(is_small_screen=True, base=base)
        assert config.labels.size == 0.25
        assert config.labels.dot_radius == 0.1
        assert config.camera.altitude == 0.2
        assert config.camera.initial_latitude == 21.0
        assert config.autoplay.interval_ms == 5000


class TestTourEvent:
    def test_serializes(self):
        event = TourEvent(event_type=TourEventType.arrival, step=1, payload={"location": "a"})
        data = event.model_dump(mode="json")
        assert data["event_type"] == "arrival"
        assert data["payload"] == {"location": "a"}
