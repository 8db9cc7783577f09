"""Tests for arc and ring choreography timing."""

from __future__ import annotations

import math

import pytest

from globe_tour.modules.choreographer import TransitionChoreographer, ring_color, ring_opacity
from globe_tour.schemas import ArcConfig, Location

ORIGIN = Location(name="Houston", lat=29.76, lng=-95.37)
DESTINATION = Location(name="Shanghai", lat=31.23, lng=121.47)
THIRD = Location(name="Rotterdam", lat=51.92, lng=4.48)


class Scene:
    """Collects pushes and events from a choreographer."""

    def __init__(self):
        self.arcs = []
        self.rings = []
        self.events = []

    def on_arcs(self, arcs):
        self.arcs = arcs

    def on_rings(self, rings):
        self.rings = rings

    def on_event(self, kind, item):
        self.events.append(kind)


def make_choreographer(clock, **config):
    scene = Scene()
    choreographer = TransitionChoreographer(
        clock,
        ArcConfig(**config),
        on_arcs=scene.on_arcs,
        on_rings=scene.on_rings,
        on_event=scene.on_event,
    )
    return choreographer, scene


class TestTiming:
    """Arc and ring lifetimes derived from the dash cycle."""

    def test_full_animation_time(self):
        config = ArcConfig(flight_time_ms=2000, dash_length=0.6, dash_gap=2)
        assert config.full_animation_time_ms == pytest.approx(3538.4615, rel=1e-6)

    def test_arc_clears_after_full_dash_cycle(self, scheduler):
        """The arc outlives the flight time until the gap has crossed too."""
        chor, scene = make_choreographer(
            scheduler, flight_time_ms=2000, dash_length=0.6, dash_gap=2
        )
        chor.transition(ORIGIN, DESTINATION)
        assert len(scene.arcs) == 1

        scheduler.advance_to(2000)
        assert len(scene.arcs) == 1
        scheduler.advance_to(3538)
        assert len(scene.arcs) == 1
        scheduler.advance_to(3539)
        assert scene.arcs == []

    def test_destination_ring_spawns_at_flight_time(self, scheduler):
        chor, scene = make_choreographer(scheduler, flight_time_ms=2000, relative_length=0.4)
        chor.transition(ORIGIN, DESTINATION)

        # Origin ring only
        assert [(r.lat, r.lng) for r in scene.rings] == [(ORIGIN.lat, ORIGIN.lng)]

        scheduler.advance_to(1999)
        assert all(r.lat != DESTINATION.lat for r in scene.rings)

        scheduler.advance_to(2000)
        destination_rings = [r for r in scene.rings if r.lat == DESTINATION.lat]
        assert len(destination_rings) == 1
        assert destination_rings[0].spawned_at == 2000

        scheduler.advance_to(2799)
        assert any(r.lat == DESTINATION.lat for r in scene.rings)
        scheduler.advance_to(2800)
        assert scene.rings == []

    def test_origin_ring_lifetime(self, scheduler):
        chor, scene = make_choreographer(scheduler, flight_time_ms=2000, relative_length=0.4)
        chor.transition(ORIGIN, DESTINATION)
        scheduler.advance_to(799)
        assert len(scene.rings) == 1
        scheduler.advance_to(800)
        assert scene.rings == []

    def test_arrival_is_single_ring(self, scheduler):
        chor, scene = make_choreographer(scheduler)
        ring = chor.arrive(ORIGIN)

        assert scene.arcs == []
        assert scene.rings == [ring]
        assert ring.num_rings == 5
        assert chor.transition_count == 0


class TestOverlap:
    """Successive transitions coexist instead of replacing each other."""

    def test_second_transition_keeps_first_arc(self, scheduler):
        chor, scene = make_choreographer(scheduler, flight_time_ms=2000, dash_length=0.6, dash_gap=2)
        first = chor.transition(ORIGIN, DESTINATION)
        scheduler.advance_to(1000)
        second = chor.transition(DESTINATION, THIRD)

        assert {a.arc_id for a in scene.arcs} == {first.arc_id, second.arc_id}

        scheduler.advance_to(3539)
        assert [a.arc_id for a in scene.arcs] == [second.arc_id]
        scheduler.advance_to(4539)
        assert scene.arcs == []

    def test_event_sequence(self, scheduler):
        chor, scene = make_choreographer(scheduler)
        chor.transition(ORIGIN, DESTINATION)
        scheduler.advance_to(10000)

        assert scene.events == [
            "arc_spawned",
            "ring_spawned",
            "ring_cleared",
            "ring_spawned",
            "ring_cleared",
            "arc_cleared",
        ]

    def test_reconfigure_does_not_touch_in_flight_cascade(self, scheduler):
        chor, scene = make_choreographer(scheduler, flight_time_ms=2000, relative_length=0.4)
        chor.transition(ORIGIN, DESTINATION)
        chor.reconfigure(ArcConfig(flight_time_ms=500, relative_length=1.0))

        scheduler.advance_to(2000)
        ring = next(r for r in scene.rings if r.lat == DESTINATION.lat)
        assert ring.lifetime_ms == pytest.approx(800)


class TestTeardown:
    """cancel_all leaves nothing to fire."""

    def test_cancel_all(self, scheduler):
        chor, scene = make_choreographer(scheduler)
        chor.transition(ORIGIN, DESTINATION)
        assert chor.pending_timers == 3

        cancelled = chor.cancel_all()
        assert cancelled == 3
        events_before = list(scene.events)
        scheduler.advance_to(60000)
        assert scene.events == events_before
        assert scheduler.pending == 0


class TestRingFade:
    """Ring color follows sqrt(1 - t)."""

    @pytest.mark.parametrize("t,expected", [(0.0, 1.0), (0.75, 0.5), (1.0, 0.0), (1.5, 0.0), (-1, 1.0)])
    def test_opacity(self, t, expected):
        assert ring_opacity(t) == pytest.approx(expected)

    def test_color_string(self):
        assert ring_color(0.0) == "rgba(255,255,255,1.0)"

    def test_live_ring_colors(self, scheduler):
        chor, _ = make_choreographer(scheduler, flight_time_ms=2000, relative_length=0.4)
        chor.arrive(ORIGIN)
        scheduler.advance_to(400)
        assert chor.ring_colors() == [f"rgba(255,255,255,{math.sqrt(0.5)})"]
