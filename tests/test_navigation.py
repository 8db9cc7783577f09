"""Tests for navigation state and index wraparound."""

from __future__ import annotations

import pytest

from globe_tour.modules.navigation import NavigationState, wrap_index
from globe_tour.schemas import Location


class Recorder:
    """Collects location_changed notifications."""

    def __init__(self):
        self.changes: list[tuple[Location | None, Location]] = []

    def __call__(self, previous, current):
        self.changes.append((previous, current))


# =============================================================================
# wrap_index
# =============================================================================

class TestWrapIndex:
    """Tests for modular index normalization."""

    @pytest.mark.parametrize(
        "index,length,expected",
        [(0, 4, 0), (3, 4, 3), (4, 4, 0), (-1, 4, 3), (-5, 4, 3), (17, 4, 1), (0, 1, 0)],
    )
    def test_wraps_into_range(self, index, length, expected):
        assert wrap_index(index, length) == expected


# =============================================================================
# NavigationState
# =============================================================================

class TestNavigationState:
    """Tests for next/prev/goto and change notification."""

    def test_activate_announces_first_location(self, four_locations):
        """First activation has no previous location."""
        nav = NavigationState(four_locations)
        rec = Recorder()
        nav.add_listener(rec)

        assert nav.activate() is four_locations[0]
        assert rec.changes == [(None, four_locations[0])]

    @pytest.mark.parametrize("start", [0, 1, 2, 3])
    def test_next_returns_to_start_after_n_calls(self, four_locations, start):
        """n calls to next() come back to the starting index."""
        nav = NavigationState(four_locations)
        nav.goto(start)

        seen = []
        for _ in range(len(four_locations)):
            nav.next()
            seen.append(nav.current_index)

        assert nav.current_index == start
        assert all(0 <= i < len(four_locations) for i in seen)
        assert sorted(seen) == [0, 1, 2, 3]

    def test_prev_wraps_to_last(self, four_locations):
        nav = NavigationState(four_locations)
        nav.activate()
        assert nav.prev() is four_locations[3]
        assert nav.current_index == 3

    @pytest.mark.parametrize("index,expected", [(4, 0), (-1, 3), (9, 1), (-6, 2)])
    def test_goto_out_of_range_normalizes(self, four_locations, index, expected):
        """Out-of-range requests are wrapped, never rejected."""
        nav = NavigationState(four_locations)
        nav.goto(index)
        assert nav.current_index == expected

    def test_empty_sequence_is_noop(self):
        """Every operation on an empty tour returns None without raising."""
        nav = NavigationState()
        rec = Recorder()
        nav.add_listener(rec)

        assert nav.activate() is None
        assert nav.next() is None
        assert nav.prev() is None
        assert nav.goto(5) is None
        assert nav.current is None
        assert rec.changes == []

    def test_listener_receives_previous_and_current(self, four_locations):
        nav = NavigationState(four_locations)
        rec = Recorder()
        nav.add_listener(rec)
        nav.activate()
        nav.next()

        assert rec.changes[-1] == (four_locations[0], four_locations[1])
        assert nav.previous_location is four_locations[0]

    def test_goto_current_index_is_silent(self, four_locations):
        nav = NavigationState(four_locations)
        rec = Recorder()
        nav.activate()
        nav.add_listener(rec)

        nav.goto(0)
        nav.goto(4)
        assert rec.changes == []

    def test_remove_listener(self, four_locations):
        nav = NavigationState(four_locations)
        rec = Recorder()
        nav.add_listener(rec)
        nav.remove_listener(rec)
        nav.remove_listener(rec)
        nav.activate()
        assert rec.changes == []


class TestValueEquality:
    """Change detection compares (name, lat, lng), not object identity."""

    def test_equal_copy_does_not_fire(self, four_locations):
        """A new but equal object in the same slot is not a change."""
        nav = NavigationState(four_locations)
        rec = Recorder()
        nav.add_listener(rec)
        nav.activate()

        copies = [Location(name=l.name, lat=l.lat, lng=l.lng) for l in four_locations]
        assert copies[0] is not four_locations[0]
        nav.set_sequence(copies)

        assert len(rec.changes) == 1
        assert nav.active_location is copies[0]

    def test_string_coordinates_compare_equal(self):
        a = Location(name="Houston", lat=29.7604, lng=-95.3698)
        b = Location.model_validate({"location": "Houston", "lat": "29.7604", "lng": "-95.3698"})
        nav = NavigationState([a])
        rec = Recorder()
        nav.add_listener(rec)
        nav.activate()

        nav.set_sequence([b])
        assert len(rec.changes) == 1

    def test_changed_coordinates_fire(self):
        a = Location(name="Houston", lat=29.7604, lng=-95.3698)
        moved = Location(name="Houston", lat=29.8, lng=-95.3698)
        nav = NavigationState([a])
        rec = Recorder()
        nav.add_listener(rec)
        nav.activate()

        nav.set_sequence([moved])
        assert rec.changes[-1] == (a, moved)

    def test_set_sequence_keeps_active_location(self, four_locations):
        """The active stop is found by value in a reordered sequence."""
        nav = NavigationState(four_locations)
        nav.goto(2)
        rec = Recorder()
        nav.add_listener(rec)

        reordered = list(reversed([Location(name=l.name, lat=l.lat, lng=l.lng) for l in four_locations]))
        nav.set_sequence(reordered)

        assert nav.current_index == 1
        assert nav.current.name == "C"
        assert rec.changes == []

    def test_set_sequence_falls_back_to_first(self, four_locations):
        nav = NavigationState(four_locations)
        nav.goto(3)
        rec = Recorder()
        nav.add_listener(rec)

        nav.set_sequence(four_locations[:2])
        assert nav.current_index == 0
        assert rec.changes == [(four_locations[3], four_locations[0])]

    def test_goto_by_value(self, four_locations):
        nav = NavigationState(four_locations)
        nav.activate()
        target = Location(name="renamed", lat=30.0, lng=30.0)

        assert nav.goto_by_value(target) is four_locations[2]
        assert nav.goto_by_value(Location(name="x", lat=0, lng=0)) is None
        assert nav.current_index == 2
