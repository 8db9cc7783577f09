"""Tests for location data providers."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from globe_tour.core.errors import ProviderError
from globe_tour.modules.providers import (
    HttpLocationProvider,
    JsonFileLocationProvider,
    StaticLocationProvider,
    parse_dataset,
)
from globe_tour.sample_data import EXAMPLE_LOCATIONS, EXAMPLE_PORTS
from globe_tour.schemas import Location


def mock_response(payload, status_error=None):
    resp = MagicMock()
    resp.json.return_value = payload
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    return resp


class TestParseDataset:
    """Validation and parent re-keying."""

    def test_example_data(self):
        dataset = parse_dataset(EXAMPLE_LOCATIONS, EXAMPLE_PORTS)
        assert [l.name for l in dataset.locations] == [
            "Houston", "Shanghai", "Rotterdam", "Singapore", "Los Angeles",
        ]
        houston = dataset.locations[0]
        assert houston.contact is not None
        assert houston.contact.email == "houston@example.com"
        assert {p.name for p in dataset.points_for(houston)} == {
            "Port of Houston", "Bayport Container Terminal", "Barbours Cut Terminal",
        }

    def test_parent_names_rekeyed_to_ids(self):
        dataset = parse_dataset(
            [{"location": "Houston", "lat": 29.76, "lng": -95.37}],
            [{"port": "Port of Houston", "location": "Houston", "lat": 29.7, "lng": -95.2}],
        )
        assert dataset.points[0].parent_location_id == dataset.locations[0].id

    def test_invalid_record_raises_provider_error(self):
        with pytest.raises(ProviderError):
            parse_dataset([{"location": "Nowhere", "lat": 120, "lng": 0}], [])

    def test_missing_coordinates_raise_provider_error(self):
        with pytest.raises(ProviderError):
            parse_dataset([{"location": "Nowhere"}], [])


class TestStaticLocationProvider:
    """In-memory provider."""

    def test_returns_equal_but_fresh_objects(self):
        loc = Location(name="A", lat=1, lng=2)
        provider = StaticLocationProvider([loc])

        first = provider.load()
        second = provider.load()
        assert first.locations[0] is not second.locations[0]
        assert first.locations[0].same_place(second.locations[0])

    def test_empty(self):
        assert StaticLocationProvider().load().locations == []


class TestJsonFileLocationProvider:
    """JSON file provider."""

    def test_reads_ports_key(self, tmp_path):
        path = tmp_path / "tour.json"
        path.write_text(json.dumps({"locations": EXAMPLE_LOCATIONS, "ports": EXAMPLE_PORTS}))

        dataset = JsonFileLocationProvider(path).load()
        assert len(dataset.locations) == 5
        assert len(dataset.points) == len(EXAMPLE_PORTS)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProviderError):
            JsonFileLocationProvider(tmp_path / "missing.json").load()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ProviderError):
            JsonFileLocationProvider(path).load()

    def test_non_object_payload(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ProviderError):
            JsonFileLocationProvider(path).load()


class TestHttpLocationProvider:
    """HTTP provider over a mocked requests session."""

    def test_fetches_both_endpoints(self):
        session = MagicMock()
        session.get.side_effect = [
            mock_response(EXAMPLE_LOCATIONS),
            mock_response(EXAMPLE_PORTS),
        ]
        provider = HttpLocationProvider("https://example.com/api/", session=session, timeout=3)

        dataset = provider.load()

        assert len(dataset.locations) == 5
        urls = [c.args[0] for c in session.get.call_args_list]
        assert urls == ["https://example.com/api/locations", "https://example.com/api/ports"]
        assert session.get.call_args.kwargs["timeout"] == 3

    def test_http_error(self):
        session = MagicMock()
        session.get.return_value = mock_response(
            [], status_error=requests.HTTPError("503 Server Error")
        )
        with pytest.raises(ProviderError, match="503"):
            HttpLocationProvider("https://example.com", session=session).load()

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ProviderError):
            HttpLocationProvider("https://example.com", session=session).load()

    def test_non_list_payload(self):
        session = MagicMock()
        session.get.return_value = mock_response({"error": "nope"})
        with pytest.raises(ProviderError):
            HttpLocationProvider("https://example.com", session=session).load()
