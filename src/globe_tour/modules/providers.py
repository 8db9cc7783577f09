"""Location data providers.

Providers raise on failure; the engine is responsible for degrading to
an empty tour. Raw records may use either the engine's field names or
the content-sheet names (``location``, ``port``) used by the site data.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import requests
from pydantic import ValidationError

from globe_tour.core.errors import ProviderError
from globe_tour.core.interfaces import LocationProvider
from globe_tour.schemas import Location, LocationDataset, PointOfInterest

logger = logging.getLogger(__name__)


def parse_dataset(
    locations: Iterable[dict[str, Any]],
    points: Iterable[dict[str, Any]],
) -> LocationDataset:
    """Validate raw records into a dataset.

    Points whose parent is referenced by name are re-keyed to the parent's
    id so lookups do not depend on which form the source used.

    Raises:
        ProviderError: If any record fails validation.
    """
    try:
        parsed_locations = [Location.model_validate(raw) for raw in locations]
        parsed_points = [PointOfInterest.model_validate(raw) for raw in points]
    except ValidationError as e:
        raise ProviderError(f"Invalid location data: {e}") from e

    ids_by_name = {loc.name: loc.id for loc in parsed_locations}
    rekeyed = [
        point.model_copy(update={"parent_location_id": ids_by_name[point.parent_location_id]})
        if point.parent_location_id in ids_by_name
        else point
        for point in parsed_points
    ]
    return LocationDataset(locations=parsed_locations, points=rekeyed)


class StaticLocationProvider(LocationProvider):
    """Serves an already materialized dataset."""

    def __init__(
        self,
        locations: Iterable[Location] = (),
        points: Iterable[PointOfInterest] = (),
    ) -> None:
        self._dataset = LocationDataset(locations=list(locations), points=list(points))

    def load(self) -> LocationDataset:
        # Fresh copies each call, like a provider that re-fetches
        return self._dataset.model_copy(deep=True)


class JsonFileLocationProvider(LocationProvider):
    """Reads ``{"locations": [...], "ports": [...]}`` from a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LocationDataset:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ProviderError(f"Cannot read {self._path}: {e}") from e

        if not isinstance(payload, dict):
            raise ProviderError(f"{self._path}: expected a JSON object")
        points = payload.get("points", payload.get("ports", []))
        return parse_dataset(payload.get("locations", []), points)


class HttpLocationProvider(LocationProvider):
    """Fetches locations and points of interest from two JSON endpoints.

    Performs a single GET per endpoint; retries are the caller's concern.
    """

    def __init__(
        self,
        base_url: str,
        locations_path: str = "locations",
        points_path: str = "ports",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._locations_path = locations_path.strip("/")
        self._points_path = points_path.strip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def _fetch(self, path: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}/{path}"
        try:
            resp = self._session.get(url, timeout=self._timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ProviderError(f"GET {url} failed: {e}") from e
        if not isinstance(data, list):
            raise ProviderError(f"GET {url}: expected a JSON array")
        logger.debug("Fetched %d records from %s", len(data), url)
        return data

    def load(self) -> LocationDataset:
        locations = self._fetch(self._locations_path)
        points = self._fetch(self._points_path)
        return parse_dataset(locations, points)
