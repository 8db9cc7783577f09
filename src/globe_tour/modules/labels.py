"""Collision-avoiding label placement.

The globe is divided into a uniform latitude/longitude grid. Labels are
processed in input order; the first label in a cell hangs below its dot,
later ones rotate through top, right and left. A fifth label in a fully
used cell is nudged north by a fraction of the cell and placed again,
possibly in a new cell. This is a declutter heuristic, not a guarantee:
very dense clusters can still overlap.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from globe_tour.schemas import Label, LabelOrientation, Location, PointOfInterest
from globe_tour.utils.config import (
    DEFAULT_LABEL_CELL_SIZE_DEG,
    DEFAULT_MAX_LABEL_NUDGES,
    LABEL_NUDGE_FRACTION,
)

logger = logging.getLogger(__name__)

GridKey = tuple[int, int]

# Orientation that follows the current occupant's; None means the cell is full
_NEXT_ORIENTATION: dict[LabelOrientation, LabelOrientation | None] = {
    LabelOrientation.BOTTOM: LabelOrientation.TOP,
    LabelOrientation.TOP: LabelOrientation.RIGHT,
    LabelOrientation.RIGHT: LabelOrientation.LEFT,
    LabelOrientation.LEFT: None,
}


class LabelCollisionResolver:
    """Assigns orientations (and nudges) so labels in one cell do not stack.

    Args:
        cell_size_deg: Edge of a grid cell in degrees.
        max_nudges: Most latitude nudges applied to a single label. When
            exhausted the label stays where the last nudge put it, hanging
            ``bottom``.
    """

    def __init__(
        self,
        cell_size_deg: float = DEFAULT_LABEL_CELL_SIZE_DEG,
        max_nudges: int = DEFAULT_MAX_LABEL_NUDGES,
    ) -> None:
        if cell_size_deg <= 0:
            raise ValueError(f"cell_size_deg must be positive, got {cell_size_deg}")
        if max_nudges < 0:
            raise ValueError(f"max_nudges must be >= 0, got {max_nudges}")
        self._cell_size = cell_size_deg
        self._max_nudges = max_nudges

    @property
    def cell_size_deg(self) -> float:
        return self._cell_size

    def grid_key(self, lat: float, lng: float) -> GridKey:
        return (
            math.floor(lat / self._cell_size),
            math.floor(lng / self._cell_size),
        )

    def resolve(self, labels: Iterable[Label]) -> list[Label]:
        """Return repositioned copies of ``labels``; inputs are untouched."""
        occupants: dict[GridKey, LabelOrientation] = {}
        nudge = self._cell_size * LABEL_NUDGE_FRACTION
        resolved: list[Label] = []

        for label in labels:
            lat = label.lat
            nudges = 0
            while True:
                key = self.grid_key(lat, label.lng)
                occupant = occupants.get(key)
                if occupant is None:
                    orientation = LabelOrientation.BOTTOM
                    break
                following = _NEXT_ORIENTATION[occupant]
                if following is not None:
                    orientation = following
                    break
                if nudges >= self._max_nudges:
                    logger.debug(
                        "Label %r still colliding after %d nudges", label.text, nudges
                    )
                    orientation = LabelOrientation.BOTTOM
                    break
                lat = min(90.0, lat + nudge)
                nudges += 1

            occupants[key] = orientation
            resolved.append(label.model_copy(update={"lat": lat, "orientation": orientation}))

        return resolved


def build_labels(
    location: Location,
    points: Iterable[PointOfInterest],
    size: float,
    dot_radius: float,
) -> list[Label]:
    """Candidate labels for the points of interest of ``location``."""
    return [
        Label(
            lat=point.lat,
            lng=point.lng,
            text=point.name,
            size=size,
            dot_radius=dot_radius,
        )
        for point in points
        if point.belongs_to(location)
    ]
