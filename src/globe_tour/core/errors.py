"""Exception hierarchy for the globe tour engine."""

from __future__ import annotations


class TourError(Exception):
    """Base class for engine errors."""


class ProviderError(TourError):
    """A location provider could not produce a dataset."""


class RenderSinkError(TourError):
    """A render sink could not be created or initialized."""
