"""Utility functions and configuration."""

from globe_tour.utils.config import (
    DEFAULT_AUTOPLAY_INTERVAL_MS,
    DEFAULT_FLIGHT_TIME_MS,
    DEFAULT_LABEL_CELL_SIZE_DEG,
)
from globe_tour.utils.logging import (
    get_logger,
    LogCategory,
    LogEntry,
    LogLevel,
    set_logger,
    StructuredLogger,
)

__all__ = [
    "DEFAULT_AUTOPLAY_INTERVAL_MS",
    "DEFAULT_FLIGHT_TIME_MS",
    "DEFAULT_LABEL_CELL_SIZE_DEG",
    "get_logger",
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "set_logger",
    "StructuredLogger",
]
