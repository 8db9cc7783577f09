"""Structured logging for the globe tour engine.

This module provides:
- LogCategory: Predefined log categories for consistent filtering
- StructuredLogger: Category-prefixed records forwarded to ``logging``
  and optionally mirrored as JSONL to a file handle
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any, TextIO

# =============================================================================
# LOG CATEGORIES
# =============================================================================

class LogCategory(str, Enum):
    """Log categories for structured filtering.

    Categories name engine components, not message content.
    """
    NAVIGATION = "NAVIGATION"      # Index changes and location activation
    AUTOPLAY = "AUTOPLAY"          # Autoplay state machine
    CHOREOGRAPHY = "CHOREOGRAPHY"  # Arc and ring cascades
    LABELS = "LABELS"              # Label placement
    DATA = "DATA"                  # Provider loads
    RENDER = "RENDER"              # Render sink lifecycle
    VIEWPORT = "VIEWPORT"          # Breakpoint changes
    SYSTEM = "SYSTEM"              # Engine lifecycle


class LogLevel(str, Enum):
    """Log levels for filtering."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


# =============================================================================
# LOG ENTRY
# =============================================================================

class LogEntry:
    """A structured log entry with category, level and free-form context."""

    def __init__(
        self,
        category: LogCategory,
        level: LogLevel,
        message: str,
        location_id: str | None = None,
        clock_ms: float | None = None,
        **context: Any,
    ):
        self.timestamp = datetime.now()
        self.category = category
        self.level = level
        self.message = message
        self.location_id = location_id
        self.clock_ms = clock_ms
        self.context = dict(context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        d: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "category": self.category.value,
            "level": self.level.value,
            "message": self.message,
        }
        if self.location_id is not None:
            d["location_id"] = self.location_id
        if self.clock_ms is not None:
            d["clock_ms"] = self.clock_ms
        if self.context:
            d["context"] = self.context
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def format_console(self) -> str:
        """Format with category prefix and short context."""
        prefix = f"[{self.category.value}]"
        parts = []
        if self.clock_ms is not None:
            parts.append(f"t={self.clock_ms:.0f}ms")
        if self.location_id:
            parts.append(f"loc={self.location_id}")
        context_str = f" ({', '.join(parts)})" if parts else ""
        return f"{prefix:14} {self.message}{context_str}"


# =============================================================================
# STRUCTURED LOGGER
# =============================================================================

class StructuredLogger:
    """Category-prefixed structured logger.

    Records go to the standard ``logging`` logger named ``name`` and are
    kept in a bounded history for inspection.
    """

    def __init__(
        self,
        name: str = "globe_tour",
        level: LogLevel = LogLevel.INFO,
        file_output: TextIO | None = None,
        max_history: int = 1000,
    ):
        self._logger = logging.getLogger(name)
        self._level = level
        self._file_output = file_output
        self._counts: dict[LogCategory, int] = {cat: 0 for cat in LogCategory}
        self._entries: list[LogEntry] = []
        self._max_history = max_history
        self._disabled_categories: set[LogCategory] = set()

    def log(
        self,
        category: LogCategory,
        level: LogLevel,
        message: str,
        **kwargs: Any,
    ) -> LogEntry:
        entry = LogEntry(category, level, message, **kwargs)

        if _LEVEL_MAP[level] < _LEVEL_MAP[self._level]:
            return entry
        if category in self._disabled_categories:
            return entry

        self._counts[category] += 1
        self._entries.append(entry)
        if len(self._entries) > self._max_history:
            self._entries = self._entries[-self._max_history:]

        self._logger.log(_LEVEL_MAP[level], entry.format_console())
        if self._file_output is not None:
            self._file_output.write(entry.to_json() + "\n")
            self._file_output.flush()
        return entry

    def debug(self, category: LogCategory, message: str, **kwargs: Any) -> LogEntry:
        return self.log(category, LogLevel.DEBUG, message, **kwargs)

    def info(self, category: LogCategory, message: str, **kwargs: Any) -> LogEntry:
        return self.log(category, LogLevel.INFO, message, **kwargs)

    def warning(self, category: LogCategory, message: str, **kwargs: Any) -> LogEntry:
        return self.log(category, LogLevel.WARNING, message, **kwargs)

    def error(self, category: LogCategory, message: str, **kwargs: Any) -> LogEntry:
        return self.log(category, LogLevel.ERROR, message, **kwargs)

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    def set_level(self, level: LogLevel) -> None:
        self._level = level

    def disable_categories(self, categories: list[LogCategory]) -> None:
        self._disabled_categories.update(categories)

    def set_file_output(self, file_output: TextIO | None) -> None:
        self._file_output = file_output

    # -------------------------------------------------------------------------
    # STATISTICS
    # -------------------------------------------------------------------------

    def get_statistics(self) -> dict[str, Any]:
        return {
            "total": sum(self._counts.values()),
            "by_category": {cat.value: count for cat, count in self._counts.items()},
        }

    def get_recent_entries(self, count: int = 100) -> list[LogEntry]:
        return self._entries[-count:]

    def filter_by_category(self, category: LogCategory) -> list[LogEntry]:
        return [e for e in self._entries if e.category == category]


# =============================================================================
# GLOBAL LOGGER INSTANCE
# =============================================================================

_global_logger: StructuredLogger | None = None


def get_logger() -> StructuredLogger:
    """Get the global structured logger."""
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger()
    return _global_logger


def set_logger(logger: StructuredLogger) -> None:
    """Replace the global structured logger."""
    global _global_logger
    _global_logger = logger


__all__ = [
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "StructuredLogger",
    "get_logger",
    "set_logger",
]
