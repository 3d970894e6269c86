"""Activity tracking and maintenance window recommendation."""

from .model import StoreBase, StoredValue
from .patterns import (
    InvalidDurationError,
    build_heatmap,
    calculate_confidence,
    compute_metrics,
    confidence_level,
    default_windows,
    describe_window,
    format_hour,
    intensity_level,
    rank_windows,
)
from .storage import MemoryStore, SQLStore, StorageError
from .tracker import ActivityTracker

__all__ = [
    "StoreBase",
    "StoredValue",
    "InvalidDurationError",
    "build_heatmap",
    "calculate_confidence",
    "compute_metrics",
    "confidence_level",
    "default_windows",
    "describe_window",
    "format_hour",
    "intensity_level",
    "rank_windows",
    "MemoryStore",
    "SQLStore",
    "StorageError",
    "ActivityTracker",
]
