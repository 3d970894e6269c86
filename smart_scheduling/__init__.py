"""Activity-based maintenance window scheduling."""

__version__ = "1.0.0"

from .activity import ActivityTracker, MemoryStore, SQLStore, StorageError, InvalidDurationError
from .app import make_app
from .config import load_settings
from .maintenance import MaintenanceSchedule, next_window_start
from .watcher import MaintenanceWatcher

__all__ = [
    "ActivityTracker",
    "MemoryStore",
    "SQLStore",
    "StorageError",
    "InvalidDurationError",
    "make_app",
    "load_settings",
    "MaintenanceSchedule",
    "next_window_start",
    "MaintenanceWatcher",
]
