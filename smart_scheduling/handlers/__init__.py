"""JSON API request handlers."""

from .activity import (
    ActivityEventsHandler,
    ActivityLogsHandler,
    ActivityMetricsHandler,
    ActivityResetHandler,
    HeatmapHandler,
    MaintenanceWindowsHandler,
)
from .maintenance import (
    MaintenanceStateHandler,
    ScheduleMaintenanceHandler,
    StartMaintenanceHandler,
    StopMaintenanceHandler,
    ToggleMaintenanceHandler,
)

__all__ = [
    "ActivityEventsHandler",
    "ActivityLogsHandler",
    "ActivityMetricsHandler",
    "ActivityResetHandler",
    "HeatmapHandler",
    "MaintenanceWindowsHandler",
    "MaintenanceStateHandler",
    "ScheduleMaintenanceHandler",
    "StartMaintenanceHandler",
    "StopMaintenanceHandler",
    "ToggleMaintenanceHandler",
]
