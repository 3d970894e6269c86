"""Tornado application wiring for the JSON API."""

from tornado import web

from .handlers import (
    ActivityEventsHandler,
    ActivityLogsHandler,
    ActivityMetricsHandler,
    ActivityResetHandler,
    HeatmapHandler,
    MaintenanceStateHandler,
    MaintenanceWindowsHandler,
    ScheduleMaintenanceHandler,
    StartMaintenanceHandler,
    StopMaintenanceHandler,
    ToggleMaintenanceHandler,
)


def make_app(tracker, schedule, **settings):
    """Build the API application around a tracker and a maintenance schedule."""
    deps = {'tracker': tracker, 'schedule': schedule}
    return web.Application([
        (r'/api/activity/events', ActivityEventsHandler, deps),
        (r'/api/activity/logs', ActivityLogsHandler, deps),
        (r'/api/activity/metrics', ActivityMetricsHandler, deps),
        (r'/api/activity/windows', MaintenanceWindowsHandler, deps),
        (r'/api/activity/heatmap', HeatmapHandler, deps),
        (r'/api/activity/reset', ActivityResetHandler, deps),
        (r'/api/maintenance', MaintenanceStateHandler, deps),
        (r'/api/maintenance/start', StartMaintenanceHandler, deps),
        (r'/api/maintenance/schedule', ScheduleMaintenanceHandler, deps),
        (r'/api/maintenance/stop', StopMaintenanceHandler, deps),
        (r'/api/maintenance/toggle', ToggleMaintenanceHandler, deps),
    ], **settings)
