"""Handlers for activity tracking, recommendations and heatmap API."""

from tornado import web

from ..activity.patterns import confidence_level
from .base import BaseAPIHandler, log


class ActivityEventsHandler(BaseAPIHandler):
    """Handler for recording activity events."""

    async def post(self):
        """Record one event: {"action", "user_id"?, "metadata"?}."""
        try:
            data = self.get_json_body()
            action = data.get('action')
            if not isinstance(action, str) or not action:
                raise ValueError("action is required")
            metadata = data.get('metadata') or {}
            if not isinstance(metadata, dict):
                raise ValueError("metadata must be an object")
        except ValueError as e:
            log.error(f"[API] Invalid activity event: {e}")
            return self.bad_request(f"Invalid request. {e}")

        event = self.tracker.log_activity(action, data.get('user_id') or 'anonymous', metadata)
        if event is None:
            raise web.HTTPError(503, reason="Activity storage unavailable")

        self.finish({"success": True, "event": event})


class ActivityLogsHandler(BaseAPIHandler):
    """Handler for reading the retained activity log."""

    async def get(self):
        events = self.tracker.get_activity_logs()
        self.finish({"events": events, "count": len(events)})


class ActivityMetricsHandler(BaseAPIHandler):
    """Handler for the latest activity metrics."""

    async def get(self):
        metrics = self.tracker.get_metrics()
        metrics_status = self.tracker.get_status()
        self.finish({"metrics": metrics, "status": metrics_status})


class MaintenanceWindowsHandler(BaseAPIHandler):
    """Handler for ranked maintenance window recommendations."""

    async def get(self):
        """Recommend windows for ?duration=<hours> (default 2)."""
        try:
            duration_hours = int(self.get_query_argument('duration', '2'))
            windows = self.tracker.predict_optimal_windows(duration_hours)
        except ValueError as e:
            log.error(f"[API] Invalid duration: {e}")
            return self.bad_request("Invalid duration. Must be a whole number of hours between 1 and 24.")

        using_defaults = not self.tracker.has_pattern_data()
        for window in windows:
            window['confidence_level'] = confidence_level(window['confidence'])

        log.info(f"[API] Returning {len(windows)} window(s) for {duration_hours}h maintenance")
        self.finish({
            "duration_hours": duration_hours,
            "windows": windows,
            "using_defaults": using_defaults,
        })


class HeatmapHandler(BaseAPIHandler):
    """Handler for hourly/daily heatmap data."""

    async def get(self):
        self.finish({"heatmap": self.tracker.get_heatmap_data()})


class ActivityResetHandler(BaseAPIHandler):
    """Handler for clearing all activity data."""

    async def post(self):
        log.info("[API] Activity reset requested")
        self.tracker.clear_data()
        self.finish({"success": True})
