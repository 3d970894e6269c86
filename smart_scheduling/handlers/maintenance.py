"""Handlers for maintenance mode state and control."""

from .base import BaseAPIHandler, log


def _state_response(schedule):
    state = schedule.get_state()
    state.update({
        "remaining": schedule.remaining(),
        "remaining_str": schedule.describe_remaining(),
        "progress": schedule.progress(),
    })
    return state


class MaintenanceStateHandler(BaseAPIHandler):
    """Handler for reading maintenance state."""

    async def get(self):
        self.finish(_state_response(self.schedule))


class StartMaintenanceHandler(BaseAPIHandler):
    """Handler for starting maintenance now for a number of hours."""

    async def post(self):
        try:
            data = self.get_json_body()
            self.schedule.start_for_hours(data.get('hours', 2))
        except ValueError as e:
            log.error(f"[API] Invalid maintenance start: {e}")
            return self.bad_request("Invalid request. Hours must be a positive number.")

        self.finish({"success": True, **_state_response(self.schedule)})


class ScheduleMaintenanceHandler(BaseAPIHandler):
    """Handler for scheduling maintenance at a recommended window."""

    async def post(self):
        try:
            data = self.get_json_body()
            self.schedule.schedule_window(data.get('start_hour'), data.get('duration_hours', 2))
        except ValueError as e:
            log.error(f"[API] Invalid maintenance schedule: {e}")
            return self.bad_request(f"Invalid request. {e}")

        self.finish({"success": True, **_state_response(self.schedule)})


class StopMaintenanceHandler(BaseAPIHandler):
    """Handler for ending maintenance immediately."""

    async def post(self):
        self.schedule.stop()
        self.finish({"success": True, **_state_response(self.schedule)})


class ToggleMaintenanceHandler(BaseAPIHandler):
    """Handler for the plain maintenance on/off switch."""

    async def post(self):
        try:
            data = self.get_json_body()
            self.schedule.set_enabled(data.get('enabled'))
        except ValueError as e:
            log.error(f"[API] Invalid maintenance toggle: {e}")
            return self.bad_request("Invalid request. enabled must be true or false.")

        self.finish({"success": True, **_state_response(self.schedule)})
