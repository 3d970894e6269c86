"""Shared JSON handler plumbing."""

import json
import logging

from tornado import web

log = logging.getLogger('smart_scheduling.api')


class BaseAPIHandler(web.RequestHandler):
    """JSON request/response handler with the tracker and schedule injected."""

    def initialize(self, tracker=None, schedule=None):
        self.tracker = tracker
        self.schedule = schedule

    def set_default_headers(self):
        self.set_header('Content-Type', 'application/json')

    def get_json_body(self):
        """Decode the request body as a JSON object. Raises ValueError otherwise."""
        body = self.request.body.decode('utf-8')
        data = json.loads(body) if body else {}
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data

    def bad_request(self, message):
        self.set_status(400)
        return self.finish({"success": False, "error": message})

    def write_error(self, status_code, **kwargs):
        self.finish({"success": False, "error": self._reason})
