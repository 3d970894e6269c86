"""Functional tests for the JSON API handlers."""

import json
from datetime import timezone

from tornado.testing import AsyncHTTPTestCase

from smart_scheduling.activity.storage import MemoryStore
from smart_scheduling.activity.tracker import ActivityTracker
from smart_scheduling.app import make_app
from smart_scheduling.maintenance import MaintenanceSchedule

from conftest import FakeClock


class APITestCase(AsyncHTTPTestCase):
    def get_app(self):
        self.clock = FakeClock()
        self.store = MemoryStore()
        self.tracker = ActivityTracker(self.store, clock=self.clock, tz=timezone.utc)
        self.schedule = MaintenanceSchedule(self.store, clock=self.clock, tz=timezone.utc)
        return make_app(self.tracker, self.schedule)

    def get_json(self, path):
        response = self.fetch(path)
        return response.code, json.loads(response.body)

    def post_json(self, path, data=None, raw=None):
        body = raw if raw is not None else json.dumps(data or {})
        response = self.fetch(path, method="POST", body=body)
        return response.code, json.loads(response.body)


class TestActivityAPI(APITestCase):
    def test_windows_default_without_data(self):
        code, body = self.get_json("/api/activity/windows")
        assert code == 200
        assert body['duration_hours'] == 2
        assert body['using_defaults'] is True
        assert [w['start_hour'] for w in body['windows']] == [2, 3, 1]
        assert [w['confidence_level'] for w in body['windows']] == ['medium', 'medium', 'medium']

    def test_windows_invalid_duration(self):
        for value in ("0", "25", "two"):
            code, body = self.get_json(f"/api/activity/windows?duration={value}")
            assert code == 400
            assert body['success'] is False

    def test_record_event(self):
        code, body = self.post_json("/api/activity/events", {
            "action": "file_upload",
            "user_id": "alice@example.com",
            "metadata": {"file_name": "report.xlsx", "file_size": 5120},
        })
        assert code == 200
        assert body['success'] is True
        assert body['event']['action'] == "file_upload"
        assert body['event']['hour_of_day'] == 12

        code, body = self.get_json("/api/activity/logs")
        assert body['count'] == 1
        assert body['events'][0]['user_id'] == "alice@example.com"

    def test_record_event_requires_action(self):
        code, body = self.post_json("/api/activity/events", {"user_id": "bob"})
        assert code == 400

    def test_record_event_invalid_json(self):
        code, body = self.post_json("/api/activity/events", raw="{not json")
        assert code == 400

    def test_record_event_storage_unavailable(self):
        self.store.available = False
        code, body = self.post_json("/api/activity/events", {"action": "login"})
        assert code == 503
        assert body['success'] is False

    def test_recommendations_after_activity(self):
        self.clock.at(2, days_ago=1)
        self.post_json("/api/activity/events", {"action": "login"})
        self.clock.at(2, days_ago=2)
        self.post_json("/api/activity/events", {"action": "login"})

        code, body = self.get_json("/api/activity/windows?duration=3")
        assert code == 200
        assert body['using_defaults'] is False
        assert body['windows']
        assert all(w['confidence_level'] == 'high' for w in body['windows'])

    def test_heatmap(self):
        code, body = self.get_json("/api/activity/heatmap")
        assert body == {"heatmap": None}

        self.post_json("/api/activity/events", {"action": "chart_generation"})
        code, body = self.get_json("/api/activity/heatmap")
        assert body['heatmap']['hourly'][12]['intensity'] == 100
        assert body['heatmap']['daily'][1]['label'] == "Mon"

    def test_metrics_and_reset(self):
        self.post_json("/api/activity/events", {"action": "login", "user_id": "carol"})
        code, body = self.get_json("/api/activity/metrics")
        assert body['metrics']['total_activities'] == 1
        assert body['status'] == "1 events from 1 users"

        code, body = self.post_json("/api/activity/reset")
        assert body == {"success": True}
        code, body = self.get_json("/api/activity/metrics")
        assert body['metrics'] == {}


class TestMaintenanceAPI(APITestCase):
    def test_initial_state(self):
        code, body = self.get_json("/api/maintenance")
        assert code == 200
        assert body['enabled'] is False
        assert body['remaining_str'] == "-"

    def test_start_and_stop(self):
        code, body = self.post_json("/api/maintenance/start", {"hours": 3})
        assert code == 200
        assert body['enabled'] is True
        assert body['remaining']['hours'] == 3

        code, body = self.post_json("/api/maintenance/stop")
        assert body['enabled'] is False
        assert body['until'] is None

    def test_start_rejects_bad_hours(self):
        code, body = self.post_json("/api/maintenance/start", {"hours": -1})
        assert code == 400

    def test_start_rejects_unbounded_hours(self):
        """Infinite or huge hours are a 400 and leave the state endpoint working."""
        for raw in ('{"hours": Infinity}', '{"hours": NaN}', '{"hours": 1e12}'):
            code, body = self.post_json("/api/maintenance/start", raw=raw)
            assert code == 400
            assert body['success'] is False

            code, body = self.get_json("/api/maintenance")
            assert code == 200
            assert body['enabled'] is False
            assert body['remaining_str'] == "-"

    def test_toggle_on_and_off(self):
        code, body = self.post_json("/api/maintenance/toggle", {"enabled": True})
        assert code == 200
        assert body['enabled'] is True
        assert body['until'] is None

        code, body = self.get_json("/api/maintenance")
        assert body['enabled'] is True

        code, body = self.post_json("/api/maintenance/toggle", {"enabled": False})
        assert body['enabled'] is False

    def test_toggle_requires_bool(self):
        code, body = self.post_json("/api/maintenance/toggle", {"enabled": "yes"})
        assert code == 400

    def test_schedule_recommended_window(self):
        code, body = self.post_json("/api/maintenance/schedule", {"start_hour": 3, "duration_hours": 2})
        assert code == 200
        assert body['enabled'] is True
        assert body['until'] - body['started'] == 2 * 60 * 60 * 1000

    def test_schedule_rejects_bad_window(self):
        code, body = self.post_json("/api/maintenance/schedule", {"start_hour": 3, "duration_hours": 30})
        assert code == 400

    def test_expired_maintenance_reported_off(self):
        self.post_json("/api/maintenance/start", {"hours": 1})
        self.clock.advance(hours=2)
        code, body = self.get_json("/api/maintenance")
        assert body['enabled'] is False
