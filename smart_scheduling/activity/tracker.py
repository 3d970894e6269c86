"""ActivityTracker - best-effort activity log and maintenance window recommender."""

import json
import logging
import threading
import time
import uuid
from datetime import datetime

from .patterns import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    MS_PER_DAY,
    build_heatmap,
    compute_metrics,
    default_windows,
    rank_windows,
    validate_duration,
)
from .storage import StorageError

log = logging.getLogger('smart_scheduling.activity')

LOGS_KEY = 'activity_logs'
METRICS_KEY = 'activity_metrics'
ANONYMOUS = 'anonymous'


def wall_clock_ms():
    return int(time.time() * 1000)


def _is_pattern(value, size):
    return isinstance(value, list) and len(value) == size and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in value
    )


def _is_event(value):
    if not isinstance(value, dict):
        return False
    timestamp = value.get('timestamp')
    return isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool)


class ActivityTracker:
    """Records user actions and recommends low-activity maintenance windows.

    Usage:
        tracker = ActivityTracker(SQLStore(db_url))
        tracker.log_activity('file_upload', 'alice@example.com', {'file_name': 'q3.xlsx'})
        windows = tracker.predict_optimal_windows(duration_hours=2)
        heatmap = tracker.get_heatmap_data()

    Tracking never interrupts the caller: storage failures are logged,
    counted in ``storage_failures`` and reported as None / empty results.
    """

    DEFAULT_RETENTION_DAYS = 30
    DEFAULT_PATTERN_DAYS = 7

    def __init__(self, store, clock=None, tz=None,
                 retention_days=DEFAULT_RETENTION_DAYS, pattern_days=DEFAULT_PATTERN_DAYS):
        self.store = store
        self.clock = clock or wall_clock_ms
        self.tz = tz
        self.retention_days = retention_days
        self.pattern_days = pattern_days
        self.storage_failures = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, store, settings, clock=None, tz=None):
        return cls(
            store,
            clock=clock,
            tz=tz,
            retention_days=settings['retention_days'],
            pattern_days=settings['pattern_days'],
        )

    def _record_failure(self, message, error):
        self.storage_failures += 1
        log.warning(f"[ActivityTracker] {message}: {error}")

    def _load(self, key, expected_type, default, strict=False):
        """Read and decode a JSON value; corrupt data counts as missing.

        With strict=True a StorageError is re-raised instead of swallowed.
        """
        try:
            raw = self.store.read(key)
        except StorageError as e:
            if strict:
                raise
            self._record_failure(f"Error reading {key}", e)
            return default

        if raw is None:
            return default

        try:
            value = json.loads(raw)
        except ValueError as e:
            log.warning(f"[ActivityTracker] Ignoring corrupt {key}: {e}")
            return default

        if not isinstance(value, expected_type):
            log.warning(f"[ActivityTracker] Ignoring {key}: expected {expected_type.__name__}")
            return default
        return value

    def _save(self, key, value):
        self.store.write(key, json.dumps(value).encode('utf-8'))

    def _local_time(self, timestamp):
        return datetime.fromtimestamp(timestamp / 1000, self.tz)

    def log_activity(self, action, user_id=ANONYMOUS, metadata=None):
        """Append an event for ``action`` and prune events past retention.

        Returns the stored event, or None if it could not be persisted.
        """
        if not isinstance(action, str) or not action:
            raise ValueError("action must be a non-empty string")

        with self._lock:
            try:
                logs = [e for e in self._load(LOGS_KEY, list, [], strict=True) if _is_event(e)]
                timestamp = self.clock()
                moment = self._local_time(timestamp)

                entry = {
                    'id': f"{timestamp}_{uuid.uuid4().hex[:9]}",
                    'timestamp': timestamp,
                    'hour_of_day': moment.hour,
                    'day_of_week': moment.isoweekday() % 7,
                    'action': action,
                    'user_id': user_id or ANONYMOUS,
                    'metadata': dict(metadata) if metadata else {},
                }
                logs.append(entry)

                cutoff = timestamp - self.retention_days * MS_PER_DAY
                logs = [e for e in logs if e['timestamp'] > cutoff]
                self._save(LOGS_KEY, logs)
            except (StorageError, TypeError, ValueError) as e:
                self._record_failure("Failed to log activity", e)
                return None

            self.update_metrics()
            return entry

    def get_activity_logs(self):
        """All retained events; [] when the log is missing or unreadable."""
        return [e for e in self._load(LOGS_KEY, list, []) if _is_event(e)]

    def update_metrics(self):
        """Recompute and persist ActivityMetrics from the full log."""
        metrics = compute_metrics(self.get_activity_logs(), self.clock(), self.pattern_days)
        try:
            self._save(METRICS_KEY, metrics)
        except StorageError as e:
            self._record_failure("Failed to update metrics", e)
            return None
        return metrics

    def get_metrics(self):
        return self._load(METRICS_KEY, dict, {})

    def has_pattern_data(self):
        return _is_pattern(self.get_metrics().get('hourly_pattern'), HOURS_PER_DAY)

    def predict_optimal_windows(self, duration_hours=2):
        """Up to 5 ranked windows, or the three defaults when there is no data.

        Raises InvalidDurationError unless duration_hours is an int in 1..24.
        """
        validate_duration(duration_hours)

        hourly_pattern = self.get_metrics().get('hourly_pattern')
        if not _is_pattern(hourly_pattern, HOURS_PER_DAY):
            return default_windows()

        return rank_windows(hourly_pattern, duration_hours)

    def get_heatmap_data(self):
        metrics = self.get_metrics()
        hourly_pattern = metrics.get('hourly_pattern')
        daily_pattern = metrics.get('daily_pattern')
        if not _is_pattern(hourly_pattern, HOURS_PER_DAY) or not _is_pattern(daily_pattern, DAYS_PER_WEEK):
            return None

        return build_heatmap(hourly_pattern, daily_pattern)

    def clear_data(self):
        """Discard the log and metrics. Safe to call repeatedly."""
        with self._lock:
            for key in (LOGS_KEY, METRICS_KEY):
                try:
                    self.store.remove(key)
                except StorageError as e:
                    self._record_failure(f"Error removing {key}", e)
        log.info("[ActivityTracker] Activity data cleared")

    def get_status(self):
        """Get overall tracking status."""
        try:
            logs = [e for e in self._load(LOGS_KEY, list, [], strict=True) if _is_event(e)]
        except StorageError as e:
            self._record_failure("Error getting status", e)
            return "Storage not available"

        if not logs:
            return "No activity yet"
        users = {str(e.get('user_id', ANONYMOUS)) for e in logs}
        return f"{len(logs)} events from {len(users)} users"
