"""Maintenance mode state: on/off flag, scheduled end and start time."""

import json
import logging
import math
from datetime import datetime, timedelta

from .activity.patterns import HOURS_PER_DAY, MS_PER_DAY, MS_PER_HOUR, validate_duration
from .activity.tracker import wall_clock_ms

log = logging.getLogger('smart_scheduling.maintenance')

FLAG_KEY = 'sys_maintenance'
UNTIL_KEY = 'sys_maintenance_until'
STARTED_KEY = 'sys_maintenance_started'

MS_PER_MINUTE = 60 * 1000
MAX_MAINTENANCE_HOURS = 24 * 365


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def next_window_start(start_hour, now, tz=None):
    """Timestamp (ms) of the next ``start_hour``:00, today if still ahead, else tomorrow."""
    current = datetime.fromtimestamp(now / 1000, tz)
    candidate = current.replace(hour=start_hour, minute=0, second=0, microsecond=0)
    if candidate <= current:
        candidate += timedelta(days=1)
    return int(candidate.timestamp() * 1000)


class MaintenanceSchedule:
    """Maintenance flag persisted in the same store as the activity log.

    Unlike activity tracking, storage errors propagate: turning maintenance
    on or off is an explicit admin action and must not fail silently.
    """

    def __init__(self, store, clock=None, tz=None):
        self.store = store
        self.clock = clock or wall_clock_ms
        self.tz = tz

    def _read(self, key, default=None):
        raw = self.store.read(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            log.warning(f"[Maintenance] Ignoring corrupt {key}")
            return default

    def _write(self, key, value):
        self.store.write(key, json.dumps(value).encode('utf-8'))

    def _raw_state(self):
        until = self._read(UNTIL_KEY)
        started = self._read(STARTED_KEY)
        return {
            'enabled': bool(self._read(FLAG_KEY, False)),
            'until': until if _is_number(until) else None,
            'started': started if _is_number(started) else None,
        }

    def get_state(self):
        """Current state; ends maintenance first if its end time has passed."""
        self.expire_if_due()
        return self._raw_state()

    def expire_if_due(self):
        state = self._raw_state()
        if state['enabled'] and state['until'] is not None and state['until'] <= self.clock():
            self.stop()
            log.info("[Maintenance] Scheduled maintenance ended")
            return True
        return False

    def _enable(self, started, until):
        self._write(FLAG_KEY, True)
        self._write(UNTIL_KEY, until)
        self._write(STARTED_KEY, started)

    def start_for_hours(self, hours):
        """Start maintenance now and end it after ``hours``."""
        if not _is_number(hours) or not math.isfinite(hours) or hours <= 0:
            raise ValueError(f"hours must be a positive number, got {hours!r}")
        if hours > MAX_MAINTENANCE_HOURS:
            raise ValueError(f"hours must be at most {MAX_MAINTENANCE_HOURS}, got {hours!r}")

        now = self.clock()
        until = now + int(hours * MS_PER_HOUR)
        self._enable(now, until)
        log.info(f"[Maintenance] Started for {hours}h")
        return self._raw_state()

    def schedule_window(self, start_hour, duration_hours):
        """Schedule maintenance at the next occurrence of ``start_hour``.

        The flag is switched on immediately so clients can announce the
        upcoming window; ``started`` records when the window opens.
        """
        if isinstance(start_hour, bool) or not isinstance(start_hour, int) or not 0 <= start_hour < HOURS_PER_DAY:
            raise ValueError(f"start_hour must be an integer between 0 and 23, got {start_hour!r}")
        validate_duration(duration_hours)

        started = next_window_start(start_hour, self.clock(), self.tz)
        until = started + duration_hours * MS_PER_HOUR
        self._enable(started, until)
        log.info(
            f"[Maintenance] Scheduled {duration_hours}h window starting "
            f"{datetime.fromtimestamp(started / 1000, self.tz):%Y-%m-%d %H:%M}"
        )
        return self._raw_state()

    def set_enabled(self, enabled):
        """Plain on/off switch. Turning on keeps any scheduled end; off clears it."""
        if not isinstance(enabled, bool):
            raise ValueError(f"enabled must be true or false, got {enabled!r}")
        if not enabled:
            return self.stop()

        self._write(FLAG_KEY, True)
        log.info("[Maintenance] Switched on")
        return self._raw_state()

    def stop(self):
        self._write(FLAG_KEY, False)
        self.store.remove(UNTIL_KEY)
        self.store.remove(STARTED_KEY)
        log.info("[Maintenance] Stopped")
        return self._raw_state()

    def remaining(self):
        """Time left until the scheduled end, as days/hours/minutes/seconds."""
        until = self._raw_state()['until']
        ms = max(0, until - self.clock()) if until is not None else 0
        return {
            'days': int(ms // MS_PER_DAY),
            'hours': int((ms % MS_PER_DAY) // MS_PER_HOUR),
            'minutes': int((ms % MS_PER_HOUR) // MS_PER_MINUTE),
            'seconds': int((ms % MS_PER_MINUTE) // 1000),
        }

    def progress(self):
        """Elapsed share (0-100) of the [started, until] span."""
        state = self._raw_state()
        started, until = state['started'], state['until']
        if started is None or until is None or until <= started:
            return 0.0

        total = until - started
        elapsed = min(total, max(0, self.clock() - started))
        return max(0.0, min(100.0, (elapsed / total) * 100))

    def describe_remaining(self):
        until = self._raw_state()['until']
        if until is None:
            return '-'

        left = self.remaining()
        end = datetime.fromtimestamp(until / 1000, self.tz)
        return f"{left['days']}d {left['hours']}h {left['minutes']}m (until {end:%Y-%m-%d %H:%M})"
