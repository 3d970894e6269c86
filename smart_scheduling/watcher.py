"""Background maintenance watcher using Tornado PeriodicCallback."""

import logging

from tornado.ioloop import PeriodicCallback

from .activity.storage import StorageError

log = logging.getLogger('smart_scheduling.watcher')


class MaintenanceWatcher:
    """Periodically refreshes activity metrics and ends expired maintenance."""

    def __init__(self, tracker, schedule, interval_seconds=60):
        self.tracker = tracker
        self.schedule = schedule
        self.interval_seconds = interval_seconds
        self.periodic_callback = None
        log.info(f"[MaintenanceWatcher] Initialized with interval={self.interval_seconds}s")

    def start(self):
        if self.periodic_callback is not None:
            log.info("[MaintenanceWatcher] Already running")
            return

        self.periodic_callback = PeriodicCallback(self.tick, self.interval_seconds * 1000)
        self.periodic_callback.start()
        log.info(f"[MaintenanceWatcher] Started - checking every {self.interval_seconds}s")

    def stop(self):
        if self.periodic_callback is not None:
            self.periodic_callback.stop()
            self.periodic_callback = None
            log.info("[MaintenanceWatcher] Stopped")

    def tick(self):
        # Metrics windows slide with the clock even when nothing is logged
        self.tracker.update_metrics()
        try:
            self.schedule.expire_if_due()
        except StorageError as e:
            log.warning(f"[MaintenanceWatcher] Error checking maintenance: {e}")
