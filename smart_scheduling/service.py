"""Standalone smart scheduling service process.

Serves the activity/maintenance JSON API and runs the maintenance watcher
against a SQLAlchemy-backed store.
"""

import logging
import sys

from tornado.ioloop import IOLoop

from .activity.storage import SQLStore
from .activity.tracker import ActivityTracker
from .app import make_app
from .config import load_settings
from .maintenance import MaintenanceSchedule
from .watcher import MaintenanceWatcher

logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)1.1s %(asctime)s.%(msecs)03d %(name)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
log = logging.getLogger('smart_scheduling.service')


def main():
    """Entry point for the standalone service."""
    settings = load_settings()
    store = SQLStore(settings['db_url'])
    tracker = ActivityTracker.from_settings(store, settings)
    schedule = MaintenanceSchedule(store)

    app = make_app(tracker, schedule)
    app.listen(settings['port'])
    log.info(f"Listening on port {settings['port']}")

    watcher = MaintenanceWatcher(tracker, schedule, settings['check_interval'])
    watcher.start()

    try:
        IOLoop.current().start()
    except KeyboardInterrupt:
        log.info("Shutting down")
        watcher.stop()
        store.close()
        sys.exit(0)


if __name__ == '__main__':
    main()
