"""Storage backends for the activity log, metrics and maintenance state.

Every backend implements the same three calls:

    read(key) -> bytes or None
    write(key, data)
    remove(key)

and raises StorageError when the underlying store cannot be used.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .model import StoreBase, StoredValue

log = logging.getLogger('smart_scheduling.storage')


class StorageError(Exception):
    """Raised when a storage backend is unavailable or a write fails."""


class MemoryStore:
    """Dict-backed store. Set ``available = False`` to simulate an outage."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})
        self.available = True

    def _check(self):
        if not self.available:
            raise StorageError("Memory store unavailable")

    def read(self, key):
        self._check()
        return self._data.get(key)

    def write(self, key, data):
        self._check()
        self._data[key] = bytes(data)

    def remove(self, key):
        self._check()
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class SQLStore:
    """SQLAlchemy-backed store. The session is created on first use."""

    def __init__(self, db_url):
        self.db_url = db_url
        self._engine = None
        self._db_session = None

    def _get_db(self):
        if self._db_session is not None:
            return self._db_session

        try:
            self._engine = create_engine(self.db_url)
            StoreBase.metadata.create_all(self._engine)
            Session = sessionmaker(bind=self._engine)
            self._db_session = Session()
            log.info(f"[SQLStore] Database initialized: {self.db_url}")
            return self._db_session
        except SQLAlchemyError as e:
            raise StorageError(f"Database init failed: {e}") from e

    def read(self, key):
        db = self._get_db()
        try:
            row = db.get(StoredValue, key)
            return row.value if row is not None else None
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Error reading {key}: {e}") from e

    def write(self, key, data):
        db = self._get_db()
        try:
            db.merge(StoredValue(key=key, value=bytes(data), updated_at=datetime.now(timezone.utc)))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Error writing {key}: {e}") from e

    def remove(self, key):
        db = self._get_db()
        try:
            deleted = db.query(StoredValue).filter(StoredValue.key == key).delete()
            db.commit()
            if deleted > 0:
                log.info(f"[SQLStore] Removed {key}")
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Error removing {key}: {e}") from e

    def close(self):
        if self._db_session is not None:
            self._db_session.close()
            self._db_session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
