"""Shared fixtures for smart_scheduling functional tests."""

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from smart_scheduling.activity.model import StoreBase
from smart_scheduling.activity.storage import MemoryStore, SQLStore
from smart_scheduling.activity.tracker import ActivityTracker
from smart_scheduling.maintenance import MaintenanceSchedule

# Monday 2026-10-19 12:00 UTC
BASE_TIME = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def to_ms(moment):
    return int(moment.timestamp() * 1000)


class FakeClock:
    """Controllable millisecond clock."""

    def __init__(self, start=BASE_TIME):
        self.now = to_ms(start)

    def __call__(self):
        return self.now

    def set(self, moment):
        self.now = to_ms(moment)

    def at(self, hour, days_ago=0):
        """Jump to ``hour``:00 UTC, ``days_ago`` days before the base date."""
        self.set(BASE_TIME.replace(hour=hour) - timedelta(days=days_ago))

    def advance(self, days=0, hours=0, minutes=0, seconds=0):
        self.now += int(timedelta(days=days, hours=hours, minutes=minutes, seconds=seconds).total_seconds() * 1000)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip SMART_SCHEDULING_* env vars for test isolation."""
    for key in list(os.environ):
        if key.startswith("SMART_SCHEDULING_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def tracker(memory_store, clock):
    """ActivityTracker on an in-memory store, UTC hours, fake clock."""
    return ActivityTracker(memory_store, clock=clock, tz=timezone.utc)


@pytest.fixture
def schedule(memory_store, clock):
    return MaintenanceSchedule(memory_store, clock=clock, tz=timezone.utc)


@pytest.fixture
def sql_store():
    """Create SQLStore wired to in-memory SQLite. Returns ready instance."""
    store = SQLStore("sqlite:///:memory:")

    engine = create_engine("sqlite:///:memory:")
    StoreBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()

    store._engine = engine
    store._db_session = session

    yield store
    store.close()
