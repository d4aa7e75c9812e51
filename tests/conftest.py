"""Pytest configuration and fixtures for time-tracker tests."""

import logging
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from time_tracker.exceptions import StoreWriteError
from time_tracker.services.log_store import LogStore
from time_tracker.services.storage import KeyValueStorage
from time_tracker.services.tracker_service import TrackerService

START = datetime(2025, 4, 9, 15, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic clock advancing by ``step`` on every call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=30)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


class FailingStorage(KeyValueStorage):
    """Storage whose writes can be switched to fail."""

    def __init__(self, data_dir: Path):
        super().__init__(data_dir)
        self.fail_writes = False

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StoreWriteError("disk full", key=key)
        super().set_item(key, value)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging configuration between tests."""
    yield
    logger = logging.getLogger("time_tracker")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(data_dir: Path) -> FailingStorage:
    return FailingStorage(data_dir)


@pytest.fixture
def store(storage: FailingStorage, clock: FakeClock) -> LogStore:
    """Initialized, empty log store."""
    log_store = LogStore(storage, clock=clock)
    log_store.init()
    return log_store


@pytest.fixture
def tracker(data_dir: Path, clock: FakeClock) -> TrackerService:
    """Initialized tracker with nothing persisted."""
    return TrackerService(data_dir, clock=clock).init()
