"""Pytest fixtures for plantlog tests."""

from datetime import datetime, timezone

import pytest

from plantlog.core import RecordStore
from plantlog.storage import MemoryKeyValueStore

FIXED_NOW = datetime(2024, 1, 2, 8, 30, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and config file."""
    for var in (
        "PLANTLOG_DB",
        "PLANTLOG_DATA_DIR",
        "PLANTLOG_EXPORT_DIR",
        "PLANTLOG_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PLANTLOG_CONFIG", str(tmp_path / "missing-config.toml"))
    yield


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def medium():
    return MemoryKeyValueStore()


@pytest.fixture
def store(medium, clock):
    """Initialized RecordStore over an empty in-memory medium."""
    store = RecordStore(medium, clock=clock)
    store.initialize()
    return store


@pytest.fixture
def echeveria(store):
    """A plant already in the store."""
    return store.add_plant(
        name="Echeveria",
        species="E. elegans",
        acquisition_date="2024-01-01",
    )
