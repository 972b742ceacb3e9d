from __future__ import annotations

import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "python"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from counter_service.config import ServiceSettings
from counter_service.database import SqlCounterStore, bootstrap_store
from counter_service.memory import InMemoryCounterStore


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'counter.db'}"


@pytest.fixture
def sql_store(sqlite_url):
    store = SqlCounterStore()
    bootstrap_store(store, sqlite_url)
    yield store
    store.shutdown()


@pytest.fixture
def memory_settings():
    return ServiceSettings(database_url="memory://")


class RecordingStore(InMemoryCounterStore):
    """In-memory store that records every call it receives."""

    def __init__(self, initial_value: int = 0):
        super().__init__(initial_value)
        self.calls: list[str] = []

    def initialize(self, connection_string: str = "memory://") -> None:
        self.calls.append("initialize")
        super().initialize(connection_string)

    def ensure_schema(self) -> None:
        self.calls.append("ensure_schema")

    def ensure_seed_row(self) -> None:
        self.calls.append("ensure_seed_row")
        super().ensure_seed_row()

    def read_value(self) -> int:
        self.calls.append("read_value")
        return super().read_value()

    def increment_value(self) -> int:
        self.calls.append("increment_value")
        return super().increment_value()

    def shutdown(self) -> None:
        self.calls.append("shutdown")
        super().shutdown()


@pytest.fixture
def recording_store():
    return RecordingStore()
