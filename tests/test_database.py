from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import inspect, text

from counter_service.database import SqlCounterStore, bootstrap_store, normalize_database_url
from counter_service.errors import (
    DatabaseConnectionError,
    QueryError,
    SchemaError,
    UpdateError,
)


def _set_value(store: SqlCounterStore, value: int) -> None:
    with store.engine.begin() as conn:
        conn.execute(text("UPDATE counters SET value = :value WHERE id = 1"), {"value": value})


def test_bootstrap_creates_table_and_seed_row(sql_store):
    columns = {col["name"] for col in inspect(sql_store.engine).get_columns("counters")}

    assert columns == {"id", "value"}
    assert sql_store.read_value() == 0


def test_sequential_increments(sql_store):
    for expected in range(1, 11):
        assert sql_store.increment_value() == expected

    assert sql_store.read_value() == 10


def test_concurrent_increments_lose_no_updates(sql_store):
    _set_value(sql_store, 3)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: sql_store.increment_value(), range(40)))

    assert sql_store.read_value() == 43
    assert sorted(results) == list(range(4, 44))


def test_seed_row_is_not_overwritten(sql_store, sqlite_url):
    _set_value(sql_store, 7)
    sql_store.shutdown()

    restarted = SqlCounterStore()
    bootstrap_store(restarted, sqlite_url)
    try:
        assert restarted.read_value() == 7
        restarted.ensure_seed_row()
        assert restarted.read_value() == 7
    finally:
        restarted.shutdown()


def test_missing_row_is_reported(sql_store):
    with sql_store.engine.begin() as conn:
        conn.execute(text("DELETE FROM counters"))

    with pytest.raises(QueryError):
        sql_store.read_value()
    with pytest.raises(UpdateError):
        sql_store.increment_value()


def test_operations_require_initialize():
    store = SqlCounterStore()

    with pytest.raises(SchemaError):
        store.ensure_schema()
    with pytest.raises(QueryError):
        store.read_value()
    with pytest.raises(UpdateError):
        store.increment_value()


def test_initialize_rejects_invalid_connection_string():
    store = SqlCounterStore()

    with pytest.raises(DatabaseConnectionError):
        store.initialize("definitely not a url")
    with pytest.raises(DatabaseConnectionError):
        store.initialize("")
    assert store.engine is None


def test_initialize_reports_unreachable_store(tmp_path):
    store = SqlCounterStore()
    missing = tmp_path / "no-such-dir" / "counter.db"

    with pytest.raises(DatabaseConnectionError):
        store.initialize(f"sqlite:///{missing}")
    assert store.engine is None


def test_shutdown_is_idempotent(sqlite_url):
    store = SqlCounterStore()
    store.initialize(sqlite_url)

    store.shutdown()
    store.shutdown()

    assert store.engine is None


class _FailingSchemaStore(SqlCounterStore):
    def __init__(self):
        super().__init__()
        self.shutdown_calls = 0

    def ensure_schema(self) -> None:
        raise SchemaError("boom")

    def shutdown(self) -> None:
        self.shutdown_calls += 1
        super().shutdown()


def test_bootstrap_releases_store_on_failure(sqlite_url):
    store = _FailingSchemaStore()

    with pytest.raises(SchemaError):
        bootstrap_store(store, sqlite_url)

    assert store.shutdown_calls == 1
    assert store.engine is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@db:5432/app", "postgresql+psycopg://u:p@db:5432/app"),
        ("postgresql://u:p@db/app", "postgresql+psycopg://u:p@db/app"),
        ("postgresql+psycopg2://u:p@db/app", "postgresql+psycopg://u:p@db/app"),
        ("postgresql+psycopg://u:p@db/app", "postgresql+psycopg://u:p@db/app"),
        ("sqlite:///counter.db", "sqlite:///counter.db"),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected
