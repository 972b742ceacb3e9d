"""Counter read/increment operations over a pluggable store."""

from __future__ import annotations

from typing import Protocol

from .errors import CounterServiceError, QueryError, UpdateError
from .logger import get_logger

logger = get_logger(__name__)


class CounterStore(Protocol):
    """Lifecycle and statements every counter store provides."""

    def initialize(self, connection_string: str) -> None: ...

    def ensure_schema(self) -> None: ...

    def ensure_seed_row(self) -> None: ...

    def read_value(self) -> int: ...

    def increment_value(self) -> int: ...

    def shutdown(self) -> None: ...


class CounterService:
    """Get/increment semantics over the single counter record.

    All state changes are delegated to the store; the service never reads a
    value back to write it again.
    """

    def __init__(self, store: CounterStore):
        self._store = store

    @property
    def store(self) -> CounterStore:
        return self._store

    def get_value(self) -> int:
        try:
            return self._store.read_value()
        except CounterServiceError:
            raise
        except Exception as exc:
            raise QueryError(f"DB query failed: {exc}") from exc

    def increment(self) -> int:
        try:
            value = self._store.increment_value()
        except CounterServiceError:
            raise
        except Exception as exc:
            raise UpdateError(f"DB update failed: {exc}") from exc
        logger.debug("Counter incremented to %d", value)
        return value
