"""In-memory counter store.

Useful for local runs and tests that should not need a database. The value is
owned by the store instance and every access goes through one lock.
"""

from __future__ import annotations

from threading import Lock

from .errors import QueryError, UpdateError


class InMemoryCounterStore:
    """Process-local counter with the same interface as ``SqlCounterStore``."""

    def __init__(self, initial_value: int = 0):
        self._initial_value = initial_value
        self._value: int | None = None
        self._lock = Lock()
        self._open = False

    def initialize(self, connection_string: str = "memory://") -> None:
        del connection_string  # nothing to connect to
        with self._lock:
            self._open = True

    def ensure_schema(self) -> None:
        pass

    def ensure_seed_row(self) -> None:
        with self._lock:
            if self._value is None:
                self._value = self._initial_value

    def read_value(self) -> int:
        with self._lock:
            if not self._open or self._value is None:
                raise QueryError("Counter store is not initialized")
            return self._value

    def increment_value(self) -> int:
        with self._lock:
            if not self._open or self._value is None:
                raise UpdateError("Counter store is not initialized")
            self._value += 1
            return self._value

    def shutdown(self) -> None:
        with self._lock:
            self._open = False

    @property
    def is_open(self) -> bool:
        return self._open
