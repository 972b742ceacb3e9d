"""Custom exceptions for the counter service."""

from __future__ import annotations


class CounterServiceError(RuntimeError):
    """Base error for counter service failures."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(CounterServiceError):
    """Raised when the service environment/configuration is invalid."""


class DatabaseConnectionError(CounterServiceError):
    """Raised when the store cannot be reached or the connection string is invalid."""


class SchemaError(CounterServiceError):
    """Raised when the counters table or its seed row cannot be created."""


class QueryError(CounterServiceError):
    """Raised when reading the counter fails."""


class UpdateError(CounterServiceError):
    """Raised when incrementing the counter fails or touches no row."""


class MethodNotAllowed(CounterServiceError):
    """Raised when a route is called with the wrong HTTP verb."""

    def __init__(self, allowed: str):
        super().__init__(f"Method not allowed, use {allowed}", status_code=405)
        self.allowed = allowed
