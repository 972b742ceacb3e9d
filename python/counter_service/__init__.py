"""Persistent HTTP counter service."""

from .config import ServiceSettings
from .database import SqlCounterStore, bootstrap_store
from .errors import (
    ConfigError,
    CounterServiceError,
    DatabaseConnectionError,
    MethodNotAllowed,
    QueryError,
    SchemaError,
    UpdateError,
)
from .memory import InMemoryCounterStore
from .schemas import CounterResponse
from .server import ROUTES, create_app
from .service import CounterService, CounterStore
from .version import get_service_version, log_service_startup

__all__ = [
    # Configuration
    "ServiceSettings",
    # Stores
    "CounterStore",
    "SqlCounterStore",
    "InMemoryCounterStore",
    "bootstrap_store",
    # Service
    "CounterService",
    "CounterResponse",
    # Errors
    "CounterServiceError",
    "ConfigError",
    "DatabaseConnectionError",
    "SchemaError",
    "QueryError",
    "UpdateError",
    "MethodNotAllowed",
    # FastAPI integration
    "ROUTES",
    "create_app",
    # Version
    "get_service_version",
    "log_service_startup",
]
