"""FastAPI application for the counter service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable

from fastapi import Depends, FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ServiceSettings
from .database import SqlCounterStore, bootstrap_store
from .errors import CounterServiceError, MethodNotAllowed
from .logger import configure_uvicorn_logging, get_logger
from .middleware import CounterCORSMiddleware, apply_cors_headers
from .schemas import CounterResponse
from .service import CounterService, CounterStore
from .version import get_service_version, log_service_startup

logger = get_logger(__name__)


def get_counter_service(request: Request) -> CounterService:
    """FastAPI dependency returning the app's counter service."""
    return request.app.state.counter_service


def read_counter(service: CounterService = Depends(get_counter_service)) -> CounterResponse:
    """Return the current counter value."""
    return CounterResponse(value=service.get_value())


def increment_counter(service: CounterService = Depends(get_counter_service)) -> CounterResponse:
    """Increment the counter and return the new value."""
    return CounterResponse(value=service.increment())


@dataclass(frozen=True)
class CounterRoute:
    path: str
    method: str
    endpoint: Callable[..., Any]


ROUTES: tuple[CounterRoute, ...] = (
    CounterRoute("/counter", "GET", read_counter),
    CounterRoute("/counter/increment", "POST", increment_counter),
)

ALLOWED_METHODS: dict[str, str] = {route.path: route.method for route in ROUTES}


def _method_not_allowed_response(exc: MethodNotAllowed) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc),
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": f"{exc.allowed}, OPTIONS"},
    )


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        allowed = ALLOWED_METHODS.get(request.url.path)
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and allowed:
            logger.debug("%s %s rejected, use %s", request.method, request.url.path, allowed)
            return _method_not_allowed_response(MethodNotAllowed(allowed))
        return await http_exception_handler(request, exc)

    @app.exception_handler(CounterServiceError)
    async def handle_counter_error(request: Request, exc: CounterServiceError):
        if isinstance(exc, MethodNotAllowed):
            return _method_not_allowed_response(exc)
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return PlainTextResponse(
            str(exc),
            status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Unexpected errors bypass the CORS middleware, so stamp headers here
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("%s %s crashed", request.method, request.url.path)
        return apply_cors_headers(
            PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        )


def create_app(
    settings: ServiceSettings | None = None,
    store: CounterStore | None = None,
) -> FastAPI:
    """Create the counter service app.

    The store is bootstrapped (connect, create table, seed row) when the app
    starts and shut down when it stops. Startup failures propagate, so the
    server never serves requests against a broken store.

    Args:
        settings: Service settings (defaults to ``ServiceSettings.from_env()``).
        store: Counter store (defaults to a ``SqlCounterStore``).

    Usage:
        app = create_app()
        uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
    """
    settings = settings or ServiceSettings.from_env()
    if store is None:
        store = SqlCounterStore(statement_timeout=settings.statement_timeout)
    service = CounterService(store)
    version = get_service_version()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_uvicorn_logging()
        log_service_startup(version)
        logger.info("Settings: %s", settings.to_dict())
        await run_in_threadpool(bootstrap_store, store, settings.database_url)
        logger.info("Counter store ready")
        try:
            yield
        finally:
            await run_in_threadpool(store.shutdown)
            logger.info("Counter store released")

    app = FastAPI(
        title="Counter Service",
        description="Persistent HTTP counter backed by a single-row table",
        version=version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.counter_service = service

    for route in ROUTES:
        app.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            response_model=CounterResponse,
        )

    @app.get("/healthz", response_class=PlainTextResponse)
    def healthz() -> str:
        """Liveness probe; does not touch the store."""
        return "ok"

    _install_exception_handlers(app)
    app.add_middleware(CounterCORSMiddleware, preflight_paths=ALLOWED_METHODS)

    return app
