"""Cross-origin middleware for the counter routes."""

from __future__ import annotations

from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


class CounterCORSMiddleware(BaseHTTPMiddleware):
    """Stamp permissive CORS headers on every response.

    ``OPTIONS`` requests to the counter routes are answered here with an empty
    200 and never reach routing, method checks or the store. Starlette's
    ``CORSMiddleware`` only reacts to requests carrying an ``Origin`` header,
    so it cannot give that guarantee.
    """

    def __init__(self, app: ASGIApp, *, preflight_paths: Iterable[str]):
        super().__init__(app)
        self._preflight_paths = frozenset(preflight_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS" and request.url.path in self._preflight_paths:
            return apply_cors_headers(Response(status_code=200))

        response = await call_next(request)
        return apply_cors_headers(response)
