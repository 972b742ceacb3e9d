"""CLI entrypoint for running the counter service."""

from __future__ import annotations

import sys

import uvicorn

from .config import ServiceSettings
from .errors import ConfigError
from .logger import get_logger
from .server import create_app

logger = get_logger(__name__)


def main() -> None:
    try:
        settings = ServiceSettings.from_env()
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Server running at http://localhost:%d", settings.port)
    # A failing lifespan (unreachable store, DDL error) makes uvicorn exit non-zero
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
