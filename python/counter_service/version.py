"""Version detection and startup banner for the counter service."""

from __future__ import annotations

from pathlib import Path

from .logger import get_logger

logger = get_logger(__name__)

PACKAGE_NAME = "counter-service"
SERVICE_NAME = "counter"


def get_service_version(package_name: str = PACKAGE_NAME) -> str:
    """Get the service version from package metadata or pyproject.toml.

    1. Installed package metadata (production)
    2. pyproject.toml next to the source tree or in the working directory
       (development)
    3. "0.0.0" if neither is available
    """
    try:
        from importlib.metadata import PackageNotFoundError, version as get_package_version

        return get_package_version(package_name)
    except PackageNotFoundError:
        pass

    import tomllib

    # python/counter_service/version.py -> repo root
    search_paths = [Path(__file__).resolve().parents[2], Path.cwd()]
    for base_path in search_paths:
        pyproject_path = base_path / "pyproject.toml"
        if not pyproject_path.exists():
            continue
        try:
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Could not read version from %s: %s", pyproject_path, e)
            continue
        project = data.get("project", {})
        if project.get("name") == package_name and "version" in project:
            return str(project["version"])

    logger.warning("Could not determine service version, using default '0.0.0'")
    return "0.0.0"


def log_service_startup(version: str | None = None) -> None:
    """Log the standardized startup message with version."""

    if not version:
        version = get_service_version()
    logger.info("Starting %s service v%s", SERVICE_NAME.title(), version)
