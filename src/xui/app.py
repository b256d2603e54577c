"""FastAPI application hosting the x-ui startup sequence."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from xui import config
from xui.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Run the startup sequence once per process.

    Args:
        _app: FastAPI application instance (unused but required by lifespan protocol).

    Yields:
        None during application runtime.
    """
    setup_logging(config.get_log_level())
    logger.info("Starting %s %s...", config.get_name(), config.get_version())

    # Must run before anything resolves the database path
    outcome = config.migrate_legacy_db(sys.platform)
    logger.debug("Legacy database migration: %s", outcome.value)

    logger.info("Binary folder: %s", config.get_bin_folder_path())
    logger.info("Log folder: %s", config.get_log_folder())
    db_config = config.require_database_config()
    if db_config.connection != config.MYSQL:
        logger.info("Database: %s", config.format_db_path(db_config))
    else:
        logger.info("Database: mysql at %s:%s", db_config.host, db_config.port)

    yield

    logger.info("Shutting down %s...", config.get_name())


app = FastAPI(
    title="x-ui",
    description="x-ui panel runtime configuration",
    version=config.get_version(),
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status response.
    """
    return {"status": "healthy"}


@app.get("/version")
async def version() -> dict[str, str]:
    """Return the build identity."""
    return {"name": config.get_name(), "version": config.get_version()}


@app.get("/config")
async def show_config() -> dict[str, object]:
    """Return the resolved configuration without secrets.

    Raises:
        HTTPException: If the database configuration is incomplete.
    """
    try:
        return config.describe_config()
    except config.DatabaseConfigError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions globally.

    Args:
        request: FastAPI request object.
        exc: Exception that was raised.

    Returns:
        JSON error response.
    """
    logger.exception("Unhandled exception for %s: %s", request.url, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
