"""Application lifespan: logging setup, database pool open and close."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fpl_service.core.settings import get_app_settings, get_db_settings
from fpl_service.infra.database import close_pool, init_pool
from fpl_service.infra.logging import setup_logging
from fpl_service.infra.logging import shutdown as shutdown_logging

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def startup_database() -> None:
    """Open the connection pool.

    With ``DB_STARTUP_REQUIRE_DB`` unset the service starts even when the
    database is down; the pool is then opened lazily by the first query.
    """
    db_settings = get_db_settings()
    if not db_settings.is_configured:
        logger.info("Database disabled, skipping pool initialization")
        return

    try:
        await init_pool(db_settings)
    except Exception as exc:
        if db_settings.startup_require_db:
            logger.exception(
                "Database required but unavailable, failing startup",
                extra={"error": str(exc), "startup_require_db": True},
            )
            raise
        logger.warning(
            "Database unavailable at startup, continuing in degraded mode",
            extra={"error": str(exc), "startup_require_db": False},
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    app_settings = get_app_settings()
    logger.info(
        "Starting service",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    await startup_database()
    try:
        yield
    finally:
        logger.info("Shutting down service")
        await close_pool()
        shutdown_logging()
