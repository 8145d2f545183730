"""Application lifespan management.

Startup: logging first, then a connectivity check of the relational store
(when enabled). Shutdown: dispose the database engine.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from checkpoint_graph.core.settings import get_app_settings, get_db_settings
from checkpoint_graph.infra.database import check_database, close_database
from checkpoint_graph.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup and shutdown hooks around the application's lifetime."""
    setup_logging()
    app_settings = get_app_settings()
    db_settings = get_db_settings()

    logger.info(
        "Starting application",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    if db_settings.is_configured:
        try:
            await check_database()
            logger.info("Database connection verified")
        except SQLAlchemyError as exc:
            # Queries will fail per request until the store is reachable
            logger.warning("Database not reachable at startup", extra={"error": str(exc)})

    try:
        yield
    finally:
        logger.info("Shutting down application")
        if db_settings.is_configured:
            await close_database()
