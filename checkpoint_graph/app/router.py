"""Router registration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter

from checkpoint_graph.core.settings import get_app_settings, get_graphql_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

    from checkpoint_graph.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Liveness probe."""
    settings = get_app_settings()
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


def setup_routers(app: FastAPI, graphql_settings: GraphQLSettings | None = None) -> None:
    """Register all routers with the application.

    Args:
        app: FastAPI application instance.
        graphql_settings: Optional override controlling GraphQL availability.
    """
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(health_router)

    if graphql_settings.enabled:
        from checkpoint_graph.features.graphql.router import create_graphql_router

        app.include_router(
            create_graphql_router(),
            prefix=graphql_settings.path,
            tags=["graphql"],
        )
        logger.info("GraphQL endpoint enabled", extra={"path": graphql_settings.path})
