"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint (mounted with the configured prefix by app/router.py)
- GraphiQL playground preloaded with a sample query for one entity
- A fresh request context, and with it fresh entity loaders, per request
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, cast

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from strawberry.fastapi import GraphQLRouter

from checkpoint_graph.core.dependencies.database import get_query_executor
from checkpoint_graph.core.settings import get_app_settings, get_graphql_settings
from checkpoint_graph.features.graphql.context import GraphQLContext
from checkpoint_graph.features.graphql.dataloaders import create_dataloaders
from checkpoint_graph.features.graphql.playground import register_playground_routes
from checkpoint_graph.features.graphql.sample_query import generate_query_for_entity
from checkpoint_graph.features.graphql.schema import get_entity_type
from checkpoint_graph.features.graphql.schema import schema as default_schema
from checkpoint_graph.infra.database.executor import QueryExecutor
from checkpoint_graph.infra.logging import get_logger

logger = logging.getLogger(__name__)

REQUEST_LOGGER_NAME = "checkpoint_graph.graphql.request"


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    executor: Annotated[QueryExecutor, Depends(get_query_executor)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Args:
        request: FastAPI request
        response: FastAPI response (for setting headers/cookies)
        background_tasks: FastAPI background tasks
        executor: Backing-store executor for this request

    Returns:
        GraphQLContext with a new loader factory
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    log = get_logger(REQUEST_LOGGER_NAME, correlation_id=correlation_id)

    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        executor=executor,
        loaders=create_dataloaders(executor, log),
        log=log,
        correlation_id=correlation_id,
    )


def build_sample_query(schema: Any = None) -> str | None:
    """Sample query for the configured entity, or None if it does not exist."""
    settings = get_graphql_settings()
    try:
        entity = get_entity_type(schema or default_schema, settings.sample_query_entity)
    except KeyError:
        logger.warning(
            "Sample query entity not found in schema",
            extra={"entity": settings.sample_query_entity},
        )
        return None

    return generate_query_for_entity(
        entity,
        page_size=settings.sample_query_page_size,
        max_depth=settings.sample_query_max_depth,
    )


def create_graphql_router(schema: Any = None) -> APIRouter:
    """Create GraphQL router with settings-based configuration."""
    settings = get_graphql_settings()
    schema = schema or default_schema

    # Empty path: the prefix given by app/router.py is the endpoint itself
    router: APIRouter = GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.get_strawberry_ide(),
        path="",
    )

    if settings.playground_enabled:
        register_playground_routes(
            router,
            graphql_path=settings.path,
            title=get_app_settings().title,
            default_query=build_sample_query(schema),
        )

    return router


__all__ = ["build_sample_query", "create_graphql_router", "get_graphql_context"]
