"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request and provides:
- Backing-store executor (for list queries)
- Entity loader factory (for batched, cached lookups by id)
- Log handle bound to the request's correlation id

Following Strawberry's FastAPI integration pattern:
https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from checkpoint_graph.features.graphql.dataloaders import (
        EntityDataLoader,
        EntityLoaderFactory,
    )
    from checkpoint_graph.infra.database.executor import QueryExecutor


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Standard fields (per Strawberry docs):
    - request: The HTTP request (or None for WebSocket)
    - response: The HTTP response (for setting headers/cookies)
    - background_tasks: FastAPI BackgroundTasks for async operations

    Custom fields:
    - executor: Backing-store executor (request-scoped)
    - loaders: Entity loader factory (request-scoped, tied to executor)
    - log: Logger for diagnostics of this request
    - correlation_id: For distributed tracing

    Example usage in resolver:
        @strawberry.field
        async def checkpoint(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> CheckpointType:
            row = await info.context.get_loader("_Checkpoint").load(id)
            return CheckpointType.from_row(row)
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    executor: QueryExecutor = field(default=None)  # type: ignore[assignment]
    loaders: EntityLoaderFactory = field(default=None)  # type: ignore[assignment]
    log: logging.Logger | logging.LoggerAdapter = field(
        default_factory=lambda: logging.getLogger("checkpoint_graph.graphql.request"),
    )
    correlation_id: str | None = None

    def get_loader(self, entity: str) -> EntityDataLoader:
        """Loader for ``entity`` in this request (created on first use)."""
        return self.loaders.get_loader(entity)


__all__ = ["GraphQLContext"]
