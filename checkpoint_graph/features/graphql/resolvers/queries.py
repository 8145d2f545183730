"""Query resolvers for checkpoints and metadata.

Provides read operations:
- _checkpoint(id) / _metadata(id): one record, looked up through the
  request's entity loader so sibling lookups share one query
- _checkpoints(first, skip) / _metadatas(first, skip): a page of records,
  read directly and primed into the loader cache
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

import strawberry
from strawberry.types import Info

from checkpoint_graph.features.graphql.context import GraphQLContext
from checkpoint_graph.features.graphql.types import (
    CHECKPOINT_ENTITY,
    METADATA_ENTITY,
    CheckpointType,
    MetadataType,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 1000

FirstArg = Annotated[int, strawberry.argument(description="Number of records to return")]
SkipArg = Annotated[int, strawberry.argument(description="Number of records to skip")]


async def _fetch_page(
    ctx: GraphQLContext,
    entity: str,
    *,
    order_by: str,
    first: int,
    skip: int,
) -> list[dict[str, Any]]:
    """Read one page of ``entity`` rows and prime the entity loader with them."""
    loader = ctx.get_loader(entity)
    rows = await ctx.executor.execute(
        f"SELECT * FROM {loader.table} ORDER BY {order_by} LIMIT :first OFFSET :skip",
        {"first": max(0, min(first, MAX_PAGE_SIZE)), "skip": max(0, skip)},
    )
    for row in rows:
        loader.prime(row["id"], row)
    return list(rows)


async def checkpoint_query(
    info: Info[GraphQLContext, None],
    id: strawberry.ID,
) -> CheckpointType | None:
    """Get a single checkpoint by id.

    Raises:
        EntityNotFoundError: Surfaced as a NOT_FOUND field error
    """
    row = await info.context.get_loader(CHECKPOINT_ENTITY).load(id)
    return CheckpointType.from_row(row)


async def checkpoints_query(
    info: Info[GraphQLContext, None],
    first: FirstArg = 10,
    skip: SkipArg = 0,
) -> list[CheckpointType]:
    """List checkpoints ordered by block number."""
    rows = await _fetch_page(
        info.context, CHECKPOINT_ENTITY, order_by="block_number, id", first=first, skip=skip
    )
    return [CheckpointType.from_row(row) for row in rows]


async def metadata_query(
    info: Info[GraphQLContext, None],
    id: strawberry.ID,
) -> MetadataType | None:
    """Get a single metadata value by key."""
    row = await info.context.get_loader(METADATA_ENTITY).load(id)
    return MetadataType.from_row(row)


async def metadatas_query(
    info: Info[GraphQLContext, None],
    first: FirstArg = 10,
    skip: SkipArg = 0,
) -> list[MetadataType]:
    """List metadata values ordered by key."""
    rows = await _fetch_page(info.context, METADATA_ENTITY, order_by="id", first=first, skip=skip)
    return [MetadataType.from_row(row) for row in rows]


@strawberry.type
class Query:
    """Root query type."""

    checkpoint: CheckpointType | None = strawberry.field(
        name="_checkpoint",
        resolver=checkpoint_query,
        description="Get a checkpoint by id",
    )
    checkpoints: list[CheckpointType] = strawberry.field(
        name="_checkpoints",
        resolver=checkpoints_query,
        description="List checkpoints",
    )
    metadata: MetadataType | None = strawberry.field(
        name="_metadata",
        resolver=metadata_query,
        description="Get a metadata value by key",
    )
    metadatas: list[MetadataType] = strawberry.field(
        name="_metadatas",
        resolver=metadatas_query,
        description="List metadata values",
    )


__all__ = [
    "Query",
    "checkpoint_query",
    "checkpoints_query",
    "metadata_query",
    "metadatas_query",
]
