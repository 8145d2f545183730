"""DataLoader factory.

DataLoaders batch and cache backing-store lookups within a single request,
preventing N+1 query problems common in GraphQL resolvers.

Each GraphQL request gets its own ``EntityLoaderFactory``; the factory hands
out one ``EntityDataLoader`` per entity name, created on first use. Nothing
is shared between requests, so a record is fetched at most once per request
and never served from another request's cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from checkpoint_graph.features.graphql.dataloaders.entity import EntityDataLoader

if TYPE_CHECKING:
    from collections.abc import Iterator

    from checkpoint_graph.infra.database.executor import QueryExecutor


class EntityLoaderFactory:
    """Lazily creates and memoizes one loader per entity name.

    Usage in resolver:
        ctx = info.context
        checkpoint = await ctx.loaders.get_loader("_Checkpoint").load(id)
    """

    def __init__(
        self,
        executor: QueryExecutor,
        *,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._executor = executor
        self._log = log
        self._max_batch_size = max_batch_size
        self._loaders: dict[str, EntityDataLoader] = {}

    def get_loader(self, entity: str) -> EntityDataLoader:
        """Return the loader for ``entity``, creating it on first request.

        Raises:
            InvalidEntityNameError: If the name cannot be used as a table name
        """
        loader = self._loaders.get(entity)
        if loader is None:
            loader = EntityDataLoader(
                entity,
                self._executor,
                log=self._log,
                max_batch_size=self._max_batch_size,
            )
            self._loaders[entity] = loader
        return loader

    __call__ = get_loader

    def __contains__(self, entity: object) -> bool:
        return entity in self._loaders

    def __iter__(self) -> Iterator[str]:
        return iter(self._loaders)

    def __len__(self) -> int:
        return len(self._loaders)


def create_dataloaders(
    executor: QueryExecutor,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> EntityLoaderFactory:
    """Factory for creating the request-scoped loader factory.

    Args:
        executor: Backing-store executor for the current request
        log: Request log handle for batch diagnostics

    Returns:
        A fresh EntityLoaderFactory with no loaders yet
    """
    from checkpoint_graph.core.settings import get_graphql_settings

    return EntityLoaderFactory(
        executor,
        log=log,
        max_batch_size=get_graphql_settings().max_batch_size,
    )


__all__ = ["EntityDataLoader", "EntityLoaderFactory", "create_dataloaders"]
