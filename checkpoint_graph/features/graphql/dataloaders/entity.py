"""Batched, request-cached loader for one entity type.

Every ``load()`` issued before the event loop regains control joins the same
batch; the batch is sent to the store as a single
``SELECT * FROM <table> WHERE id IN (...)`` and the rows are handed back to
each caller in the order the ids were requested.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from strawberry.dataloader import DataLoader

from checkpoint_graph.core.exceptions import EntityNotFoundError, InvalidEntityNameError
from checkpoint_graph.core.utils.strings import is_identifier, table_name_for

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from checkpoint_graph.infra.database.executor import QueryExecutor, Record

logger = logging.getLogger(__name__)


class EntityDataLoader:
    """DataLoader for batch-loading records of one entity by id.

    Prevents N+1 queries when many resolvers look up records of the same
    entity while one GraphQL request executes. Each request gets its own
    loader instance, so the cache never outlives the request.

    Ids are cached by their string form: ``load(1)`` and ``load("1")`` share
    one slot, matching how GraphQL ``ID`` values arrive as strings.

    A missing id resolves to an ``EntityNotFoundError`` for that key only; the
    error is cached like a record. A failing backing-store call fails the
    whole batch and evicts its ids, so a later ``load`` retries them.

    Usage:
        loader = EntityDataLoader("_Checkpoint", executor)
        checkpoint = await loader.load("0x1")  # Batched with other loads
        checkpoints = await loader.load_many(["0x1", "0x2"])
    """

    def __init__(
        self,
        entity: str,
        executor: QueryExecutor,
        *,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        """Bind the loader to an entity. No I/O happens here.

        Args:
            entity: Entity (GraphQL type) name, e.g. ``_Checkpoint``
            executor: Backing-store executor scoped to the current request
            log: Request log handle used for batch diagnostics
            max_batch_size: Split batches larger than this many ids

        Raises:
            InvalidEntityNameError: If the name cannot be used as a table name
        """
        if not is_identifier(entity):
            raise InvalidEntityNameError(entity)

        self.entity = entity
        self.table = table_name_for(entity)
        self.query = f"SELECT * FROM {self.table} WHERE id IN :ids"
        self._executor = executor
        self._log = log if log is not None else logger
        self._loader: DataLoader[Any, Record] = DataLoader(
            load_fn=self._batch_load,
            max_batch_size=max_batch_size,
            cache_key_fn=str,
        )

    async def _batch_load(self, ids: list[Any]) -> list[Record | EntityNotFoundError]:
        """Fetch one batch of ids with a single query.

        Called by the DataLoader with the deduplicated ids collected during
        one event-loop tick. Returns one slot per id, in the same order.
        """
        self._log.debug(
            "executing batched query",
            extra={"entity": self.entity, "sql": self.query, "ids": [str(i) for i in ids]},
        )

        try:
            rows = await self._executor.execute(self.query, {"ids": list(ids)})
        except Exception as exc:
            self._log.error(
                "Batched query failed",
                extra={"entity": self.entity, "batch_size": len(ids), "error": str(exc)},
            )
            # Failed ids must not stay cached as errors
            self._loader.clear_many(ids)
            raise

        rows_by_id = {str(row["id"]): row for row in rows}
        return [
            rows_by_id[str(id_)] if str(id_) in rows_by_id else EntityNotFoundError(self.entity, id_)
            for id_ in ids
        ]

    def load(self, id_: Any) -> Awaitable[Record]:
        """Load a single record by id.

        The id is queued as soon as this is called, not when the result is
        awaited, so loads started before the next suspension share one batch:

            first = loader.load("0x01")
            second = loader.load("0x02")
            await first
            await second  # both ids went out in one query

        Raises:
            EntityNotFoundError: If the store has no row with this id
        """
        return self._loader.load(id_)

    def load_many(self, ids: list[Any]) -> Awaitable[list[Record]]:
        """Load several records, in the order of ``ids``.

        Raises:
            EntityNotFoundError: If any of the ids is missing
        """
        return self._loader.load_many(ids)

    def prime(self, id_: Any, record: Record) -> None:
        """Seed the request cache with a record fetched some other way."""
        self._loader.prime(id_, record)


__all__ = ["EntityDataLoader"]
