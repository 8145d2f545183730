"""Backing-store query executor.

The GraphQL layer talks to the relational store through a single primitive:
execute a parameterized SQL statement and get the rows back as mappings.
``SessionQueryExecutor`` provides it over a SQLAlchemy ``AsyncSession``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import bindparam, text

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


class QueryExecutor(Protocol):
    """Anything that can run a parameterized query and return rows."""

    async def execute(
        self,
        query: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> Sequence[Record]: ...


class SessionQueryExecutor:
    """Execute textual SQL on an ``AsyncSession``.

    Named parameters use SQLAlchemy's ``:name`` syntax. List and tuple values
    are bound as expanding parameters, so ``WHERE id IN :ids`` receives one
    placeholder per element.

    Usage:
        executor = SessionQueryExecutor(session)
        rows = await executor.execute(
            "SELECT * FROM _checkpoints WHERE id IN :ids",
            {"ids": ["a", "b"]},
        )
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def execute(
        self,
        query: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        params = dict(parameters or {})
        statement = text(query)
        expanding = [
            bindparam(name, expanding=True)
            for name, value in params.items()
            if isinstance(value, (list, tuple))
        ]
        if expanding:
            statement = statement.bindparams(*expanding)

        result = await self._session.execute(statement, params)
        return [dict(row) for row in result.mappings().all()]


__all__ = ["QueryExecutor", "Record", "SessionQueryExecutor"]
