"""Database dependencies for FastAPI route handlers.

Route handlers and the GraphQL context getter receive a request-scoped
session (``get_db_session``) or the query executor wrapping it
(``get_query_executor``). Tests override ``get_query_executor`` to run the
GraphQL layer against an in-memory store.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkpoint_graph.infra.database import (
    QueryExecutor,
    SessionQueryExecutor,
    get_async_session,
)


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session


async def get_query_executor(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> QueryExecutor:
    """FastAPI dependency for the backing-store executor of one request."""
    return SessionQueryExecutor(session)
