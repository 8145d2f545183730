"""Database infrastructure: engine, sessions and the query executor."""

from __future__ import annotations

from checkpoint_graph.infra.database.executor import (
    QueryExecutor,
    Record,
    SessionQueryExecutor,
)
from checkpoint_graph.infra.database.session import (
    check_database,
    close_database,
    get_async_session,
    get_engine,
    get_sessionmaker,
)

__all__ = [
    "QueryExecutor",
    "Record",
    "SessionQueryExecutor",
    "check_database",
    "close_database",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
]
