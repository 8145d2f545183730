"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings defaults so tests never reach a real database
    - Backing store: an in-memory executor that records every query
    - GraphQL: request contexts built on that executor
    - Application: FastAPI app and HTTP client
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Mapping, Sequence
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("DB_DATABASE_URL", "")
os.environ.setdefault("GRAPHQL_ENABLED", "true")
os.environ.setdefault("GRAPHQL_PATH", "/graphql")
os.environ.setdefault("LOG_JSON", "false")


# ============================================================================
# Backing Store Fixtures
# ============================================================================


class StoreUnavailableError(Exception):
    """Raised by the fake store when told to fail."""


class RecordingExecutor:
    """QueryExecutor double holding rows per table and recording every call.

    Batched id lookups (``SELECT * FROM <table> WHERE id IN :ids``) are
    answered from ``tables``; any other statement returns ``page_rows``.
    Rows come back in reverse table order to make sure callers re-index them.
    """

    def __init__(self, tables: Mapping[str, list[dict[str, Any]]] | None = None) -> None:
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_with: BaseException | None = None

    async def execute(
        self,
        query: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> Sequence[dict[str, Any]]:
        params = dict(parameters or {})
        self.calls.append((query, params))
        if self.fail_with is not None:
            raise self.fail_with

        table = query.split(" FROM ", 1)[1].split()[0]
        rows = self.tables.get(table, [])
        if "ids" in params:
            wanted = {str(i) for i in params["ids"]}
            return [dict(row) for row in reversed(rows) if str(row["id"]) in wanted]

        skip = params.get("skip", 0)
        first = params.get("first", len(rows))
        return [dict(row) for row in rows[skip : skip + first]]

    def calls_for(self, table: str) -> list[dict[str, Any]]:
        """Parameters of every query issued against ``table``."""
        return [params for query, params in self.calls if f" FROM {table} " in f"{query} "]


CHECKPOINT_ROWS = [
    {"id": "0x01", "block_number": 100, "contract_address": "0xabc"},
    {"id": "0x02", "block_number": 101, "contract_address": "0xabc"},
    {"id": "0x03", "block_number": 102, "contract_address": "0xdef"},
]

METADATA_ROWS = [
    {"id": "last_indexed_block", "value": "102"},
    {"id": "network_identifier", "value": "mainnet"},
]


@pytest.fixture
def executor() -> RecordingExecutor:
    """Fake backing store with a few checkpoints and metadata values."""
    return RecordingExecutor({"_checkpoints": CHECKPOINT_ROWS, "_metadatas": METADATA_ROWS})


@pytest.fixture
def make_executor() -> type[RecordingExecutor]:
    """Build a fake store with custom tables."""
    return RecordingExecutor


@pytest.fixture
def store_error() -> type[Exception]:
    return StoreUnavailableError


# ============================================================================
# GraphQL Fixtures
# ============================================================================


@pytest.fixture
def graphql_context(executor: RecordingExecutor):
    """GraphQL context as built for one request."""
    from checkpoint_graph.features.graphql.context import GraphQLContext
    from checkpoint_graph.features.graphql.dataloaders import EntityLoaderFactory

    return GraphQLContext(executor=executor, loaders=EntityLoaderFactory(executor))


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(executor: RecordingExecutor):
    """FastAPI application whose GraphQL requests use the fake store."""
    from checkpoint_graph.app.main import create_app
    from checkpoint_graph.core.dependencies.database import get_query_executor

    application = create_app()
    application.dependency_overrides[get_query_executor] = lambda: executor
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the application (no network)."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
