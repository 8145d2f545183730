"""Tests for the SQLAlchemy-backed query executor."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from checkpoint_graph.features.graphql.dataloaders import EntityLoaderFactory
from checkpoint_graph.infra.database.executor import SessionQueryExecutor


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """In-memory SQLite session with the checkpoint tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE _checkpoints ("
                "id TEXT PRIMARY KEY, block_number INTEGER NOT NULL, contract_address TEXT NOT NULL)"
            )
        )
        await conn.execute(
            text("INSERT INTO _checkpoints VALUES (:id, :block_number, :contract_address)"),
            [
                {"id": "0x01", "block_number": 100, "contract_address": "0xabc"},
                {"id": "0x02", "block_number": 101, "contract_address": "0xabc"},
                {"id": "0x03", "block_number": 102, "contract_address": "0xdef"},
            ],
        )

    async with async_sessionmaker(engine, expire_on_commit=False)() as db_session:
        yield db_session

    await engine.dispose()


@pytest.mark.asyncio
async def test_returns_rows_as_mappings(session):
    rows = await SessionQueryExecutor(session).execute(
        "SELECT * FROM _checkpoints WHERE block_number > :block ORDER BY id",
        {"block": 100},
    )

    assert rows == [
        {"id": "0x02", "block_number": 101, "contract_address": "0xabc"},
        {"id": "0x03", "block_number": 102, "contract_address": "0xdef"},
    ]


@pytest.mark.asyncio
async def test_list_parameters_expand_into_in_clause(session):
    rows = await SessionQueryExecutor(session).execute(
        "SELECT * FROM _checkpoints WHERE id IN :ids ORDER BY id",
        {"ids": ["0x03", "0x01", "0xff"]},
    )

    assert [row["id"] for row in rows] == ["0x01", "0x03"]


@pytest.mark.asyncio
async def test_query_without_parameters(session):
    rows = await SessionQueryExecutor(session).execute("SELECT COUNT(*) AS total FROM _checkpoints")

    assert rows == [{"total": 3}]


@pytest.mark.asyncio
async def test_loader_against_database(session):
    loaders = EntityLoaderFactory(SessionQueryExecutor(session))
    loader = loaders.get_loader("_Checkpoint")

    second, first = await asyncio.gather(loader.load("0x02"), loader.load("0x01"))

    assert second["block_number"] == 101
    assert first["block_number"] == 100
