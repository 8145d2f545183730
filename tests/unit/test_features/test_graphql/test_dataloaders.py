"""Tests for the request-scoped entity loaders."""

from __future__ import annotations

import asyncio
import logging

import pytest

from checkpoint_graph.core.exceptions import EntityNotFoundError, InvalidEntityNameError
from checkpoint_graph.features.graphql.dataloaders import (
    EntityDataLoader,
    EntityLoaderFactory,
    create_dataloaders,
)


@pytest.mark.unit
class TestEntityDataLoader:
    """Batching, caching and failure behaviour of EntityDataLoader."""

    def test_derives_table_and_query_without_io(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        assert loader.entity == "_Checkpoint"
        assert loader.table == "_checkpoints"
        assert loader.query == "SELECT * FROM _checkpoints WHERE id IN :ids"
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_loads_in_one_tick_share_one_query(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        first, second, third = await asyncio.gather(
            loader.load("0x01"),
            loader.load("0x03"),
            loader.load("0x02"),
        )

        assert len(executor.calls) == 1
        query, params = executor.calls[0]
        assert query == "SELECT * FROM _checkpoints WHERE id IN :ids"
        assert params == {"ids": ["0x01", "0x03", "0x02"]}
        assert [first["id"], second["id"], third["id"]] == ["0x01", "0x03", "0x02"]

    @pytest.mark.asyncio
    async def test_loads_started_before_awaiting_share_one_query(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        first = loader.load("0x01")
        second = loader.load("0x02")
        first_record = await first
        second_record = await second

        assert executor.calls_for("_checkpoints") == [{"ids": ["0x01", "0x02"]}]
        assert (first_record["id"], second_record["id"]) == ("0x01", "0x02")

    @pytest.mark.asyncio
    async def test_load_many_and_load_started_together_share_one_query(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        pending_many = loader.load_many(["0x03", "0x01"])
        pending_one = loader.load("0x02")
        records = await pending_many
        record = await pending_one

        assert executor.calls_for("_checkpoints") == [{"ids": ["0x03", "0x01", "0x02"]}]
        assert [r["id"] for r in records] == ["0x03", "0x01"]
        assert record["id"] == "0x02"

    @pytest.mark.asyncio
    async def test_duplicate_ids_are_fetched_once(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        results = await asyncio.gather(
            loader.load("0x01"),
            loader.load("0x02"),
            loader.load("0x01"),
        )

        assert executor.calls[0][1] == {"ids": ["0x01", "0x02"]}
        assert results[0] == results[2]

    @pytest.mark.asyncio
    async def test_cached_ids_issue_no_further_query(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        first = await loader.load("0x01")
        again = await loader.load("0x01")

        assert first == again
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_ids_are_keyed_by_string_form(self, make_executor):
        executor = make_executor({"_metadatas": [{"id": 7, "value": "x"}]})
        loader = EntityDataLoader("_Metadata", executor)

        by_int = await loader.load(7)
        by_str = await loader.load("7")

        assert by_int is by_str
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_missing_id_only_fails_its_own_lookup(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        results = await asyncio.gather(
            loader.load("0x01"),
            loader.load("0xff"),
            loader.load("0x03"),
            return_exceptions=True,
        )

        assert results[0]["id"] == "0x01"
        assert results[2]["id"] == "0x03"
        assert isinstance(results[1], EntityNotFoundError)
        assert results[1].entity == "_Checkpoint"
        assert results[1].id == "0xff"
        assert results[1].extensions["code"] == "NOT_FOUND"
        assert str(results[1]) == "Row not found: 0xff"

    @pytest.mark.asyncio
    async def test_not_found_is_cached(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        with pytest.raises(EntityNotFoundError):
            await loader.load("0xff")
        with pytest.raises(EntityNotFoundError):
            await loader.load("0xff")

        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_store_failure_fails_whole_batch_then_retries(self, executor, store_error):
        loader = EntityDataLoader("_Checkpoint", executor)
        executor.fail_with = store_error("connection reset")

        results = await asyncio.gather(
            loader.load("0x01"),
            loader.load("0x02"),
            return_exceptions=True,
        )

        assert len(executor.calls) == 1
        assert all(isinstance(result, store_error) for result in results)
        assert results[0] is results[1]

        executor.fail_with = None
        record = await loader.load("0x01")

        assert record["id"] == "0x01"
        assert len(executor.calls) == 2
        assert executor.calls[1][1] == {"ids": ["0x01"]}

    @pytest.mark.asyncio
    async def test_store_failure_is_logged(self, executor, store_error, caplog):
        loader = EntityDataLoader("_Checkpoint", executor)
        executor.fail_with = store_error("boom")

        with caplog.at_level(logging.ERROR), pytest.raises(store_error):
            await loader.load("0x01")

        assert any(record.getMessage() == "Batched query failed" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_dispatch_logs_entity_ids_and_sql(self, executor, caplog):
        loader = EntityDataLoader("_Checkpoint", executor)

        with caplog.at_level(logging.DEBUG):
            await loader.load("0x02")

        record = next(r for r in caplog.records if r.getMessage() == "executing batched query")
        assert record.entity == "_Checkpoint"
        assert record.ids == ["0x02"]
        assert record.sql == "SELECT * FROM _checkpoints WHERE id IN :ids"

    @pytest.mark.asyncio
    async def test_load_many_keeps_requested_order(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)

        records = await loader.load_many(["0x03", "0x01"])

        assert [record["id"] for record in records] == ["0x03", "0x01"]
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_primed_record_skips_the_store(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor)
        row = {"id": "0x09", "block_number": 1, "contract_address": "0x0"}

        loader.prime("0x09", row)

        assert await loader.load("0x09") == row
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_max_batch_size_splits_batches(self, executor):
        loader = EntityDataLoader("_Checkpoint", executor, max_batch_size=2)

        await asyncio.gather(*(loader.load(id_) for id_ in ("0x01", "0x02", "0x03")))

        assert [params["ids"] for _, params in executor.calls] == [["0x01", "0x02"], ["0x03"]]

    @pytest.mark.parametrize("name", ["", "1Checkpoint", "check point", "_Checkpoint; DROP TABLE x"])
    def test_rejects_names_that_are_not_identifiers(self, executor, name):
        with pytest.raises(InvalidEntityNameError):
            EntityDataLoader(name, executor)


@pytest.mark.unit
class TestEntityLoaderFactory:
    """Per-request loader registry."""

    def test_returns_same_loader_per_entity(self, executor):
        factory = EntityLoaderFactory(executor)

        first = factory.get_loader("_Checkpoint")

        assert factory.get_loader("_Checkpoint") is first
        assert factory("_Checkpoint") is first
        assert "_Checkpoint" in factory
        assert len(factory) == 1

    @pytest.mark.asyncio
    async def test_two_entities_use_two_loaders_and_two_queries(self, executor):
        factory = EntityLoaderFactory(executor)

        checkpoint, metadata = await asyncio.gather(
            factory.get_loader("_Checkpoint").load("0x01"),
            factory.get_loader("_Metadata").load("last_indexed_block"),
        )

        assert checkpoint["block_number"] == 100
        assert metadata["value"] == "102"
        assert sorted(factory) == ["_Checkpoint", "_Metadata"]
        assert len(executor.calls_for("_checkpoints")) == 1
        assert len(executor.calls_for("_metadatas")) == 1

    def test_invalid_name_raises_before_registering(self, executor):
        factory = EntityLoaderFactory(executor)

        with pytest.raises(InvalidEntityNameError):
            factory.get_loader("bad-name")

        assert len(factory) == 0
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_factories_do_not_share_caches(self, executor):
        await EntityLoaderFactory(executor).get_loader("_Checkpoint").load("0x01")
        await EntityLoaderFactory(executor).get_loader("_Checkpoint").load("0x01")

        assert len(executor.calls) == 2

    def test_create_dataloaders_returns_empty_factory(self, executor):
        factory = create_dataloaders(executor)

        assert isinstance(factory, EntityLoaderFactory)
        assert len(factory) == 0
