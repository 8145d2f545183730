"""GraphQL types for the indexer's internal entities.

Field names map one-to-one to columns of the ``_checkpoints`` and
``_metadatas`` tables; resolvers build the types from raw rows.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import strawberry

CHECKPOINT_ENTITY = "_Checkpoint"
METADATA_ENTITY = "_Metadata"


@strawberry.type(name=CHECKPOINT_ENTITY, description="Contract and Block where its event is found.")
class CheckpointType:
    """A (contract, block) pair where an indexed event was found."""

    id: strawberry.ID = strawberry.field(
        description="id computed as last 5 bytes of sha256(contract+block)",
    )
    block_number: int
    contract_address: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> CheckpointType:
        return cls(
            id=strawberry.ID(str(row["id"])),
            block_number=int(row["block_number"]),
            contract_address=str(row["contract_address"]),
        )


@strawberry.type(name=METADATA_ENTITY, description="Core metadata values used internally by Checkpoint")
class MetadataType:
    """Key/value pair of indexer metadata (e.g. last_indexed_block)."""

    id: strawberry.ID = strawberry.field(description="example: last_indexed_block")
    value: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> MetadataType:
        value = row.get("value")
        return cls(
            id=strawberry.ID(str(row["id"])),
            value=None if value is None else str(value),
        )


__all__ = ["CHECKPOINT_ENTITY", "METADATA_ENTITY", "CheckpointType", "MetadataType"]
