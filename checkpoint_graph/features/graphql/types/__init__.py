"""GraphQL types."""

from checkpoint_graph.features.graphql.types.entities import (
    CHECKPOINT_ENTITY,
    METADATA_ENTITY,
    CheckpointType,
    MetadataType,
)

__all__ = ["CHECKPOINT_ENTITY", "METADATA_ENTITY", "CheckpointType", "MetadataType"]
