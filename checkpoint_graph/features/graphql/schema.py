"""GraphQL schema assembly.

Builds the strawberry schema with the configured extensions and exposes the
graphql-core object types of its entities for the sample query generator.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry
from graphql import GraphQLObjectType
from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, MaskErrors, SchemaExtension
from strawberry.schema.config import StrawberryConfig

from checkpoint_graph.features.graphql.error_handler import (
    process_graphql_errors,
    should_mask_error,
)
from checkpoint_graph.features.graphql.resolvers import Query

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

    from checkpoint_graph.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


class ErrorMaskingExtension(MaskErrors):
    """Replace internal error messages with a generic one.

    Not-found and validation errors keep their message; see
    ``should_mask_error``.
    """

    def __init__(self, *, execution_context: ExecutionContext | None = None) -> None:
        super().__init__(should_mask_error=should_mask_error)


class NoIntrospectionExtension(AddValidationRules):
    """Reject queries that select ``__schema`` or ``__type``."""

    def __init__(self, *, execution_context: ExecutionContext | None = None) -> None:
        super().__init__([NoSchemaIntrospectionCustomRule])


class CheckpointSchema(strawberry.Schema):
    """Schema routing execution errors through the application error handler."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        process_graphql_errors(errors, execution_context)


def create_schema(settings: GraphQLSettings | None = None) -> CheckpointSchema:
    """Create the schema with extensions derived from settings.

    Field names are kept exactly as declared (``block_number``, not
    ``blockNumber``) since they mirror table columns.
    """
    if settings is None:
        from checkpoint_graph.core.settings import get_graphql_settings

        settings = get_graphql_settings()

    extensions: list[type[SchemaExtension]] = []
    if not settings.introspection_enabled:
        extensions.append(NoIntrospectionExtension)
    if _masking_enabled(settings):
        extensions.append(ErrorMaskingExtension)

    return CheckpointSchema(
        query=Query,
        config=StrawberryConfig(auto_camel_case=False),
        extensions=extensions,
    )


def _masking_enabled(settings: GraphQLSettings) -> bool:
    if settings.mask_errors is not None:
        return settings.mask_errors
    from checkpoint_graph.core.settings import get_app_settings

    return get_app_settings().is_production


def get_entity_type(schema: strawberry.Schema, name: str) -> GraphQLObjectType:
    """Look up the graphql-core object type named ``name``.

    Reads the graphql-core schema strawberry builds internally
    (``Schema._schema``). Strawberry has no public accessor for it, so this
    is the only place that touches the attribute.

    Raises:
        KeyError: If the schema has no object type with that name
    """
    graphql_type = schema._schema.get_type(name)
    if not isinstance(graphql_type, GraphQLObjectType):
        raise KeyError(name)
    return graphql_type


schema = create_schema()

logger.debug("GraphQL schema created")

__all__ = [
    "CheckpointSchema",
    "ErrorMaskingExtension",
    "NoIntrospectionExtension",
    "create_schema",
    "get_entity_type",
    "schema",
]
