"""Sample query generation for the GraphQL IDE.

Builds a human-readable example query for an entity type by walking its
fields: leaf fields are selected as-is, object fields are expanded into
nested selections. The result is meant for display (the IDE's default
query), not for execution by the service itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphql import (
    ArgumentNode,
    DocumentNode,
    FieldNode,
    GraphQLNonNull,
    IntValueNode,
    NameNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    get_named_type,
    is_interface_type,
    is_leaf_type,
    is_object_type,
    print_ast,
)

from checkpoint_graph.core.utils.strings import pluralize

if TYPE_CHECKING:
    from graphql import GraphQLInterfaceType, GraphQLObjectType, GraphQLOutputType

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_DEPTH = 5


def single_entity_query_name(entity: GraphQLObjectType) -> str:
    """Name of the query fetching one record of ``entity``."""
    return entity.name.lower()


def multi_entity_query_name(entity: GraphQLObjectType) -> str:
    """Name of the query fetching a list of ``entity`` records."""
    return pluralize(entity.name.lower())


def get_non_null_type(type_: GraphQLOutputType) -> GraphQLOutputType:
    """Strip one non-null wrapper, if present."""
    if isinstance(type_, GraphQLNonNull):
        return type_.of_type
    return type_


def _field(name: str, selections: tuple[FieldNode, ...] | None = None, **int_args: int) -> FieldNode:
    return FieldNode(
        alias=None,
        name=NameNode(value=name),
        arguments=tuple(
            ArgumentNode(name=NameNode(value=arg), value=IntValueNode(value=str(value)))
            for arg, value in int_args.items()
        ),
        directives=(),
        selection_set=SelectionSetNode(selections=selections) if selections is not None else None,
    )


def _select_fields(
    object_type: GraphQLObjectType | GraphQLInterfaceType,
    path: frozenset[str],
    depth: int,
    max_depth: int,
) -> tuple[FieldNode, ...]:
    """Build the selection for every field of ``object_type``, in declaration order.

    ``path`` holds the composite types already being expanded above this one;
    a field pointing back to one of them is left out, as is any composite
    field below ``max_depth``.
    """
    selections: list[FieldNode] = []
    path = path | {object_type.name}

    for field_name, field in object_type.fields.items():
        field_type = get_named_type(field.type)

        if is_leaf_type(field_type):
            selections.append(_field(field_name))
            continue

        if not (is_object_type(field_type) or is_interface_type(field_type)):
            # Unions need fragments; not worth it for a sample
            continue

        if field_type.name in path or depth >= max_depth:
            logger.debug(
                "Skipping field in sample query",
                extra={"type": object_type.name, "field": field_name, "depth": depth},
            )
            continue

        children = _select_fields(field_type, path, depth + 1, max_depth)
        if children:
            selections.append(_field(field_name, children))

    return tuple(selections)


def generate_query_for_entity(
    entity: GraphQLObjectType,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Generate a sample query string from the entity's fields.

    Args:
        entity: GraphQL object type to build the query for
        page_size: Value of the ``first`` argument of the root selection
        max_depth: Maximum nesting of object fields below the root

    Returns:
        Pretty-printed query text, e.g.::

            {
              _checkpoints(first: 10) {
                id
                block_number
                contract_address
              }
            }
    """
    root = _field(
        multi_entity_query_name(entity),
        _select_fields(entity, frozenset(), 1, max_depth),
        first=page_size,
    )
    document = DocumentNode(
        definitions=(
            OperationDefinitionNode(
                operation=OperationType.QUERY,
                name=None,
                variable_definitions=(),
                directives=(),
                selection_set=SelectionSetNode(selections=(root,)),
            ),
        )
    )
    return print_ast(document)


__all__ = [
    "generate_query_for_entity",
    "get_non_null_type",
    "multi_entity_query_name",
    "single_entity_query_name",
]
