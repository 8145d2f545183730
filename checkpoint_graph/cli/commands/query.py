"""Sample query command."""

import click

from checkpoint_graph.core.settings import get_graphql_settings


@click.command(name="sample-query")
@click.argument("entity", required=False)
@click.option(
    "--first",
    default=None,
    type=click.IntRange(min=1),
    help="Page size of the root selection (default: from settings)",
)
@click.option(
    "--max-depth",
    default=None,
    type=click.IntRange(min=1),
    help="Maximum nesting of object selections (default: from settings)",
)
def sample_query(entity: str | None, first: int | None, max_depth: int | None) -> None:
    """Print an example query listing ENTITY with all of its fields.

    ENTITY is a GraphQL object type name such as ``_Checkpoint``.
    """
    # Deferred so that --help does not build the schema.
    from checkpoint_graph.features.graphql.sample_query import generate_query_for_entity
    from checkpoint_graph.features.graphql.schema import get_entity_type, schema

    settings = get_graphql_settings()
    entity = entity or settings.sample_query_entity

    try:
        entity_type = get_entity_type(schema, entity)
    except KeyError:
        raise click.ClickException(f"Unknown entity type: {entity}") from None

    click.echo(
        generate_query_for_entity(
            entity_type,
            page_size=first or settings.sample_query_page_size,
            max_depth=max_depth or settings.sample_query_max_depth,
        )
    )
