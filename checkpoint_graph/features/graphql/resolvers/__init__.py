"""GraphQL resolvers."""

from checkpoint_graph.features.graphql.resolvers.queries import Query

__all__ = ["Query"]
