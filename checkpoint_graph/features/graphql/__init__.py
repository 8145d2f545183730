"""GraphQL feature module using Strawberry.

This module provides a GraphQL API endpoint with:
- Query resolvers for checkpoints and indexer metadata
- Request-scoped, batched entity loaders (N+1 prevention)
- A GraphiQL playground preloaded with a generated sample query

The router is built by ``router.create_graphql_router()`` and mounted by
``checkpoint_graph.app.router``.
"""
