"""CLI command modules."""

from checkpoint_graph.cli.commands import query, server

__all__ = [
    "query",
    "server",
]
