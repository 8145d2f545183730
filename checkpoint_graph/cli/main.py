"""Main CLI entry point for checkpoint-graph."""

import click

from checkpoint_graph.cli.commands import query, server


@click.group()
@click.version_option(version="0.1.0", prog_name="checkpoint-graph")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Checkpoint Graph CLI - serve and inspect the GraphQL API.

    \b
    Quick Start:
      checkpoint-graph serve                      # Run the API server
      checkpoint-graph sample-query _Checkpoint   # Print an example query
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(query.sample_query)


if __name__ == "__main__":
    cli()
