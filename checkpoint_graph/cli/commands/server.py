"""Server command."""

import sys

import click
import uvicorn

from checkpoint_graph.core.settings import get_app_settings, get_logging_settings

APP_FACTORY = "checkpoint_graph.app.main:create_app"


def _status(message: str, fg: str = "blue") -> None:
    # Status lines go to stderr
    click.secho(message, fg=fg, err=True)


@click.command(name="serve")
@click.option(
    "--host",
    default=None,
    help="Host to bind (default: from settings)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind (default: from settings)",
)
@click.option(
    "--reload/--no-reload",
    default=False,
    help="Enable auto-reload on code changes",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Uvicorn log level (default: from LOG_LEVEL)",
)
def serve(
    host: str | None,
    port: int | None,
    reload: bool,
    log_level: str | None,
) -> None:
    """Run the GraphQL API server."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port
    log_level = log_level or get_logging_settings().level.lower()

    _status(f"Server will run at: http://{host}:{port}")
    _status(f"Environment: {settings.environment}")

    try:
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=host,
            port=port,
            reload=reload,
            access_log=settings.debug,
            log_level=log_level,
        )
    except KeyboardInterrupt:
        _status("Shutting down server...")
    except OSError as e:
        _status(f"Failed to start server: {e}", fg="red")
        sys.exit(1)
