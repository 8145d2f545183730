"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from checkpoint_graph.app.exception_handlers import configure_exception_handlers
from checkpoint_graph.app.lifespan import lifespan
from checkpoint_graph.app.middleware import configure_middleware
from checkpoint_graph.app.router import setup_routers
from checkpoint_graph.core.settings import get_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app_settings = settings.app

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, settings.graphql)

    return app
