"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from checkpoint_graph.core.exceptions import AppException

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application exceptions as RFC 7807 problem details."""
    problem = exc.to_problem()
    problem.setdefault("instance", str(request.url.path))

    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        problem["correlation_id"] = correlation_id

    logger.info(
        "Application exception",
        extra={"status_code": exc.status_code, "type": exc.type, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem,
        media_type="application/problem+json",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
