"""Correlation ID middleware for distributed tracing across services.

Reads ``X-Correlation-ID`` from the incoming request (or generates one),
stores it in ``request.state.correlation_id`` and the logging context, and
echoes it in the response headers.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import Headers, MutableHeaders

from checkpoint_graph.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class CorrelationIDMiddleware:
    """Pure ASGI middleware for correlation ID handling.

    Usage:
        app = FastAPI()
        app.add_middleware(CorrelationIDMiddleware)
    """

    def __init__(self, app: ASGIApp, header_name: str = "x-correlation-id") -> None:
        self.app = app
        self.header_name = header_name.lower()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        value = Headers(scope=scope).get(self.header_name)
        if not value:
            value = str(uuid.uuid4())
            logger.debug("Generated new correlation ID", extra={"correlation_id": value})

        scope.setdefault("state", {})["correlation_id"] = value
        set_log_context(correlation_id=value)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[self.header_name] = value
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()


def configure_middleware(app: FastAPI) -> None:
    """Register middleware in order (last added runs first)."""
    app.add_middleware(CorrelationIDMiddleware)
