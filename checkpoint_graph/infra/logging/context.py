"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so request-scoped values such as the correlation id are included in every
log message without explicit passing. Each asyncio task gets its own copy
of the context.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current async task.

    Args:
        **kwargs: Key-value pairs to add to the logging context.

    Example:
        ```python
        set_log_context(correlation_id="abc-123")
        logger.info("Processing request")  # includes correlation_id
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current async task."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into records.

    Applied to the root logger handlers so every logger benefits, and
    formatters (especially JSONFormatter) see the fields as record attributes.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class ContextBoundLogger(logging.LoggerAdapter):
    """Logger adapter that binds context to a logger instance.

    Used as the per-request log handle of the GraphQL context: every record
    it emits carries the bound fields plus whatever ``extra`` the call adds.

    Example:
        ```python
        request_log = ContextBoundLogger(logger, correlation_id="abc-123")
        request_log.debug("executing batched query", extra={"ids": ["1", "2"]})

        entity_log = request_log.bind(entity="_Checkpoint")
        ```
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        super().__init__(logger, context)

    def bind(self, **context: Any) -> ContextBoundLogger:
        """Create a new logger with additional bound context."""
        merged = {**self.extra, **context}
        return ContextBoundLogger(self.logger, **merged)

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> ContextBoundLogger:
    """Get a logger with bound context.

    Args:
        name: Logger name.
        **context: Context to add to all log messages.
    """
    return ContextBoundLogger(logging.getLogger(name), **context)
