"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- Automatic context injection (correlation_id, ...) via contextvars
- Context-bound loggers used as per-request log handles

Basic usage:
    from checkpoint_graph.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(correlation_id="abc-123")
    logger.info("Processing request")  # includes correlation_id
"""

from checkpoint_graph.infra.logging.config import configure_logging, setup_logging
from checkpoint_graph.infra.logging.context import (
    ContextBoundLogger,
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)
from checkpoint_graph.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextBoundLogger",
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "get_logger",
    "set_log_context",
    "setup_logging",
]
