"""GraphQL error handling and production error masking.

Errors raised by resolvers are logged server-side with their full details.
Intentional application errors (not-found, validation) keep their message
and ``extensions.code`` for clients; anything else is masked when masking is
enabled, so driver messages and SQL never reach clients in production.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from checkpoint_graph.core.exceptions import AppException

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorCategory",
    "is_user_facing_error",
    "log_error",
    "process_graphql_errors",
    "should_mask_error",
]


class ErrorCategory:
    """Error categories for classification."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


_USER_FACING_CODES = frozenset({ErrorCategory.VALIDATION, ErrorCategory.NOT_FOUND})


def is_user_facing_error(error: GraphQLError) -> bool:
    """Determine if an error should be shown to the user as-is.

    User-facing errors are syntax/validation errors of the query itself
    (no original exception) and application exceptions such as a missing
    entity.

    Args:
        error: GraphQL error to check

    Returns:
        True if error is safe to show to user, False if it should be masked
    """
    original = error.original_error
    if original is None:
        return True
    if isinstance(original, AppException):
        return True

    extensions = error.extensions or {}
    return extensions.get("code") in _USER_FACING_CODES


def should_mask_error(error: GraphQLError) -> bool:
    """Predicate for strawberry's MaskErrors extension."""
    return not is_user_facing_error(error)


def log_error(error: GraphQLError, execution_context: ExecutionContext | None = None) -> None:
    """Log one GraphQL error with operation details.

    User-facing errors are logged at INFO without a traceback; everything
    else is logged at ERROR with the original exception attached.
    """
    extra = {
        "error_message": error.message,
        "path": list(error.path) if error.path else None,
        "operation": getattr(execution_context, "operation_name", None),
    }
    original = error.original_error

    if is_user_facing_error(error):
        logger.info("GraphQL client error", extra=extra)
        return

    logger.error(
        "GraphQL execution error",
        extra={**extra, "exception_type": type(original).__name__},
        exc_info=(type(original), original, original.__traceback__) if original else None,
    )


def process_graphql_errors(
    errors: list[GraphQLError],
    execution_context: ExecutionContext | None = None,
) -> None:
    """Log every error of an execution result."""
    for error in errors:
        log_error(error, execution_context)
