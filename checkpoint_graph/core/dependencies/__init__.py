"""FastAPI dependencies for route handlers.

Usage:
    from checkpoint_graph.core.dependencies import get_query_executor
"""

from checkpoint_graph.core.dependencies.database import get_db_session, get_query_executor

__all__ = ["get_db_session", "get_query_executor"]
