"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/graphql/logging), read from environment
variables with a per-domain prefix (and an optional .env file), frozen, and
cached by the loaders below.

    from checkpoint_graph.core.settings import get_graphql_settings

    settings = get_graphql_settings()
"""

from __future__ import annotations

from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .unified import Settings, get_settings

__all__ = [
    "Settings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_settings",
]
