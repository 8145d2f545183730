"""Core utility functions for the application.

Utilities Organization:
    - strings: entity name to table and query name derivation
"""

from checkpoint_graph.core.utils.strings import is_identifier, pluralize, table_name_for

__all__ = ["is_identifier", "pluralize", "table_name_for"]
