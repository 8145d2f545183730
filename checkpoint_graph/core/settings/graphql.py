"""GraphQL server configuration settings.

Controls the GraphQL endpoint, IDE, entity loaders and the sample query shown
in the IDE. Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GraphQLIDE = Literal["graphiql", "playground", False]


class GraphQLSettings(BaseSettings):
    """GraphQL server configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_ENABLED=true, GRAPHQL_PATH=/graphql
    """

    enabled: bool = Field(default=True, description="Enable GraphQL endpoint")
    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )

    # IDE configuration
    graphql_ide: GraphQLIDE = Field(
        default="playground",
        description=(
            "GraphQL IDE: graphiql (strawberry's built-in page), playground "
            "(GraphiQL shell preloaded with the sample query), or false to disable"
        ),
    )
    introspection_enabled: bool = Field(
        default=True,
        description="Enable GraphQL schema introspection",
    )
    mask_errors: bool | None = Field(
        default=None,
        description="Mask internal error messages. If None, masks only in production.",
    )

    # Entity loaders
    max_batch_size: int | None = Field(
        default=None,
        ge=1,
        le=10000,
        description="Maximum ids per batched query. None sends every id of a tick in one query.",
    )

    # Sample query shown in the IDE
    sample_query_entity: str = Field(
        default="_Checkpoint",
        description="Entity type used to build the IDE's default query",
    )
    sample_query_page_size: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Value of the `first` argument in the sample query",
    )
    sample_query_max_depth: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum nesting depth of the sample query",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def playground_enabled(self) -> bool:
        """Check if the local playground page is served."""
        return self.graphql_ide == "playground"

    def get_strawberry_ide(self) -> Literal["graphiql"] | None:
        """IDE handed to strawberry's router (None when served locally or disabled)."""
        return "graphiql" if self.graphql_ide == "graphiql" else None
