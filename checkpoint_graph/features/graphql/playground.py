"""Serve a GraphiQL page preloaded with a sample query."""

from __future__ import annotations

import html
import json
from typing import Final

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

_GRAPHIQL_VERSION: Final = "3.0.10"
_REACT_VERSION: Final = "18.2.0"
_CDN: Final = "https://unpkg.com"


def register_playground_routes(
    router: APIRouter,
    *,
    graphql_path: str,
    title: str,
    default_query: str | None,
) -> None:
    """Expose the /playground endpoint on ``router``."""

    @router.get("/playground", include_in_schema=False)
    async def graphql_playground(request: Request) -> HTMLResponse:
        endpoint_url = _build_endpoint_url(request, graphql_path)
        return HTMLResponse(
            _render_playground_html(
                title=title,
                endpoint_url=endpoint_url,
                default_query=default_query,
            )
        )


def _build_endpoint_url(request: Request, graphql_path: str) -> str:
    """Combine ASGI root_path with the configured GraphQL path."""
    normalized_path = _normalize_path(graphql_path)
    root_path = (request.scope.get("root_path") or "").rstrip("/")
    if not root_path:
        return normalized_path
    return f"{root_path}{normalized_path}"


def _normalize_path(path: str) -> str:
    path = path or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/")
    return path


def _render_playground_html(
    *,
    title: str,
    endpoint_url: str,
    default_query: str | None,
) -> str:
    safe_title = html.escape(title)
    config: dict[str, object] = {"endpoint": endpoint_url}
    if default_query:
        config["defaultQuery"] = default_query

    config_data = html.escape(json.dumps(config), quote=True)
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{safe_title} · GraphiQL</title>
    <link rel="stylesheet" href="{_CDN}/graphiql@{_GRAPHIQL_VERSION}/graphiql.min.css" />
    <style>body {{ margin: 0; height: 100vh; }} #graphiql {{ height: 100vh; }}</style>
  </head>
  <body data-playground-config="{config_data}">
    <div id="graphiql">Loading GraphiQL…</div>
    <script crossorigin src="{_CDN}/react@{_REACT_VERSION}/umd/react.production.min.js"></script>
    <script crossorigin src="{_CDN}/react-dom@{_REACT_VERSION}/umd/react-dom.production.min.js"></script>
    <script crossorigin src="{_CDN}/graphiql@{_GRAPHIQL_VERSION}/graphiql.min.js"></script>
    <script>
      const config = JSON.parse(document.body.dataset.playgroundConfig);
      const fetcher = GraphiQL.createFetcher({{ url: config.endpoint }});
      ReactDOM.createRoot(document.getElementById("graphiql")).render(
        React.createElement(GraphiQL, {{ fetcher, defaultQuery: config.defaultQuery }})
      );
    </script>
  </body>
</html>
"""


__all__ = ["register_playground_routes"]
