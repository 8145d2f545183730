"""Tests for the GraphiQL playground page."""
from __future__ import annotations

import html
import json
import re

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from checkpoint_graph.features.graphql.playground import register_playground_routes


def _extract_config(html_body: str) -> dict[str, object]:
    match = re.search(r'data-playground-config="([^"]+)"', html_body)
    assert match, "Playground config attribute missing"
    return json.loads(html.unescape(match.group(1)))


def _client(default_query: str | None, **client_kwargs: object) -> TestClient:
    router = APIRouter()
    register_playground_routes(
        router,
        graphql_path="/graphql",
        title="Checkpoint <Graph>",
        default_query=default_query,
    )
    app = FastAPI()
    app.include_router(router, prefix="/graphql")
    return TestClient(app, **client_kwargs)


def test_playground_serves_html_with_default_query() -> None:
    query = '{\n  _checkpoints(first: 10) {\n    id\n  }\n}'

    response = _client(query).get("/graphql/playground")

    assert response.status_code == 200
    assert "Checkpoint &lt;Graph&gt; · GraphiQL" in response.text
    config = _extract_config(response.text)
    assert config == {"endpoint": "/graphql", "defaultQuery": query}


def test_playground_respects_root_path() -> None:
    response = _client(None, root_path="/service").get("/graphql/playground")

    assert response.status_code == 200
    config = _extract_config(response.text)
    assert config["endpoint"] == "/service/graphql"
    assert "defaultQuery" not in config


def test_query_with_quotes_survives_attribute_escaping() -> None:
    query = '{ _metadata(id: "last_indexed_block") { value } }'

    config = _extract_config(_client(query).get("/graphql/playground").text)

    assert config["defaultQuery"] == query
