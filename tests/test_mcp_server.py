import asyncio
import json

import pytest
from fastmcp import Client

from apple_books_mcp.main import create_mcp_server


def _run(coro):
    return asyncio.run(coro)


def test_tools_are_listed(config):
    mcp = create_mcp_server(config)

    async def list_names():
        async with Client(mcp) as client:
            tools = await client.list_tools()
        return {tool.name: tool for tool in tools}

    tools = _run(list_names())

    assert set(tools) == {"get_books", "get_collections", "get_annotations", "get_book_list", "search_books"}
    search_schema = tools["search_books"].input_schema
    assert search_schema["required"] == ["query"]
    assert search_schema["properties"]["query"]["type"] == "string"
    assert tools["get_book_list"].description == "Get a simple list of books in 'Author - Title' format"


def _call(config, name, arguments=None):
    mcp = create_mcp_server(config)

    async def call():
        async with Client(mcp) as client:
            result = await client.call_tool(name, arguments or {}, raise_on_error=False)
        assert not result.is_error
        return result.content[0].text

    return _run(call())


def test_search_books_over_mcp(config):
    text = _call(config, "search_books", {"query": "Dune"})

    assert [book["id"] for book in json.loads(text)] == ["1"]


@pytest.mark.parametrize("arguments", [{}, {"query": 5}, {"query": "   "}])
def test_invalid_search_arguments_over_mcp(config, arguments):
    text = _call(config, "search_books", arguments)

    assert text.startswith("Error: ")


def test_missing_query_reaches_dispatcher(config):
    text = _call(config, "search_books", {})

    assert text.startswith("Error: Invalid arguments for search_books")
    assert "query" in text


def test_collections_over_mcp(config):
    payload = json.loads(_call(config, "get_collections"))

    assert payload[0]["title"] == "Favorites"


def test_failures_are_returned_as_text(tmp_path, config):
    config.library_dir = str(tmp_path / "missing")

    text = _call(config, "get_books")

    assert text.startswith("Error: ")
    assert "missing" in text


def test_http_app_mounts_mcp_endpoint(config):
    from starlette.applications import Starlette

    from apple_books_mcp.http_server import create_app

    app = create_app(config)

    assert isinstance(app, Starlette)
    assert len(app.routes) == 1
