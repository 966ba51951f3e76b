import logging
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from pydantic import Field

from .dispatcher import (
    GET_ANNOTATIONS,
    GET_BOOK_LIST,
    GET_BOOKS,
    GET_COLLECTIONS,
    SEARCH_BOOKS,
    ToolDispatcher,
)

logger = logging.getLogger(__name__)


def register_library_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> None:
    """Register the Apple Books MCP tools.

    Each tool hands its call to the dispatcher and returns the rendered
    text, including error texts, so failures reach the client as a
    normal tool reply.
    """
    tools = {tool.name: tool for tool in dispatcher.list_tools()}

    @mcp.tool(name=GET_BOOKS, description=tools[GET_BOOKS].description)
    def get_books() -> str:
        return dispatcher.call_tool(GET_BOOKS).text

    @mcp.tool(name=GET_COLLECTIONS, description=tools[GET_COLLECTIONS].description)
    def get_collections() -> str:
        return dispatcher.call_tool(GET_COLLECTIONS).text

    @mcp.tool(name=GET_ANNOTATIONS, description=tools[GET_ANNOTATIONS].description)
    def get_annotations() -> str:
        return dispatcher.call_tool(GET_ANNOTATIONS).text

    @mcp.tool(name=GET_BOOK_LIST, description=tools[GET_BOOK_LIST].description)
    def get_book_list() -> str:
        return dispatcher.call_tool(GET_BOOK_LIST).text

    # FastMCP validates arguments against the function signature before the
    # body runs, so ``query`` accepts anything here and the dispatcher does
    # the validation. The advertised schema still requires a string.
    def search_books(
        query: Annotated[Any, Field(description="Search query for title or author")] = None,
    ) -> str:
        arguments = {} if query is None else {"query": query}
        return dispatcher.call_tool(SEARCH_BOOKS, arguments).text

    search_tool = Tool.from_function(
        search_books,
        name=SEARCH_BOOKS,
        description=tools[SEARCH_BOOKS].description,
    )
    mcp.add_tool(search_tool.model_copy(update={"parameters": tools[SEARCH_BOOKS].input_schema}))

    logger.debug("Registered tools: %s", ", ".join(tools))
