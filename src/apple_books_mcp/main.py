#!/usr/bin/env python
import logging
import sys

import anyio

from fastmcp import FastMCP

from .config_loader import ServerConfig, configure_logging, load_config_from_env
from .core.service import LibraryService
from .infra.books_sqlite import BooksRepository
from .tools.dispatcher import ToolDispatcher
from .tools.library_tools import register_library_tools

SERVER_NAME = "apple-books-mcp"

log = logging.getLogger(__name__)


def create_dispatcher(config: ServerConfig) -> ToolDispatcher:
    repository = BooksRepository(
        library_dir=config.library_dir,
        annotations_dir=config.annotations_dir,
        extension=config.store_extension,
    )
    return ToolDispatcher(LibraryService(repository))


def create_mcp_server(config: ServerConfig | None = None) -> FastMCP:
    """Create MCP server with all registered tools."""
    cfg = config or load_config_from_env()
    dispatcher = create_dispatcher(cfg)

    mcp = FastMCP(SERVER_NAME)
    register_library_tools(mcp, dispatcher)

    return mcp


def run(config: ServerConfig | None = None) -> None:
    """Run MCP server using stdio transport (MCP clients connect via pipes)."""

    cfg = config or load_config_from_env()
    server = create_mcp_server(cfg)
    log.info(
        "Apple Books MCP server running on stdio: library=%r annotations=%r",
        cfg.library_dir,
        cfg.annotations_dir,
    )

    async def _serve():
        await server.run_async(transport="stdio")

    anyio.run(_serve)


def main() -> None:
    try:
        cfg = load_config_from_env()
        configure_logging(cfg.log_level)
        run(cfg)
    except KeyboardInterrupt:
        pass
    except Exception:  # pylint: disable=broad-except
        log.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
