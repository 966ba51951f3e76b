#!/usr/bin/env python
from __future__ import annotations

import os

from starlette.applications import Starlette
from starlette.routing import Mount
import uvicorn

from .config_loader import ServerConfig, configure_logging, load_config_from_env
from .main import create_mcp_server


def create_app(config: ServerConfig | None = None) -> Starlette:
    # Create MCP server and mount its Streamable HTTP app (served under /mcp).
    cfg = config or load_config_from_env()
    mcp = create_mcp_server(cfg)

    http_app_factory = getattr(mcp, "http_app", None)
    if not callable(http_app_factory):
        raise RuntimeError("FastMCP does not provide http_app(); cannot expose /mcp endpoint.")

    mcp_app = http_app_factory()
    # The session manager only runs inside the MCP app's lifespan.
    return Starlette(
        routes=[Mount("/", app=mcp_app)],
        lifespan=mcp_app.lifespan,
    )


def run_from_env() -> None:
    # Read host/port from environment and serve via Uvicorn.
    host = (os.environ.get("MCP_HTTP_HOST") or "127.0.0.1").strip()
    port = int((os.environ.get("MCP_HTTP_PORT") or "8000").strip())

    cfg = load_config_from_env()
    configure_logging(cfg.log_level)
    app = create_app(cfg)
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())


if __name__ == "__main__":
    run_from_env()
