#!/usr/bin/env python
# vim:fileencoding=UTF-8:ts=4:sw=4:sta:et:sts=4:ai

"""Standalone MCP-style WebSocket server wrapping the Apple Books tools."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from websockets.asyncio.server import Server, ServerConnection, serve

from .config_loader import ServerConfig, configure_logging, load_config_from_env
from .main import create_dispatcher
from .mcp_protocol import make_error_response, make_result_response

log = logging.getLogger(__name__)


def log_startup_context(config: ServerConfig) -> None:
    log.info(
        "WebSocket server startup: python=%s argv=%s cwd=%s library=%r annotations=%r",
        sys.executable,
        sys.argv,
        os.getcwd(),
        config.library_dir,
        config.annotations_dir,
    )


class MCPWebSocketServer:
    """Very small MCP-inspired WebSocket facade for the tool dispatcher."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self._server: Optional[Server] = None
        self._dispatcher = create_dispatcher(config)

    def _list_tools(self) -> Dict[str, Any]:
        return {"tools": [tool.to_dict() for tool in self._dispatcher.list_tools()]}

    def _call_tool(self, request_id: str, params: Dict[str, Any]) -> Dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not name:
            return make_error_response(request_id, "Missing tool name", code="bad_request")
        if not isinstance(arguments, dict):
            return make_error_response(request_id, "Tool arguments must be an object", code="bad_request")
        result = self._dispatcher.call_tool(name, arguments)
        return make_result_response(request_id, result.to_content())

    def handle_message(self, message: str) -> Dict[str, Any]:
        """Answer one raw JSON request with a response envelope."""
        try:
            payload = json.loads(message)
        except json.JSONDecodeError:
            return make_error_response("-", "Invalid JSON", code="invalid_json")
        if not isinstance(payload, dict):
            return make_error_response("-", "Request must be a JSON object", code="bad_request")

        request_id = str(payload.get("id") or "-")
        method = payload.get("method")
        params = payload.get("params") or {}
        if not isinstance(params, dict):
            return make_error_response(request_id, "params must be an object", code="bad_request")

        if method == "list_tools":
            return make_result_response(request_id, self._list_tools())
        if method == "call_tool":
            return self._call_tool(request_id, params)
        return make_error_response(request_id, "Unknown method", code="unknown_method")

    async def start(self):
        cfg = self.config
        log.info("Starting MCP WebSocket server on ws://%s:%s", cfg.server_host, cfg.server_port)
        try:
            self._server = await serve(self._handle_client, cfg.server_host, cfg.server_port)
        except OSError as exc:
            raise RuntimeError(f"Could not bind port {cfg.server_port}: {exc}") from exc

    async def stop(self):
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    async def _handle_client(self, websocket: ServerConnection) -> None:
        async for message in websocket:
            # Store reads are blocking; keep them off the event loop.
            response = await asyncio.to_thread(self.handle_message, message)
            await websocket.send(json.dumps(response))


async def run_async(config: Optional[ServerConfig] = None) -> None:
    cfg = config or load_config_from_env()
    server = MCPWebSocketServer(cfg)
    await server.start()
    try:
        await asyncio.Future()  # run forever
    finally:
        await server.stop()


def run_from_env() -> None:
    cfg = load_config_from_env()
    configure_logging(cfg.log_level)
    log_startup_context(cfg)
    try:
        asyncio.run(run_async(cfg))
    except RuntimeError:
        log.exception("WebSocket server failed")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run_from_env()
