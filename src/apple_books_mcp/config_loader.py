#!/usr/bin/env python
# vim:fileencoding=UTF-8:ts=4:sw=4:sta:et:sts=4:ai

"""Lightweight config loader for running the server standalone."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

APPLE_BOOKS_DOCUMENTS = Path("Library/Containers/com.apple.iBooksX/Data/Documents")


@dataclass
class ServerConfig:
    library_dir: str
    annotations_dir: str
    server_host: str = "127.0.0.1"
    server_port: int = 8765
    store_extension: str = ".sqlite"
    log_level: str = "INFO"


def _default_dir(name: str) -> str:
    return str(Path.home() / APPLE_BOOKS_DOCUMENTS / name)


def _read_port(name: str, default: str) -> int:
    raw = (os.environ.get(name) or default).strip()
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"{name} must be between 1 and 65535, got {port}")
    return port


def load_config_from_env() -> ServerConfig:
    library = os.environ.get("APPLE_BOOKS_LIBRARY_DIR") or _default_dir("BKLibrary")
    annotations = os.environ.get("APPLE_BOOKS_ANNOTATIONS_DIR") or _default_dir("AEAnnotation")
    host = os.environ.get("MCP_SERVER_HOST", "127.0.0.1")
    port = _read_port("MCP_SERVER_PORT", "8765")
    extension = os.environ.get("APPLE_BOOKS_STORE_EXTENSION", ".sqlite")
    log_level = os.environ.get("MCP_LOG_LEVEL", "INFO").upper()
    return ServerConfig(
        library_dir=library,
        annotations_dir=annotations,
        server_host=host,
        server_port=port,
        store_extension=extension,
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> None:
    """Send log output to stderr; stdout carries the stdio protocol."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
