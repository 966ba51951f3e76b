#!/usr/bin/env python
# vim:fileencoding=UTF-8:ts=4:sw=4:sta:et:sts=4:ai

"""Minimal MCP protocol helpers shared by the dispatcher and transports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

ERROR_PREFIX = "Error: "


@dataclass
class MCPToolDescription:
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: either a text payload or an error.

    ``error_kind`` is ``None`` for successful calls.
    """

    text: str
    error_kind: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, kind: str, message: str) -> "ToolResult":
        return cls(text=f"{ERROR_PREFIX}{message}", error_kind=kind)

    def to_content(self) -> Dict[str, Any]:
        return {
            "content": [
                {
                    "type": "text",
                    "text": self.text,
                }
            ],
            "isError": self.is_error,
        }


def make_error_response(request_id: str, message: str, code: str = "internal_error") -> Dict[str, Any]:
    return {
        "id": request_id,
        "error": {
            "code": code,
            "message": message,
        },
    }


def make_result_response(request_id: str, result: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": request_id,
        "result": result,
    }
