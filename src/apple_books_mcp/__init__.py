"""Expose the Apple Books library, collections and highlights over MCP."""

__version__ = "1.0.0"
