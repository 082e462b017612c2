"""MCP method table served over the session transport."""

from .handler import MCPHandler

__all__ = ["MCPHandler"]
