"""Resumable session transport for MCP servers over streamable HTTP.

Import ``mcpgate.server`` for the ASGI app; the sub-packages hold the
building blocks (security gate, event store, session table, router).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
