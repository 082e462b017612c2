"""Server identity and listener configuration."""

import os


MCP_HOST = os.getenv("MCP_HOST", "127.0.0.1")
MCP_PORT = int(os.getenv("MCP_PORT", "3000"))

# Reported in the initialize result and the /health payload
MCP_SERVER_NAME = os.getenv("MCP_SERVER_NAME", "mcpgate")
MCP_SERVER_VERSION = os.getenv("MCP_SERVER_VERSION", "1.0.0")


__all__ = [
    "MCP_HOST",
    "MCP_PORT",
    "MCP_SERVER_NAME",
    "MCP_SERVER_VERSION",
]
