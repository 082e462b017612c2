"""Run the transport with uvicorn: ``python -m mcpgate``."""

from __future__ import annotations

import uvicorn

from .config import MCP_HOST, MCP_PORT


def main() -> None:
    uvicorn.run("mcpgate.server:app", host=MCP_HOST, port=MCP_PORT, log_config=None)


if __name__ == "__main__":
    main()
