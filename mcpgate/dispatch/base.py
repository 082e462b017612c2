"""Boundary between the transport and the domain operations it serves.

The transport only ever calls ``execute(name, arguments)`` and
``list_tools()``. How a tool is fulfilled (upstream clients, formatting,
retries) is the implementer's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Dispatcher(ABC):
    """Executes named operations on behalf of a session."""

    @abstractmethod
    async def execute(self, name: str, arguments: dict[str, Any]) -> Any:
        """Run operation ``name`` and return its MCP tool result.

        Raises:
            DispatchError: For expected failures (unknown tool, bad input).
        """

    @abstractmethod
    def list_tools(self) -> list[dict[str, Any]]:
        """Return tool definitions (``name``, ``description``, ``inputSchema``)."""


__all__ = ["Dispatcher"]
