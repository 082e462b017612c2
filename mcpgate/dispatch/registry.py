"""Name-to-handler registry implementing the dispatcher boundary.

Handlers may be plain functions or coroutines. Whatever they return is
shaped into an MCP tool result:

    {"content": [...]}   returned unchanged
    str                  wrapped as a single text block
    anything else        JSON-encoded into a single text block
"""

from __future__ import annotations

import json
import inspect
import logging
from typing import Any
from collections.abc import Callable

from .base import Dispatcher
from ..errors import DispatchError
from .tool import ToolHandler, ToolSpec

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


def to_tool_result(value: Any) -> dict[str, Any]:
    """Shape a handler return value into an MCP tool result."""
    if isinstance(value, dict) and "content" in value:
        return value
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    return {"content": [{"type": "text", "text": text}]}


class ToolRegistry(Dispatcher):
    """Holds the tools this server exposes and runs them by name."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._listeners: list[ChangeListener] = []

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(
        self,
        name: str,
        handler: ToolHandler,
        *,
        description: str = "",
        input_schema: dict[str, Any] | None = None,
    ) -> ToolSpec:
        """Add or replace a tool and notify change listeners."""
        spec = ToolSpec(name=name, handler=handler, description=description)
        if input_schema is not None:
            spec.input_schema = input_schema
        replaced = name in self._tools
        self._tools[name] = spec
        logger.info("tool registry: %s tool=%s", "replaced" if replaced else "registered", name)
        self._notify()
        return spec

    def unregister(self, name: str) -> bool:
        """Remove a tool; return False if it was not registered."""
        if self._tools.pop(name, None) is None:
            return False
        logger.info("tool registry: unregistered tool=%s", name)
        self._notify()
        return True

    def add_listener(self, listener: ChangeListener) -> None:
        """Call ``listener`` whenever the tool list changes."""
        self._listeners.append(listener)

    def list_tools(self) -> list[dict[str, Any]]:
        return [spec.definition() for spec in self._tools.values()]

    async def execute(self, name: str, arguments: dict[str, Any]) -> Any:
        spec = self._tools.get(name)
        if spec is None:
            raise DispatchError.unknown_tool(name)
        outcome = spec.handler(dict(arguments or {}))
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return to_tool_result(outcome)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("tool registry: change listener failed")


__all__ = ["ToolRegistry", "to_tool_result"]
