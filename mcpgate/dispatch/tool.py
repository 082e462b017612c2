"""Tool definition record kept by the registry."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass, field
from collections.abc import Awaitable, Callable

ToolHandler = Callable[[dict[str, Any]], "Awaitable[Any] | Any"]


def _empty_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


@dataclass(slots=True)
class ToolSpec:
    """A named operation and the metadata advertised by ``tools/list``."""

    name: str
    handler: ToolHandler
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=_empty_schema)

    def definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


__all__ = ["ToolHandler", "ToolSpec"]
