"""Tools every server instance exposes regardless of the domain catalogue."""

from __future__ import annotations

from typing import Any

from .registry import ToolRegistry
from ..errors import DispatchError

ECHO_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "message": {"type": "string", "description": "Text to send back"},
    },
    "required": ["message"],
}


def echo(arguments: dict[str, Any]) -> str:
    message = arguments.get("message")
    if not isinstance(message, str):
        raise DispatchError(
            "INVALID_VALUE",
            "Invalid value for message: expected a string",
            {"suggestion": "Pass {\"message\": \"...\"}"},
        )
    return message


def register_builtin_tools(registry: ToolRegistry) -> ToolRegistry:
    """Install the built-in tools on ``registry`` and return it."""
    registry.register(
        "echo",
        echo,
        description="Return the given message unchanged. Useful for connectivity checks.",
        input_schema=ECHO_SCHEMA,
    )
    return registry


__all__ = ["echo", "register_builtin_tools"]
