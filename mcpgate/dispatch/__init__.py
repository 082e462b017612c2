"""Dispatcher boundary and the default tool registry."""

from .base import Dispatcher
from .tool import ToolHandler, ToolSpec
from .registry import ToolRegistry, to_tool_result
from .builtin import echo, register_builtin_tools

__all__ = [
    "Dispatcher",
    "ToolHandler",
    "ToolRegistry",
    "ToolSpec",
    "echo",
    "register_builtin_tools",
    "to_tool_result",
]
