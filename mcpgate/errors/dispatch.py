"""Typed failure returned across the dispatcher boundary.

Tool implementations raise ``DispatchError`` for expected failures (unknown
tool, bad arguments, upstream refusal). Anything else escaping ``execute``
is treated as an internal error and never shown to the client verbatim.
"""

from __future__ import annotations

from typing import Any


class DispatchError(Exception):
    """Expected failure of a domain operation.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Human-readable error description.
        details: Optional context (``context``, ``suggestion``, ``data``).
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = dict(details or {})

    @classmethod
    def unknown_tool(cls, name: str) -> "DispatchError":
        return cls(
            "UNKNOWN_TOOL",
            f"Invalid value for tool: '{name}'. Expected a valid tool name",
            {"context": "tool lookup", "data": {"tool": name}},
        )

    def format_message(self) -> str:
        """Render the error the way tool results present it to users."""
        text = f"Error [{self.error_code}]: {self.message}"
        context = self.details.get("context")
        if context:
            text += f"\n\nContext: {context}"
        suggestion = self.details.get("suggestion")
        if suggestion:
            text += f"\n\nSuggestion: {suggestion}"
        return text


__all__ = ["DispatchError"]
