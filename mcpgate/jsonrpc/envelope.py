"""JSON-RPC 2.0 envelope builders and predicates.

Inbound messages are plain dicts decoded from the request body; these
helpers classify them and build outbound envelopes:

    request       {"jsonrpc": "2.0", "method": ..., "params": ..., "id": ...}
    notification  {"jsonrpc": "2.0", "method": ..., "params": ...}
    response      {"jsonrpc": "2.0", "result" | "error": ..., "id": ...}
"""

from __future__ import annotations

from typing import Any

from .codes import JSONRPC_VERSION

INITIALIZE_METHOD = "initialize"


def build_result(request_id: Any, result: Any) -> dict[str, Any]:
    """Build a success response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "result": result, "id": request_id}


def build_error(
    request_id: Any,
    code: int,
    message: str,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an error response envelope.

    Args:
        request_id: Id of the request being answered, or None when unknown.
        code: Numeric JSON-RPC error code.
        message: Human-readable description.
        data: Optional structured details (omitted when empty).
    """
    error: dict[str, Any] = {"code": code, "message": message}
    if data:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "error": error, "id": request_id}


def build_notification(method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a server-initiated notification."""
    message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": method}
    if params is not None:
        message["params"] = params
    return message


def has_valid_envelope(message: Any) -> bool:
    """Return True when ``message`` is a JSON-RPC 2.0 object of any kind."""
    if not isinstance(message, dict) or message.get("jsonrpc") != JSONRPC_VERSION:
        return False
    if "method" in message:
        return isinstance(message["method"], str) and bool(message["method"])
    return "id" in message and ("result" in message or "error" in message)


def is_request(message: dict[str, Any]) -> bool:
    """True for messages that expect a response (method plus id)."""
    return "method" in message and message.get("id") is not None


def is_initialize_request(message: Any) -> bool:
    """True when ``message`` is an ``initialize`` request."""
    return (
        isinstance(message, dict)
        and message.get("jsonrpc") == JSONRPC_VERSION
        and message.get("method") == INITIALIZE_METHOD
        and message.get("id") is not None
    )


__all__ = [
    "INITIALIZE_METHOD",
    "build_error",
    "build_notification",
    "build_result",
    "has_valid_envelope",
    "is_initialize_request",
    "is_request",
]
