"""HTTP response builders for the /mcp endpoint.

Every rejection leaves as a JSON-RPC error envelope whose ``data`` carries
a stable ``error_code``:

    {
        "jsonrpc": "2.0",
        "error": {"code": -32600, "message": "...", "data": {"error_code": "invalid_request"}},
        "id": null
    }

Internal failures never include exception text or tracebacks.
"""

from __future__ import annotations

from typing import Any

import orjson
from fastapi import Response
from fastapi.responses import ORJSONResponse

from ..errors import TransportError
from ..config.http import MCP_SESSION_ID_HEADER
from ..jsonrpc import INTERNAL_ERROR, build_error

KEEPALIVE_FRAME = ": keepalive\n\n"


def session_headers(session_id: str | None) -> dict[str, str]:
    return {MCP_SESSION_ID_HEADER: session_id} if session_id else {}


def json_response(
    payload: Any,
    *,
    status_code: int = 200,
    session_id: str | None = None,
) -> ORJSONResponse:
    return ORJSONResponse(payload, status_code=status_code, headers=session_headers(session_id))


def accepted_response(session_id: str | None = None) -> Response:
    """202 for POSTs that carried only notifications or responses."""
    return Response(status_code=202, headers=session_headers(session_id))


def error_response(exc: TransportError, request_id: Any = None) -> ORJSONResponse:
    """Translate a transport failure into its JSON-RPC error response."""
    data: dict[str, Any] = {"error_code": exc.error_code}
    data.update(exc.details)
    return ORJSONResponse(
        build_error(request_id, exc.rpc_code, exc.message, data),
        status_code=exc.status_code,
    )


def internal_error_response(request_id: Any = None) -> ORJSONResponse:
    """Generic 500; details stay in the server log."""
    return ORJSONResponse(
        build_error(request_id, INTERNAL_ERROR, "Internal error", {"error_code": "internal_error"}),
        status_code=500,
    )


def format_sse(data: Any, *, event_id: str | None = None, event: str = "message") -> str:
    """Render one SSE frame; ``data`` is JSON-encoded unless already a string."""
    text = data if isinstance(data, str) else orjson.dumps(data).decode()
    lines = [f"event: {event}"]
    if event_id:
        lines.append(f"id: {event_id}")
    lines.extend(f"data: {line}" for line in text.splitlines() or [""])
    return "\n".join(lines) + "\n\n"


__all__ = [
    "KEEPALIVE_FRAME",
    "accepted_response",
    "error_response",
    "format_sse",
    "internal_error_response",
    "json_response",
    "session_headers",
]
