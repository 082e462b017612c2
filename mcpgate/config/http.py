"""HTTP header names, content types and CORS policy for the /mcp endpoint."""

MCP_SESSION_ID_HEADER = "mcp-session-id"
MCP_PROTOCOL_VERSION_HEADER = "mcp-protocol-version"
LAST_EVENT_ID_HEADER = "last-event-id"
ORIGIN_HEADER = "origin"

CONTENT_TYPE_SSE = "text/event-stream"

SSE_RESPONSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

# CORS for browser clients on allow-listed origins
CORS_ALLOW_METHODS: tuple[str, ...] = ("GET", "POST", "DELETE")
CORS_ALLOW_HEADERS: tuple[str, ...] = (
    "content-type",
    MCP_SESSION_ID_HEADER,
    MCP_PROTOCOL_VERSION_HEADER,
    LAST_EVENT_ID_HEADER,
)
CORS_EXPOSE_HEADERS: tuple[str, ...] = (MCP_SESSION_ID_HEADER,)


__all__ = [
    "MCP_SESSION_ID_HEADER",
    "MCP_PROTOCOL_VERSION_HEADER",
    "LAST_EVENT_ID_HEADER",
    "ORIGIN_HEADER",
    "CONTENT_TYPE_SSE",
    "SSE_RESPONSE_HEADERS",
    "CORS_ALLOW_METHODS",
    "CORS_ALLOW_HEADERS",
    "CORS_EXPOSE_HEADERS",
]
