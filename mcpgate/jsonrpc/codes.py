"""JSON-RPC 2.0 error codes used on the wire.

Standard codes come from the JSON-RPC 2.0 specification. The -32000 to
-32099 range is reserved for implementation-defined server errors; the
transport uses it for gate rejections, unknown sessions and dispatcher
failures.
"""

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVER_ERROR = -32000  # gate rejections and dispatcher failures
SESSION_NOT_FOUND = -32001


__all__ = [
    "JSONRPC_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    "SESSION_NOT_FOUND",
]
