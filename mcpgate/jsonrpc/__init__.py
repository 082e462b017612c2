"""JSON-RPC 2.0 wire envelope: error codes, builders and predicates."""

from .codes import (
    JSONRPC_VERSION,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    SERVER_ERROR,
    SESSION_NOT_FOUND,
)
from .envelope import (
    INITIALIZE_METHOD,
    build_error,
    build_notification,
    build_result,
    has_valid_envelope,
    is_initialize_request,
    is_request,
)

__all__ = [
    # Codes
    "JSONRPC_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    "SESSION_NOT_FOUND",
    # Envelopes
    "INITIALIZE_METHOD",
    "build_error",
    "build_notification",
    "build_result",
    "has_valid_envelope",
    "is_initialize_request",
    "is_request",
]
