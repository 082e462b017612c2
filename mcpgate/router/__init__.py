"""Routing of /mcp requests onto sessions."""

from .parsing import parse_body
from .stream import stream_events
from .router import RequestRouter
from .classify import RouteKind, classify_request
from .responses import error_response, format_sse, internal_error_response

__all__ = [
    "RequestRouter",
    "RouteKind",
    "classify_request",
    "error_response",
    "format_sse",
    "internal_error_response",
    "parse_body",
    "stream_events",
]
