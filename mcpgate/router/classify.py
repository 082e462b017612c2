"""Classification of inbound /mcp requests.

Evaluated in order:
    1. POST without a session header carrying ``initialize``  -> INITIATE
    2. Any method with a session header:
           POST -> CONTINUE, GET -> RESUME, DELETE -> TERMINATE
    3. Everything else                                          -> MALFORMED
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..jsonrpc import is_initialize_request


class RouteKind(str, Enum):
    """What an inbound request asks the transport to do."""

    INITIATE = "initiate"
    CONTINUE = "continue"
    RESUME = "resume"
    TERMINATE = "terminate"
    MALFORMED = "malformed"


_SESSION_ROUTES: dict[str, RouteKind] = {
    "POST": RouteKind.CONTINUE,
    "GET": RouteKind.RESUME,
    "DELETE": RouteKind.TERMINATE,
}


def classify_request(method: str, session_id: str | None, message: Any = None) -> RouteKind:
    """Map an HTTP method, session header and decoded body to a route."""
    verb = method.upper()
    if session_id:
        return _SESSION_ROUTES.get(verb, RouteKind.MALFORMED)
    if verb == "POST" and is_initialize_request(message):
        return RouteKind.INITIATE
    return RouteKind.MALFORMED


__all__ = ["RouteKind", "classify_request"]
