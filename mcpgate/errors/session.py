"""Unknown or closed session id on a continuation request."""

from __future__ import annotations

from .base import TransportError
from ..jsonrpc.codes import SESSION_NOT_FOUND


class SessionNotFoundError(TransportError):
    """Raised when ``mcp-session-id`` does not name a live session.

    Continuing a session that does not exist is a client error (400);
    deleting one is a missing resource (404). The router picks the status.
    """

    rpc_code = SESSION_NOT_FOUND

    def __init__(self, session_id: str, *, status_code: int = 400) -> None:
        super().__init__(
            "session_not_found",
            "Session not found: invalid or expired session id",
            status_code=status_code,
            details={"session_id": session_id},
        )
        self.session_id = session_id


__all__ = ["SessionNotFoundError"]
