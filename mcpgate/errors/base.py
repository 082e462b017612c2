"""Base class for failures that end a request at the transport layer.

Every rejection the gate or router produces is a ``TransportError``. The
HTTP layer turns it into a JSON-RPC error envelope using the attributes
below, so raising code never builds responses itself.
"""

from __future__ import annotations

from typing import Any

from ..jsonrpc.codes import SERVER_ERROR


class TransportError(Exception):
    """Structured transport failure with HTTP and JSON-RPC metadata.

    Attributes:
        error_code: Stable machine-readable identifier (``data.error_code``).
        message: Human-readable description sent to the client.
        status_code: HTTP status of the error response.
        rpc_code: Numeric JSON-RPC error code.
        details: Extra fields merged into the error ``data`` object.
    """

    status_code = 400
    rpc_code = SERVER_ERROR

    def __init__(
        self,
        error_code: str,
        message: str,
        *,
        status_code: int | None = None,
        rpc_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if rpc_code is not None:
            self.rpc_code = rpc_code
        self.details = dict(details or {})


__all__ = ["TransportError"]
