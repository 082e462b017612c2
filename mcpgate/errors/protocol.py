"""Wire-level rejections: bad envelopes and unsupported protocol versions."""

from __future__ import annotations

from collections.abc import Iterable

from .base import TransportError
from ..jsonrpc.codes import INVALID_REQUEST


class MalformedRequestError(TransportError):
    """Raised when a request body or header set cannot be routed.

    ``rpc_code`` defaults to INVALID_REQUEST; parse failures pass
    PARSE_ERROR so clients can tell bad JSON from a bad envelope.
    """

    rpc_code = INVALID_REQUEST

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "invalid_request",
        rpc_code: int | None = None,
    ) -> None:
        super().__init__(error_code, message, rpc_code=rpc_code)


class VersionMismatchError(TransportError):
    """Raised when ``mcp-protocol-version`` names a version we do not speak."""

    def __init__(self, version: str, supported: Iterable[str]) -> None:
        supported_list = list(supported)
        super().__init__(
            "unsupported_protocol_version",
            (
                f"Bad Request: unsupported protocol version '{version}'. "
                f"Supported versions: {', '.join(supported_list)}"
            ),
            details={"requested": version, "supported": supported_list},
        )
        self.version = version


__all__ = ["MalformedRequestError", "VersionMismatchError"]
