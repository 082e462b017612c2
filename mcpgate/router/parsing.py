"""Request body decoding for POST /mcp."""

from __future__ import annotations

import json
from typing import Any

from ..errors import MalformedRequestError
from ..jsonrpc import PARSE_ERROR, has_valid_envelope


def parse_body(raw: bytes | str) -> dict[str, Any]:
    """Decode a POST body into a single JSON-RPC message.

    Raises:
        MalformedRequestError: Empty body, invalid UTF-8 or JSON, batch array, or a
            value that is not a JSON-RPC 2.0 object.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else (raw or "")
    except UnicodeDecodeError as exc:
        raise MalformedRequestError(
            "Parse error: body must be UTF-8 encoded JSON",
            error_code="parse_error",
            rpc_code=PARSE_ERROR,
        ) from exc
    if not text.strip():
        raise MalformedRequestError("Bad Request: empty request body")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedRequestError(
            "Parse error: body must be valid JSON",
            error_code="parse_error",
            rpc_code=PARSE_ERROR,
        ) from exc

    if isinstance(data, list):
        raise MalformedRequestError("Bad Request: batch requests are not supported")
    if not has_valid_envelope(data):
        raise MalformedRequestError("Invalid Request")
    return data


def request_id_of(message: Any) -> Any:
    """Return the JSON-RPC id of ``message`` when it has one."""
    if isinstance(message, dict):
        return message.get("id")
    return None


__all__ = ["parse_body", "request_id_of"]
