"""MCP method handling for a single inbound JSON-RPC message.

Supported methods:
    initialize        Negotiate protocol version and advertise capabilities
    ping              Liveness check, empty result
    tools/list        Tool definitions from the dispatcher
    tools/call        Run one tool through the dispatcher

Notifications (``notifications/initialized``, ``notifications/cancelled``)
and client responses are acknowledged without a reply.

Expected tool failures (DispatchError) are reported inside the tool result
with ``isError`` set, so the model on the other end can read them. Any
other exception propagates to the caller, which answers with a generic
internal error.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Awaitable, Callable

from ..dispatch import Dispatcher
from ..errors import DispatchError, InvalidParamsError
from ..config.server import MCP_SERVER_NAME, MCP_SERVER_VERSION
from ..config.security import LATEST_PROTOCOL_VERSION, SUPPORTED_PROTOCOL_VERSIONS
from ..jsonrpc import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    INITIALIZE_METHOD,
    build_error,
    build_result,
    is_request,
)

logger = logging.getLogger(__name__)

MethodHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class MCPHandler:
    """Maps JSON-RPC methods to results for one server instance."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        server_name: str = MCP_SERVER_NAME,
        server_version: str = MCP_SERVER_VERSION,
    ) -> None:
        self._dispatcher = dispatcher
        self._server_name = server_name
        self._server_version = server_version
        self._methods: dict[str, MethodHandler] = {
            INITIALIZE_METHOD: self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def handle(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Process one message; return the response envelope or None."""
        if not is_request(message):
            if "method" in message:
                logger.debug("mcp: notification %s", message["method"])
            return None

        method = message["method"]
        request_id = message["id"]
        handler = self._methods.get(method)
        if handler is None:
            logger.info("mcp: method not found %s", method)
            return build_error(request_id, METHOD_NOT_FOUND, "Method not found", {"method": method})

        params = message.get("params") or {}
        if not isinstance(params, dict):
            return build_error(request_id, INVALID_PARAMS, "Invalid params: expected an object")
        try:
            result = await handler(params)
        except InvalidParamsError as exc:
            return build_error(request_id, INVALID_PARAMS, f"Invalid params: {exc}")
        return build_result(request_id, result)

    def negotiate_version(self, requested: Any) -> str:
        if isinstance(requested, str) and requested in SUPPORTED_PROTOCOL_VERSIONS:
            return requested
        return LATEST_PROTOCOL_VERSION

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        version = self.negotiate_version(params.get("protocolVersion"))
        client = params.get("clientInfo") or {}
        logger.info(
            "mcp: initialize client=%s version=%s negotiated=%s",
            client.get("name", "unknown") if isinstance(client, dict) else "unknown",
            params.get("protocolVersion"),
            version,
        )
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": True}},
            "serverInfo": {"name": self._server_name, "version": self._server_version},
        }

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": self._dispatcher.list_tools()}

    async def _call_tool(self, params: dict[str, Any]) -> Any:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("'name' must be a non-empty string")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("'arguments' must be an object")

        try:
            return await self._dispatcher.execute(name, arguments)
        except DispatchError as exc:
            logger.info("mcp: tool %s failed code=%s", name, exc.error_code)
            return {
                "content": [{"type": "text", "text": exc.format_message()}],
                "isError": True,
            }


__all__ = ["MCPHandler"]
