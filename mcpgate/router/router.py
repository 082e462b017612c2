"""Request router for the /mcp endpoint.

Every inbound call runs through the same pipeline:

1. Security gate (origin)      -> 403 access_denied
2. Body decoding (POST only)   -> 400 parse_error / invalid_request
3. Classification              -> INITIATE, CONTINUE, RESUME, TERMINATE, MALFORMED
4. Security gate (version)     -> 400 unsupported_protocol_version (not on INITIATE)
5. Dispatch to the session table / controller

Steps 1 to 4 never touch the session table. Every failure is turned into a
JSON-RPC error response here; nothing escapes to the ASGI server.

Status codes by route:
    INITIATE   200 + mcp-session-id header
    CONTINUE   200 with the JSON-RPC response, 202 for notifications,
               400 if the session is unknown
    RESUME     200 text/event-stream, 400 if the session is unknown
    TERMINATE  200 acknowledgment, 404 if the session is unknown
    MALFORMED  400
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Mapping

from fastapi import Response
from fastapi.responses import StreamingResponse

from .stream import stream_events
from ..logging import request_scope, session_scope
from ..sessions import SessionController, SessionTable
from ..jsonrpc import build_result, is_initialize_request
from .classify import RouteKind, classify_request
from .parsing import parse_body, request_id_of
from ..config.events import SSE_KEEPALIVE_INTERVAL_S
from ..security import enforce_origin, enforce_protocol_version
from ..errors import MalformedRequestError, SessionNotFoundError, TransportError
from ..config.http import (
    CONTENT_TYPE_SSE,
    LAST_EVENT_ID_HEADER,
    MCP_SESSION_ID_HEADER,
    SSE_RESPONSE_HEADERS,
)
from .responses import (
    error_response,
    json_response,
    session_headers,
    accepted_response,
    internal_error_response,
)

logger = logging.getLogger(__name__)


class RequestRouter:
    """Routes /mcp requests to sessions held by a SessionTable."""

    def __init__(
        self,
        table: SessionTable,
        *,
        keepalive_s: float = SSE_KEEPALIVE_INTERVAL_S,
    ) -> None:
        self.table = table
        self._keepalive_s = keepalive_s

    async def handle(
        self,
        method: str,
        headers: Mapping[str, str],
        body: bytes | str = b"",
    ) -> Response:
        """Run the full pipeline for one HTTP exchange."""
        session_id = headers.get(MCP_SESSION_ID_HEADER) or None
        message: Any = None
        with request_scope(session_id):
            try:
                enforce_origin(headers)
                if method.upper() == "POST":
                    message = parse_body(body)
                route = classify_request(method, session_id, message)
                enforce_protocol_version(headers, is_initialization=is_initialize_request(message))
                return await self._dispatch(route, method, session_id, headers, message)
            except TransportError as exc:
                logger.info(
                    "mcp %s rejected: %s (%s)",
                    method.upper(),
                    exc.error_code,
                    exc.status_code,
                )
                return error_response(exc, request_id_of(message))
            except Exception:
                logger.exception("mcp %s failed with an internal error", method.upper())
                return internal_error_response(request_id_of(message))

    async def _dispatch(
        self,
        route: RouteKind,
        method: str,
        session_id: str | None,
        headers: Mapping[str, str],
        message: Any,
    ) -> Response:
        if route is RouteKind.INITIATE:
            return await self._initiate(message)
        if route is RouteKind.CONTINUE and session_id:
            return await self._continue(session_id, message)
        if route is RouteKind.RESUME and session_id:
            return await self._resume(session_id, headers.get(LAST_EVENT_ID_HEADER))
        if route is RouteKind.TERMINATE and session_id:
            return await self._terminate(session_id)
        if method.upper() == "POST":
            raise MalformedRequestError("Bad Request: missing session id for non-initialize request")
        raise MalformedRequestError(f"Bad Request: {MCP_SESSION_ID_HEADER} header is required")

    # ============================================================================
    # Routes
    # ============================================================================
    async def _initiate(self, message: dict[str, Any]) -> Response:
        controller = self.table.create()
        with session_scope(controller.session_id):
            try:
                response = await controller.initialize(message)
            except Exception:
                await self.table.discard(controller, "initialization failed")
                raise
            if not controller.is_active:
                await self.table.discard(controller, "initialization rejected")
                return json_response(response, status_code=400)
            logger.info("session %s: created (%s active)", controller.session_id, self.table.active_count())
            return json_response(response, session_id=controller.session_id)

    async def _continue(self, session_id: str, message: dict[str, Any]) -> Response:
        controller = self._lookup(session_id, status_code=400)
        response = await controller.handle_message(message)
        if response is None:
            return accepted_response(session_id)
        return json_response(response, session_id=session_id)

    async def _resume(self, session_id: str, last_event_id: str | None) -> Response:
        controller = self._lookup(session_id, status_code=400)
        channel = await controller.open_stream(last_event_id)
        headers = dict(SSE_RESPONSE_HEADERS)
        headers.update(session_headers(session_id))
        return StreamingResponse(
            stream_events(controller, channel, keepalive_s=self._keepalive_s),
            media_type=CONTENT_TYPE_SSE,
            headers=headers,
        )

    async def _terminate(self, session_id: str) -> Response:
        if not await self.table.terminate(session_id):
            raise SessionNotFoundError(session_id, status_code=404)
        logger.info("session %s: terminated by client", session_id)
        return json_response(build_result(None, {"terminated": True, "sessionId": session_id}))

    def _lookup(self, session_id: str, *, status_code: int) -> SessionController:
        controller = self.table.get(session_id)
        if controller is None:
            raise SessionNotFoundError(session_id, status_code=status_code)
        return controller


__all__ = ["RequestRouter"]
