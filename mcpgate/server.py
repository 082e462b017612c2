"""Main FastAPI server for the mcpgate session transport.

This module wires the transport together and exposes it over HTTP:

- GET /health           Liveness check (service name, active sessions, uptime)
- POST /mcp             Session initiation and continuation
- GET /mcp              Server-push SSE channel, resumable via Last-Event-ID
- DELETE /mcp           Explicit session termination
- GET /tools            Tool definitions (REST convenience)
- POST /tools/{name}    Direct tool execution (REST convenience)

Server Lifecycle:
    1. On startup: start the idle-session sweeper
    2. Answer CORS preflights for allow-listed browser origins
    3. Run every request through the security gate; /mcp goes on to the router
    4. Push ``notifications/tools/list_changed`` when the tool registry changes
    5. On shutdown: stop the sweeper and close every session

Example:
    Run directly with uvicorn:
        $ uvicorn mcpgate.server:app --host 127.0.0.1 --port 3000

    Or with a custom dispatcher:
        from mcpgate.server import create_app
        app = create_app(dispatcher=my_dispatcher)
"""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .router import RequestRouter
from .protocol import MCPHandler
from .logging import configure_logging
from .security import enforce_origin, origin_pattern
from .events import EventStore, InMemoryEventStore
from .errors import DispatchError, TransportError
from .jsonrpc import SERVER_ERROR, build_error, build_notification
from .sessions import SessionSweeper, SessionTable
from .router.responses import error_response, internal_error_response
from .dispatch import Dispatcher, ToolRegistry, register_builtin_tools
from .config import MCP_SERVER_NAME, MCP_SERVER_VERSION, SESSION_IDLE_TTL_SECONDS
from .config.http import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_EXPOSE_HEADERS

logger = logging.getLogger(__name__)

TOOLS_LIST_CHANGED = "notifications/tools/list_changed"


def _watch_registry(registry: ToolRegistry, table: SessionTable) -> None:
    """Broadcast list_changed to every session when the registry changes."""
    pending: set[asyncio.Task] = set()

    def on_change() -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # registered before the server started; nobody to notify
        if not table.active_count():
            return
        task = loop.create_task(table.broadcast(build_notification(TOOLS_LIST_CHANGED)))
        pending.add(task)
        task.add_done_callback(pending.discard)

    registry.add_listener(on_change)


def create_app(
    dispatcher: Dispatcher | None = None,
    *,
    event_store: EventStore | None = None,
    idle_ttl_seconds: float = SESSION_IDLE_TTL_SECONDS,
    server_name: str = MCP_SERVER_NAME,
    server_version: str = MCP_SERVER_VERSION,
) -> FastAPI:
    """Build an app with its own session table and event store.

    Args:
        dispatcher: Executes tool calls. Defaults to a registry holding the
            built-in tools.
        event_store: Backing store for push events. Defaults to the
            in-memory store.
        idle_ttl_seconds: Idle eviction threshold; 0 disables eviction.
        server_name: Name reported in initialize results and /health.
        server_version: Version reported in initialize results.
    """
    if dispatcher is None:
        dispatcher = register_builtin_tools(ToolRegistry())

    protocol = MCPHandler(dispatcher, server_name=server_name, server_version=server_version)
    table = SessionTable(
        protocol,
        event_store if event_store is not None else InMemoryEventStore(),
        idle_ttl_seconds=idle_ttl_seconds,
    )
    router = RequestRouter(table)
    sweeper = SessionSweeper(table)
    started_at = time.monotonic()

    if isinstance(dispatcher, ToolRegistry):
        _watch_registry(dispatcher, table)

    app = FastAPI(default_response_class=ORJSONResponse)
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=origin_pattern(),
        allow_methods=list(CORS_ALLOW_METHODS),
        allow_headers=list(CORS_ALLOW_HEADERS),
        expose_headers=list(CORS_EXPOSE_HEADERS),
    )
    app.state.sessions = table
    app.state.router = router
    app.state.dispatcher = dispatcher

    @app.on_event("startup")
    async def start_sweeper() -> None:
        sweeper.start()

    @app.on_event("shutdown")
    async def close_sessions() -> None:
        """Stop background work and close every session."""
        await sweeper.stop()
        closed = await table.close_all()
        logger.info("shutdown: closed %s sessions", closed)

    @app.get("/health")
    async def health(request: Request) -> Response:
        """Health check endpoint (origin-checked, read-only session count)."""
        try:
            enforce_origin(request.headers, path="/health")
        except TransportError as exc:
            return error_response(exc)
        return ORJSONResponse({
            "status": "healthy",
            "server": server_name,
            "transport": "http",
            "sessions": table.active_count(),
            "uptime": round(time.monotonic() - started_at, 3),
        })

    @app.post("/mcp")
    async def mcp_post(request: Request) -> Response:
        body = await request.body()
        return await router.handle("POST", request.headers, body)

    @app.get("/mcp")
    async def mcp_get(request: Request) -> Response:
        return await router.handle("GET", request.headers)

    @app.delete("/mcp")
    async def mcp_delete(request: Request) -> Response:
        return await router.handle("DELETE", request.headers)

    @app.get("/tools")
    async def list_tools(request: Request) -> Response:
        try:
            enforce_origin(request.headers, path="/tools")
        except TransportError as exc:
            return error_response(exc)
        return ORJSONResponse({"tools": dispatcher.list_tools()})

    @app.post("/tools/{tool_name}")
    async def call_tool(tool_name: str, request: Request) -> Response:
        try:
            enforce_origin(request.headers, path=f"/tools/{tool_name}")
        except TransportError as exc:
            return error_response(exc)
        arguments = await _read_arguments(request)
        if arguments is None:
            payload = build_error(
                None,
                SERVER_ERROR,
                "Tool arguments must be a JSON object",
                {"error_code": "invalid_arguments"},
            )
            return ORJSONResponse(payload, status_code=400)
        try:
            result = await dispatcher.execute(tool_name, arguments)
        except DispatchError as exc:
            data = {"error_code": exc.error_code, "details": exc.details}
            return ORJSONResponse(build_error(None, SERVER_ERROR, exc.message, data), status_code=400)
        except Exception:
            logger.exception("tool %s failed with an internal error", tool_name)
            return internal_error_response()
        return ORJSONResponse(result)

    return app


async def _read_arguments(request: Request) -> dict[str, Any] | None:
    """Decode a REST tool call body; empty bodies mean no arguments."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


configure_logging()
app = create_app()


__all__ = ["TOOLS_LIST_CHANGED", "app", "create_app"]
