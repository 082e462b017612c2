"""Unit tests for the /mcp request pipeline (gate, parsing, routing, errors)."""

from __future__ import annotations

import json
import asyncio
from typing import Any

import pytest

import mcpgate.security.gate as gate_mod
from mcpgate.router import RequestRouter
from mcpgate.jsonrpc import INTERNAL_ERROR, INVALID_PARAMS, SESSION_NOT_FOUND
from tests.helpers.fakes import INIT_MESSAGE, FailingDispatcher, request, notification, make_table


def _body(response) -> dict[str, Any]:
    return json.loads(response.body)


def _encode(message: Any) -> bytes:
    return json.dumps(message).encode()


@pytest.fixture(autouse=True)
def _local_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gate_mod, "ALLOWED_ORIGINS", ("http://localhost",))


def test_initiate_returns_session_header_and_result() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table)
        response = await router.handle("POST", {"origin": "http://localhost:5173"}, _encode(INIT_MESSAGE))

        assert response.status_code == 200
        session_id = response.headers["mcp-session-id"]
        assert table.get(session_id) is not None
        result = _body(response)["result"]
        assert result["serverInfo"] == {"name": "test-server", "version": "9.9.9"}
        assert result["capabilities"]["tools"]["listChanged"] is True

    asyncio.run(_run())


def test_foreign_origin_is_rejected_before_session_logic() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table)
        response = await router.handle("POST", {"origin": "http://evil.example"}, _encode(INIT_MESSAGE))

        assert response.status_code == 403
        assert _body(response)["error"]["data"]["error_code"] == "access_denied"
        assert len(table) == 0

    asyncio.run(_run())


def test_initialize_is_exempt_from_version_check() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table)
        headers = {"mcp-protocol-version": "1999-01-01"}
        response = await router.handle("POST", headers, _encode(INIT_MESSAGE))
        assert response.status_code == 200

        session_id = response.headers["mcp-session-id"]
        headers["mcp-session-id"] = session_id
        rejected = await router.handle("POST", headers, _encode(request("ping")))
        assert rejected.status_code == 400
        assert _body(rejected)["error"]["data"]["error_code"] == "unsupported_protocol_version"
        assert _body(rejected)["id"] == 2

    asyncio.run(_run())


def test_continue_returns_response_and_notification_is_accepted() -> None:
    async def _run() -> None:
        router = RequestRouter(make_table())
        init = await router.handle("POST", {}, _encode(INIT_MESSAGE))
        headers = {"mcp-session-id": init.headers["mcp-session-id"], "mcp-protocol-version": "2025-03-26"}

        listed = await router.handle("POST", headers, _encode(request("tools/list")))
        assert listed.status_code == 200
        assert [tool["name"] for tool in _body(listed)["result"]["tools"]] == ["echo"]

        accepted = await router.handle("POST", headers, _encode(notification("notifications/initialized")))
        assert accepted.status_code == 202
        assert accepted.body == b""

    asyncio.run(_run())


def test_unknown_session_is_rejected_on_post_and_get() -> None:
    async def _run() -> None:
        router = RequestRouter(make_table())
        headers = {"mcp-session-id": "does-not-exist"}

        posted = await router.handle("POST", headers, _encode(request("ping")))
        assert posted.status_code == 400
        assert _body(posted)["error"]["code"] == SESSION_NOT_FOUND

        streamed = await router.handle("GET", headers)
        assert streamed.status_code == 400

    asyncio.run(_run())


def test_delete_terminates_once_then_404() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table)
        init = await router.handle("POST", {}, _encode(INIT_MESSAGE))
        headers = {"mcp-session-id": init.headers["mcp-session-id"]}

        first = await router.handle("DELETE", headers)
        assert first.status_code == 200
        assert _body(first)["result"]["terminated"] is True

        second = await router.handle("DELETE", headers)
        assert second.status_code == 404

        after = await router.handle("POST", headers, _encode(request("ping")))
        assert after.status_code == 400
        assert len(table) == 0

    asyncio.run(_run())


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_missing_session_header_is_bad_request(method: str) -> None:
    async def _run() -> None:
        response = await RequestRouter(make_table()).handle(method, {})
        assert response.status_code == 400
        assert "mcp-session-id" in _body(response)["error"]["message"]

    asyncio.run(_run())


def test_non_initialize_post_without_session_is_bad_request() -> None:
    async def _run() -> None:
        table = make_table()
        response = await RequestRouter(table).handle("POST", {}, _encode(request("tools/list")))
        assert response.status_code == 400
        assert "missing session id" in _body(response)["error"]["message"]
        assert len(table) == 0

    asyncio.run(_run())


def test_reinitialize_on_existing_session_is_rejected() -> None:
    async def _run() -> None:
        router = RequestRouter(make_table())
        init = await router.handle("POST", {}, _encode(INIT_MESSAGE))
        headers = {"mcp-session-id": init.headers["mcp-session-id"]}

        again = await router.handle("POST", headers, _encode(INIT_MESSAGE))
        assert again.status_code == 400
        assert _body(again)["error"]["data"]["error_code"] == "invalid_request"

    asyncio.run(_run())


def test_rejected_initialize_leaves_no_session_behind() -> None:
    async def _run() -> None:
        table = make_table()
        message = dict(INIT_MESSAGE, params=["not", "an", "object"])
        response = await RequestRouter(table).handle("POST", {}, _encode(message))

        assert response.status_code == 400
        assert _body(response)["error"]["code"] == INVALID_PARAMS
        assert "mcp-session-id" not in response.headers
        assert len(table) == 0

    asyncio.run(_run())


def test_unexpected_failure_becomes_generic_internal_error() -> None:
    async def _run() -> None:
        router = RequestRouter(make_table(FailingDispatcher()))
        init = await router.handle("POST", {}, _encode(INIT_MESSAGE))
        headers = {"mcp-session-id": init.headers["mcp-session-id"]}
        call = request("tools/call", 4, {"name": "explode", "arguments": {}})

        response = await router.handle("POST", headers, _encode(call))

        assert response.status_code == 500
        body = _body(response)
        assert body["id"] == 4
        assert body["error"]["code"] == INTERNAL_ERROR
        assert "secret" not in response.body.decode()

    asyncio.run(_run())


def test_parse_error_uses_null_id() -> None:
    async def _run() -> None:
        response = await RequestRouter(make_table()).handle("POST", {}, b"{broken")
        assert response.status_code == 400
        body = _body(response)
        assert body["id"] is None
        assert body["error"]["code"] == -32700

    asyncio.run(_run())
