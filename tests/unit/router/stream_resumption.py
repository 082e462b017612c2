"""End-to-end tests for push streams and Last-Event-ID resumption through the router."""

from __future__ import annotations

import json
import asyncio
from datetime import datetime, timezone
from mcpgate.router import RequestRouter
from mcpgate.router.responses import KEEPALIVE_FRAME
from tests.helpers.fakes import INIT_MESSAGE, make_table


def _data_of(frame: str) -> dict:
    lines = [line[len("data: "):] for line in frame.splitlines() if line.startswith("data: ")]
    return json.loads("".join(lines))


def _id_of(frame: str) -> str:
    return next(line[len("id: "):] for line in frame.splitlines() if line.startswith("id: "))


async def _initiate(router: RequestRouter) -> str:
    response = await router.handle("POST", {}, json.dumps(INIT_MESSAGE).encode())
    assert response.status_code == 200
    return response.headers["mcp-session-id"]


def test_stream_delivers_events_and_resumes_after_last_id() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=5)
        session_id = await _initiate(router)
        controller = table.get(session_id)

        response = await router.handle("GET", {"mcp-session-id": session_id})
        assert response.status_code == 200
        assert response.media_type == "text/event-stream"
        assert response.headers["mcp-session-id"] == session_id

        body = response.body_iterator
        for n in range(3):
            await controller.send({"jsonrpc": "2.0", "method": "notifications/progress", "params": {"n": n}})
        frames = [await body.__anext__() for _ in range(3)]
        await body.aclose()

        assert [_data_of(frame)["params"]["n"] for frame in frames] == [0, 1, 2]
        assert not controller.has_channel
        assert controller.is_active

        await controller.send({"jsonrpc": "2.0", "method": "notifications/progress", "params": {"n": 3}})
        resumed = await router.handle(
            "GET",
            {"mcp-session-id": session_id, "last-event-id": _id_of(frames[0])},
        )
        body = resumed.body_iterator
        replayed = [await body.__anext__() for _ in range(3)]
        await body.aclose()

        assert [_data_of(frame)["params"]["n"] for frame in replayed] == [1, 2, 3]
        assert [_id_of(frame) for frame in replayed[:2]] == [_id_of(frame) for frame in frames[1:]]

    asyncio.run(_run())


def test_stream_emits_keepalive_when_idle() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=0.01)
        session_id = await _initiate(router)

        response = await router.handle("GET", {"mcp-session-id": session_id})
        body = response.body_iterator
        assert await body.__anext__() == KEEPALIVE_FRAME
        await body.aclose()

    asyncio.run(_run())


def test_stream_ends_when_session_is_deleted() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=5)
        session_id = await _initiate(router)

        response = await router.handle("GET", {"mcp-session-id": session_id})
        async def _drain() -> list[str]:
            return [frame async for frame in response.body_iterator]

        pending = asyncio.create_task(_drain())
        await asyncio.sleep(0.01)

        deleted = await router.handle("DELETE", {"mcp-session-id": session_id})
        assert deleted.status_code == 200
        assert await asyncio.wait_for(pending, timeout=1) == []

    asyncio.run(_run())


def test_resume_with_foreign_event_id_replays_nothing() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=0.01)
        victim_id = await _initiate(router)
        attacker_id = await _initiate(router)
        foreign = await table.get(victim_id).send({"jsonrpc": "2.0", "method": "secret"})
        await table.get(victim_id).send({"jsonrpc": "2.0", "method": "secret"})

        response = await router.handle(
            "GET",
            {"mcp-session-id": attacker_id, "last-event-id": foreign},
        )
        body = response.body_iterator
        assert await body.__anext__() == KEEPALIVE_FRAME
        await body.aclose()

    asyncio.run(_run())


def test_reconnect_after_latest_event_replays_nothing_then_goes_live() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=0.05)
        session_id = await _initiate(router)
        controller = table.get(session_id)

        first = await router.handle("GET", {"mcp-session-id": session_id})
        ev1 = await controller.send({"jsonrpc": "2.0", "method": "ev1"})
        frame = await first.body_iterator.__anext__()
        assert _id_of(frame) == ev1
        await first.body_iterator.aclose()

        second = await router.handle("GET", {"mcp-session-id": session_id, "last-event-id": ev1})
        body = second.body_iterator
        assert await body.__anext__() == KEEPALIVE_FRAME

        ev2 = await controller.send({"jsonrpc": "2.0", "method": "ev2"})
        live = await body.__anext__()
        await body.aclose()

        assert _id_of(live) == ev2
        assert _data_of(live)["method"] == "ev2"

    asyncio.run(_run())


def test_concurrent_initiations_get_distinct_sessions() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table)
        responses = await asyncio.gather(*(_initiate(router) for _ in range(25)))
        assert len(set(responses)) == 25
        assert table.active_count() == 25

    asyncio.run(_run())


def test_resume_over_event_with_datetime_payload_is_repeatable() -> None:
    async def _run() -> None:
        table = make_table()
        router = RequestRouter(table, keepalive_s=5)
        session_id = await _initiate(router)
        controller = table.get(session_id)
        first = await controller.send({"jsonrpc": "2.0", "method": "a"})
        at = datetime(2026, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
        await controller.send({"jsonrpc": "2.0", "method": "b", "params": {"at": at}})

        for _ in range(2):
            response = await router.handle("GET", {"mcp-session-id": session_id, "last-event-id": first})
            frame = await response.body_iterator.__anext__()
            await response.body_iterator.aclose()
            assert _data_of(frame)["params"]["at"] == "2026-05-06T07:08:09+00:00"

        assert controller.is_active

    asyncio.run(_run())
