"""Unit tests for the per-session lifecycle controller."""

from __future__ import annotations

import asyncio
from typing import Any
from datetime import datetime, timezone

import pytest

from mcpgate.dispatch import Dispatcher
from mcpgate.sessions import SessionPhase
from mcpgate.errors import MalformedRequestError, SessionNotFoundError
from tests.helpers.fakes import INIT_MESSAGE, request, notification, make_table, make_active_session


class _BlockingDispatcher(Dispatcher):
    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    def list_tools(self) -> list[dict[str, Any]]:
        return []

    async def execute(self, name: str, arguments: dict[str, Any]) -> Any:
        self.started.set()
        await self.release.wait()
        return {"content": [{"type": "text", "text": "done"}]}


def test_initialize_moves_to_active_and_records_version() -> None:
    async def _run() -> None:
        table = make_table()
        controller = table.create()
        assert controller.phase is SessionPhase.UNINITIALIZED

        response = await controller.initialize(INIT_MESSAGE)

        assert response["id"] == 1
        assert response["result"]["protocolVersion"] == "2025-03-26"
        assert controller.phase is SessionPhase.ACTIVE
        assert controller.protocol_version == "2025-03-26"

    asyncio.run(_run())


def test_second_initialize_is_rejected() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        with pytest.raises(MalformedRequestError):
            await controller.initialize(INIT_MESSAGE)
        with pytest.raises(MalformedRequestError):
            await controller.handle_message(INIT_MESSAGE)

    asyncio.run(_run())


def test_handle_message_requires_active_session() -> None:
    async def _run() -> None:
        controller = make_table().create()
        with pytest.raises(SessionNotFoundError):
            await controller.handle_message(request("ping"))

    asyncio.run(_run())


def test_handle_message_returns_none_for_notifications() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        assert await controller.handle_message(notification("notifications/initialized")) is None
        response = await controller.handle_message(request("ping", 7))
        assert response == {"jsonrpc": "2.0", "result": {}, "id": 7}

    asyncio.run(_run())


def test_close_is_idempotent_and_sticky() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        assert await controller.close() is True
        assert await controller.close() is False
        assert controller.phase is SessionPhase.CLOSED
        with pytest.raises(SessionNotFoundError):
            await controller.handle_message(request("ping"))
        with pytest.raises(SessionNotFoundError):
            await controller.open_stream()
        assert await controller.send({"jsonrpc": "2.0", "method": "late"}) is None

    asyncio.run(_run())


def test_close_during_inflight_request_stays_closed() -> None:
    async def _run() -> None:
        dispatcher = _BlockingDispatcher()
        table = make_table(dispatcher)
        controller = await make_active_session(table)
        call = request("tools/call", 5, {"name": "slow", "arguments": {}})

        task = asyncio.create_task(controller.handle_message(call))
        await dispatcher.started.wait()
        assert await table.terminate(controller.session_id) is True
        dispatcher.release.set()
        response = await task

        assert response["result"]["content"][0]["text"] == "done"
        assert controller.phase is SessionPhase.CLOSED
        assert table.get(controller.session_id) is None

    asyncio.run(_run())


def test_send_delivers_to_bound_channel() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        channel = await controller.open_stream()
        event_id = await controller.send({"n": 1})

        event = await channel.receive(timeout=1)
        assert event.event_id == event_id
        assert event.message == {"n": 1}

    asyncio.run(_run())


def test_open_stream_replays_events_after_last_id() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        ids = [await controller.send({"n": n}) for n in range(3)]

        channel = await controller.open_stream(ids[0])
        await controller.send({"n": 3})

        received = [await channel.receive(timeout=1) for _ in range(3)]
        assert [event.message["n"] for event in received] == [1, 2, 3]

    asyncio.run(_run())


def test_open_stream_ignores_last_id_from_another_session() -> None:
    async def _run() -> None:
        table = make_table()
        victim = await make_active_session(table)
        attacker = await make_active_session(table)
        foreign_id = await victim.send({"secret": True})
        await victim.send({"secret": True})

        channel = await attacker.open_stream(foreign_id)

        assert channel.backlog_size == 0
        with pytest.raises(asyncio.TimeoutError):
            await channel.receive(timeout=0.01)

    asyncio.run(_run())


def test_reconnect_rebinds_and_closes_previous_channel() -> None:
    async def _run() -> None:
        controller = await make_active_session(make_table())
        first = await controller.open_stream()
        second = await controller.open_stream()

        assert first.closed
        assert await first.receive(timeout=1) is None
        await controller.send({"n": 1})
        assert (await second.receive(timeout=1)).message == {"n": 1}

        controller.release_channel(first)
        assert controller.has_channel

        controller.release_channel(second)
        assert not controller.has_channel
        assert controller.is_active

    asyncio.run(_run())


def test_close_ends_open_channel_and_drops_events() -> None:
    async def _run() -> None:
        table = make_table()
        controller = await make_active_session(table)
        channel = await controller.open_stream()
        await controller.send({"n": 1})

        await controller.close("test")

        assert channel.closed
        assert table.event_store.stream_length(controller.stream_id) == 0

    asyncio.run(_run())


def test_close_keeps_events_when_drop_disabled() -> None:
    async def _run() -> None:
        table = make_table(drop_events_on_close=False)
        controller = await make_active_session(table)
        await controller.send({"n": 1})

        await controller.close("test")

        assert table.event_store.stream_length(controller.stream_id) == 1

    asyncio.run(_run())


def test_send_stores_messages_in_json_form() -> None:
    async def _run() -> None:
        table = make_table()
        controller = await make_active_session(table)
        at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        first = await controller.send({"jsonrpc": "2.0", "method": "a"})
        await controller.send({"jsonrpc": "2.0", "method": "b", "params": {"at": at}})

        channel = await controller.open_stream(first)
        event = await channel.receive(timeout=1)

        assert event.message == {"jsonrpc": "2.0", "method": "b", "params": {"at": "2026-01-02T03:04:05+00:00"}}

    asyncio.run(_run())


def test_send_rejects_unencodable_message_without_recording_it() -> None:
    async def _run() -> None:
        table = make_table()
        controller = await make_active_session(table)
        with pytest.raises(TypeError):
            await controller.send({"jsonrpc": "2.0", "method": "bad", "params": {"obj": object()}})
        assert table.event_store.stream_length(controller.stream_id) == 0
        assert controller.is_active

    asyncio.run(_run())
