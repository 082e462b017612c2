"""Per-session lifecycle controller.

A controller owns one client conversation from the ``initialize`` request
until the session closes:

1. Lifecycle:
   - UNINITIALIZED until the initiation message is processed
   - ACTIVE for every later request/response or push cycle
   - CLOSED (terminal) on DELETE, idle eviction, or shutdown

2. Inbound messages:
   - Forwarded to the MCP method handler, which reaches the dispatcher

3. Outbound messages:
   - Every server-initiated message is appended to the event store first,
     then handed to the live push channel if a GET stream is attached
   - A reconnecting GET rebinds the channel; the previous one is closed
   - ``Last-Event-ID`` replays missed events of this session's stream only

Closing is idempotent and sticky: a request that completes after a
concurrent close never moves the session back to ACTIVE.
"""

from __future__ import annotations

import time
import logging
from typing import Any
from collections.abc import Callable
from datetime import datetime, timezone

import orjson

from .phase import SessionPhase
from .channel import PushChannel
from ..protocol import MCPHandler
from ..telemetry import get_metrics
from ..jsonrpc import is_initialize_request
from ..config.events import EVENT_STORE_DROP_ON_CLOSE
from ..events import EventMessage, EventStore, stream_id_from_event_id
from ..errors import MalformedRequestError, SessionNotFoundError

logger = logging.getLogger(__name__)

CloseCallback = Callable[[str], Any]


class SessionController:
    """State machine for a single session and its push stream.

    Attributes:
        session_id: Opaque id surfaced in the ``mcp-session-id`` header.
        stream_id: Id of this session's stream in the event store.
        created_at: UTC wall-clock creation time.
        last_access: Monotonic timestamp of the last request or stream event.
        protocol_version: Version negotiated during initialization.
    """

    def __init__(
        self,
        session_id: str,
        *,
        protocol: MCPHandler,
        event_store: EventStore,
        on_close: CloseCallback | None = None,
        drop_events_on_close: bool = EVENT_STORE_DROP_ON_CLOSE,
    ) -> None:
        self.session_id = session_id
        self.stream_id = session_id
        self.created_at = datetime.now(timezone.utc)
        self.last_access = time.monotonic()
        self.protocol_version: str | None = None
        self._protocol = protocol
        self._store = event_store
        self._on_close = on_close
        self._drop_events_on_close = drop_events_on_close
        self._phase = SessionPhase.UNINITIALIZED
        self._channel: PushChannel | None = None

    # ============================================================================
    # State
    # ============================================================================
    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase is SessionPhase.ACTIVE

    @property
    def closed(self) -> bool:
        return self._phase is SessionPhase.CLOSED

    @property
    def has_channel(self) -> bool:
        return self._channel is not None and not self._channel.closed

    def touch(self) -> None:
        """Record recent activity (resets the idle countdown)."""
        self.last_access = time.monotonic()

    def idle_seconds(self, now: float | None = None) -> float:
        current = time.monotonic() if now is None else now
        return max(0.0, current - self.last_access)

    def _ensure_active(self) -> None:
        # Closed and not-yet-initialized sessions look unknown to clients
        if not self.is_active:
            raise SessionNotFoundError(self.session_id)

    # ============================================================================
    # Inbound
    # ============================================================================
    async def initialize(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Process the initiation message and move to ACTIVE."""
        if self._phase is not SessionPhase.UNINITIALIZED:
            raise MalformedRequestError("Bad Request: session already initialized")

        response = await self._protocol.handle(message)
        if self.closed:
            return response

        result = (response or {}).get("result")
        if not isinstance(result, dict):
            logger.info("session %s: initialize rejected", self.session_id)
            return response
        self.protocol_version = result.get("protocolVersion")
        self._phase = SessionPhase.ACTIVE
        self.touch()
        metrics = get_metrics()
        metrics.sessions_created_total.add(1)
        metrics.active_sessions.add(1)
        logger.info(
            "session %s: initialized protocol=%s",
            self.session_id,
            self.protocol_version,
        )
        return response

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Run one request/response cycle; None for notifications."""
        self._ensure_active()
        if is_initialize_request(message):
            raise MalformedRequestError("Bad Request: session already initialized")

        self.touch()
        response = await self._protocol.handle(message)
        if not self.closed:
            self.touch()
        return response

    # ============================================================================
    # Outbound
    # ============================================================================
    async def open_stream(self, last_event_id: str | None = None) -> PushChannel:
        """Bind a new push channel, replaying events after ``last_event_id``.

        The channel is bound before replay starts so nothing appended in the
        meantime is lost; duplicates are filtered by the channel.
        """
        self._ensure_active()
        channel = PushChannel(self.session_id)
        previous, self._channel = self._channel, channel
        if previous is not None:
            previous.close()
            logger.info("session %s: push channel rebound", self.session_id)

        if last_event_id:
            await self._replay_into(channel, last_event_id)

        self.touch()
        return channel

    async def _replay_into(self, channel: PushChannel, last_event_id: str) -> None:
        if stream_id_from_event_id(last_event_id) != self.stream_id:
            logger.warning(
                "session %s: ignoring last event id %s from another stream",
                self.session_id,
                last_event_id,
            )
            return

        async def sink(event_id: str, message: Any) -> None:
            channel.push_backlog(EventMessage(event_id=event_id, stream_id=self.stream_id, message=message))

        await self._store.replay_after(last_event_id, sink)
        get_metrics().events_replayed_total.add(channel.backlog_size)
        logger.info(
            "session %s: resumed after %s replayed=%s",
            self.session_id,
            last_event_id,
            channel.backlog_size,
        )

    def release_channel(self, channel: PushChannel) -> None:
        """Detach ``channel`` when its HTTP response ends (disconnect or close)."""
        channel.close()
        if self._channel is channel:
            self._channel = None
            if not self.closed:
                self.touch()
                logger.info("session %s: push channel disconnected", self.session_id)

    async def send(self, message: Any) -> str | None:
        """Record a server-to-client message and push it if a stream is open.

        Returns:
            The new event id, or None if the session is already closed.

        Raises:
            TypeError: ``message`` cannot be encoded as JSON. Nothing is
                recorded in that case.
        """
        if self.closed:
            logger.debug("session %s: dropping message for closed session", self.session_id)
            return None

        # Stored in its JSON form so every replay encodes it the same way
        message = orjson.loads(orjson.dumps(message))
        event_id = await self._store.append(self.stream_id, message)
        get_metrics().events_appended_total.add(1)
        channel = self._channel
        if channel is not None and not self.closed:
            channel.deliver(EventMessage(event_id=event_id, stream_id=self.stream_id, message=message))
        return event_id

    # ============================================================================
    # Teardown
    # ============================================================================
    async def close(self, reason: str = "terminated") -> bool:
        """Move to CLOSED; return False if the session was already closed."""
        if self._phase is SessionPhase.CLOSED:
            return False
        was_active = self._phase is SessionPhase.ACTIVE
        self._phase = SessionPhase.CLOSED
        metrics = get_metrics()
        metrics.sessions_closed_total.add(1, {"reason": reason})
        if was_active:
            metrics.active_sessions.add(-1)

        channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()

        if self._on_close is not None:
            try:
                self._on_close(self.session_id)
            except Exception:
                logger.exception("session %s: close callback failed", self.session_id)

        dropped = 0
        if self._drop_events_on_close:
            dropped = await self._store.drop_stream(self.stream_id)
        logger.info(
            "session %s: closed reason=%s dropped_events=%s",
            self.session_id,
            reason,
            dropped,
        )
        return True


__all__ = ["SessionController"]
