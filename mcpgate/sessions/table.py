"""Process-wide table of live sessions.

The table is the only owner of session controllers. Routers and handlers
hold a controller just for the duration of one request and must look it up
again on the next one.

Lookups never create, and only sessions that finished initialization are
visible: a session that is still processing its ``initialize`` request, or
one that has closed, is reported as absent.
"""

from __future__ import annotations

import uuid
import time
import logging
from typing import Any
from collections.abc import Callable, Iterator

from ..protocol import MCPHandler
from .controller import SessionController
from ..events import EventStore, InMemoryEventStore
from ..config.sessions import SESSION_IDLE_TTL_SECONDS
from ..config.events import EVENT_STORE_DROP_ON_CLOSE

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    """Return a fresh 128-bit random session id as hex."""
    return uuid.uuid4().hex


class SessionTable:
    """Creates, finds, and tears down session controllers.

    Thread Safety:
        All operations are designed for single-threaded async code.
        The table is not thread-safe for concurrent access.
    """

    def __init__(
        self,
        protocol: MCPHandler,
        event_store: EventStore | None = None,
        *,
        idle_ttl_seconds: float = SESSION_IDLE_TTL_SECONDS,
        drop_events_on_close: bool = EVENT_STORE_DROP_ON_CLOSE,
        id_factory: Callable[[], str] = new_session_id,
    ) -> None:
        self.protocol = protocol
        self.event_store = event_store if event_store is not None else InMemoryEventStore()
        self.idle_ttl_seconds = float(idle_ttl_seconds)
        self._drop_events_on_close = drop_events_on_close
        self._id_factory = id_factory
        self._sessions: dict[str, SessionController] = {}  # session_id -> controller

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[SessionController]:
        return iter(list(self._sessions.values()))

    def active_count(self) -> int:
        return sum(1 for controller in self._sessions.values() if controller.is_active)

    # ============================================================================
    # Core operations
    # ============================================================================
    def create(self) -> SessionController:
        """Register a new, not yet initialized, session."""
        session_id = self._id_factory()
        if session_id in self._sessions:
            raise RuntimeError(f"session id collision: {session_id}")

        controller = SessionController(
            session_id,
            protocol=self.protocol,
            event_store=self.event_store,
            on_close=self.remove,
            drop_events_on_close=self._drop_events_on_close,
        )
        self._sessions[session_id] = controller
        logger.debug("session table: created %s (%s entries)", session_id, len(self._sessions))
        return controller

    def get(self, session_id: str) -> SessionController | None:
        """Return the ACTIVE controller for ``session_id``, or None."""
        controller = self._sessions.get(session_id)
        if controller is None or not controller.is_active:
            return None
        return controller

    def remove(self, session_id: str) -> bool:
        """Drop the entry for ``session_id``; absent ids are a no-op."""
        removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.debug("session table: removed %s (%s entries)", session_id, len(self._sessions))
        return removed

    async def terminate(self, session_id: str) -> bool:
        """Close and remove a live session; False if it was not present."""
        controller = self.get(session_id)
        if controller is None:
            return False
        await controller.close("client terminated")
        self.remove(session_id)
        return True

    async def discard(self, controller: SessionController, reason: str) -> None:
        """Tear down a session whose initialization did not complete."""
        await controller.close(reason)
        self.remove(controller.session_id)

    # ============================================================================
    # Fan-out and maintenance
    # ============================================================================
    async def broadcast(self, message: Any) -> int:
        """Push ``message`` to every active session; return how many got it."""
        delivered = 0
        for controller in self:
            if not controller.is_active:
                continue
            if await controller.send(message) is not None:
                delivered += 1
        return delivered

    async def evict_idle(self, now: float | None = None) -> list[str]:
        """Close sessions idle past the TTL that have no open push channel."""
        if self.idle_ttl_seconds <= 0:
            return []
        current = time.monotonic() if now is None else now
        evicted: list[str] = []
        for controller in self:
            if controller.has_channel:
                continue
            if controller.idle_seconds(current) < self.idle_ttl_seconds:
                continue
            await controller.close("idle timeout")
            self.remove(controller.session_id)
            evicted.append(controller.session_id)
        if evicted:
            logger.info("session table: evicted %s idle sessions", len(evicted))
        return evicted

    async def close_all(self, reason: str = "server shutdown") -> int:
        """Close every session; used on shutdown."""
        closed = 0
        for controller in self:
            if await controller.close(reason):
                closed += 1
            self.remove(controller.session_id)
        return closed


__all__ = ["SessionTable", "new_session_id"]
