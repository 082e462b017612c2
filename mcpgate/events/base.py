"""Abstract event store for stream resumability.

Every server-to-client message is appended to the store before it is
written to a push channel. When a client reconnects with the id of the last
event it saw, the store replays everything that followed on that stream.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from collections.abc import Awaitable, Callable

# sink(event_id, message)
EventSink = Callable[[str, Any], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class EventMessage:
    """A stored server-to-client message."""

    event_id: str
    stream_id: str
    message: Any


class EventStore(ABC):
    """Interface for per-stream append-only message logs."""

    @abstractmethod
    async def append(self, stream_id: str, message: Any) -> str:
        """Record ``message`` on ``stream_id`` and return its new event id."""

    @abstractmethod
    async def replay_after(self, last_event_id: str, sink: EventSink) -> str | None:
        """Replay events of the same stream that followed ``last_event_id``.

        Events are passed to ``sink`` in append order. Unknown ids are a
        no-op.

        Returns:
            The stream id recovered from ``last_event_id``, or None when the
            id is unknown to the store.
        """

    @abstractmethod
    async def drop_stream(self, stream_id: str) -> int:
        """Forget every event of ``stream_id``; return how many were removed."""


__all__ = ["EventMessage", "EventSink", "EventStore"]
