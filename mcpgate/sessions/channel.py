"""Live push channel bound to one long-lived GET response.

A channel carries two sources of events: the replay backlog gathered when a
client resumes with ``Last-Event-ID``, and live events delivered after the
channel was bound. The backlog is always drained first. An event that shows
up in both (appended while replay was in progress) is delivered once.
"""

from __future__ import annotations

import time
import asyncio
import logging
from collections import deque

from ..events import EventMessage

logger = logging.getLogger(__name__)


class PushChannel:
    """Queue-backed event channel consumed by a streaming response.

    Attributes:
        session_id: Session that owns the channel.
        opened_at: Monotonic timestamp when the channel was bound.
    """

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.opened_at = time.monotonic()
        self._queue: asyncio.Queue[EventMessage | None] = asyncio.Queue()
        self._backlog: deque[EventMessage] = deque()
        self._replayed: set[str] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def backlog_size(self) -> int:
        return len(self._backlog)

    def push_backlog(self, event: EventMessage) -> None:
        """Queue a replayed event ahead of any live event."""
        self._backlog.append(event)
        self._replayed.add(event.event_id)

    def deliver(self, event: EventMessage) -> bool:
        """Hand a live event to the consumer; False once the channel closed."""
        if self._closed:
            return False
        self._queue.put_nowait(event)
        return True

    def close(self) -> None:
        """Stop the channel; a blocked ``receive`` returns None."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)

    async def receive(self, timeout: float | None = None) -> EventMessage | None:
        """Return the next event, or None when the channel is closed.

        Raises:
            asyncio.TimeoutError: No event arrived within ``timeout`` seconds.
        """
        while True:
            if self._closed:
                return None
            if self._backlog:
                return self._backlog.popleft()
            item = await asyncio.wait_for(self._queue.get(), timeout=timeout)
            if item is None:
                return None
            if item.event_id in self._replayed:
                self._replayed.discard(item.event_id)
                continue
            return item


__all__ = ["PushChannel"]
