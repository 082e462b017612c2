"""Process-local event store.

Events are partitioned by stream; each partition is a bounded deque so a
session that pushes forever cannot grow the log without limit. An id that
has been evicted is indistinguishable from one that never existed, which
makes replay from it a no-op.
"""

from __future__ import annotations

import logging
import itertools
from typing import Any
from collections import deque

from .base import EventMessage, EventSink, EventStore
from .ids import make_event_id, stream_id_from_event_id
from ..config.events import EVENT_STORE_MAX_EVENTS_PER_STREAM

logger = logging.getLogger(__name__)


class InMemoryEventStore(EventStore):
    """Event store backed by per-stream deques and an id index.

    Attributes:
        max_events_per_stream: Per-stream cap; 0 disables the cap.
    """

    def __init__(self, max_events_per_stream: int | None = None) -> None:
        if max_events_per_stream is None:
            max_events_per_stream = EVENT_STORE_MAX_EVENTS_PER_STREAM
        self.max_events_per_stream = max(0, int(max_events_per_stream))
        self._streams: dict[str, deque[EventMessage]] = {}
        self._index: dict[str, EventMessage] = {}  # event_id -> event
        self._sequence = itertools.count(1)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._index

    def stream_length(self, stream_id: str) -> int:
        events = self._streams.get(stream_id)
        return len(events) if events is not None else 0

    async def append(self, stream_id: str, message: Any) -> str:
        event_id = make_event_id(stream_id, next(self._sequence))
        event = EventMessage(event_id=event_id, stream_id=stream_id, message=message)
        events = self._streams.setdefault(stream_id, deque())
        events.append(event)
        self._index[event_id] = event

        cap = self.max_events_per_stream
        while cap and len(events) > cap:
            evicted = events.popleft()
            self._index.pop(evicted.event_id, None)
        return event_id

    async def replay_after(self, last_event_id: str, sink: EventSink) -> str | None:
        anchor = self._index.get(last_event_id)
        if anchor is None:
            logger.info("event store: unknown last event id=%s; nothing to replay", last_event_id)
            return None

        stream_id = stream_id_from_event_id(last_event_id) or anchor.stream_id
        # Snapshot before awaiting the sink; later appends reach the live channel.
        pending = list(self._streams.get(stream_id, ()))

        replayed = 0
        seen_anchor = False
        for event in pending:
            if not seen_anchor:
                seen_anchor = event.event_id == last_event_id
                continue
            await sink(event.event_id, event.message)
            replayed += 1

        logger.debug("event store: replayed %s events after %s", replayed, last_event_id)
        return stream_id

    async def drop_stream(self, stream_id: str) -> int:
        events = self._streams.pop(stream_id, None)
        if not events:
            return 0
        for event in events:
            self._index.pop(event.event_id, None)
        return len(events)


__all__ = ["InMemoryEventStore"]
