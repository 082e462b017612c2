"""Append-only event log used to replay missed push messages."""

from .memory import InMemoryEventStore
from .base import EventSink, EventStore, EventMessage
from .ids import EVENT_ID_SEPARATOR, make_event_id, stream_id_from_event_id

__all__ = [
    "EVENT_ID_SEPARATOR",
    "EventMessage",
    "EventSink",
    "EventStore",
    "InMemoryEventStore",
    "make_event_id",
    "stream_id_from_event_id",
]
