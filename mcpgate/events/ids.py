"""Event id format.

Event ids embed the owning stream so a bare ``Last-Event-ID`` is enough to
find where to resume:

    <stream_id>_<sequence>

``sequence`` is zero-padded so ids of one stream sort in append order.
Stream ids must not contain the separator; session ids are uuid hex.
"""

from __future__ import annotations

EVENT_ID_SEPARATOR = "_"
SEQUENCE_WIDTH = 12


def make_event_id(stream_id: str, sequence: int) -> str:
    """Compose an event id from its stream and sequence number."""
    return f"{stream_id}{EVENT_ID_SEPARATOR}{sequence:0{SEQUENCE_WIDTH}d}"


def stream_id_from_event_id(event_id: str) -> str | None:
    """Recover the stream id embedded in ``event_id`` (None if malformed)."""
    stream_id, sep, sequence = event_id.rpartition(EVENT_ID_SEPARATOR)
    if not sep or not stream_id or not sequence.isdigit():
        return None
    return stream_id


__all__ = [
    "EVENT_ID_SEPARATOR",
    "make_event_id",
    "stream_id_from_event_id",
]
