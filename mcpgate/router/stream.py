"""SSE body generator for GET /mcp push channels.

The generator drains the channel (replay backlog first, then live events)
and writes one SSE frame per event, using the event id as the SSE ``id``
so the client can resume with ``Last-Event-ID``. While idle it emits
comment frames to keep intermediaries from timing the connection out.

When the client disconnects, the ASGI server cancels the generator; the
``finally`` block detaches the channel without closing the session, so a
later GET can resume it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from ..telemetry import get_metrics
from ..sessions import PushChannel, SessionController
from .responses import KEEPALIVE_FRAME, format_sse
from ..config.events import SSE_KEEPALIVE_INTERVAL_S

logger = logging.getLogger(__name__)


async def stream_events(
    controller: SessionController,
    channel: PushChannel,
    *,
    keepalive_s: float = SSE_KEEPALIVE_INTERVAL_S,
) -> AsyncIterator[str]:
    """Yield SSE frames for ``channel`` until it closes or the client leaves."""
    timeout = keepalive_s if keepalive_s > 0 else None
    sent = 0
    get_metrics().active_streams.add(1)
    try:
        while True:
            try:
                event = await channel.receive(timeout=timeout)
            except asyncio.TimeoutError:
                yield KEEPALIVE_FRAME
                continue
            if event is None:
                break
            sent += 1
            yield format_sse(event.message, event_id=event.event_id)
    finally:
        controller.release_channel(channel)
        get_metrics().active_streams.add(-1)
        logger.debug("session %s: push stream ended events_sent=%s", controller.session_id, sent)


__all__ = ["stream_events"]
