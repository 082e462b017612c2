"""Event log and push stream configuration."""

from __future__ import annotations

import os

from ..helpers.env import env_flag

# Oldest events are evicted once a stream holds this many
EVENT_STORE_MAX_EVENTS_PER_STREAM = int(os.getenv("EVENT_STORE_MAX_EVENTS_PER_STREAM", "1000"))

# Forget a stream's events when its session closes
EVENT_STORE_DROP_ON_CLOSE = env_flag("EVENT_STORE_DROP_ON_CLOSE", True)

# Comment frames keep idle SSE connections open through proxies
SSE_KEEPALIVE_INTERVAL_S = float(os.getenv("SSE_KEEPALIVE_INTERVAL_S", "15"))


__all__ = [
    "EVENT_STORE_MAX_EVENTS_PER_STREAM",
    "EVENT_STORE_DROP_ON_CLOSE",
    "SSE_KEEPALIVE_INTERVAL_S",
]
