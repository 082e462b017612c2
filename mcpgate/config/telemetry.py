"""Telemetry configuration.

Instruments are created from the OpenTelemetry API meter. Without an SDK
configured by the hosting process the meter is a no-op, so recording is
always safe.

Each METRIC_* value is a ``(name, unit, description)`` tuple.
"""

import os


OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "mcpgate")

# Counters
METRIC_SESSIONS_CREATED_TOTAL = ("mcpgate.sessions_created_total", "{session}", "Sessions that completed initialization")
METRIC_SESSIONS_CLOSED_TOTAL = ("mcpgate.sessions_closed_total", "{session}", "Closed sessions by reason")
METRIC_GATE_REJECTIONS_TOTAL = ("mcpgate.gate_rejections_total", "{request}", "Requests rejected by the security gate")
METRIC_EVENTS_APPENDED_TOTAL = ("mcpgate.events_appended_total", "{event}", "Server-push events recorded")
METRIC_EVENTS_REPLAYED_TOTAL = ("mcpgate.events_replayed_total", "{event}", "Events replayed on stream resumption")
# UpDown counters
METRIC_ACTIVE_SESSIONS = ("mcpgate.active_sessions", "{session}", "Currently active sessions")
METRIC_ACTIVE_STREAMS = ("mcpgate.active_streams", "{stream}", "Currently open push channels")


__all__ = [
    "OTEL_SERVICE_NAME",
    "METRIC_SESSIONS_CREATED_TOTAL",
    "METRIC_SESSIONS_CLOSED_TOTAL",
    "METRIC_GATE_REJECTIONS_TOTAL",
    "METRIC_EVENTS_APPENDED_TOTAL",
    "METRIC_EVENTS_REPLAYED_TOTAL",
    "METRIC_ACTIVE_SESSIONS",
    "METRIC_ACTIVE_STREAMS",
]
