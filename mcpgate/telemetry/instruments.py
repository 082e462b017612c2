"""MetricInstruments registry: typed accessors for the transport's OTel instruments."""

from __future__ import annotations

from opentelemetry import metrics
from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    METRIC_ACTIVE_STREAMS,
    METRIC_ACTIVE_SESSIONS,
    METRIC_EVENTS_APPENDED_TOTAL,
    METRIC_EVENTS_REPLAYED_TOTAL,
    METRIC_GATE_REJECTIONS_TOTAL,
    METRIC_SESSIONS_CLOSED_TOTAL,
    METRIC_SESSIONS_CREATED_TOTAL,
)


def _counter(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Counter:
    name, unit, desc = spec
    return meter.create_counter(name, unit=unit, description=desc)


def _updown(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.UpDownCounter:
    name, unit, desc = spec
    return meter.create_up_down_counter(name, unit=unit, description=desc)


class MetricInstruments:
    """Holds all OTel metric instruments created from config specs."""

    __slots__ = (
        "sessions_created_total",
        "sessions_closed_total",
        "gate_rejections_total",
        "events_appended_total",
        "events_replayed_total",
        "active_sessions",
        "active_streams",
    )

    def __init__(self, meter: metrics.Meter) -> None:
        # Counters
        self.sessions_created_total = _counter(meter, METRIC_SESSIONS_CREATED_TOTAL)
        self.sessions_closed_total = _counter(meter, METRIC_SESSIONS_CLOSED_TOTAL)
        self.gate_rejections_total = _counter(meter, METRIC_GATE_REJECTIONS_TOTAL)
        self.events_appended_total = _counter(meter, METRIC_EVENTS_APPENDED_TOTAL)
        self.events_replayed_total = _counter(meter, METRIC_EVENTS_REPLAYED_TOTAL)
        # UpDown counters
        self.active_sessions = _updown(meter, METRIC_ACTIVE_SESSIONS)
        self.active_streams = _updown(meter, METRIC_ACTIVE_STREAMS)


_metrics: MetricInstruments | None = None


def get_metrics() -> MetricInstruments:
    """Return the global MetricInstruments (no-op meter if no SDK is installed)."""
    global _metrics  # noqa: PLW0603
    if _metrics is None:
        _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    return _metrics


__all__ = ["MetricInstruments", "get_metrics"]
