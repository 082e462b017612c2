"""Public telemetry API: re-exports for convenience."""

from .instruments import MetricInstruments, get_metrics

__all__ = ["MetricInstruments", "get_metrics"]
