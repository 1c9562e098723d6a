"""Tracing statistics collected through the round hooks."""

from beacon_tracing.metrics.tracing import (
    RoundDistance,
    TracingStatsCollector,
    observation_intervals,
    summarize,
)

__all__ = [
    "RoundDistance",
    "TracingStatsCollector",
    "observation_intervals",
    "summarize",
]
