"""Experiment entrypoints: command-line runs of a tracing simulation."""

from beacon_tracing.experiments.cli import RunSummary, main, run_tracing

__all__ = ["RunSummary", "main", "run_tracing"]
