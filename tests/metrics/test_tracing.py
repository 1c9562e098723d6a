"""Tests for beacon_tracing.metrics.tracing module."""

from __future__ import annotations

import math

import numpy as np

from beacon_tracing.config.types import MovementStrategyType, SimulationConfig
from beacon_tracing.domain.location import Location
from beacon_tracing.metrics.tracing import (
    TracingStatsCollector,
    observation_intervals,
    summarize,
)
from beacon_tracing.simulation.builder import (
    AgentSnapshot,
    SimulationSnapshot,
    build_simulation,
    restore_simulation,
)


def traced_collector(max_rounds: int = 2) -> TracingStatsCollector:
    config = SimulationConfig(
        rows=2,
        cols=2,
        beacons=2,
        observers=1,
        max_rounds=max_rounds,
        radius=1.0,
        awakeness_cycle=2,
        awakeness_duration=1,
    )
    snapshot = SimulationSnapshot(
        current_round=0,
        beacons=(
            AgentSnapshot(0, Location(1, 0), MovementStrategyType.UP),
            AgentSnapshot(1, Location(1, 1), MovementStrategyType.STATIONARY),
        ),
        observers=(
            AgentSnapshot(0, Location(0, 0), MovementStrategyType.STATIONARY, awakeness_offset=0),
        ),
    )
    sim = restore_simulation(config, snapshot)
    collector = TracingStatsCollector(sim)
    sim.add_hooks(collector)
    sim.run()
    return collector


class TestSummarize:
    def test_empty_is_nan(self) -> None:
        stats = summarize([])
        assert all(math.isnan(stats[name]) for name in ("min", "max", "mean"))

    def test_ignores_nan_entries(self) -> None:
        assert summarize([float("nan"), 1.0, 3.0]) == {"min": 1.0, "max": 3.0, "mean": 2.0}

    def test_all_nan_is_nan(self) -> None:
        assert math.isnan(summarize([float("nan")])["mean"])


class TestObservationIntervals:
    def test_first_gap_measured_from_round_zero(self) -> None:
        np.testing.assert_array_equal(observation_intervals([2, 3, 7]), [2.0, 1.0, 4.0])

    def test_never_observed_is_empty(self) -> None:
        assert observation_intervals([]).size == 0

    def test_first_gap_measured_from_origin(self) -> None:
        np.testing.assert_array_equal(observation_intervals([5, 7], origin=4), [1.0, 2.0])


class TestTracingStatsCollector:
    def test_round_distances(self) -> None:
        collector = traced_collector()
        first, second = collector.round_distances
        assert first.round == 1
        assert first.estimated_beacons == 0
        assert math.isnan(first.mean_distance)
        assert second.round == 2
        assert second.estimated_beacons == 1
        assert second.mean_distance == 0.0

    def test_distance_stats_skip_rounds_without_estimates(self) -> None:
        collector = traced_collector()
        assert collector.distance_stats() == {"min": 0.0, "max": 0.0, "mean": 0.0}

    def test_observed_rounds_only_include_heard_beacons(self) -> None:
        collector = traced_collector(max_rounds=4)
        assert collector.observed_rounds(0) == (2, 4)
        # Beacon 1 sits at Manhattan distance 2 from the observer.
        assert collector.observed_rounds(1) == ()

    def test_observed_stats(self) -> None:
        collector = traced_collector(max_rounds=4)
        stats = collector.observed_stats()
        assert stats[0] == {"min": 2.0, "max": 2.0, "mean": 2.0}
        assert math.isnan(stats[1]["mean"])

    def test_stale_estimate_still_counts_for_distance(self) -> None:
        collector = traced_collector(max_rounds=3)
        assert [rd.estimated_beacons for rd in collector.round_distances] == [0, 1, 1]

    def test_completed_flag(self) -> None:
        sim = build_simulation(SimulationConfig(rows=3, cols=3, beacons=1, observers=1, max_rounds=1))
        collector = TracingStatsCollector(sim)
        sim.add_hooks(collector)
        assert not collector.completed
        sim.run()
        assert collector.completed
        assert len(collector.round_distances) == 1

    def test_restored_simulation_intervals_start_at_resume_round(self) -> None:
        config = SimulationConfig(
            rows=2,
            cols=2,
            beacons=1,
            observers=1,
            max_rounds=6,
            radius=0.0,
            awakeness_cycle=1,
            awakeness_duration=1,
        )
        snapshot = SimulationSnapshot(
            current_round=4,
            beacons=(AgentSnapshot(0, Location(1, 1), MovementStrategyType.STATIONARY),),
            observers=(
                AgentSnapshot(0, Location(1, 1), MovementStrategyType.STATIONARY, awakeness_offset=0),
            ),
        )
        sim = restore_simulation(config, snapshot)
        collector = TracingStatsCollector(sim)
        sim.add_hooks(collector)
        sim.run()
        assert collector.observed_rounds(0) == (4, 5, 6)
        assert collector.observed_stats()[0] == {"min": 1.0, "max": 1.0, "mean": 1.0}
