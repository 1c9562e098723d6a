"""Tracing statistics: how far estimates drift from reality and how often beacons are heard.

Two families of statistics are gathered through the round hooks:

- distance: per round, the mean Manhattan distance between each beacon's real
  location and its current estimate (beacons never heard are skipped), then
  min/max/mean of those per-round means over the whole run;
- observed intervals: per beacon, the gaps between consecutive rounds on which
  the resolver heard it, with the first gap measured from the round before
  the first round this collector sees (round 0 for a fresh simulation).

Aggregates are NaN when there is nothing to aggregate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from beacon_tracing.domain.location import manhattan_distance
from beacon_tracing.simulation.hooks import SimulationHooks

if TYPE_CHECKING:
    from beacon_tracing.simulation.engine import TracingSimulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundDistance:
    """Mean real-vs-estimated distance for one round."""

    round: int
    mean_distance: float
    estimated_beacons: int


def summarize(values: list[float] | np.ndarray) -> dict[str, float]:
    """Return min/max/mean of the finite entries, NaN for each when none exist."""
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return {"min": float("nan"), "max": float("nan"), "mean": float("nan")}
    return {"min": float(arr.min()), "max": float(arr.max()), "mean": float(arr.mean())}


def observation_intervals(rounds: list[int], origin: int = 0) -> np.ndarray:
    """Gaps between consecutive observation rounds, the first measured from ``origin``."""
    if not rounds:
        return np.empty(0, dtype=float)
    return np.diff(np.asarray([origin, *rounds], dtype=float))


class TracingStatsCollector(SimulationHooks):
    """Round-hook collaborator accumulating tracing statistics for one simulation."""

    def __init__(self, simulation: TracingSimulation) -> None:
        self._simulation = simulation
        self._round_distances: list[RoundDistance] = []
        self._observed_rounds: dict[int, list[int]] = {
            beacon.agent_id: [] for beacon in simulation.beacons
        }
        # A restored simulation resumes at current_round; its gaps start one round earlier.
        self._origin = max(simulation.current_round - 1, 0)
        self._completed = False

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def round_distances(self) -> tuple[RoundDistance, ...]:
        return tuple(self._round_distances)

    def observed_rounds(self, beacon_id: int) -> tuple[int, ...]:
        return tuple(self._observed_rounds[beacon_id])

    def on_round_stats_ready(self, round_index: int) -> None:
        resolver = self._simulation.resolver
        distances: list[int] = []
        for beacon in self._simulation.beacons:
            estimate = resolver.estimated_location(beacon)
            if estimate is not None:
                distances.append(manhattan_distance(beacon.location, estimate))
        mean_distance = float(np.mean(distances)) if distances else float("nan")
        self._round_distances.append(
            RoundDistance(round=round_index, mean_distance=mean_distance, estimated_beacons=len(distances))
        )
        for transmission in resolver.heard_last_round:
            self._observed_rounds[transmission.advertisement].append(round_index)

    def on_simulation_complete(self) -> None:
        self._completed = True
        stats = self.distance_stats()
        logger.info(
            "simulation %s complete: %d rounds, mean distance %.3f",
            self._simulation.simulation_id,
            len(self._round_distances),
            stats["mean"],
        )

    def distance_stats(self) -> dict[str, float]:
        """min/max/mean over the per-round mean distances."""
        return summarize([rd.mean_distance for rd in self._round_distances])

    def observed_stats(self) -> dict[int, dict[str, float]]:
        """beacon id -> min/max/mean interval between rounds on which it was heard."""
        return {
            beacon_id: summarize(observation_intervals(rounds, self._origin))
            for beacon_id, rounds in sorted(self._observed_rounds.items())
        }
