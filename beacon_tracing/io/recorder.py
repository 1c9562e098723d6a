"""Parquet recorder: persists round states and tracing statistics.

Board states are streamed as long-format rows (one row per agent per cell per
board per round) and flushed to ``board_states.parquet`` in row groups. The
latest snapshots are also kept in memory so callers can read a round back
without touching disk.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from enum import Enum
from pathlib import Path

import pyarrow.parquet as pq

from beacon_tracing.config.constants import FLUSH_THRESHOLD
from beacon_tracing.config.types import SimulationConfig
from beacon_tracing.domain.board import Board
from beacon_tracing.errors import ExceedingRoundError
from beacon_tracing.io.board_state import BoardKind, BoardState, create_board_state
from beacon_tracing.io.persistence import flush_columns, write_table
from beacon_tracing.io.schemas import (
    BOARD_STATE_SCHEMA,
    DISTANCE_STATS_SCHEMA,
    METADATA_SCHEMA_VERSION,
    OBSERVED_STATS_SCHEMA,
    ROUND_DISTANCE_SCHEMA,
    STAT_NAMES,
)
from beacon_tracing.metrics.tracing import TracingStatsCollector
from beacon_tracing.simulation.hooks import SimulationHooks

logger = logging.getLogger(__name__)

BOARD_STATES_FILE = "board_states.parquet"
ROUND_DISTANCES_FILE = "round_distances.parquet"
DISTANCE_STATS_FILE = "distance_stats.parquet"
OBSERVED_STATS_FILE = "observed_stats.parquet"
METADATA_FILE = "metadata.json"


def _empty_board_columns() -> dict[str, list[object]]:
    return {field.name: [] for field in BOARD_STATE_SCHEMA}


class ParquetRecorder(SimulationHooks):
    """Round-hook collaborator writing board states and statistics under ``out_dir``."""

    def __init__(
        self,
        out_dir: Path,
        simulation_id: str,
        max_rounds: int,
        flush_threshold: int = FLUSH_THRESHOLD,
    ) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.simulation_id = simulation_id
        self.max_rounds = max_rounds
        self.flush_threshold = flush_threshold
        self._states: dict[tuple[int, BoardKind], BoardState] = {}
        self._columns = _empty_board_columns()
        self._writer: pq.ParquetWriter | None = None
        self._closed = False

    @property
    def board_states_path(self) -> Path:
        return self.out_dir / BOARD_STATES_FILE

    # -- hooks -----------------------------------------------------------

    def on_round_state_ready(self, board: Board, estimated_board: Board, round_index: int) -> None:
        for kind, source in ((BoardKind.REAL, board), (BoardKind.ESTIMATED, estimated_board)):
            state = create_board_state(source, round_index, self.max_rounds, kind)
            self._states[(round_index, kind)] = state
            for row, col, label in state.iter_rows():
                self._columns["simulation_id"].append(self.simulation_id)
                self._columns["round"].append(round_index)
                self._columns["board_kind"].append(kind.value)
                self._columns["row"].append(row)
                self._columns["col"].append(col)
                self._columns["agent_label"].append(label)
        if len(self._columns["round"]) >= self.flush_threshold:
            self._flush()

    def on_round_stats_ready(self, round_index: int) -> None:
        logger.debug("simulation %s: round %d recorded", self.simulation_id, round_index)

    def on_simulation_complete(self) -> None:
        self.close()

    # -- board-state access ---------------------------------------------

    def board_state(self, round_index: int, kind: BoardKind = BoardKind.REAL) -> BoardState:
        """Return the recorded state of ``round_index``.

        Raises:
            ExceedingRoundError: the round is past the simulation's last round.
            KeyError: the round has not been recorded yet.
        """
        if round_index < 0:
            raise ValueError("round must be >= 0")
        if round_index > self.max_rounds:
            raise ExceedingRoundError(
                f"round {round_index} exceeds the maximum number of rounds {self.max_rounds} "
                f"of simulation {self.simulation_id}"
            )
        return self._states[(round_index, kind)]

    # -- output ----------------------------------------------------------

    def _flush(self) -> None:
        self._writer = flush_columns(
            self._columns, self.board_states_path, self._writer, BOARD_STATE_SCHEMA
        )

    def close(self) -> None:
        """Flush buffered rows and close the Parquet writer. Idempotent."""
        if self._closed:
            return
        self._flush()
        if self._writer is None:
            write_table(_empty_board_columns(), self.board_states_path, BOARD_STATE_SCHEMA)
        else:
            self._writer.close()
        self._closed = True
        logger.info("board states written to %s", self.board_states_path)

    def write_stats(self, collector: TracingStatsCollector) -> list[Path]:
        """Persist per-round distances and the aggregated tracing statistics."""
        round_distances = collector.round_distances
        round_rows: dict[str, list[object]] = {
            "simulation_id": [self.simulation_id] * len(round_distances),
            "round": [rd.round for rd in round_distances],
            "mean_distance": [rd.mean_distance for rd in round_distances],
            "estimated_beacons": [rd.estimated_beacons for rd in round_distances],
        }
        distance = collector.distance_stats()
        distance_rows: dict[str, list[object]] = {"simulation_id": [self.simulation_id]}
        distance_rows.update({name: [distance[name]] for name in STAT_NAMES})

        observed = collector.observed_stats()
        observed_rows: dict[str, list[object]] = {
            "simulation_id": [self.simulation_id] * len(observed),
            "beacon_id": list(observed),
        }
        observed_rows.update({name: [stats[name] for stats in observed.values()] for name in STAT_NAMES})

        paths = [
            write_table(round_rows, self.out_dir / ROUND_DISTANCES_FILE, ROUND_DISTANCE_SCHEMA),
            write_table(distance_rows, self.out_dir / DISTANCE_STATS_FILE, DISTANCE_STATS_SCHEMA),
            write_table(observed_rows, self.out_dir / OBSERVED_STATS_FILE, OBSERVED_STATS_SCHEMA),
        ]
        logger.info("statistics written to %s", self.out_dir)
        return paths

    def write_metadata(self, config: SimulationConfig) -> Path:
        """Write the run's configuration and identity as JSON."""
        payload: dict[str, object] = {
            "schema_version": METADATA_SCHEMA_VERSION,
            "simulation_id": self.simulation_id,
        }
        for key, value in asdict(config).items():
            payload[key] = value.value if isinstance(value, Enum) else value
        path = self.out_dir / METADATA_FILE
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2))
        return path
