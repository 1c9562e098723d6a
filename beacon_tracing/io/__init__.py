"""Collaborator I/O: board-state snapshots, Parquet schemas and the recorder."""

from beacon_tracing.io.board_state import BoardKind, BoardState, create_board_state
from beacon_tracing.io.recorder import ParquetRecorder

__all__ = [
    "BoardKind",
    "BoardState",
    "ParquetRecorder",
    "create_board_state",
]
