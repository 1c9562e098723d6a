"""Immutable per-round board-state snapshots.

A ``BoardState`` records, for every cell, the labels of the agents on it in
board order (``"Beacon3"``, ``"Observer0"``). Real and estimated boards use
the same shape and are told apart by ``kind``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from beacon_tracing.domain.board import Board
from beacon_tracing.errors import ExceedingRoundError


class BoardKind(Enum):
    REAL = "real"
    ESTIMATED = "estimated"


Cells = tuple[tuple[tuple[str, ...], ...], ...]
"""``rows x cols`` grid of per-cell agent-label tuples."""


@dataclass(frozen=True)
class BoardState:
    """Labels of the agents on every cell of one board at one round."""

    rows: int
    cols: int
    round: int
    kind: BoardKind
    cells: Cells

    def labels_at(self, row: int, col: int) -> tuple[str, ...]:
        return self.cells[row][col]

    def iter_rows(self) -> list[tuple[int, int, str]]:
        """Flatten to ``(row, col, label)`` triples, one per agent, in board order."""
        return [
            (row, col, label)
            for row, line in enumerate(self.cells)
            for col, labels in enumerate(line)
            for label in labels
        ]


def create_board_state(board: Board, round_index: int, max_rounds: int, kind: BoardKind) -> BoardState:
    """Snapshot ``board`` as the state of ``round_index``.

    Raises:
        ValueError: ``round_index`` is negative.
        ExceedingRoundError: ``round_index`` is past the simulation's last round.
    """
    if round_index < 0:
        raise ValueError("round must be >= 0")
    if round_index > max_rounds:
        raise ExceedingRoundError(
            f"round {round_index} exceeds the maximum number of rounds {max_rounds}"
        )
    grid: list[list[list[str]]] = [[[] for _ in range(board.cols)] for _ in range(board.rows)]
    for location, agents in board.all_occupied().items():
        grid[location.row][location.col].extend(agent.label for agent in agents)
    cells = tuple(tuple(tuple(labels) for labels in line) for line in grid)
    return BoardState(rows=board.rows, cols=board.cols, round=round_index, kind=kind, cells=cells)
