"""Immutable grid coordinates and unit movement directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Axis-aligned unit step as a ``(row_delta, col_delta)`` pair."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def row_delta(self) -> int:
        return self.value[0]

    @property
    def col_delta(self) -> int:
        return self.value[1]


@dataclass(frozen=True, order=True)
class Location:
    """A ``(row, col)`` cell coordinate. Bounds are checked by the board, not here."""

    row: int
    col: int

    def move(self, direction: Direction) -> Location:
        """Return the neighbouring coordinate in ``direction`` (may be off-board)."""
        return Location(self.row + direction.row_delta, self.col + direction.col_delta)


def manhattan_distance(a: Location, b: Location) -> int:
    """L1 distance between two grid coordinates."""
    return abs(a.row - b.row) + abs(a.col - b.col)
