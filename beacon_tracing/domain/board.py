"""Bounded grid board indexing which agents occupy each cell.

Unlike a one-agent-per-cell occupancy grid, a cell here holds an ordered
multiset of agents: beacons and observers freely share cells. Insertion order
within a cell is kept so that board-state snapshots are reproducible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from beacon_tracing.domain.location import Location
from beacon_tracing.errors import NullAgentError, OutOfBoundsError

if TYPE_CHECKING:
    from beacon_tracing.domain.agents import Agent


class Board:
    """``rows x cols`` spatial index mapping locations to the agents on them."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise OutOfBoundsError(f"board extent must be >= 1x1, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: dict[Location, list[Agent]] = {}

    def __repr__(self) -> str:
        return f"<Board {self.rows}x{self.cols} agents={sum(len(v) for v in self._cells.values())}>"

    def is_location_valid(self, location: Location) -> bool:
        """Return True when ``location`` lies inside the board extent."""
        return 0 <= location.row < self.rows and 0 <= location.col < self.cols

    def _check_location(self, location: Location) -> None:
        if not self.is_location_valid(location):
            raise OutOfBoundsError(
                f"location ({location.row}, {location.col}) is outside a "
                f"{self.rows}x{self.cols} board"
            )

    def place_agent(self, location: Location, agent: Agent | None) -> None:
        """Add ``agent`` to the cell at ``location``.

        Placing the same agent twice duplicates its membership; avoiding that
        is the caller's responsibility.
        """
        self._check_location(location)
        if agent is None:
            raise NullAgentError("cannot place a missing agent")
        self._cells.setdefault(location, []).append(agent)

    def move_agent(self, source: Location, target: Location, agent: Agent | None) -> None:
        """Remove ``agent`` from ``source`` (if present) and append it to ``target``.

        Staying on the cell it already occupies leaves the board untouched, so
        the order of a shared cell is not disturbed.
        """
        self._check_location(source)
        self._check_location(target)
        if agent is None:
            raise NullAgentError("cannot move a missing agent")
        occupants = self._cells.get(source)
        if source == target and occupants is not None and any(o is agent for o in occupants):
            return
        if occupants is not None:
            for index, occupant in enumerate(occupants):
                if occupant is agent:
                    del occupants[index]
                    break
            if not occupants:
                del self._cells[source]
        self._cells.setdefault(target, []).append(agent)

    def agents_at(self, location: Location) -> tuple[Agent, ...]:
        """Snapshot of the agents on ``location`` in insertion order."""
        self._check_location(location)
        return tuple(self._cells.get(location, ()))

    def all_occupied(self) -> dict[Location, tuple[Agent, ...]]:
        """Snapshot of every non-empty cell, ordered by (row, col)."""
        return {loc: tuple(self._cells[loc]) for loc in sorted(self._cells)}
