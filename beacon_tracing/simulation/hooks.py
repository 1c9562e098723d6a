"""Collaborator hooks invoked by the round loop.

The core calls these at fixed points and never performs I/O itself;
persistence and statistics plug in by overriding the no-op defaults.
"""

from __future__ import annotations

from collections.abc import Iterable

from beacon_tracing.domain.board import Board


class SimulationHooks:
    """No-op base class for round-loop collaborators."""

    def on_round_state_ready(self, board: Board, estimated_board: Board, round_index: int) -> None:
        """Called once per round after estimation, and once for round 0 before any movement."""

    def on_round_stats_ready(self, round_index: int) -> None:
        """Called once per executed round, right after ``on_round_state_ready``."""

    def on_simulation_complete(self) -> None:
        """Called once after the last round."""


class CompositeHooks(SimulationHooks):
    """Fans each hook call out to several collaborators in registration order."""

    def __init__(self, hooks: Iterable[SimulationHooks] = ()) -> None:
        self._hooks: list[SimulationHooks] = list(hooks)

    def add(self, hooks: SimulationHooks) -> None:
        self._hooks.append(hooks)

    def on_round_state_ready(self, board: Board, estimated_board: Board, round_index: int) -> None:
        for hooks in self._hooks:
            hooks.on_round_state_ready(board, estimated_board, round_index)

    def on_round_stats_ready(self, round_index: int) -> None:
        for hooks in self._hooks:
            hooks.on_round_stats_ready(round_index)

    def on_simulation_complete(self) -> None:
        for hooks in self._hooks:
            hooks.on_simulation_complete()
