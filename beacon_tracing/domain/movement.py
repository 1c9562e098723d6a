"""Movement strategies: where an agent proposes to go next.

Strategies never mutate the board; the agent applies the proposal through
``Board.move_agent``. Off-board proposals collapse to the current location
(clamp at the edge, no wrap-around, no retry).
"""

from __future__ import annotations

from random import Random

from beacon_tracing.config.types import MovementStrategyType
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Direction, Location

DIRECTIONS: tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
"""Sampling order for the random walk; fixed so seeded runs are reproducible."""


class MovementStrategy:
    """Policy proposing an agent's next location."""

    kind: MovementStrategyType

    def propose(self, board: Board, location: Location) -> Location:
        raise NotImplementedError


class StationaryMovementStrategy(MovementStrategy):
    kind = MovementStrategyType.STATIONARY

    def propose(self, board: Board, location: Location) -> Location:
        return location


class RandomMovementStrategy(MovementStrategy):
    """Uniform step to one of the four neighbours; stays put if it falls off the board."""

    kind = MovementStrategyType.RANDOM

    def __init__(self, rng: Random) -> None:
        self._rng = rng

    def propose(self, board: Board, location: Location) -> Location:
        candidate = location.move(self._rng.choice(DIRECTIONS))
        if board.is_location_valid(candidate):
            return candidate
        return location


class DirectionalMovementStrategy(MovementStrategy):
    """Always step in one direction, clamped at the board edge."""

    def __init__(self, direction: Direction) -> None:
        self.direction = direction
        self.kind = MovementStrategyType(direction.name.lower())

    def propose(self, board: Board, location: Location) -> Location:
        candidate = location.move(self.direction)
        if board.is_location_valid(candidate):
            return candidate
        return location


def create_movement_strategy(kind: MovementStrategyType, rng: Random) -> MovementStrategy:
    """Map a movement tag to a strategy instance.

    ``rng`` is only consumed by the random walk; it is the simulation's own
    source of randomness so a seeded run stays deterministic.
    """
    if kind == MovementStrategyType.STATIONARY:
        return StationaryMovementStrategy()
    if kind == MovementStrategyType.RANDOM:
        return RandomMovementStrategy(rng)
    try:
        direction = Direction[kind.name]
    except KeyError as exc:
        raise ValueError(f"unsupported movement strategy: {kind!r}") from exc
    return DirectionalMovementStrategy(direction)
