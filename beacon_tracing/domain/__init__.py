"""Domain layer: board, agents, strategies and the resolver."""

from beacon_tracing.domain.agents import Agent, Beacon, IdAllocator, Observer, Transmission
from beacon_tracing.domain.awakeness import (
    AwakenessStrategy,
    FixedAwakenessStrategy,
    RandomAwakenessStrategy,
    create_awakeness_strategy,
)
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Direction, Location, manhattan_distance
from beacon_tracing.domain.movement import (
    DirectionalMovementStrategy,
    MovementStrategy,
    RandomMovementStrategy,
    StationaryMovementStrategy,
    create_movement_strategy,
)
from beacon_tracing.domain.resolver import GlobalResolver, centroid, round_half_up_mean

__all__ = [
    "Agent",
    "AwakenessStrategy",
    "Beacon",
    "Board",
    "Direction",
    "DirectionalMovementStrategy",
    "FixedAwakenessStrategy",
    "GlobalResolver",
    "IdAllocator",
    "Location",
    "MovementStrategy",
    "Observer",
    "RandomAwakenessStrategy",
    "RandomMovementStrategy",
    "StationaryMovementStrategy",
    "Transmission",
    "centroid",
    "create_awakeness_strategy",
    "create_movement_strategy",
    "manhattan_distance",
    "round_half_up_mean",
]
