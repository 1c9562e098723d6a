"""Configuration dataclasses and strategy tags for tracing simulations.

All frozen dataclasses that parameterise a simulation run live here. Each
validates itself in ``__post_init__`` so an invalid configuration can never
reach the builder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from beacon_tracing.config.constants import (
    AWAKENESS_CYCLE,
    AWAKENESS_DURATION,
    GRID_COLS,
    GRID_ROWS,
    MAX_ROUNDS,
    NUM_BEACONS,
    NUM_OBSERVERS,
    TRANSMISSION_RADIUS,
)
from beacon_tracing.errors import ConfigurationError

__all__ = [
    "AwakenessStrategyType",
    "MovementStrategyType",
    "SimulationConfig",
    "validate_awakeness",
]

# ---------------------------------------------------------------------------
# Strategy tags
# ---------------------------------------------------------------------------


class MovementStrategyType(Enum):
    """Movement policy selected for a group of agents."""

    STATIONARY = "stationary"
    RANDOM = "random"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class AwakenessStrategyType(Enum):
    """Duty-cycle policy selected for observers."""

    FIXED = "fixed"
    RANDOM = "random"


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _require_int(value: object, key: str) -> None:
    """Reject booleans and anything that is not a plain integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{key} must be an integer")


def validate_awakeness(cycle: int, duration: int) -> None:
    """Raise ConfigurationError unless ``1 <= duration <= cycle``."""
    _require_int(cycle, "awakeness_cycle")
    _require_int(duration, "awakeness_duration")
    if cycle < 1:
        raise ConfigurationError("awakeness_cycle must be >= 1")
    if duration < 1:
        raise ConfigurationError("awakeness_duration must be >= 1")
    if duration > cycle:
        raise ConfigurationError("awakeness_duration must be <= awakeness_cycle")


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one tracing simulation.

    ``max_rounds`` is the index of the last round, so a run executes rounds
    ``1..max_rounds`` after the initial round-0 state.
    """

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    beacons: int = NUM_BEACONS
    observers: int = NUM_OBSERVERS
    max_rounds: int = MAX_ROUNDS
    radius: float = TRANSMISSION_RADIUS
    beacon_movement: MovementStrategyType = MovementStrategyType.RANDOM
    observer_movement: MovementStrategyType = MovementStrategyType.RANDOM
    awakeness: AwakenessStrategyType = AwakenessStrategyType.FIXED
    awakeness_cycle: int = AWAKENESS_CYCLE
    awakeness_duration: int = AWAKENESS_DURATION
    seed: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        for key in ("rows", "cols", "beacons", "observers", "max_rounds", "seed"):
            _require_int(getattr(self, key), key)
        if isinstance(self.radius, bool) or not isinstance(self.radius, (int, float)):
            raise ConfigurationError("radius must be a number")
        if not math.isfinite(self.radius):
            raise ConfigurationError("radius must be finite")
        if self.rows < 1:
            raise ConfigurationError("rows must be >= 1")
        if self.cols < 1:
            raise ConfigurationError("cols must be >= 1")
        if self.beacons < 0:
            raise ConfigurationError("beacons must be >= 0")
        if self.observers < 0:
            raise ConfigurationError("observers must be >= 0")
        if self.max_rounds < 0:
            raise ConfigurationError("max_rounds must be >= 0")
        if self.radius < 0:
            raise ConfigurationError("radius must be >= 0")
        if not isinstance(self.beacon_movement, MovementStrategyType):
            raise ConfigurationError("beacon_movement must be a MovementStrategyType")
        if not isinstance(self.observer_movement, MovementStrategyType):
            raise ConfigurationError("observer_movement must be a MovementStrategyType")
        if not isinstance(self.awakeness, AwakenessStrategyType):
            raise ConfigurationError("awakeness must be an AwakenessStrategyType")
        validate_awakeness(self.awakeness_cycle, self.awakeness_duration)
