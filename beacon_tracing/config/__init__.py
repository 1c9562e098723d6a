"""Configuration layer: constants and typed config dataclasses."""

from beacon_tracing.config.constants import (
    AWAKENESS_CYCLE,
    AWAKENESS_DURATION,
    BEACON_LABEL,
    FLUSH_THRESHOLD,
    GRID_COLS,
    GRID_ROWS,
    MAX_ROUNDS,
    NUM_BEACONS,
    NUM_OBSERVERS,
    OBSERVER_LABEL,
    TRANSMISSION_RADIUS,
)
from beacon_tracing.config.types import (
    AwakenessStrategyType,
    MovementStrategyType,
    SimulationConfig,
    validate_awakeness,
)

__all__ = [
    "AWAKENESS_CYCLE",
    "AWAKENESS_DURATION",
    "AwakenessStrategyType",
    "BEACON_LABEL",
    "FLUSH_THRESHOLD",
    "GRID_COLS",
    "GRID_ROWS",
    "MAX_ROUNDS",
    "MovementStrategyType",
    "NUM_BEACONS",
    "NUM_OBSERVERS",
    "OBSERVER_LABEL",
    "SimulationConfig",
    "TRANSMISSION_RADIUS",
    "validate_awakeness",
]
