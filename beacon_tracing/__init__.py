"""Beacon tracing simulator: mobile beacons, duty-cycled observers and a location resolver."""

from beacon_tracing.config.types import (
    AwakenessStrategyType,
    MovementStrategyType,
    SimulationConfig,
)
from beacon_tracing.domain import Beacon, Board, GlobalResolver, Location, Observer, Transmission
from beacon_tracing.errors import (
    ConfigurationError,
    ExceedingRoundError,
    NullAgentError,
    ObserverAsleepError,
    OutOfBoundsError,
    TracingError,
)
from beacon_tracing.simulation import (
    SimulationHooks,
    SimulationState,
    TracingSimulation,
    build_simulation,
    restore_simulation,
    snapshot_simulation,
)

__all__ = [
    "AwakenessStrategyType",
    "Beacon",
    "Board",
    "ConfigurationError",
    "ExceedingRoundError",
    "GlobalResolver",
    "Location",
    "MovementStrategyType",
    "NullAgentError",
    "Observer",
    "ObserverAsleepError",
    "OutOfBoundsError",
    "SimulationConfig",
    "SimulationHooks",
    "SimulationState",
    "TracingError",
    "TracingSimulation",
    "Transmission",
    "build_simulation",
    "restore_simulation",
    "snapshot_simulation",
]
