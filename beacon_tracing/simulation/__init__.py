"""Simulation layer: round loop, collaborator hooks and builders."""

from beacon_tracing.simulation.builder import (
    AgentSnapshot,
    SimulationSnapshot,
    build_simulation,
    restore_simulation,
    snapshot_simulation,
)
from beacon_tracing.simulation.engine import SimulationState, TracingSimulation
from beacon_tracing.simulation.hooks import CompositeHooks, SimulationHooks

__all__ = [
    "AgentSnapshot",
    "CompositeHooks",
    "SimulationHooks",
    "SimulationSnapshot",
    "SimulationState",
    "TracingSimulation",
    "build_simulation",
    "restore_simulation",
    "snapshot_simulation",
]
