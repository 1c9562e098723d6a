"""Construct tracing simulations from a validated ``SimulationConfig``.

Two modes:

- ``build_simulation``: agents at uniformly random cells, ids sequential
  from 0, every random draw taken from ``Random(config.seed)``;
- ``restore_simulation``: agents at explicitly supplied locations (for
  example a ``SimulationSnapshot`` captured from an earlier run), resuming at
  the snapshot's round.

Ids come from an ``IdAllocator`` owned by the build call, so two simulations
never share a counter.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from random import Random

from beacon_tracing.config.types import (
    AwakenessStrategyType,
    MovementStrategyType,
    SimulationConfig,
)
from beacon_tracing.domain.agents import Beacon, IdAllocator, Observer
from beacon_tracing.domain.awakeness import (
    AwakenessStrategy,
    FixedAwakenessStrategy,
    RandomAwakenessStrategy,
    create_awakeness_strategy,
)
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Location
from beacon_tracing.domain.movement import create_movement_strategy
from beacon_tracing.domain.resolver import GlobalResolver
from beacon_tracing.errors import ConfigurationError
from beacon_tracing.simulation.engine import TracingSimulation
from beacon_tracing.simulation.hooks import SimulationHooks


@dataclass(frozen=True)
class AgentSnapshot:
    """Identity, position and strategy tags of one agent.

    ``awakeness_offset`` is only meaningful for observers: the phase of a
    fixed schedule or the seed of a random one.
    """

    agent_id: int
    location: Location
    movement: MovementStrategyType
    awakeness_offset: int | None = None


@dataclass(frozen=True)
class SimulationSnapshot:
    """Everything needed to resume a simulation's agents at a given round."""

    current_round: int
    beacons: tuple[AgentSnapshot, ...]
    observers: tuple[AgentSnapshot, ...]


def _deterministic_simulation_id(config: SimulationConfig) -> str:
    """Build a reproducible simulation ID stable across runs for identical configs."""
    return (
        f"tracing_{config.rows}x{config.cols}_b{config.beacons}_o{config.observers}"
        f"_r{config.max_rounds}_s{config.seed}"
    )


def _random_location(config: SimulationConfig, rng: Random) -> Location:
    return Location(rng.randrange(config.rows), rng.randrange(config.cols))


def _awakeness_from_offset(config: SimulationConfig, offset: int) -> AwakenessStrategy:
    if config.awakeness == AwakenessStrategyType.FIXED:
        return FixedAwakenessStrategy(config.awakeness_cycle, config.awakeness_duration, offset)
    return RandomAwakenessStrategy(config.awakeness_cycle, config.awakeness_duration, offset)


def _awakeness_offset(strategy: AwakenessStrategy) -> int | None:
    if isinstance(strategy, FixedAwakenessStrategy):
        return strategy.phase
    if isinstance(strategy, RandomAwakenessStrategy):
        return strategy.seed
    return None


def build_simulation(
    config: SimulationConfig, hooks: Iterable[SimulationHooks] = ()
) -> TracingSimulation:
    """Build a fresh simulation with randomly placed agents."""
    rng = Random(config.seed)
    board = Board(config.rows, config.cols)
    beacon_ids = IdAllocator()
    observer_ids = IdAllocator()

    beacons = [
        Beacon(
            agent_id=beacon_ids.allocate(),
            location=_random_location(config, rng),
            movement=create_movement_strategy(config.beacon_movement, rng),
            board=board,
        )
        for _ in range(config.beacons)
    ]
    resolver = GlobalResolver.create(board, beacons)
    observers = [
        Observer(
            agent_id=observer_ids.allocate(),
            location=_random_location(config, rng),
            movement=create_movement_strategy(config.observer_movement, rng),
            awakeness=create_awakeness_strategy(
                config.awakeness, config.awakeness_cycle, config.awakeness_duration, rng
            ),
            board=board,
            resolver=resolver,
        )
        for _ in range(config.observers)
    ]
    return TracingSimulation(
        board=board,
        beacons=beacons,
        observers=observers,
        resolver=resolver,
        max_rounds=config.max_rounds,
        radius=config.radius,
        hooks=hooks,
        simulation_id=_deterministic_simulation_id(config),
    )


def _validate_snapshot(config: SimulationConfig, snapshot: SimulationSnapshot) -> None:
    if not 0 <= snapshot.current_round <= config.max_rounds + 1:
        raise ConfigurationError(
            f"snapshot round {snapshot.current_round} must be in [0, {config.max_rounds + 1}]"
        )
    if len(snapshot.beacons) != config.beacons:
        raise ConfigurationError("snapshot beacon count does not match config.beacons")
    if len(snapshot.observers) != config.observers:
        raise ConfigurationError("snapshot observer count does not match config.observers")
    for label, agents in (("beacon", snapshot.beacons), ("observer", snapshot.observers)):
        ids = [agent.agent_id for agent in agents]
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"snapshot {label} ids must be unique")
        if any(agent_id < 0 for agent_id in ids):
            raise ConfigurationError(f"snapshot {label} ids must be >= 0")


def restore_simulation(
    config: SimulationConfig,
    snapshot: SimulationSnapshot,
    hooks: Iterable[SimulationHooks] = (),
) -> TracingSimulation:
    """Rebuild a simulation from explicit agent locations.

    The resolver starts empty: estimates are rebuilt from the next round's
    observations. Observers without an ``awakeness_offset`` get one drawn
    from ``Random(config.seed)``.
    """
    _validate_snapshot(config, snapshot)
    rng = Random(config.seed)
    board = Board(config.rows, config.cols)
    beacon_ids = IdAllocator()
    observer_ids = IdAllocator()

    beacons = [
        Beacon(
            agent_id=beacon_ids.reserve(agent.agent_id),
            location=agent.location,
            movement=create_movement_strategy(agent.movement, rng),
            board=board,
        )
        for agent in snapshot.beacons
    ]
    resolver = GlobalResolver.create(board, beacons)
    observers: list[Observer] = []
    for agent in snapshot.observers:
        if agent.awakeness_offset is None:
            awakeness = create_awakeness_strategy(
                config.awakeness, config.awakeness_cycle, config.awakeness_duration, rng
            )
        else:
            awakeness = _awakeness_from_offset(config, agent.awakeness_offset)
        observers.append(
            Observer(
                agent_id=observer_ids.reserve(agent.agent_id),
                location=agent.location,
                movement=create_movement_strategy(agent.movement, rng),
                awakeness=awakeness,
                board=board,
                resolver=resolver,
            )
        )
    return TracingSimulation(
        board=board,
        beacons=beacons,
        observers=observers,
        resolver=resolver,
        max_rounds=config.max_rounds,
        radius=config.radius,
        hooks=hooks,
        current_round=snapshot.current_round,
        simulation_id=_deterministic_simulation_id(config),
    )


def snapshot_simulation(simulation: TracingSimulation) -> SimulationSnapshot:
    """Capture agent ids, locations and strategy tags for ``restore_simulation``."""
    return SimulationSnapshot(
        current_round=simulation.current_round,
        beacons=tuple(
            AgentSnapshot(b.agent_id, b.location, b.movement.kind) for b in simulation.beacons
        ),
        observers=tuple(
            AgentSnapshot(
                o.agent_id, o.location, o.movement.kind, _awakeness_offset(o.awakeness)
            )
            for o in simulation.observers
        ),
    )
