"""Round-based tracing simulation loop.

One round, in this fixed order:

1. move every beacon, then every observer (construction order);
2. recompute every observer's awake/asleep state for the round;
3. deliver each beacon's transmission to every awake observer within the
   Manhattan threshold radius;
4. every observer forwards its observations to the resolver;
5. the resolver re-estimates the beacons it heard;
6. the round-state hook fires, then the round-stats hook;
7. the round counter increments.

Round 0 is the initial placement: its state hook fires on the first ``run``
before anything moves. The completion hook fires once after the last round.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from beacon_tracing.domain.agents import Beacon, Observer
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import manhattan_distance
from beacon_tracing.domain.resolver import GlobalResolver
from beacon_tracing.errors import ConfigurationError
from beacon_tracing.simulation.hooks import CompositeHooks, SimulationHooks


class SimulationState(Enum):
    """Lifecycle of a simulation run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"


class TracingSimulation:
    """Owns the real board, the agents and the resolver, and drives the rounds."""

    def __init__(
        self,
        board: Board,
        beacons: Sequence[Beacon],
        observers: Sequence[Observer],
        resolver: GlobalResolver,
        max_rounds: int,
        radius: float,
        hooks: Iterable[SimulationHooks] = (),
        current_round: int = 0,
        simulation_id: str = "",
    ) -> None:
        if max_rounds < 0:
            raise ConfigurationError("max_rounds must be >= 0")
        if radius < 0:
            raise ConfigurationError("radius must be >= 0")
        if not 0 <= current_round <= max_rounds + 1:
            raise ConfigurationError("current_round must be in [0, max_rounds + 1]")
        self.simulation_id = simulation_id
        self._board = board
        self._beacons = tuple(beacons)
        self._observers = tuple(observers)
        self._resolver = resolver
        self._max_rounds = max_rounds
        self._radius = radius
        self._current_round = current_round
        self._completion_reported = False
        self._hooks = CompositeHooks(hooks)

    def __repr__(self) -> str:
        return (
            f"<TracingSimulation round={self._current_round}/{self._max_rounds} "
            f"beacons={len(self._beacons)} observers={len(self._observers)}>"
        )

    # -- read accessors --------------------------------------------------

    @property
    def board(self) -> Board:
        return self._board

    @property
    def estimated_board(self) -> Board:
        return self._resolver.board

    @property
    def resolver(self) -> GlobalResolver:
        return self._resolver

    @property
    def beacons(self) -> tuple[Beacon, ...]:
        return self._beacons

    @property
    def observers(self) -> tuple[Observer, ...]:
        return self._observers

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def max_rounds(self) -> int:
        return self._max_rounds

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def state(self) -> SimulationState:
        if self._current_round > self._max_rounds:
            return SimulationState.COMPLETED
        if self._current_round == 0:
            return SimulationState.NOT_STARTED
        return SimulationState.RUNNING

    def add_hooks(self, hooks: SimulationHooks) -> None:
        """Register a collaborator; it receives every hook call from now on."""
        self._hooks.add(hooks)

    # -- round loop ------------------------------------------------------

    def run(self) -> None:
        """Execute all remaining rounds. A completed simulation is left untouched."""
        if self._completion_reported:
            return
        if self._current_round == 0:
            self._hooks.on_round_state_ready(self._board, self.estimated_board, 0)
            self._current_round += 1
        while self._current_round <= self._max_rounds:
            self._run_round()
        self._completion_reported = True
        self._hooks.on_simulation_complete()

    def _run_round(self) -> None:
        """Execute exactly one round (``current_round``) and advance the counter."""
        round_index = self._current_round
        self.move_agents()
        self.update_observers_awakeness(round_index)
        self.beacons_to_observers()
        self.observers_to_resolver()
        self._resolver.estimate()
        self._hooks.on_round_state_ready(self._board, self.estimated_board, round_index)
        self._hooks.on_round_stats_ready(round_index)
        self._current_round += 1

    def move_agents(self) -> None:
        for beacon in self._beacons:
            beacon.move()
        for observer in self._observers:
            observer.move()

    def update_observers_awakeness(self, round_index: int) -> None:
        for observer in self._observers:
            observer.update_awakeness_state(round_index)

    def beacons_to_observers(self) -> None:
        """Deliver transmissions within the Manhattan threshold radius to awake observers."""
        for beacon in self._beacons:
            transmission = beacon.transmit()
            for observer in self._observers:
                if not observer.is_awake:
                    continue
                if manhattan_distance(beacon.location, observer.location) <= self._radius:
                    observer.observe(transmission)

    def observers_to_resolver(self) -> None:
        for observer in self._observers:
            observer.pass_information_to_resolver()
