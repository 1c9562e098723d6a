"""Beacons, observers and the transmissions passed between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from beacon_tracing.config.constants import BEACON_LABEL, OBSERVER_LABEL
from beacon_tracing.domain.awakeness import AwakenessStrategy
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Location
from beacon_tracing.domain.movement import MovementStrategy
from beacon_tracing.errors import ObserverAsleepError, OutOfBoundsError

if TYPE_CHECKING:
    from beacon_tracing.domain.resolver import GlobalResolver


@dataclass(frozen=True)
class Transmission:
    """A beacon advertisement. Two beacons never share an advertisement."""

    advertisement: int


class IdAllocator:
    """Sequential id source scoped to one simulation."""

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def allocate(self) -> int:
        agent_id = self._next
        self._next += 1
        return agent_id

    def reserve(self, agent_id: int) -> int:
        """Accept an explicit id and keep later allocations above it."""
        self._next = max(self._next, agent_id + 1)
        return agent_id


class Agent:
    """An entity placed on a board that moves according to its strategy."""

    kind: str = ""

    def __init__(
        self,
        agent_id: int,
        location: Location,
        movement: MovementStrategy,
        board: Board,
    ) -> None:
        if not board.is_location_valid(location):
            raise OutOfBoundsError(
                f"{self.kind} {agent_id} initial location ({location.row}, {location.col}) "
                f"is outside a {board.rows}x{board.cols} board"
            )
        self.agent_id = agent_id
        self.movement = movement
        self._board = board
        self._location = location
        board.place_agent(location, self)

    def __repr__(self) -> str:
        return f"<{self.label} at ({self._location.row}, {self._location.col})>"

    @property
    def location(self) -> Location:
        return self._location

    @property
    def label(self) -> str:
        """Kind-prefixed id, e.g. ``Beacon3``."""
        return f"{self.kind}{self.agent_id}"

    def move(self) -> None:
        """Move to the strategy's proposal and update the board accordingly."""
        target = self.movement.propose(self._board, self._location)
        self._board.move_agent(self._location, target, self)
        self._location = target


class Beacon(Agent):
    """Agent broadcasting its fixed identifier every round."""

    kind = BEACON_LABEL

    def transmit(self) -> Transmission:
        return Transmission(self.agent_id)


class Observer(Agent):
    """Agent that records nearby transmissions while awake and reports them."""

    kind = OBSERVER_LABEL

    def __init__(
        self,
        agent_id: int,
        location: Location,
        movement: MovementStrategy,
        awakeness: AwakenessStrategy,
        board: Board,
        resolver: GlobalResolver,
    ) -> None:
        super().__init__(agent_id, location, movement, board)
        self.awakeness = awakeness
        self._resolver = resolver
        self._awake = False
        self._observed: list[Transmission] = []

    @property
    def is_awake(self) -> bool:
        return self._awake

    @property
    def pending(self) -> tuple[Transmission, ...]:
        """Transmissions observed this round and not yet forwarded."""
        return tuple(self._observed)

    def update_awakeness_state(self, round_index: int) -> None:
        self._awake = self.awakeness.is_awake(round_index)

    def observe(self, transmission: Transmission) -> None:
        if not self._awake:
            raise ObserverAsleepError(f"{self.label} cannot observe while asleep")
        self._observed.append(transmission)

    def pass_information_to_resolver(self) -> None:
        """Forward this round's observations from the current location, then reset."""
        self._resolver.receive_information(self._location, list(self._observed))
        self._observed.clear()
