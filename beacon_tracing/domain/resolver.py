"""Global resolver: estimates beacon locations from observer reports.

Each round, observers report the transmissions they heard together with
their own location. For every beacon heard, the new estimate is the centroid
of the reporting locations, with the previous estimate (if any) folded in as
one extra report so consecutive estimates stay close. Row and column are
averaged independently and rounded half-up. Beacons not heard in a round keep
their previous estimate.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from beacon_tracing.domain.agents import Beacon, Transmission
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Location


def round_half_up_mean(values: Sequence[int]) -> int:
    """Mean of integers rounded half-up, computed exactly (no float error at .5)."""
    if not values:
        raise ValueError("values must not be empty")
    n = len(values)
    return (2 * sum(values) + n) // (2 * n)


def centroid(locations: Sequence[Location]) -> Location:
    """Half-up rounded centroid of grid locations."""
    return Location(
        round_half_up_mean([loc.row for loc in locations]),
        round_half_up_mean([loc.col for loc in locations]),
    )


class GlobalResolver:
    """Collects per-round observations and maintains an estimated board."""

    def __init__(self, estimated_board: Board, beacons: Iterable[Beacon]) -> None:
        self._board = estimated_board
        self._beacons: dict[Transmission, Beacon] = {b.transmit(): b for b in beacons}
        self._current_round: dict[Transmission, list[Location]] = {}
        self._estimates: dict[Transmission, Location] = {}
        self._heard_last_round: frozenset[Transmission] = frozenset()

    @classmethod
    def create(cls, real_board: Board, beacons: Iterable[Beacon]) -> GlobalResolver:
        """Resolver with an empty estimated board matching ``real_board``'s extent."""
        return cls(Board(real_board.rows, real_board.cols), beacons)

    @property
    def board(self) -> Board:
        """The live estimated board. Callers must treat it as read-only."""
        return self._board

    @property
    def heard_last_round(self) -> frozenset[Transmission]:
        """Transmissions that produced an estimate in the latest ``estimate()`` pass."""
        return self._heard_last_round

    def receive_information(
        self, observer_location: Location, transmissions: Iterable[Transmission]
    ) -> None:
        for transmission in transmissions:
            self._current_round.setdefault(transmission, []).append(observer_location)

    def estimate(self) -> None:
        """Update the estimate of every beacon heard this round, then reset the round."""
        for transmission, reports in self._current_round.items():
            beacon = self._beacons[transmission]
            previous = self._estimates.get(transmission)
            samples = list(reports)
            if previous is not None:
                samples.append(previous)
            new_location = centroid(samples)
            if previous is None:
                self._board.place_agent(new_location, beacon)
            else:
                self._board.move_agent(previous, new_location, beacon)
            self._estimates[transmission] = new_location
        self._heard_last_round = frozenset(self._current_round)
        self._current_round.clear()

    def estimated_location(self, beacon: Beacon) -> Location | None:
        """Latest estimate for ``beacon``, or None if it was never heard."""
        return self._estimates.get(beacon.transmit())

    def estimated_locations(self) -> dict[int, Location]:
        """Snapshot of beacon id -> latest estimate, for beacons heard at least once."""
        return {t.advertisement: loc for t, loc in self._estimates.items()}
