"""Tests for beacons, observers and the global resolver."""

from __future__ import annotations

import pytest

from beacon_tracing.domain.agents import Beacon, IdAllocator, Observer, Transmission
from beacon_tracing.domain.awakeness import FixedAwakenessStrategy
from beacon_tracing.domain.board import Board
from beacon_tracing.domain.location import Direction, Location
from beacon_tracing.domain.movement import (
    DirectionalMovementStrategy,
    StationaryMovementStrategy,
)
from beacon_tracing.domain.resolver import GlobalResolver, centroid, round_half_up_mean
from beacon_tracing.errors import ObserverAsleepError, OutOfBoundsError

ALWAYS_AWAKE = FixedAwakenessStrategy(cycle=1, duration=1)


def make_beacon(board: Board, agent_id: int = 0, location: Location = Location(0, 0)) -> Beacon:
    return Beacon(agent_id, location, StationaryMovementStrategy(), board)


def make_observer(
    board: Board,
    resolver: GlobalResolver,
    agent_id: int = 0,
    location: Location = Location(0, 0),
) -> Observer:
    return Observer(agent_id, location, StationaryMovementStrategy(), ALWAYS_AWAKE, board, resolver)


class TestIdAllocator:
    def test_sequential_from_zero(self) -> None:
        ids = IdAllocator()
        assert [ids.allocate() for _ in range(3)] == [0, 1, 2]

    def test_reserve_moves_counter_past_explicit_id(self) -> None:
        ids = IdAllocator()
        assert ids.reserve(5) == 5
        assert ids.allocate() == 6

    def test_allocators_are_independent(self) -> None:
        a, b = IdAllocator(), IdAllocator()
        a.allocate()
        assert b.allocate() == 0


class TestBeacon:
    def test_transmit_carries_id(self) -> None:
        beacon = make_beacon(Board(2, 2), agent_id=7)
        assert beacon.transmit() == Transmission(7)
        assert beacon.transmit() == beacon.transmit()

    def test_label(self) -> None:
        assert make_beacon(Board(2, 2), agent_id=3).label == "Beacon3"

    def test_creation_places_on_board(self) -> None:
        board = Board(2, 2)
        beacon = make_beacon(board, location=Location(1, 0))
        assert board.agents_at(Location(1, 0)) == (beacon,)
        assert beacon.location == Location(1, 0)
        assert beacon.location == beacon.location

    def test_creation_outside_board_raises(self) -> None:
        with pytest.raises(OutOfBoundsError):
            make_beacon(Board(2, 2), location=Location(2, 0))

    def test_move_updates_location_and_board(self) -> None:
        board = Board(3, 3)
        beacon = Beacon(0, Location(2, 1), DirectionalMovementStrategy(Direction.UP), board)
        beacon.move()
        assert beacon.location == Location(1, 1)
        assert board.agents_at(Location(1, 1)) == (beacon,)
        assert board.agents_at(Location(2, 1)) == ()

    def test_move_clamped_at_edge_keeps_location(self) -> None:
        board = Board(3, 3)
        beacon = Beacon(0, Location(0, 1), DirectionalMovementStrategy(Direction.UP), board)
        beacon.move()
        assert beacon.location == Location(0, 1)
        assert board.agents_at(Location(0, 1)) == (beacon,)


class TestObserver:
    def test_label(self) -> None:
        board = Board(2, 2)
        observer = make_observer(board, GlobalResolver.create(board, []), agent_id=4)
        assert observer.label == "Observer4"

    def test_starts_asleep_until_updated(self) -> None:
        board = Board(2, 2)
        observer = make_observer(board, GlobalResolver.create(board, []))
        assert not observer.is_awake
        observer.update_awakeness_state(0)
        assert observer.is_awake

    def test_observe_while_asleep_raises(self) -> None:
        board = Board(2, 2)
        resolver = GlobalResolver.create(board, [])
        observer = Observer(
            0,
            Location(0, 0),
            StationaryMovementStrategy(),
            FixedAwakenessStrategy(cycle=2, duration=1),
            board,
            resolver,
        )
        observer.update_awakeness_state(1)
        with pytest.raises(ObserverAsleepError):
            observer.observe(Transmission(0))

    def test_pass_information_forwards_and_clears(self) -> None:
        board = Board(3, 3)
        beacon = make_beacon(board)
        resolver = GlobalResolver.create(board, [beacon])
        observer = make_observer(board, resolver, location=Location(2, 2))
        observer.update_awakeness_state(0)
        observer.observe(beacon.transmit())
        assert observer.pending == (Transmission(0),)

        observer.pass_information_to_resolver()
        assert observer.pending == ()
        resolver.estimate()
        assert resolver.estimated_location(beacon) == Location(2, 2)

    def test_duplicate_observations_are_kept(self) -> None:
        board = Board(2, 2)
        observer = make_observer(board, GlobalResolver.create(board, []))
        observer.update_awakeness_state(0)
        observer.observe(Transmission(1))
        observer.observe(Transmission(1))
        assert observer.pending == (Transmission(1), Transmission(1))


class TestRounding:
    @pytest.mark.parametrize(
        "values,expected",
        [([0, 1], 1), ([1, 2], 2), ([0, 0, 1], 0), ([0, 1, 1], 1), ([3], 3), ([0, 1, 2, 3], 2)],
    )
    def test_round_half_up_mean(self, values: list[int], expected: int) -> None:
        assert round_half_up_mean(values) == expected

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            round_half_up_mean([])

    def test_centroid_rounds_axes_independently(self) -> None:
        assert centroid([Location(0, 0), Location(0, 1), Location(1, 0)]) == Location(0, 0)
        assert centroid([Location(0, 0), Location(0, 1)]) == Location(0, 1)


class TestGlobalResolver:
    def _setup(self, n_beacons: int = 1) -> tuple[Board, list[Beacon], GlobalResolver]:
        board = Board(4, 4)
        beacons = [make_beacon(board, agent_id=i) for i in range(n_beacons)]
        return board, beacons, GlobalResolver.create(board, beacons)

    def test_estimated_board_matches_extent_and_starts_empty(self) -> None:
        board, _, resolver = self._setup()
        assert (resolver.board.rows, resolver.board.cols) == (board.rows, board.cols)
        assert resolver.board.all_occupied() == {}
        assert resolver.board is not board

    def test_first_estimate_is_centroid_of_reports(self) -> None:
        _, beacons, resolver = self._setup()
        t = beacons[0].transmit()
        resolver.receive_information(Location(0, 0), [t])
        resolver.receive_information(Location(0, 1), [t])
        resolver.receive_information(Location(1, 0), [t])
        resolver.estimate()
        assert resolver.estimated_location(beacons[0]) == Location(0, 0)
        assert resolver.board.agents_at(Location(0, 0)) == (beacons[0],)

    def test_previous_estimate_is_folded_in(self) -> None:
        _, beacons, resolver = self._setup()
        t = beacons[0].transmit()
        resolver.receive_information(Location(0, 0), [t])
        resolver.estimate()
        resolver.receive_information(Location(2, 2), [t])
        resolver.estimate()
        assert resolver.estimated_location(beacons[0]) == Location(1, 1)
        assert resolver.board.agents_at(Location(1, 1)) == (beacons[0],)
        assert resolver.board.agents_at(Location(0, 0)) == ()

    def test_unheard_beacon_keeps_stale_estimate(self) -> None:
        _, beacons, resolver = self._setup()
        resolver.receive_information(Location(3, 3), [beacons[0].transmit()])
        resolver.estimate()
        resolver.estimate()
        assert resolver.estimated_location(beacons[0]) == Location(3, 3)
        assert resolver.heard_last_round == frozenset()

    def test_never_heard_beacon_has_no_estimate(self) -> None:
        _, beacons, resolver = self._setup(n_beacons=2)
        resolver.receive_information(Location(1, 1), [beacons[0].transmit()])
        resolver.estimate()
        assert resolver.estimated_location(beacons[1]) is None
        assert resolver.estimated_locations() == {0: Location(1, 1)}
        assert resolver.heard_last_round == frozenset({Transmission(0)})

    def test_estimate_without_reports_is_noop(self) -> None:
        _, _, resolver = self._setup()
        resolver.estimate()
        assert resolver.estimated_locations() == {}
        assert resolver.board.all_occupied() == {}

    def test_identical_reports_give_exact_location(self) -> None:
        _, beacons, resolver = self._setup()
        t = beacons[0].transmit()
        for _ in range(3):
            resolver.receive_information(Location(3, 1), [t])
        resolver.estimate()
        assert resolver.estimated_location(beacons[0]) == Location(3, 1)

    def test_unknown_transmission_fails_at_estimation(self) -> None:
        _, _, resolver = self._setup()
        resolver.receive_information(Location(0, 0), [Transmission(99)])
        with pytest.raises(KeyError):
            resolver.estimate()

    def test_empty_report_contributes_nothing(self) -> None:
        _, beacons, resolver = self._setup()
        resolver.receive_information(Location(2, 2), [])
        resolver.estimate()
        assert resolver.estimated_location(beacons[0]) is None
