"""Tests for beacon_tracing.config.types module."""

from __future__ import annotations

import dataclasses
import math

import pytest

from beacon_tracing.config.types import (
    AwakenessStrategyType,
    MovementStrategyType,
    SimulationConfig,
    validate_awakeness,
)
from beacon_tracing.errors import ConfigurationError, TracingError
from beacon_tracing.simulation.builder import build_simulation


class TestSimulationConfig:
    def test_defaults_are_valid(self) -> None:
        config = SimulationConfig()
        assert config.beacon_movement == MovementStrategyType.RANDOM
        assert config.awakeness == AwakenessStrategyType.FIXED

    def test_frozen(self) -> None:
        config = SimulationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.rows = 3  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"rows": 0}, "rows must be >= 1"),
            ({"cols": 0}, "cols must be >= 1"),
            ({"beacons": -1}, "beacons must be >= 0"),
            ({"observers": -1}, "observers must be >= 0"),
            ({"max_rounds": -1}, "max_rounds must be >= 0"),
            ({"radius": -0.5}, "radius must be >= 0"),
            ({"awakeness_cycle": 0}, "awakeness_cycle must be >= 1"),
            ({"awakeness_duration": 0}, "awakeness_duration must be >= 1"),
            ({"awakeness_cycle": 2, "awakeness_duration": 3}, "awakeness_duration must be <="),
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict[str, object], message: str) -> None:
        with pytest.raises(ConfigurationError, match=message):
            SimulationConfig(**overrides)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "key,value",
        [
            ("rows", 2.5),
            ("cols", 3.0),
            ("beacons", True),
            ("observers", "4"),
            ("max_rounds", 10.0),
            ("seed", 1.5),
            ("awakeness_cycle", 2.0),
            ("awakeness_duration", False),
        ],
    )
    def test_non_integer_counts_rejected(self, key: str, value: object) -> None:
        with pytest.raises(ConfigurationError, match=f"{key} must be an integer"):
            SimulationConfig(**{key: value})  # type: ignore[arg-type]

    @pytest.mark.parametrize("radius", [math.nan, math.inf])
    def test_non_finite_radius_rejected(self, radius: float) -> None:
        with pytest.raises(ConfigurationError, match="radius must be finite"):
            SimulationConfig(radius=radius)

    @pytest.mark.parametrize("radius", [True, "1.0", None])
    def test_non_numeric_radius_rejected(self, radius: object) -> None:
        with pytest.raises(ConfigurationError, match="radius must be a number"):
            SimulationConfig(radius=radius)  # type: ignore[arg-type]

    def test_integer_radius_accepted(self) -> None:
        assert SimulationConfig(radius=2).radius == 2

    def test_non_integer_rows_rejected_before_build(self) -> None:
        with pytest.raises(ConfigurationError):
            build_simulation(SimulationConfig(rows=2.5, cols=2))  # type: ignore[arg-type]

    def test_string_strategy_tag_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            SimulationConfig(beacon_movement="random")  # type: ignore[arg-type]

    def test_zero_agents_and_rounds_allowed(self) -> None:
        config = SimulationConfig(beacons=0, observers=0, max_rounds=0, radius=0)
        assert config.beacons == 0

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            SimulationConfig(rows=-3)
        assert issubclass(ConfigurationError, TracingError)


class TestValidateAwakeness:
    def test_duration_equal_to_cycle_allowed(self) -> None:
        validate_awakeness(3, 3)

    def test_duration_longer_than_cycle_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            validate_awakeness(2, 5)
