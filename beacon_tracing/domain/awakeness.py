"""Awakeness (duty-cycle) strategies for observers.

Both variants are pure functions of the round index: they hold only their
configured constants, so asking about the same round twice always gives the
same answer.
"""

from __future__ import annotations

from random import Random

from beacon_tracing.config.types import AwakenessStrategyType, validate_awakeness


class AwakenessStrategy:
    """Decides whether an observer listens on a given round."""

    kind: AwakenessStrategyType

    def __init__(self, cycle: int, duration: int) -> None:
        validate_awakeness(cycle, duration)
        self.cycle = cycle
        self.duration = duration

    def is_awake(self, round_index: int) -> bool:
        raise NotImplementedError


class FixedAwakenessStrategy(AwakenessStrategy):
    """Awake for ``duration`` consecutive rounds starting at ``phase`` in every cycle.

    With ``phase=0`` this is ``round mod cycle < duration``.
    """

    kind = AwakenessStrategyType.FIXED

    def __init__(self, cycle: int, duration: int, phase: int = 0) -> None:
        super().__init__(cycle, duration)
        self.phase = phase % cycle

    def is_awake(self, round_index: int) -> bool:
        return (round_index - self.phase) % self.cycle < self.duration


class RandomAwakenessStrategy(AwakenessStrategy):
    """Awake for ``duration`` consecutive rounds at a random offset inside each cycle.

    The offset for cycle ``k`` is drawn from a generator seeded with
    ``(seed, k)``, so the window never straddles a cycle boundary and the
    schedule is reproducible without any mutable state.
    """

    kind = AwakenessStrategyType.RANDOM

    def __init__(self, cycle: int, duration: int, seed: int = 0) -> None:
        super().__init__(cycle, duration)
        self.seed = seed

    def window_start(self, cycle_index: int) -> int:
        """In-cycle position at which the awake window opens for ``cycle_index``."""
        rng = Random(f"{self.seed}:{cycle_index}")
        return rng.randrange(self.cycle - self.duration + 1)

    def is_awake(self, round_index: int) -> bool:
        cycle_index, position = divmod(round_index, self.cycle)
        start = self.window_start(cycle_index)
        return start <= position < start + self.duration


def create_awakeness_strategy(
    kind: AwakenessStrategyType, cycle: int, duration: int, rng: Random
) -> AwakenessStrategy:
    """Map an awakeness tag to a strategy instance.

    The fixed variant draws its phase from ``rng`` and the random variant its
    seed, so observers built one after another get distinct offsets.
    """
    validate_awakeness(cycle, duration)
    if kind == AwakenessStrategyType.FIXED:
        return FixedAwakenessStrategy(cycle, duration, phase=rng.randrange(cycle))
    if kind == AwakenessStrategyType.RANDOM:
        return RandomAwakenessStrategy(cycle, duration, seed=rng.getrandbits(32))
    raise ValueError(f"unsupported awakeness strategy: {kind!r}")
