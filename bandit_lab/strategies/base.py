from __future__ import annotations

from typing import Callable, Protocol

import numpy as np
from numpy.typing import NDArray

from bandit_lab.counters import Counters
from bandit_lab.errors import ArmIndexError, ConfigurationError


class Strategy(Protocol):
    counters: Counters

    @property
    def arms(self) -> int:
        ...

    def select_arm(self) -> int:
        ...

    def update(self, arm: int, reward: float) -> None:
        ...

    def reset(self) -> None:
        ...

    def init(self, snapshot: Counters) -> None:
        ...


StrategyFactory = Callable[[], Strategy]


def validate_arms(arms: int) -> None:
    if arms < 1:
        raise ConfigurationError("strategy needs at least 1 arm")


def check_arm(arm: int, arms: int) -> int:
    if arm < 1 or arm > arms:
        raise ArmIndexError(f"selected arm {arm} outside [1, {arms}]")
    return arm


def random_argmax(scores: NDArray[np.float64], rng: np.random.Generator) -> int:
    """0-indexed position of the maximum, ties broken uniformly at random."""
    best = np.flatnonzero(scores == np.max(scores))
    if best.size == 1:
        return int(best[0])
    return int(best[int(rng.integers(best.size))])


class CountersStrategy:
    """Forwards the learning half of the strategy contract to ``counters``.

    Subclasses own one ``Counters`` and implement ``_choose`` returning a
    0-indexed arm.
    """

    __slots__ = ()

    counters: Counters

    def _choose(self) -> int:
        raise NotImplementedError

    def select_arm(self) -> int:
        return check_arm(self._choose() + 1, self.counters.arms)

    def update(self, arm: int, reward: float) -> None:
        self.counters.update(arm, reward)

    def reset(self) -> None:
        self.counters.reset()

    def init(self, snapshot: Counters) -> None:
        self.counters.init(snapshot)
