from __future__ import annotations

from dataclasses import dataclass, field

from bandit_lab.counters import Counters
from bandit_lab.strategies.base import CountersStrategy, validate_arms


@dataclass(slots=True)
class Uniform(CountersStrategy):
    arms: int
    seed: int | None = None
    counters: Counters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_arms(self.arms)
        self.counters = Counters.new(self.arms, seed=self.seed)

    def _choose(self) -> int:
        return int(self.counters.rng.integers(self.arms))

    def __str__(self) -> str:
        return "Uniform"
