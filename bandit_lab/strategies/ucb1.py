from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from bandit_lab.counters import Counters
from bandit_lab.strategies.base import CountersStrategy, random_argmax, validate_arms


@dataclass(slots=True)
class UCB1(CountersStrategy):
    arms: int
    seed: int | None = None
    counters: Counters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_arms(self.arms)
        self.counters = Counters.new(self.arms, seed=self.seed)

    def _choose(self) -> int:
        counts = self.counters.counts
        values = self.counters.values

        unplayed = np.flatnonzero(counts == 0)
        if unplayed.size > 0:
            return int(unplayed[0])

        total = float(np.sum(counts))
        bonus = np.sqrt(2.0 * math.log(total) / counts.astype(np.float64))
        return random_argmax(values + bonus, self.counters.rng)

    def __str__(self) -> str:
        return "UCB1"
