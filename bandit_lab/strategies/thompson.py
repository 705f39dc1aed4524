from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from bandit_lab.counters import Counters
from bandit_lab.errors import ConfigurationError
from bandit_lab.sampling import BetaSampler
from bandit_lab.strategies.base import CountersStrategy, random_argmax, validate_arms


@dataclass(slots=True)
class Thompson(CountersStrategy):
    """Thompson sampling over Beta(alpha + successes, alpha + failures)
    posteriors, where successes are recovered as value * count.
    """

    arms: int
    alpha: float
    seed: int | None = None
    counters: Counters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_arms(self.arms)
        if not self.alpha > 0.0:
            raise ConfigurationError("alpha must be in (0, inf)")
        self.counters = Counters.new(self.arms, seed=self.seed)

    def _choose(self) -> int:
        counts = self.counters.counts.astype(np.float64)
        # rewards outside [0, 1] would push a shape parameter to zero or below
        successes = np.clip(self.counters.values * counts, 0.0, counts)
        failures = counts - successes

        # the generator is swapped on init, so bind the sampler per draw
        sampler = BetaSampler(rng=self.counters.rng)
        theta = np.empty(self.arms, dtype=np.float64)
        for arm in range(self.arms):
            theta[arm] = sampler.next_beta(self.alpha + float(successes[arm]), self.alpha + float(failures[arm]))
        return random_argmax(theta, self.counters.rng)

    def __str__(self) -> str:
        return f"Thompson(alpha={self.alpha:.2f})"
