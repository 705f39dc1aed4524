from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from bandit_lab.counters import Counters
from bandit_lab.errors import ConfigurationError, NumericalError
from bandit_lab.strategies.base import CountersStrategy, random_argmax, validate_arms


def softmax_probabilities(values: NDArray[np.float64], tau: float) -> NDArray[np.float64]:
    """Boltzmann weights exp(v_i / tau), normalized. Shifted by max(values)."""
    if tau <= 0.0:
        raise ConfigurationError("tau must be positive to form probabilities")
    scores = np.asarray(values, dtype=np.float64)
    with np.errstate(over="ignore", invalid="ignore"):
        weights = np.exp((scores - np.max(scores)) / tau)
        normalizer = float(np.sum(weights))
    if not np.isfinite(normalizer) or normalizer <= 0.0:
        raise NumericalError(f"softmax normalizer is {normalizer} for tau={tau}")
    return weights / normalizer


@dataclass(slots=True)
class Softmax(CountersStrategy):
    """Selects arms in proportion to exp(value / tau).

    tau == 0 is the greedy limit: argmax with random tie-break.
    """

    arms: int
    tau: float
    seed: int | None = None
    counters: Counters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_arms(self.arms)
        if not self.tau >= 0.0:
            raise ConfigurationError("tau must be in [0, inf)")
        self.counters = Counters.new(self.arms, seed=self.seed)

    def probabilities(self) -> NDArray[np.float64]:
        return softmax_probabilities(self.counters.values, self.tau)

    def _choose(self) -> int:
        rng = self.counters.rng
        if self.tau == 0.0:
            return random_argmax(self.counters.values, rng)

        probs = self.probabilities()
        z = float(rng.random())
        cumulative = 0.0
        for arm, prob in enumerate(probs):
            cumulative += float(prob)
            if cumulative > z:
                return arm
        return self.arms - 1

    def __str__(self) -> str:
        return f"Softmax(tau={self.tau:.2f})"
