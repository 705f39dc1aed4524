from __future__ import annotations

from dataclasses import dataclass, field

from bandit_lab.counters import Counters
from bandit_lab.errors import ConfigurationError
from bandit_lab.strategies.base import CountersStrategy, random_argmax, validate_arms


@dataclass(slots=True)
class EpsilonGreedy(CountersStrategy):
    """Explores a uniformly random arm with probability epsilon, otherwise
    exploits one of the arms tied for the best running mean.
    """

    arms: int
    epsilon: float
    seed: int | None = None
    counters: Counters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_arms(self.arms)
        if not (0.0 <= self.epsilon <= 1.0):
            raise ConfigurationError("epsilon must be in [0, 1]")
        self.counters = Counters.new(self.arms, seed=self.seed)

    def _choose(self) -> int:
        rng = self.counters.rng
        if float(rng.random()) >= self.epsilon:
            return random_argmax(self.counters.values, rng)
        return int(rng.integers(self.arms))

    def __str__(self) -> str:
        return f"EpsilonGreedy(epsilon={self.epsilon:.2f})"
