from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from bandit_lab.errors import ConfigurationError


@dataclass(slots=True)
class BernoulliArm:
    mu: float
    seed: int | None = None
    rng: np.random.Generator | None = None
    _generator: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not (0.0 <= self.mu <= 1.0):
            raise ConfigurationError("mu must be in [0, 1]")
        self._generator = self.rng if self.rng is not None else np.random.default_rng(self.seed)

    def __call__(self) -> float:
        return 1.0 if float(self._generator.random()) < self.mu else 0.0


def bernoulli_arms(
    means: list[float] | NDArray[np.float64],
    seed: int | None = None,
) -> list[BernoulliArm]:
    mu = np.asarray(means, dtype=np.float64)
    if mu.ndim != 1 or mu.size == 0:
        raise ConfigurationError("means must be a non-empty 1D array")
    if np.any((mu < 0.0) | (mu > 1.0)):
        raise ConfigurationError("means must be in [0, 1]")

    children = np.random.SeedSequence(seed).spawn(mu.size)
    return [BernoulliArm(mu=float(m), rng=np.random.default_rng(child)) for m, child in zip(mu, children)]


def best_arms(means: list[float] | NDArray[np.float64]) -> list[int]:
    """1-indexed arms tied for the highest mean."""
    mu = np.asarray(means, dtype=np.float64)
    if mu.size == 0:
        raise ConfigurationError("means must be non-empty")
    return [int(i) + 1 for i in np.flatnonzero(mu == np.max(mu))]
