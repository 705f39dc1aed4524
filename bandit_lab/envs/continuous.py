from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from bandit_lab.errors import ConfigurationError


@dataclass(slots=True)
class GaussianArm:
    mu: float
    sigma: float
    seed: int | None = None
    rng: np.random.Generator | None = None
    _generator: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.sigma < 0.0:
            raise ConfigurationError("sigma must be non-negative")
        self._generator = self.rng if self.rng is not None else np.random.default_rng(self.seed)

    def __call__(self) -> float:
        return float(self._generator.normal(self.mu, self.sigma))


@dataclass(slots=True)
class ConstantArm:
    value: float

    def __call__(self) -> float:
        return self.value
