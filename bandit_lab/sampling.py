from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from bandit_lab.errors import ConfigurationError, SamplerError

_LOG4 = math.log(4.0)


@dataclass(slots=True)
class BetaSampler:
    """Beta variates by rejection, after R.C.H. Cheng (1978),
    "Generating Beta Variates with Nonintegral Shape Parameters".
    """

    seed: int | None = None
    rng: np.random.Generator | None = None
    max_iterations: int = 10_000
    _generator: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_iterations <= 0:
            raise ConfigurationError("max_iterations must be positive")
        self._generator = self.rng if self.rng is not None else np.random.default_rng(self.seed)

    def next_beta(self, alpha: float, beta: float) -> float:
        if not (alpha > 0.0 and beta > 0.0):
            raise ConfigurationError(f"beta shape parameters must be positive, got ({alpha}, {beta})")

        a = alpha + beta
        if min(alpha, beta) <= 1.0:
            b = max(1.0 / alpha, 1.0 / beta)
        else:
            b = math.sqrt((a - 2.0) / (2.0 * alpha * beta - a))
        c = alpha + 1.0 / b

        gen = self._generator
        for _ in range(self.max_iterations):
            u1 = float(gen.random())
            u2 = float(gen.random())
            if u1 <= 0.0 or u2 <= 0.0:
                continue

            v = b * math.log(u1 / (1.0 - u1))
            try:
                w = alpha * math.exp(v)
            except OverflowError:
                continue
            if math.isinf(w):
                continue

            if a * math.log(a / (beta + w)) + c * v - _LOG4 >= math.log(u1 * u1 * u2):
                return w / (beta + w)

        raise SamplerError(
            f"no beta variate accepted after {self.max_iterations} iterations for ({alpha}, {beta})"
        )
