import math

import pytest

from bandit_lab.errors import ConfigurationError, SamplerError
from bandit_lab.sampling import BetaSampler


def test_beta_moments_converge() -> None:
    sampler = BetaSampler(seed=123)
    alpha, beta = 15.0, 4.0
    n = 1_000_000
    expectation = alpha / (alpha + beta)
    variance = alpha * beta / ((alpha + beta) ** 2 * (alpha + beta + 1.0))

    total = 0.0
    total_sq = 0.0
    for _ in range(n):
        x = sampler.next_beta(alpha, beta)
        total += x
        total_sq += x * x
    mean = total / n
    second = total_sq / n

    assert abs(mean - expectation) <= 1e-3
    assert abs((second - mean * mean) - variance) <= 1e-3


def test_beta_is_reproducible_with_seed() -> None:
    a = BetaSampler(seed=7)
    b = BetaSampler(seed=7)

    out_a = [a.next_beta(2.0, 5.0) for _ in range(20)]
    out_b = [b.next_beta(2.0, 5.0) for _ in range(20)]

    assert out_a == out_b


@pytest.mark.parametrize("alpha,beta", [(0.5, 0.5), (1.0, 1.0), (0.3, 7.0), (40.0, 2.0)])
def test_beta_samples_lie_in_unit_interval(alpha: float, beta: float) -> None:
    sampler = BetaSampler(seed=3)
    draws = [sampler.next_beta(alpha, beta) for _ in range(2000)]

    assert all(0.0 <= x <= 1.0 for x in draws)
    assert all(not math.isnan(x) for x in draws)


@pytest.mark.parametrize("alpha,beta", [(0.0, 1.0), (1.0, -2.0), (float("nan"), 1.0)])
def test_beta_rejects_non_positive_shapes(alpha: float, beta: float) -> None:
    with pytest.raises(ConfigurationError):
        BetaSampler(seed=0).next_beta(alpha, beta)


def test_beta_gives_up_after_max_iterations() -> None:
    class ZeroGenerator:
        def random(self) -> float:
            return 0.0

    sampler = BetaSampler(rng=ZeroGenerator(), max_iterations=5)  # type: ignore[arg-type]
    with pytest.raises(SamplerError):
        sampler.next_beta(2.0, 3.0)
