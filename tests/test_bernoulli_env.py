import numpy as np
import pytest

from bandit_lab.envs.bernoulli import BernoulliArm, bernoulli_arms, best_arms
from bandit_lab.envs.continuous import ConstantArm, GaussianArm
from bandit_lab.errors import ConfigurationError


def test_reproducible_pull_sequence_with_seed() -> None:
    means = [0.2, 0.8, 0.5]
    arm_sequence = [0, 1, 1, 2, 0, 2, 1, 0, 2, 2, 1, 0]

    arms_a = bernoulli_arms(means, seed=42)
    arms_b = bernoulli_arms(means, seed=42)

    out_a = [arms_a[arm]() for arm in arm_sequence]
    out_b = [arms_b[arm]() for arm in arm_sequence]

    assert out_a == out_b
    assert set(out_a) <= {0.0, 1.0}


def test_bernoulli_arm_empirical_mean() -> None:
    arm = BernoulliArm(mu=0.3, seed=1)
    draws = np.asarray([arm() for _ in range(20_000)])

    assert abs(float(np.mean(draws)) - 0.3) < 0.02


@pytest.mark.parametrize("means", [[], [0.2, 1.2], [-0.1]])
def test_bernoulli_arms_validate_means(means: list[float]) -> None:
    with pytest.raises(ConfigurationError):
        bernoulli_arms(means, seed=0)


def test_best_arms_are_one_indexed_and_keep_ties() -> None:
    assert best_arms([0.1, 0.3, 0.2, 0.8]) == [4]
    assert best_arms([0.5, 0.2, 0.5]) == [1, 3]


def test_gaussian_and_constant_arms() -> None:
    gaussian = GaussianArm(mu=2.0, sigma=0.5, seed=0)
    draws = np.asarray([gaussian() for _ in range(20_000)])

    assert abs(float(np.mean(draws)) - 2.0) < 0.02
    assert abs(float(np.std(draws)) - 0.5) < 0.02
    assert ConstantArm(0.7)() == 0.7
    with pytest.raises(ConfigurationError):
        GaussianArm(mu=0.0, sigma=-1.0)
