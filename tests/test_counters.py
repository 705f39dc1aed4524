import numpy as np
import pytest

from bandit_lab.counters import Counters
from bandit_lab.errors import ArmIndexError, ConfigurationError


def test_new_counters_are_zero() -> None:
    counters = Counters.new(3, seed=0)

    assert counters.arms == 3
    assert counters.counts.tolist() == [0, 0, 0]
    assert counters.values.tolist() == [0.0, 0.0, 0.0]
    assert counters.total_pulls == 0


def test_update_increments_once_and_keeps_running_mean() -> None:
    counters = Counters.new(2, seed=0)
    counters.update(1, 1.0)
    counters.update(1, 0.0)
    counters.update(1, 1.0)
    counters.update(2, 0.25)

    assert counters.counts.tolist() == [3, 1]
    assert counters.values[0] == pytest.approx(2.0 / 3.0)
    assert counters.values[1] == pytest.approx(0.25)
    assert counters.total_pulls == 4


@pytest.mark.parametrize("arm", [0, 3, -1])
def test_update_rejects_out_of_range_arm(arm: int) -> None:
    counters = Counters.new(2, seed=0)
    with pytest.raises(ArmIndexError):
        counters.update(arm, 1.0)


def test_init_replaces_state_without_aliasing() -> None:
    counters = Counters.new(2, seed=0)
    snapshot = Counters.new(2, seed=1)
    snapshot.update(2, 1.0)

    counters.init(snapshot)
    assert counters.counts.tolist() == [0, 1]
    assert counters.values.tolist() == [0.0, 1.0]
    assert counters.rng is snapshot.rng

    snapshot.update(1, 1.0)
    assert counters.counts.tolist() == [0, 1]


def test_init_rejects_mismatched_arms() -> None:
    counters = Counters.new(2, seed=0)
    with pytest.raises(ConfigurationError):
        counters.init(Counters.new(3, seed=0))


def test_init_rejects_zero_arm_snapshot() -> None:
    counters = Counters.new(2, seed=0)
    with pytest.raises(ConfigurationError):
        counters.init(Counters.new(0, seed=0))


def test_init_rejects_snapshot_with_wrong_array_lengths() -> None:
    counters = Counters.new(2, seed=0)
    snapshot = Counters.new(2, seed=0)
    snapshot.counts = np.asarray([1, 2, 3], dtype=np.int_)

    with pytest.raises(ConfigurationError):
        counters.init(snapshot)
    assert counters.counts.tolist() == [0, 0]


def test_reset_zeroes_but_keeps_arms() -> None:
    counters = Counters.new(4, seed=0)
    for arm in [1, 2, 2, 4]:
        counters.update(arm, 1.0)

    counters.reset()

    assert counters.arms == 4
    assert np.array_equal(counters.counts, np.zeros(4, dtype=np.int_))
    assert np.array_equal(counters.values, np.zeros(4, dtype=np.float64))


def test_copy_is_independent() -> None:
    counters = Counters.new(2, seed=0)
    counters.update(1, 1.0)
    clone = counters.copy()
    counters.update(1, 0.0)

    assert clone.counts.tolist() == [1, 0]
    assert clone.values.tolist() == [1.0, 0.0]
