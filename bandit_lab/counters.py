from __future__ import annotations

import threading
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from bandit_lab.errors import ArmIndexError, ConfigurationError


@dataclass(slots=True)
class Counters:
    """Per-arm pull counts and running mean rewards.

    Arms are addressed 1-indexed by callers. Mutation goes through the
    instance lock; readers such as ``select_arm`` access ``counts`` and
    ``values`` without it and may observe a slightly stale state.
    """

    arms: int
    counts: NDArray[np.int_]
    values: NDArray[np.float64]
    rng: np.random.Generator
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @classmethod
    def new(
        cls,
        arms: int,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> "Counters":
        generator = rng if rng is not None else np.random.default_rng(seed)
        return cls(
            arms=arms,
            counts=np.zeros(arms, dtype=np.int_),
            values=np.zeros(arms, dtype=np.float64),
            rng=generator,
        )

    @property
    def total_pulls(self) -> int:
        return int(np.sum(self.counts))

    def update(self, arm: int, reward: float) -> None:
        if arm < 1 or arm > self.arms:
            raise ArmIndexError(f"arm {arm} out of range [1, {self.arms}]")

        idx = arm - 1
        with self._lock:
            self.counts[idx] += 1
            count = float(self.counts[idx])
            self.values[idx] = (self.values[idx] * (count - 1.0) + float(reward)) / count

    def init(self, snapshot: "Counters") -> None:
        if snapshot.arms == 0:
            raise ConfigurationError("snapshot needs at least 1 arm")
        if snapshot.arms != self.arms:
            raise ConfigurationError(f"cannot init {self.arms} arms with {snapshot.arms} arms")
        if len(snapshot.counts) != snapshot.arms or len(snapshot.values) != snapshot.arms:
            raise ConfigurationError(
                f"snapshot has {len(snapshot.counts)} counts and {len(snapshot.values)} values for {snapshot.arms} arms"
            )

        counts = np.array(snapshot.counts, dtype=np.int_, copy=True)
        values = np.array(snapshot.values, dtype=np.float64, copy=True)
        with self._lock:
            self.counts = counts
            self.values = values
            self.rng = snapshot.rng

    def reset(self) -> None:
        with self._lock:
            self.counts = np.zeros(self.arms, dtype=np.int_)
            self.values = np.zeros(self.arms, dtype=np.float64)

    def copy(self) -> "Counters":
        with self._lock:
            return Counters(
                arms=self.arms,
                counts=self.counts.copy(),
                values=self.values.copy(),
                rng=self.rng,
            )
