from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from bandit_lab.errors import ArmIndexError, ConfigurationError
from bandit_lab.strategies.base import StrategyFactory

logger = logging.getLogger(__name__)

Arm = Callable[[], float]


@dataclass(slots=True)
class Simulation:
    """Monte Carlo results, one row per (simulation, trial) pair.

    Row ``s * trials + t`` holds trial ``t`` of simulation ``s``; the ``sim``
    and ``trial`` columns are 1-indexed.
    """

    sims: int
    trials: int
    description: str
    sim: NDArray[np.int_]
    trial: NDArray[np.int_]
    selected: NDArray[np.int_]
    reward: NDArray[np.float64]
    cumulative: NDArray[np.float64]

    @property
    def rows(self) -> int:
        return self.sims * self.trials


def monte_carlo(
    sims: int,
    trials: int,
    strategy_factory: StrategyFactory,
    arms: Sequence[Arm],
) -> Simulation:
    if sims <= 0:
        raise ConfigurationError("sims must be positive")
    if trials <= 0:
        raise ConfigurationError("trials must be positive")
    if len(arms) == 0:
        raise ConfigurationError("need at least one arm")

    n_rows = sims * trials
    sim_col = np.zeros(n_rows, dtype=np.int_)
    trial_col = np.zeros(n_rows, dtype=np.int_)
    selected_col = np.zeros(n_rows, dtype=np.int_)
    reward_col = np.zeros(n_rows, dtype=np.float64)
    cumulative_col = np.zeros(n_rows, dtype=np.float64)

    n_arms = len(arms)
    description = ""
    for s in range(sims):
        strategy = strategy_factory()
        description = str(strategy)
        if s == 0:
            logger.debug("running %d sims x %d trials of %s", sims, trials, description)

        running = 0.0
        for t in range(trials):
            selected = strategy.select_arm()
            if selected < 1 or selected > n_arms:
                raise ArmIndexError(f"{description} selected arm {selected} outside [1, {n_arms}]")
            reward = float(arms[selected - 1]())
            strategy.update(selected, reward)

            running += reward
            row = s * trials + t
            sim_col[row] = s + 1
            trial_col[row] = t + 1
            selected_col[row] = selected
            reward_col[row] = reward
            cumulative_col[row] = running

        close = getattr(strategy, "close", None)
        if callable(close):
            close()

    logger.debug("finished %d sims of %s", sims, description)
    return Simulation(
        sims=sims,
        trials=trials,
        description=description,
        sim=sim_col,
        trial=trial_col,
        selected=selected_col,
        reward=reward_col,
        cumulative=cumulative_col,
    )
