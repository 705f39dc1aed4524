from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from bandit_lab.errors import ConfigurationError, SimulationError
from bandit_lab.simulation import Simulation


@dataclass(slots=True)
class SimulationSummary:
    description: str
    sims: int
    trials: int
    final_accuracy: float
    final_performance: float
    final_cumulative: float


def _by_trial(simulation: Simulation, column: NDArray[np.generic]) -> NDArray[np.generic]:
    """Reshape a result column to (sims, trials), checking the trial index."""
    if column.size != simulation.rows:
        raise SimulationError(f"column has {column.size} rows, expected {simulation.rows}")
    expected = np.tile(np.arange(1, simulation.trials + 1), simulation.sims)
    if not np.array_equal(simulation.trial, expected):
        raise SimulationError("impossible trial access: trial index does not match row layout")
    return column.reshape(simulation.sims, simulation.trials)


def accuracy(simulation: Simulation, best_arms: Sequence[int]) -> NDArray[np.float64]:
    if len(best_arms) == 0:
        raise ConfigurationError("best_arms must be non-empty")
    selected = _by_trial(simulation, simulation.selected)
    hits = np.isin(selected, np.asarray(best_arms, dtype=np.int_))
    return np.mean(hits, axis=0, dtype=np.float64)


def performance(simulation: Simulation) -> NDArray[np.float64]:
    rewards = _by_trial(simulation, simulation.reward)
    return np.mean(rewards, axis=0, dtype=np.float64)


def cumulative(simulation: Simulation) -> NDArray[np.float64]:
    totals = _by_trial(simulation, simulation.cumulative)
    return np.mean(totals, axis=0, dtype=np.float64)


def summarize_simulation(simulation: Simulation, best_arms: Sequence[int]) -> SimulationSummary:
    return SimulationSummary(
        description=simulation.description,
        sims=simulation.sims,
        trials=simulation.trials,
        final_accuracy=float(accuracy(simulation, best_arms)[-1]),
        final_performance=float(performance(simulation)[-1]),
        final_cumulative=float(cumulative(simulation)[-1]),
    )
