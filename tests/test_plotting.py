from __future__ import annotations

from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from bandit_lab.envs.continuous import ConstantArm  # noqa: E402
from bandit_lab.plotting import plot_metrics, plot_simulations  # noqa: E402
from bandit_lab.simulation import monte_carlo  # noqa: E402
from bandit_lab.strategies import EpsilonGreedy, UCB1  # noqa: E402


def test_plot_simulations_saves_figure(tmp_path: Path) -> None:
    arms = [ConstantArm(0.0), ConstantArm(1.0)]
    simulations = [
        monte_carlo(5, 20, lambda: UCB1(arms=2, seed=0), arms),
        monte_carlo(5, 20, lambda: EpsilonGreedy(arms=2, epsilon=0.1, seed=0), arms),
    ]
    out_path = tmp_path / "comparison.png"

    plot_simulations(simulations, [2], title="Comparative", save_path=str(out_path), show=False)

    assert out_path.exists()
    assert out_path.stat().st_size > 0


def test_plot_metrics_saves_figure(tmp_path: Path) -> None:
    out_path = tmp_path / "accuracy.png"
    plot_metrics({"a": np.linspace(0.0, 1.0, 10)}, title="Accuracy", ylabel="P(best)", save_path=str(out_path), show=False)

    assert out_path.exists()


def test_plot_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        plot_simulations([], [1], show=False)
    with pytest.raises(ValueError):
        plot_metrics({}, title="x", ylabel="y", show=False)
