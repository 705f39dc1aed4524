from __future__ import annotations

from typing import Mapping, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from numpy.typing import NDArray

from bandit_lab.metrics import accuracy, cumulative, performance
from bandit_lab.simulation import Simulation


def draw_curves(ax: Axes, curves: Mapping[str, NDArray[np.float64]], title: str, ylabel: str) -> None:
    for label, curve in curves.items():
        x = np.arange(1, curve.size + 1)
        ax.plot(x, curve, linewidth=1.2, label=label)
    ax.set_title(title)
    ax.set_xlabel("trial")
    ax.set_ylabel(ylabel)
    if 0 < len(curves) <= 12:
        ax.legend(fontsize=8)


def plot_metrics(
    curves: Mapping[str, NDArray[np.float64]],
    title: str,
    ylabel: str,
    save_path: str | None = None,
    show: bool = True,
) -> None:
    if not curves:
        raise ValueError("curves is empty")

    fig, ax = plt.subplots(figsize=(8, 6), constrained_layout=True)
    draw_curves(ax, curves, title, ylabel)

    if save_path is not None:
        fig.savefig(save_path, dpi=160)

    if show:
        plt.show()
    else:
        plt.close(fig)


def plot_simulations(
    simulations: Sequence[Simulation],
    best_arms: Sequence[int],
    title: str | None = None,
    save_path: str | None = None,
    show: bool = True,
) -> None:
    if not simulations:
        raise ValueError("simulations is empty")

    fig, axes = plt.subplots(3, 1, figsize=(10, 11), constrained_layout=True)
    ax_acc, ax_perf, ax_cum = axes

    draw_curves(ax_acc, {s.description: accuracy(s, best_arms) for s in simulations}, "Accuracy", "P(selecting best arm)")
    ax_acc.set_ylim(-0.02, 1.02)
    draw_curves(ax_perf, {s.description: performance(s) for s in simulations}, "Performance", "average reward")
    draw_curves(ax_cum, {s.description: cumulative(s) for s in simulations}, "Cumulative", "cumulative reward")

    if title is not None:
        fig.suptitle(title)

    if save_path is not None:
        fig.savefig(save_path, dpi=160)

    if show:
        plt.show()
    else:
        plt.close(fig)
