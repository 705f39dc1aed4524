from __future__ import annotations

import argparse
import csv
import itertools
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from bandit_lab.delayed import SimulatedDelayedStrategy
from bandit_lab.envs.bernoulli import bernoulli_arms, best_arms
from bandit_lab.errors import ConfigurationError
from bandit_lab.metrics import SimulationSummary, accuracy, cumulative, performance, summarize_simulation
from bandit_lab.plotting import plot_simulations
from bandit_lab.registry import STRATEGY_NAMES, build_strategy, canonical_name, parse_params
from bandit_lab.simulation import Simulation, monte_carlo
from bandit_lab.strategies.base import Strategy, StrategyFactory

logger = logging.getLogger(__name__)

DEFAULT_PARAMS: dict[str, str] = {"epsilon-greedy": "0.1", "softmax": "0.1", "thompson": "1.0"}


@dataclass(slots=True)
class RunConfig:
    strategy: str
    params: str | None
    means: str
    sims: int
    trials: int
    seed: int
    delay: int | None
    plot: bool
    save_plot: str | None
    no_show: bool
    output_csv: str | None
    output_json: bool
    log_level: str = "WARNING"


def parse_means_list(raw: str) -> NDArray[np.float64]:
    parts = [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
    if not parts:
        raise ConfigurationError("means must contain at least one numeric value")

    values: list[float] = []
    for token in parts:
        try:
            values.append(float(token))
        except ValueError as exc:
            raise ConfigurationError(f"invalid value in means: {token}") from exc

    means = np.asarray(values, dtype=np.float64)
    if np.any((means < 0.0) | (means > 1.0)):
        raise ConfigurationError("means values must be in [0, 1]")
    return means


def make_factory(config: RunConfig, n_arms: int) -> StrategyFactory:
    """One fresh strategy per simulation, seeded ``seed, seed + 1, ...``."""
    params = parse_params(config.params)
    # validate eagerly so a bad configuration fails before the first simulation
    build_strategy(config.strategy, n_arms, params)
    if config.delay is not None and config.delay < 1:
        raise ConfigurationError("delay must be at least 1")

    seeds = itertools.count(config.seed)

    def factory() -> Strategy:
        strategy = build_strategy(config.strategy, n_arms, params, seed=next(seeds))
        if config.delay is None:
            return strategy
        return SimulatedDelayedStrategy(strategy=strategy, limit=config.delay)

    return factory


def run_simulation(config: RunConfig) -> tuple[Simulation, NDArray[np.float64]]:
    means = parse_means_list(config.means)
    arms = bernoulli_arms(means, seed=config.seed)
    factory = make_factory(config, int(means.size))
    simulation = monte_carlo(config.sims, config.trials, factory, arms)
    return simulation, means


def write_curves_csv(path: str, simulation: Simulation, best: list[int]) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    acc = accuracy(simulation, best)
    perf = performance(simulation)
    cum = cumulative(simulation)

    fieldnames = ["trial", "accuracy", "performance", "cumulative"]
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for t in range(simulation.trials):
            writer.writerow(
                {
                    "trial": t + 1,
                    "accuracy": f"{float(acc[t]):.6f}",
                    "performance": f"{float(perf[t]):.6f}",
                    "cumulative": f"{float(cum[t]):.6f}",
                }
            )


def summary_to_json_record(summary: SimulationSummary) -> dict[str, Any]:
    return {
        "strategy": summary.description,
        "sims": summary.sims,
        "trials": summary.trials,
        "final_accuracy": summary.final_accuracy,
        "final_performance": summary.final_performance,
        "final_cumulative": summary.final_cumulative,
    }


def parse_args(argv: list[str] | None = None) -> RunConfig:
    parser = argparse.ArgumentParser(description="Monte Carlo bandit strategy runner")
    parser.add_argument("--strategy", default="epsilon-greedy", type=canonical_name, choices=STRATEGY_NAMES)
    parser.add_argument("--params", type=str, default=None)
    parser.add_argument("--means", type=str, default="0.1,0.3,0.2,0.8")
    parser.add_argument("--sims", type=int, default=5000)
    parser.add_argument("--trials", type=int, default=300)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--delay", type=int, default=None)
    parser.add_argument("--plot", action="store_true")
    parser.add_argument("--save-plot", type=str, default=None)
    parser.add_argument("--no-show", action="store_true")
    parser.add_argument("--output-csv", type=str, default=None)
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    return RunConfig(
        strategy=args.strategy,
        params=args.params if args.params is not None else DEFAULT_PARAMS.get(args.strategy),
        means=args.means,
        sims=args.sims,
        trials=args.trials,
        seed=args.seed,
        delay=args.delay,
        plot=bool(args.plot),
        save_plot=args.save_plot,
        no_show=bool(args.no_show),
        output_csv=args.output_csv,
        output_json=bool(args.json),
        log_level=args.log_level,
    )


def _print_summary(config: RunConfig, summary: SimulationSummary, best: list[int]) -> None:
    print(f"strategy={summary.description} sims={summary.sims} trials={summary.trials} seed={config.seed}")
    print(f"means={config.means} best_arms={best}")
    print(
        "final "
        f"accuracy={summary.final_accuracy:.4f} "
        f"performance={summary.final_performance:.4f} "
        f"cumulative={summary.final_cumulative:.2f}"
    )


def main(argv: list[str] | None = None) -> None:
    config = parse_args(argv)
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    simulation, means = run_simulation(config)
    best = best_arms(means)
    summary = summarize_simulation(simulation, best)
    logger.info("simulated %s", summary.description)

    if config.output_json:
        payload = {"means": [float(m) for m in means.tolist()], "best_arms": best, **summary_to_json_record(summary)}
        print(json.dumps(payload, ensure_ascii=False))
    else:
        _print_summary(config, summary, best)

    if config.output_csv is not None:
        write_curves_csv(config.output_csv, simulation, best)
        print(f"saved_csv={config.output_csv}")

    if config.plot:
        plot_simulations(
            [simulation],
            best,
            title=f"{summary.description} | means={config.means}",
            save_path=config.save_plot,
            show=not config.no_show,
        )
        if config.save_plot is not None:
            print(f"saved_plot={config.save_plot}")


if __name__ == "__main__":
    main()
