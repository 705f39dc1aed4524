from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path

from bandit_lab.delayed import SimulatedDelayedStrategy
from bandit_lab.envs.bernoulli import bernoulli_arms, best_arms
from bandit_lab.metrics import summarize_simulation
from bandit_lab.registry import build_strategy
from bandit_lab.run import parse_means_list
from bandit_lab.simulation import monte_carlo
from bandit_lab.strategies.base import Strategy

GRID: dict[str, list[list[float]]] = {
    "epsilon-greedy": [[0.1], [0.2], [0.3], [0.4], [0.5]],
    "softmax": [[0.1], [0.2], [0.3], [0.4], [0.5]],
    "ucb1": [[]],
    "thompson": [[1.0], [2.0], [10.0], [20.0], [100.0]],
}


def parse_int_list(text: str) -> list[int]:
    return [int(part.strip()) for part in text.split(",") if part.strip()]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run bandit hyperparameter sweep and export CSV")
    parser.add_argument("--strategies", type=str, default="epsilon-greedy,softmax,ucb1,thompson")
    parser.add_argument("--means", type=str, default="0.1,0.3,0.2,0.8")
    parser.add_argument("--delays", type=str, default="1")
    parser.add_argument("--sims", type=int, default=1000)
    parser.add_argument("--trials", type=int, default=300)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", type=str, default="experiments/sweep_results.csv")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    names = [part.strip() for part in args.strategies.split(",") if part.strip()]
    delays = parse_int_list(args.delays)
    means = parse_means_list(args.means)
    best = best_arms(means)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["strategy", "delay", "sims", "trials", "final_accuracy", "final_performance", "final_cumulative"]

    combo_idx = 0
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for name in names:
            for params in GRID[name]:
                for delay in delays:
                    combo_idx += 1
                    base_seed = args.seed + 100_000 * combo_idx
                    arms = bernoulli_arms(means, seed=base_seed)
                    seeds = iter(range(base_seed, base_seed + args.sims))

                    def factory() -> Strategy:
                        strategy = build_strategy(name, int(means.size), params, seed=next(seeds))
                        if delay == 1:
                            return strategy
                        return SimulatedDelayedStrategy(strategy=strategy, limit=delay)

                    simulation = monte_carlo(args.sims, args.trials, factory, arms)
                    summary = summarize_simulation(simulation, best)

                    writer.writerow(
                        {
                            "strategy": summary.description,
                            "delay": delay,
                            "sims": summary.sims,
                            "trials": summary.trials,
                            "final_accuracy": f"{summary.final_accuracy:.4f}",
                            "final_performance": f"{summary.final_performance:.4f}",
                            "final_cumulative": f"{summary.final_cumulative:.3f}",
                        }
                    )

                    print(
                        "finished "
                        f"strategy={summary.description} delay={delay} "
                        f"acc={summary.final_accuracy:.3f} cum={summary.final_cumulative:.1f}"
                    )

    print(f"saved: {output_path}")


if __name__ == "__main__":
    main()
