"""Bandit Lab: multi-armed bandit strategies for online A/B experiments."""

from bandit_lab.counters import Counters
from bandit_lab.delayed import DelayedStrategy, SimulatedDelayedStrategy
from bandit_lab.registry import build_strategy
from bandit_lab.simulation import Simulation, monte_carlo
from bandit_lab.strategies import EpsilonGreedy, Softmax, Thompson, UCB1, Uniform

__all__ = [
    "Counters",
    "DelayedStrategy",
    "SimulatedDelayedStrategy",
    "build_strategy",
    "Simulation",
    "monte_carlo",
    "EpsilonGreedy",
    "Softmax",
    "Thompson",
    "UCB1",
    "Uniform",
]
