from __future__ import annotations

from typing import Sequence

from bandit_lab.errors import ConfigurationError
from bandit_lab.strategies import EpsilonGreedy, Softmax, Strategy, Thompson, UCB1, Uniform

STRATEGY_NAMES: tuple[str, ...] = ("epsilon-greedy", "softmax", "ucb1", "thompson", "uniform")

_ALIASES: dict[str, str] = {
    "epsilon-greedy": "epsilon-greedy",
    "epsilon_greedy": "epsilon-greedy",
    "epsilongreedy": "epsilon-greedy",
    "egreedy": "epsilon-greedy",
    "softmax": "softmax",
    "ucb1": "ucb1",
    "ucb": "ucb1",
    "thompson": "thompson",
    "thompson-sampling": "thompson",
    "uniform": "uniform",
}

_PARAM_COUNTS: dict[str, int] = {
    "epsilon-greedy": 1,
    "softmax": 1,
    "thompson": 1,
    "ucb1": 0,
    "uniform": 0,
}


def canonical_name(name: str) -> str:
    normalized = name.strip().lower()
    if normalized not in _ALIASES:
        raise ConfigurationError(f"unknown strategy: {name}")
    return _ALIASES[normalized]


def parse_params(raw: str | None) -> list[float]:
    if raw is None:
        return []
    values: list[float] = []
    for token in (chunk.strip() for chunk in raw.split(",")):
        if not token:
            continue
        try:
            values.append(float(token))
        except ValueError as exc:
            raise ConfigurationError(f"invalid strategy parameter: {token}") from exc
    return values


def build_strategy(
    name: str,
    arms: int,
    params: Sequence[float] = (),
    seed: int | None = None,
) -> Strategy:
    kind = canonical_name(name)
    if arms < 1:
        raise ConfigurationError("strategy needs at least 1 arm")

    expected = _PARAM_COUNTS[kind]
    if len(params) != expected:
        raise ConfigurationError(f"{kind} takes {expected} parameter(s), got {len(params)}")

    if kind == "epsilon-greedy":
        return EpsilonGreedy(arms=arms, epsilon=float(params[0]), seed=seed)
    if kind == "softmax":
        return Softmax(arms=arms, tau=float(params[0]), seed=seed)
    if kind == "thompson":
        return Thompson(arms=arms, alpha=float(params[0]), seed=seed)
    if kind == "ucb1":
        return UCB1(arms=arms, seed=seed)
    return Uniform(arms=arms, seed=seed)
