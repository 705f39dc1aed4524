from bandit_lab.strategies.base import Strategy, StrategyFactory
from bandit_lab.strategies.epsilon_greedy import EpsilonGreedy
from bandit_lab.strategies.softmax import Softmax
from bandit_lab.strategies.thompson import Thompson
from bandit_lab.strategies.ucb1 import UCB1
from bandit_lab.strategies.uniform import Uniform

__all__ = ["Strategy", "StrategyFactory", "EpsilonGreedy", "Softmax", "Thompson", "UCB1", "Uniform"]
