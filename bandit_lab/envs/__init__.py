from bandit_lab.envs.bernoulli import BernoulliArm, bernoulli_arms, best_arms
from bandit_lab.envs.continuous import ConstantArm, GaussianArm

__all__ = ["BernoulliArm", "ConstantArm", "GaussianArm", "bernoulli_arms", "best_arms"]
