from __future__ import annotations


class BanditError(Exception):
    pass


class ConfigurationError(BanditError, ValueError):
    pass


class SnapshotError(ConfigurationError):
    pass


class NumericalError(BanditError, ArithmeticError):
    pass


class SamplerError(NumericalError):
    pass


class ArmIndexError(BanditError, IndexError):
    pass


class SimulationError(BanditError, RuntimeError):
    pass
