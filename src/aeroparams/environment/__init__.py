"""Environment collaborators for the parameter model."""

from aeroparams.environment.environment import GRAVITY_FT_S2, Environment, GravitySource

__all__ = ["GRAVITY_FT_S2", "Environment", "GravitySource"]
