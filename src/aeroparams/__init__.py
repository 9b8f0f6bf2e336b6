"""Static parameter model for fixed-wing flight-dynamics simulation.

Typical usage example:
    from aeroparams import Aircraft

    aircraft = Aircraft.default()
    loaded = Aircraft.load("Navion")
"""

from aeroparams.aero import Constant, Interpolated, LinearTable, StabilityDerivative, WingGeometryField
from aeroparams.aircraft import Aircraft, MassPropertyField, MissingParameterError, ParameterRegistry
from aeroparams.core.config import ModelConfig
from aeroparams.environment import Environment

__version__ = "0.1.0"

__all__ = [
    "Aircraft",
    "Constant",
    "Environment",
    "Interpolated",
    "LinearTable",
    "MassPropertyField",
    "MissingParameterError",
    "ModelConfig",
    "ParameterRegistry",
    "StabilityDerivative",
    "WingGeometryField",
]
