"""Aerodynamic parameter identifiers and coefficient values."""

from aeroparams.aero.stability_derivatives import (
    Coefficient,
    Constant,
    Interpolated,
    LinearTable,
    StabilityDerivative,
    as_coefficient,
)
from aeroparams.aero.wing_geometry import WingGeometryField

__all__ = [
    "Coefficient",
    "Constant",
    "Interpolated",
    "LinearTable",
    "StabilityDerivative",
    "WingGeometryField",
    "as_coefficient",
]
