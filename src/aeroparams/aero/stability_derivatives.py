"""Stability derivative identifiers and coefficient values.

A stability derivative value is either a constant or a function of one or
more flight-state variables (angle of attack, Mach, ...). Both variants share
an ``evaluate`` method; only ``Constant`` converts to ``float``.

Typical usage example:
    from aeroparams.aero.stability_derivatives import (
        Constant, Interpolated, LinearTable, StabilityDerivative,
    )

    cl_alpha = Constant(4.44)
    cl_0 = Interpolated(LinearTable([-0.1, 0.0, 0.2], [0.0, 0.41, 1.2]), ("alpha",))
    cl_0.evaluate(alpha=0.05)
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np
import numpy.typing as npt


class StabilityDerivative(Enum):
    """Aerodynamic stability and control derivatives.

    The value of each member is the token used in parameter resource files.
    """

    # Lift
    CL_ALPHA = "CL_ALPHA"
    CL_0 = "CL_0"
    CL_Q = "CL_Q"
    CL_ALPHA_DOT = "CL_ALPHA_DOT"
    CL_D_ELEV = "CL_D_ELEV"
    CL_D_FLAP = "CL_D_FLAP"

    # Side force
    CY_BETA = "CY_BETA"
    CY_D_RUD = "CY_D_RUD"

    # Drag
    CD_ALPHA = "CD_ALPHA"
    CD_0 = "CD_0"
    CD_D_ELEV = "CD_D_ELEV"
    CD_D_FLAP = "CD_D_FLAP"
    CD_D_GEAR = "CD_D_GEAR"

    # Rolling moment
    CROLL_BETA = "CROLL_BETA"
    CROLL_P = "CROLL_P"
    CROLL_R = "CROLL_R"
    CROLL_D_AIL = "CROLL_D_AIL"
    CROLL_D_RUD = "CROLL_D_RUD"

    # Pitching moment
    CM_ALPHA = "CM_ALPHA"
    CM_0 = "CM_0"
    CM_Q = "CM_Q"
    CM_ALPHA_DOT = "CM_ALPHA_DOT"
    CM_D_ELEV = "CM_D_ELEV"
    CM_D_FLAP = "CM_D_FLAP"

    # Yawing moment
    CN_BETA = "CN_BETA"
    CN_P = "CN_P"
    CN_R = "CN_R"
    CN_D_AIL = "CN_D_AIL"
    CN_D_RUD = "CN_D_RUD"

    @classmethod
    def from_token(cls, token: str) -> "StabilityDerivative | None":
        """Look up a member by its file token, or None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass(frozen=True)
class Constant:
    """Coefficient with a fixed value.

    Examples:
        >>> c = Constant(4.44)
        >>> float(c)
        4.44
        >>> c.evaluate(alpha=0.1)
        4.44
    """

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @property
    def is_constant(self) -> bool:
        return True

    def evaluate(self, **flight_state: float) -> float:
        """Return the constant; flight state is ignored."""
        return self.value

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True)
class Interpolated:
    """Coefficient computed from flight-state variables.

    Attributes:
        function: Interpolating function called with the variables' values as
            positional arguments, in the order given by ``variables``.
        variables: Names of the flight-state variables the function depends on.

    Examples:
        >>> table = LinearTable([0.0, 0.2], [0.0, 1.0])
        >>> cl = Interpolated(table, ("alpha",))
        >>> cl.evaluate(alpha=0.1)
        0.5
    """

    function: Callable[..., float]
    variables: tuple[str, ...]

    def __post_init__(self) -> None:
        if not callable(self.function):
            raise TypeError("Interpolated coefficient requires a callable function")
        object.__setattr__(self, "variables", tuple(self.variables))
        if not self.variables:
            raise ValueError("Interpolated coefficient requires at least one variable")

    @property
    def is_constant(self) -> bool:
        return False

    def evaluate(self, **flight_state: float) -> float:
        """Evaluate the function at the given flight state.

        Raises:
            ValueError: If a required flight-state variable is missing.
        """
        missing = [name for name in self.variables if name not in flight_state]
        if missing:
            raise ValueError(f"Missing flight-state variables: {', '.join(missing)}")
        return float(self.function(*(flight_state[name] for name in self.variables)))

    def __float__(self) -> float:
        raise TypeError(
            f"Interpolated coefficient of {', '.join(self.variables)} has no single value; "
            "use evaluate()"
        )


Coefficient = Union[Constant, Interpolated]


def as_coefficient(value: "Coefficient | float") -> Coefficient:
    """Wrap plain numbers in ``Constant``; pass coefficients through.

    Raises:
        TypeError: If value is neither a coefficient nor a real number.
    """
    if isinstance(value, (Constant, Interpolated)):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
        raise TypeError(f"Expected a number or coefficient, got {type(value).__name__}")
    return Constant(float(value))


class LinearTable:
    """One-dimensional piecewise-linear lookup table.

    Values outside the breakpoint range are clamped to the end values.

    Examples:
        >>> table = LinearTable([0.0, 10.0], [0.0, 1.0])
        >>> table(5.0)
        0.5
        >>> table(20.0)
        1.0
    """

    def __init__(self, breakpoints: Sequence[float], values: Sequence[float]) -> None:
        """Initialize table.

        Args:
            breakpoints: Strictly increasing independent-variable samples.
            values: Coefficient value at each breakpoint.

        Raises:
            ValueError: If lengths differ, the table is empty, or breakpoints
                are not strictly increasing.
        """
        self.breakpoints: npt.NDArray[np.float64] = np.asarray(breakpoints, dtype=np.float64)
        self.values: npt.NDArray[np.float64] = np.asarray(values, dtype=np.float64)

        if self.breakpoints.ndim != 1 or self.breakpoints.size == 0:
            raise ValueError("Breakpoints must be a non-empty 1-D sequence")
        if self.breakpoints.shape != self.values.shape:
            raise ValueError(
                f"Breakpoints ({self.breakpoints.size}) and values ({self.values.size}) "
                "must have the same length"
            )
        if np.any(np.diff(self.breakpoints) <= 0):
            raise ValueError("Breakpoints must be strictly increasing")

    def __call__(self, x: float) -> float:
        return float(np.interp(x, self.breakpoints, self.values))

    def __repr__(self) -> str:
        return f"LinearTable(breakpoints={self.breakpoints.tolist()}, values={self.values.tolist()})"
