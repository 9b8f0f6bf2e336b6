"""Mass property identifiers and the derived total mass.

Weights are in lbf, inertias in slug·ft², and total mass in slugs.
"""

from enum import Enum


class MassPropertyField(Enum):
    """Mass and inertia quantities; values are resource file tokens."""

    # Center of gravity
    CG_X = "CG_X"
    CG_Y = "CG_Y"
    CG_Z = "CG_Z"

    # Moments and product of inertia
    J_X = "J_X"
    J_Y = "J_Y"
    J_Z = "J_Z"
    J_XZ = "J_XZ"

    # Weights
    WEIGHT_EMPTY = "WEIGHT_EMPTY"
    WEIGHT_FUEL = "WEIGHT_FUEL"
    WEIGHT_PAYLOAD = "WEIGHT_PAYLOAD"

    # Derived from the weights and gravity
    TOTAL_MASS = "TOTAL_MASS"

    @classmethod
    def from_token(cls, token: str) -> "MassPropertyField | None":
        """Look up a member by its file token, or None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


WEIGHT_FIELDS = (
    MassPropertyField.WEIGHT_EMPTY,
    MassPropertyField.WEIGHT_FUEL,
    MassPropertyField.WEIGHT_PAYLOAD,
)


def compute_total_mass(
    weight_empty: float, weight_fuel: float, weight_payload: float, gravity_z: float
) -> float:
    """Compute total mass from weights.

    Args:
        weight_empty: Empty weight (lbf).
        weight_fuel: Fuel weight (lbf).
        weight_payload: Payload weight (lbf).
        gravity_z: Vertical component of gravity (ft/s²).

    Returns:
        Total mass (slug).

    Raises:
        ValueError: If gravity_z is zero.

    Examples:
        >>> compute_total_mass(1780.0, 360.0, 610.0, 32.174)  # doctest: +ELLIPSIS
        85.47...
    """
    if gravity_z == 0:
        raise ValueError("Vertical gravity component must be non-zero")
    return (weight_empty + weight_fuel + weight_payload) / gravity_z
