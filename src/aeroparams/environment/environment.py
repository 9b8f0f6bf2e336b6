"""Environment collaborator supplying the gravity vector.

The parameter model only reads the vertical (third) component of gravity to
derive total mass from weights. Anything exposing ``get_gravity()`` returning
a 3-component vector can stand in for ``Environment``.

Typical usage example:
    from aeroparams.environment import Environment

    env = Environment()
    g = env.get_gravity().z  # 32.174 ft/s²
"""

from typing import Protocol

from aeroparams.physics.vectors import Vector3

# Standard gravity in ft/s², matching the lbf/slug unit system of the weights
GRAVITY_FT_S2 = 32.174


class GravitySource(Protocol):
    """Anything that can report a gravity vector."""

    def get_gravity(self) -> Vector3: ...


class Environment:
    """Constant-gravity environment in a north-east-down frame.

    Examples:
        >>> Environment().get_gravity()
        Vector3(x=0.0, y=0.0, z=32.174)
        >>> Environment(gravity=9.80665).get_gravity().z
        9.80665
    """

    def __init__(self, gravity: float = GRAVITY_FT_S2) -> None:
        """Initialize environment.

        Args:
            gravity: Magnitude of gravitational acceleration, pointing down (+z).
        """
        self._gravity = Vector3(0.0, 0.0, float(gravity))

    def get_gravity(self) -> Vector3:
        """Get the gravity vector (x, y, z), z positive down."""
        return self._gravity
