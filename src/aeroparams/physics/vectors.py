"""Vector utilities for body-axis and earth-axis quantities.

Typical usage example:
    from aeroparams.physics.vectors import Vector3

    gravity = Vector3(0.0, 0.0, 32.174)
    g = gravity.z
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """3D vector in a north-east-down frame.

    Attributes:
        x: X component (forward / north).
        y: Y component (right / east).
        z: Z component (down, the vertical axis).

    Examples:
        >>> gravity = Vector3(0.0, 0.0, 32.174)
        >>> gravity[2]
        32.174
    """

    x: float
    y: float
    z: float

    def __getitem__(self, index: int) -> float:
        """Component access by index (0=x, 1=y, 2=z).

        Raises:
            IndexError: If index is outside 0..2.
        """
        return self.as_tuple()[index]

    def as_tuple(self) -> tuple[float, float, float]:
        """Components as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)
