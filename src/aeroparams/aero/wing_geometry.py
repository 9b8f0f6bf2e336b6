"""Wing geometry identifiers.

Reference quantities used to non-dimensionalize aerodynamic forces and the
location of the aerodynamic center. Lengths in ft, area in ft².
"""

from enum import Enum


class WingGeometryField(Enum):
    """Wing geometry quantities; values are resource file tokens."""

    # Aerodynamic center
    AC_X = "AC_X"
    AC_Y = "AC_Y"
    AC_Z = "AC_Z"

    # Wing dimensions
    S_WING = "S_WING"
    B_WING = "B_WING"
    C_BAR = "C_BAR"

    @classmethod
    def from_token(cls, token: str) -> "WingGeometryField | None":
        """Look up a member by its file token, or None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None
