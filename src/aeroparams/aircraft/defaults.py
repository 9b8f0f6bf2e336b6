"""Default reference aircraft profile (Navion).

Stability derivatives, wing geometry and mass properties of the North
American Navion light single-engine airplane, in the lbf/slug/ft unit system.
Every identifier is populated; total mass is derived from the weights and the
environment's vertical gravity.

Typical usage example:
    from aeroparams.aircraft.defaults import build_default_registry

    registry = build_default_registry()
    registry.total_mass()  # (1780 + 360 + 610) / 32.174
"""

from types import MappingProxyType

from aeroparams.aero.stability_derivatives import StabilityDerivative
from aeroparams.aero.wing_geometry import WingGeometryField
from aeroparams.aircraft.mass_properties import MassPropertyField, compute_total_mass
from aeroparams.aircraft.registry import ParameterRegistry, RegistryBuilder
from aeroparams.core.logging_system import get_logger
from aeroparams.environment.environment import Environment, GravitySource

logger = get_logger(__name__)

DEFAULT_AIRCRAFT_NAME = "Navion"

DEFAULT_STABILITY_DERIVATIVES = MappingProxyType(
    {
        # Lift
        StabilityDerivative.CL_ALPHA: 4.44,
        StabilityDerivative.CL_0: 0.41,
        StabilityDerivative.CL_Q: 3.80,
        StabilityDerivative.CL_ALPHA_DOT: 0.0,
        StabilityDerivative.CL_D_ELEV: 0.355,
        StabilityDerivative.CL_D_FLAP: 0.355,
        # Side force
        StabilityDerivative.CY_BETA: -0.564,
        StabilityDerivative.CY_D_RUD: 0.157,
        # Drag
        StabilityDerivative.CD_ALPHA: 0.33,
        StabilityDerivative.CD_0: 0.025,
        StabilityDerivative.CD_D_ELEV: 0.001,
        StabilityDerivative.CD_D_FLAP: 0.02,
        StabilityDerivative.CD_D_GEAR: 0.09,
        # Rolling moment
        StabilityDerivative.CROLL_BETA: -0.074,
        StabilityDerivative.CROLL_P: -0.410,
        StabilityDerivative.CROLL_R: 0.107,
        StabilityDerivative.CROLL_D_AIL: -0.134,
        StabilityDerivative.CROLL_D_RUD: 0.107,
        # Pitching moment
        StabilityDerivative.CM_ALPHA: -0.683,
        StabilityDerivative.CM_0: 0.02,
        StabilityDerivative.CM_Q: -9.96,
        StabilityDerivative.CM_ALPHA_DOT: -4.36,
        StabilityDerivative.CM_D_ELEV: -0.923,
        StabilityDerivative.CM_D_FLAP: -0.050,
        # Yawing moment
        StabilityDerivative.CN_BETA: 0.071,
        StabilityDerivative.CN_P: -0.0575,
        StabilityDerivative.CN_R: -0.125,
        StabilityDerivative.CN_D_AIL: -0.0035,
        StabilityDerivative.CN_D_RUD: -0.072,
    }
)

DEFAULT_WING_GEOMETRY = MappingProxyType(
    {
        # Aerodynamic center (ft)
        WingGeometryField.AC_X: 0.0,
        WingGeometryField.AC_Y: 0.0,
        WingGeometryField.AC_Z: 0.0,
        # Wing dimensions (ft², ft, ft)
        WingGeometryField.S_WING: 184.0,
        WingGeometryField.B_WING: 33.4,
        WingGeometryField.C_BAR: 5.7,
    }
)

# TOTAL_MASS is derived in build_default_registry()
DEFAULT_MASS_PROPERTIES = MappingProxyType(
    {
        # Center of gravity (ft)
        MassPropertyField.CG_X: 0.0,
        MassPropertyField.CG_Y: 0.0,
        MassPropertyField.CG_Z: 0.0,
        # Moments of inertia (slug·ft²)
        MassPropertyField.J_X: 1048.0,
        MassPropertyField.J_Y: 3000.0,
        MassPropertyField.J_Z: 3050.0,
        MassPropertyField.J_XZ: 0.0,
        # Weights (lbf)
        MassPropertyField.WEIGHT_EMPTY: 1780.0,
        MassPropertyField.WEIGHT_FUEL: 360.0,
        MassPropertyField.WEIGHT_PAYLOAD: 610.0,
    }
)


def seed_defaults(builder: RegistryBuilder) -> None:
    """Copy the default profile's base values into a builder.

    TOTAL_MASS is not seeded; the caller derives it once the weights are final.
    """
    for derivative, value in DEFAULT_STABILITY_DERIVATIVES.items():
        builder.set_stability_derivative(derivative, value)
    for field, value in DEFAULT_WING_GEOMETRY.items():
        builder.set_wing_geometry(field, value)
    for field, value in DEFAULT_MASS_PROPERTIES.items():
        builder.set_mass_property(field, value)


def build_default_registry(environment: GravitySource | None = None) -> ParameterRegistry:
    """Build a fully populated registry with the Navion reference data.

    Args:
        environment: Source of the gravity vector. Defaults to ``Environment()``.

    Returns:
        Registry with every identifier populated.

    Raises:
        ValueError: If the vertical gravity component is zero.
    """
    environment = environment or Environment()

    builder = RegistryBuilder()
    seed_defaults(builder)

    mass = builder.mass_properties
    builder.set_mass_property(
        MassPropertyField.TOTAL_MASS,
        compute_total_mass(
            mass[MassPropertyField.WEIGHT_EMPTY],
            mass[MassPropertyField.WEIGHT_FUEL],
            mass[MassPropertyField.WEIGHT_PAYLOAD],
            environment.get_gravity()[2],
        ),
    )

    registry = builder.build()
    logger.debug(
        "Built default %s profile: total mass %.3f slug", DEFAULT_AIRCRAFT_NAME, registry.total_mass()
    )
    return registry
