"""Aircraft parameter model consumed by flight-dynamics solvers.

An ``Aircraft`` wraps an immutable ``ParameterRegistry`` built either from
the default Navion profile or from a named aircraft's resource files.

Typical usage:
    aircraft = Aircraft.default()
    aircraft = Aircraft.load("Navion", config=ModelConfig.from_file("config/settings.yaml"))
    cg = aircraft.center_of_gravity()
    jx, jy, jz, jxz = aircraft.inertia_values()
"""

from typing import Any

from aeroparams.aero.stability_derivatives import Coefficient, StabilityDerivative
from aeroparams.aero.wing_geometry import WingGeometryField
from aeroparams.aircraft.defaults import DEFAULT_AIRCRAFT_NAME, build_default_registry
from aeroparams.aircraft.loader import AircraftLoader, LoadReport
from aeroparams.aircraft.mass_properties import MassPropertyField
from aeroparams.aircraft.registry import ParameterRegistry
from aeroparams.core.config import ModelConfig
from aeroparams.core.logging_system import get_logger
from aeroparams.environment.environment import GravitySource

logger = get_logger(__name__)


class Aircraft:
    """Static parameters of a fixed-wing aircraft.

    Attributes:
        name: Aircraft name.
        registry: Stability derivatives, wing geometry and mass properties.
        load_report: Loader report when built from files, otherwise None.

    Examples:
        >>> aircraft = Aircraft.default()
        >>> aircraft.aerodynamic_center()
        (0.0, 0.0, 0.0)
        >>> aircraft = Aircraft.load("DoesNotExist")
        >>> aircraft.load_report.ok
        False
    """

    def __init__(
        self,
        registry: ParameterRegistry,
        name: str = DEFAULT_AIRCRAFT_NAME,
        load_report: LoadReport | None = None,
    ) -> None:
        """Initialize aircraft.

        Args:
            registry: Parameter registry.
            name: Aircraft name.
            load_report: Report from the file-backed loader, if used.
        """
        self.name = name
        self.registry = registry
        self.load_report = load_report

    @classmethod
    def default(cls, environment: GravitySource | None = None) -> "Aircraft":
        """Create the reference aircraft with every parameter populated.

        Args:
            environment: Source of gravity for deriving total mass.
        """
        aircraft = cls(build_default_registry(environment), DEFAULT_AIRCRAFT_NAME)
        logger.info("Created default aircraft: %s", aircraft.name)
        return aircraft

    @classmethod
    def load(
        cls,
        aircraft_name: Any,
        config: ModelConfig | None = None,
        environment: GravitySource | None = None,
    ) -> "Aircraft":
        """Create an aircraft from its resource files.

        Missing or malformed data never raises; check ``load_report`` or
        ``missing_parameters()`` for completeness.

        Args:
            aircraft_name: Directory name under the configured resource root.
            config: Resource location and loading options.
            environment: Source of gravity for deriving total mass.
        """
        registry, report = AircraftLoader(config, environment).load(aircraft_name)
        name = aircraft_name if isinstance(aircraft_name, str) else str(aircraft_name)
        return cls(registry, name, report)

    def __repr__(self) -> str:
        return f"Aircraft(name={self.name!r}, complete={self.is_complete()})"

    def get_stability_derivative(self, derivative: StabilityDerivative) -> Coefficient:
        return self.registry.get_stability_derivative(derivative)

    def get_wing_geometry(self, field: WingGeometryField) -> float:
        return self.registry.get_wing_geometry(field)

    def get_mass_property(self, field: MassPropertyField) -> float:
        return self.registry.get_mass_property(field)

    def center_of_gravity(self) -> tuple[float, float, float]:
        """Get (CG_X, CG_Y, CG_Z).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return self.registry.center_of_gravity()

    def aerodynamic_center(self) -> tuple[float, float, float]:
        """Get (AC_X, AC_Y, AC_Z).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return self.registry.aerodynamic_center()

    def inertia_values(self) -> tuple[float, float, float, float]:
        """Get (J_X, J_Y, J_Z, J_XZ).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return self.registry.inertia_values()

    def total_mass(self) -> float:
        """Get total mass (slug).

        Raises:
            MissingParameterError: If total mass is not available.
        """
        return self.registry.total_mass()

    def missing_parameters(self) -> dict[str, list[str]]:
        return self.registry.missing_parameters()

    def is_complete(self) -> bool:
        return self.registry.is_complete()
