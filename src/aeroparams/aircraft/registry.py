"""Parameter registry for stability derivatives, wing geometry and mass properties.

The registry holds one mapping per identifier enumeration. It is built once
through ``RegistryBuilder`` and is read-only afterwards, so the derived total
mass can never go stale relative to the weights it was computed from.

Typical usage example:
    from aeroparams.aircraft.registry import RegistryBuilder

    builder = RegistryBuilder()
    builder.set_mass_property(MassPropertyField.CG_X, 0.0)
    registry = builder.build()
    cg = registry.center_of_gravity()  # raises MissingParameterError if incomplete
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TypeVar

from aeroparams.aero.stability_derivatives import Coefficient, StabilityDerivative, as_coefficient
from aeroparams.aero.wing_geometry import WingGeometryField
from aeroparams.aircraft.mass_properties import MassPropertyField
from aeroparams.core.errors import AeroParamsError

_K = TypeVar("_K", bound=Enum)
_V = TypeVar("_V")

# Category names, also the resource names on disk
AERO = "Aero"
MASS_PROPERTIES = "MassProperties"
WING_GEOMETRY = "WingGeometry"


class MissingParameterError(AeroParamsError, KeyError):
    """Raised when a requested parameter was never populated."""

    def __init__(self, category: str, identifier: Enum) -> None:
        self.category = category
        self.identifier = identifier
        super().__init__(f"{category} parameter {identifier.value} is not populated")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


def _lookup(mapping: Mapping[_K, _V], category: str, identifier: _K) -> _V:
    try:
        return mapping[identifier]
    except KeyError:
        raise MissingParameterError(category, identifier) from None


def _check_key(identifier: Enum, enum_cls: type[Enum]) -> None:
    if not isinstance(identifier, enum_cls):
        raise TypeError(f"Expected {enum_cls.__name__}, got {identifier!r}")


class ParameterRegistry:
    """Immutable set of aircraft parameters.

    Attributes:
        stability_derivatives: Read-only mapping of derivative to coefficient.
        wing_geometry: Read-only mapping of wing geometry field to value.
        mass_properties: Read-only mapping of mass property field to value.

    Examples:
        >>> registry = build_default_registry()
        >>> registry.center_of_gravity()
        (0.0, 0.0, 0.0)
        >>> registry.inertia_values()
        (1048.0, 3000.0, 3050.0, 0.0)
    """

    __slots__ = ("stability_derivatives", "wing_geometry", "mass_properties")

    def __init__(
        self,
        stability_derivatives: Mapping[StabilityDerivative, Coefficient] | None = None,
        wing_geometry: Mapping[WingGeometryField, float] | None = None,
        mass_properties: Mapping[MassPropertyField, float] | None = None,
    ) -> None:
        """Initialize registry from mappings.

        The mappings are copied; later changes to them do not affect the registry.
        """
        builder = RegistryBuilder()
        for derivative, coefficient in (stability_derivatives or {}).items():
            builder.set_stability_derivative(derivative, coefficient)
        for field, value in (wing_geometry or {}).items():
            builder.set_wing_geometry(field, value)
        for field, value in (mass_properties or {}).items():
            builder.set_mass_property(field, value)

        object.__setattr__(self, "stability_derivatives", MappingProxyType(builder.stability_derivatives))
        object.__setattr__(self, "wing_geometry", MappingProxyType(builder.wing_geometry))
        object.__setattr__(self, "mass_properties", MappingProxyType(builder.mass_properties))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ParameterRegistry is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ParameterRegistry is read-only")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterRegistry):
            return NotImplemented
        return (
            dict(self.stability_derivatives) == dict(other.stability_derivatives)
            and dict(self.wing_geometry) == dict(other.wing_geometry)
            and dict(self.mass_properties) == dict(other.mass_properties)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ParameterRegistry(stability_derivatives={len(self.stability_derivatives)}, "
            f"wing_geometry={len(self.wing_geometry)}, "
            f"mass_properties={len(self.mass_properties)})"
        )

    def get_stability_derivative(self, derivative: StabilityDerivative) -> Coefficient:
        """Get a stability derivative coefficient.

        Raises:
            MissingParameterError: If the derivative is not populated.
        """
        return _lookup(self.stability_derivatives, AERO, derivative)

    def get_wing_geometry(self, field: WingGeometryField) -> float:
        """Get a wing geometry value.

        Raises:
            MissingParameterError: If the field is not populated.
        """
        return _lookup(self.wing_geometry, WING_GEOMETRY, field)

    def get_mass_property(self, field: MassPropertyField) -> float:
        """Get a mass property value.

        Raises:
            MissingParameterError: If the field is not populated.
        """
        return _lookup(self.mass_properties, MASS_PROPERTIES, field)

    def center_of_gravity(self) -> tuple[float, float, float]:
        """Get center of gravity offsets as (CG_X, CG_Y, CG_Z).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return (
            self.get_mass_property(MassPropertyField.CG_X),
            self.get_mass_property(MassPropertyField.CG_Y),
            self.get_mass_property(MassPropertyField.CG_Z),
        )

    def aerodynamic_center(self) -> tuple[float, float, float]:
        """Get aerodynamic center offsets as (AC_X, AC_Y, AC_Z).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return (
            self.get_wing_geometry(WingGeometryField.AC_X),
            self.get_wing_geometry(WingGeometryField.AC_Y),
            self.get_wing_geometry(WingGeometryField.AC_Z),
        )

    def inertia_values(self) -> tuple[float, float, float, float]:
        """Get moments and product of inertia as (J_X, J_Y, J_Z, J_XZ).

        Raises:
            MissingParameterError: If any component is not populated.
        """
        return (
            self.get_mass_property(MassPropertyField.J_X),
            self.get_mass_property(MassPropertyField.J_Y),
            self.get_mass_property(MassPropertyField.J_Z),
            self.get_mass_property(MassPropertyField.J_XZ),
        )

    def total_mass(self) -> float:
        """Get total mass (slug).

        Raises:
            MissingParameterError: If total mass was never derived or supplied.
        """
        return self.get_mass_property(MassPropertyField.TOTAL_MASS)

    def missing_parameters(self) -> dict[str, list[str]]:
        """List unpopulated identifier tokens per category.

        Returns:
            Mapping of category name to missing tokens in declaration order.
            Categories with nothing missing are omitted.
        """
        missing: dict[str, list[str]] = {}
        for category, enum_cls, mapping in (
            (AERO, StabilityDerivative, self.stability_derivatives),
            (MASS_PROPERTIES, MassPropertyField, self.mass_properties),
            (WING_GEOMETRY, WingGeometryField, self.wing_geometry),
        ):
            tokens = [member.value for member in enum_cls if member not in mapping]
            if tokens:
                missing[category] = tokens
        return missing

    def is_complete(self) -> bool:
        """Check whether every identifier in every category is populated."""
        return not self.missing_parameters()

    def to_builder(self) -> "RegistryBuilder":
        """Create a builder pre-populated with this registry's values."""
        builder = RegistryBuilder()
        builder.stability_derivatives.update(self.stability_derivatives)
        builder.wing_geometry.update(self.wing_geometry)
        builder.mass_properties.update(self.mass_properties)
        return builder


class RegistryBuilder:
    """Mutable construction-time form of ``ParameterRegistry``.

    Examples:
        >>> builder = RegistryBuilder()
        >>> builder.set_stability_derivative(StabilityDerivative.CL_ALPHA, 4.44)
        >>> builder.set_wing_geometry(WingGeometryField.S_WING, 184.0)
        >>> registry = builder.build()
    """

    def __init__(self) -> None:
        self.stability_derivatives: dict[StabilityDerivative, Coefficient] = {}
        self.wing_geometry: dict[WingGeometryField, float] = {}
        self.mass_properties: dict[MassPropertyField, float] = {}

    def set_stability_derivative(
        self, derivative: StabilityDerivative, value: "Coefficient | float"
    ) -> None:
        """Set a stability derivative; plain numbers are wrapped in ``Constant``.

        Raises:
            TypeError: If derivative is not a StabilityDerivative or value is
                not a number or coefficient.
        """
        _check_key(derivative, StabilityDerivative)
        self.stability_derivatives[derivative] = as_coefficient(value)

    def set_wing_geometry(self, field: WingGeometryField, value: float) -> None:
        """Set a wing geometry value.

        Raises:
            TypeError: If field is not a WingGeometryField.
        """
        _check_key(field, WingGeometryField)
        self.wing_geometry[field] = float(value)

    def set_mass_property(self, field: MassPropertyField, value: float) -> None:
        """Set a mass property value.

        Raises:
            TypeError: If field is not a MassPropertyField.
        """
        _check_key(field, MassPropertyField)
        self.mass_properties[field] = float(value)

    def build(self) -> ParameterRegistry:
        """Freeze the current values into a ``ParameterRegistry``."""
        return ParameterRegistry(self.stability_derivatives, self.wing_geometry, self.mass_properties)
