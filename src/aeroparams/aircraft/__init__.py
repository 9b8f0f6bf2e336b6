"""Aircraft parameter registry, default profile and file-backed loader."""

from aeroparams.aircraft.aircraft import Aircraft
from aeroparams.aircraft.defaults import build_default_registry
from aeroparams.aircraft.loader import (
    AircraftDataError,
    AircraftLoader,
    InconsistentValue,
    InvalidReference,
    LoadIssue,
    LoadReport,
    ParseFailure,
    ResourceNotFound,
    ResourceUnreadable,
    write_aircraft,
)
from aeroparams.aircraft.mass_properties import MassPropertyField, compute_total_mass
from aeroparams.aircraft.registry import MissingParameterError, ParameterRegistry, RegistryBuilder

__all__ = [
    "Aircraft",
    "AircraftDataError",
    "AircraftLoader",
    "InconsistentValue",
    "InvalidReference",
    "LoadIssue",
    "LoadReport",
    "MassPropertyField",
    "MissingParameterError",
    "ParameterRegistry",
    "ParseFailure",
    "RegistryBuilder",
    "ResourceNotFound",
    "ResourceUnreadable",
    "build_default_registry",
    "compute_total_mass",
    "write_aircraft",
]
