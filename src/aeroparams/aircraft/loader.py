"""File-backed aircraft parameter loader.

An aircraft named ``N`` is described by three line-oriented text resources
under the configured resource root::

    <resource_root>/N/Aero.txt
    <resource_root>/N/MassProperties.txt
    <resource_root>/N/WingGeometry.txt

Each line holds one assignment, ``IDENTIFIER = VALUE``, where IDENTIFIER is a
token of the category's enumeration and VALUE parses as a float. Blank lines
and lines starting with ``#`` are ignored.

Loading never raises for bad data. Missing or unreadable resources, an invalid
aircraft name, malformed lines and a TOTAL_MASS that disagrees with the weights
are logged and recorded in a ``LoadReport``; the registry simply ends up with
fewer entries.

Typical usage example:
    from aeroparams.aircraft.loader import AircraftLoader

    registry, report = AircraftLoader(config).load("Navion")
    if not report.ok:
        for issue in report.issues:
            print(issue.kind, issue.message)
"""

import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from aeroparams.aero.stability_derivatives import Constant, StabilityDerivative
from aeroparams.aero.wing_geometry import WingGeometryField
from aeroparams.aircraft.defaults import seed_defaults
from aeroparams.aircraft.mass_properties import (
    WEIGHT_FIELDS,
    MassPropertyField,
    compute_total_mass,
)
from aeroparams.aircraft.registry import (
    AERO,
    MASS_PROPERTIES,
    WING_GEOMETRY,
    ParameterRegistry,
    RegistryBuilder,
)
from aeroparams.core.config import ModelConfig
from aeroparams.core.errors import AeroParamsError
from aeroparams.core.logging_system import get_logger
from aeroparams.environment.environment import Environment, GravitySource

logger = get_logger(__name__)

SEPARATOR = " = "

# Relative difference tolerated between a supplied and a derived TOTAL_MASS
TOTAL_MASS_REL_TOLERANCE = 1e-9

# Resource name and identifier enumeration, in load order
CATEGORIES: tuple[tuple[str, type[Enum]], ...] = (
    (AERO, StabilityDerivative),
    (MASS_PROPERTIES, MassPropertyField),
    (WING_GEOMETRY, WingGeometryField),
)

_E = TypeVar("_E", bound=Enum)

# Decimal or scientific notation only; no underscores, hex, nan or inf
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Bytes that failed to decode, as left by the surrogateescape error handler
_UNDECODABLE = re.compile("[\udc80-\udcff]")


class AircraftDataError(AeroParamsError):
    """Base class for problems with aircraft parameter resources.

    Attributes:
        path: Resource the problem was found in, if known.
        line: 1-based line number, if the problem is line-specific.
    """

    def __init__(self, message: str, path: Path | None = None, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line


class ResourceNotFound(AircraftDataError):
    """The resource file does not exist."""


class ResourceUnreadable(AircraftDataError):
    """The resource exists but could not be read or decoded."""


class InvalidReference(AircraftDataError):
    """The aircraft name is missing or cannot address a resource directory."""


class ParseFailure(AircraftDataError):
    """A line is not a well-formed ``IDENTIFIER = VALUE`` assignment."""


class InconsistentValue(AircraftDataError):
    """A supplied value disagrees with the value derived from other entries."""


@dataclass(frozen=True)
class LoadIssue:
    """A non-fatal problem encountered while loading.

    Attributes:
        kind: Error class name (e.g. "ResourceNotFound", "ParseFailure").
        category: Resource category ("Aero", "MassProperties", "WingGeometry").
        message: Human-readable description.
        path: Resource path, if known.
        line: 1-based line number for parse failures.
    """

    kind: str
    category: str
    message: str
    path: Path | None = None
    line: int | None = None

    @classmethod
    def from_error(cls, error: AircraftDataError, category: str) -> "LoadIssue":
        return cls(
            kind=type(error).__name__,
            category=category,
            message=error.message,
            path=error.path,
            line=error.line,
        )


@dataclass
class LoadReport:
    """Outcome of loading one aircraft.

    Attributes:
        aircraft_name: Name that was requested (may be invalid).
        issues: Problems encountered, in the order they occurred.
        loaded: Number of values overlaid per category.
    """

    aircraft_name: Any
    issues: list[LoadIssue] = field(default_factory=list)
    loaded: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True if nothing went wrong."""
        return not self.issues

    def issues_of(self, kind: "type[AircraftDataError] | str") -> list[LoadIssue]:
        """Get issues of one kind, given as an error class or its name."""
        name = kind if isinstance(kind, str) else kind.__name__
        return [issue for issue in self.issues if issue.kind == name]

    def record(self, error: AircraftDataError, category: str) -> None:
        self.issues.append(LoadIssue.from_error(error, category))


def validate_aircraft_name(name: Any) -> str:
    """Check that an aircraft name can address a resource directory.

    Args:
        name: Candidate aircraft name.

    Returns:
        The name, unchanged.

    Raises:
        InvalidReference: If name is None, not a string, blank, "." or "..",
            or contains a path separator.
    """
    if name is None:
        raise InvalidReference("Aircraft name is None")
    if not isinstance(name, str):
        raise InvalidReference(f"Aircraft name must be a string, got {type(name).__name__}")
    if not name.strip():
        raise InvalidReference("Aircraft name is empty")
    if name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise InvalidReference(f"Aircraft name is not a plain directory name: {name!r}")
    return name


def resource_file(resource_root: Path, aircraft_name: str, category: str, extension: str = ".txt") -> Path:
    """Path of one category's resource for an aircraft."""
    return Path(resource_root) / aircraft_name / f"{category}{extension}"


def split_line(text: str) -> list[str]:
    """Split a line on the assignment separator, trimming each token."""
    return [token.strip() for token in text.split(SEPARATOR)]


def read_and_split(path: Path, encoding: str = "utf-8") -> list[tuple[int, list[str]]]:
    """Read a resource and split every content line on the separator.

    Args:
        path: Resource file.
        encoding: Text encoding.

    Bytes that do not decode are kept as surrogate escapes, so one bad line
    does not cost the rest of the file; ``parse_tokens`` rejects such lines.

    Returns:
        (line number, tokens) for each non-blank, non-comment line.

    Raises:
        ResourceNotFound: If the file does not exist.
        ResourceUnreadable: If the file cannot be opened or read.
    """
    rows: list[tuple[int, list[str]]] = []
    try:
        with Path(path).open("r", encoding=encoding, errors="surrogateescape") as f:
            for lineno, raw in enumerate(f, start=1):
                text = raw.strip()
                if not text or text.startswith("#"):
                    continue
                rows.append((lineno, split_line(text)))
    except FileNotFoundError as e:
        raise ResourceNotFound(f"Could not find: {path}", path=path) from e
    except (OSError, UnicodeError) as e:
        raise ResourceUnreadable(f"Could not read: {path} ({e})", path=path) from e
    return rows


def parse_tokens(tokens: Sequence[str], enum_cls: type[_E]) -> tuple[_E, float]:
    """Parse split line tokens into an identifier and a value.

    Args:
        tokens: Tokens produced by splitting a line on " = ".
        enum_cls: Identifier enumeration the line must belong to.

    Returns:
        (identifier, value).

    Raises:
        ParseFailure: If the line holds undecodable bytes, there are not
            exactly two tokens, the identifier is not in enum_cls, or the
            value is not a plain finite number.
    """
    if any(_UNDECODABLE.search(token) for token in tokens):
        raise ParseFailure("Line contains bytes that are not valid text in the resource encoding")

    if len(tokens) != 2:
        raise ParseFailure(f"Expected 'IDENTIFIER{SEPARATOR}VALUE', got {len(tokens)} token(s)")

    token, raw_value = tokens
    member = enum_cls.from_token(token)  # type: ignore[attr-defined]
    if member is None:
        raise ParseFailure(f"Unknown {enum_cls.__name__} identifier: {token!r}")

    if not _NUMBER.fullmatch(raw_value):
        raise ParseFailure(f"Value for {token} is not a number: {raw_value!r}")

    value = float(raw_value)
    if not math.isfinite(value):
        raise ParseFailure(f"Value for {token} is not finite: {raw_value!r}")

    return member, value


def parse_line(text: str, enum_cls: type[_E]) -> tuple[_E, float]:
    """Parse one ``IDENTIFIER = VALUE`` line.

    Examples:
        >>> parse_line("CL_ALPHA = 4.44", StabilityDerivative)
        (<StabilityDerivative.CL_ALPHA: 'CL_ALPHA'>, 4.44)

    Raises:
        ParseFailure: If the line is malformed.
    """
    return parse_tokens(split_line(text), enum_cls)


class AircraftLoader:
    """Builds parameter registries from per-aircraft text resources.

    Examples:
        >>> loader = AircraftLoader(ModelConfig(resource_root="data/aircraft"))
        >>> registry, report = loader.load("Navion")
        >>> report.ok
        True
    """

    def __init__(self, config: ModelConfig | None = None, environment: GravitySource | None = None) -> None:
        """Initialize loader.

        Args:
            config: Resource location and loading options. Defaults to
                ``ModelConfig()``, which reads the bundled data directory.
            environment: Source of gravity for deriving total mass.
        """
        self.config = config or ModelConfig()
        self.environment = environment or Environment()

    def load(self, aircraft_name: Any) -> tuple[ParameterRegistry, LoadReport]:
        """Load an aircraft's parameters.

        Never raises for missing, unreadable or malformed data; see the
        returned report for what went wrong.

        Args:
            aircraft_name: Directory name of the aircraft under the resource root.

        Returns:
            (registry, report). The registry may be incomplete.
        """
        report = LoadReport(aircraft_name=aircraft_name)
        builder = RegistryBuilder()

        if self.config.seed_with_defaults:
            seed_defaults(builder)

        setters: dict[str, Callable[[Any, float], None]] = {
            AERO: lambda member, value: builder.set_stability_derivative(member, Constant(value)),
            MASS_PROPERTIES: builder.set_mass_property,
            WING_GEOMETRY: builder.set_wing_geometry,
        }

        try:
            name = validate_aircraft_name(aircraft_name)
        except InvalidReference as e:
            # Every resource is unreachable; report each one
            for category, _ in CATEGORIES:
                logger.error("Bad reference to %s resource: %s", category, e)
                report.record(e, category)
                report.loaded[category] = 0
        else:
            for category, enum_cls in CATEGORIES:
                report.loaded[category] = self._load_category(
                    name, category, enum_cls, setters[category], report
                )

        self._derive_total_mass(builder, report, aircraft_name)

        registry = builder.build()
        logger.info(
            "Loaded aircraft %r: %s values, %d issue(s)",
            aircraft_name,
            ", ".join(f"{category}={count}" for category, count in report.loaded.items()),
            len(report.issues),
        )
        return registry, report

    def _load_category(
        self,
        aircraft_name: str,
        category: str,
        enum_cls: type[Enum],
        store: Callable[[Any, float], None],
        report: LoadReport,
    ) -> int:
        """Overlay one resource onto the builder.

        Returns:
            Number of identifiers stored.
        """
        path = resource_file(self.config.resource_root, aircraft_name, category, self.config.extension)

        try:
            rows = read_and_split(path, self.config.encoding)
        except (ResourceNotFound, ResourceUnreadable) as e:
            logger.error("%s", e.message)
            report.record(e, category)
            return 0

        logger.debug("Read %d line(s) from %s", len(rows), path)

        parsed: dict[Enum, float] = {}
        for lineno, tokens in rows:
            try:
                member, value = parse_tokens(tokens, enum_cls)
            except ParseFailure as e:
                e.path, e.line = path, lineno
                logger.warning("Skipping %s line %d: %s", path, lineno, e.message)
                report.record(e, category)
                continue
            if member in parsed:
                logger.debug("%s line %d overrides earlier %s", path, lineno, member.value)
            parsed[member] = value

        stored = 0
        for member in enum_cls:
            if member in parsed:
                store(member, parsed[member])
                stored += 1

        return stored

    def _derive_total_mass(self, builder: RegistryBuilder, report: LoadReport, aircraft_name: Any) -> None:
        """Fill in TOTAL_MASS from the weights, or check a supplied one against them.

        A TOTAL_MASS read from the file is always kept. When all weights are
        present and the file value disagrees with the derived one, the
        mismatch is logged and recorded as an ``InconsistentValue`` issue.
        """
        mass = builder.mass_properties
        supplied = mass.get(MassPropertyField.TOTAL_MASS)
        missing = [f.value for f in WEIGHT_FIELDS if f not in mass]

        if missing:
            if supplied is not None:
                logger.warning(
                    "Keeping file-supplied TOTAL_MASS; cannot check it without %s", ", ".join(missing)
                )
            else:
                logger.warning("Total mass not available; missing %s", ", ".join(missing))
            return

        derived = compute_total_mass(
            mass[MassPropertyField.WEIGHT_EMPTY],
            mass[MassPropertyField.WEIGHT_FUEL],
            mass[MassPropertyField.WEIGHT_PAYLOAD],
            self.environment.get_gravity()[2],
        )

        if supplied is None:
            builder.set_mass_property(MassPropertyField.TOTAL_MASS, derived)
            return

        if not math.isclose(supplied, derived, rel_tol=TOTAL_MASS_REL_TOLERANCE):
            path = resource_file(
                self.config.resource_root, aircraft_name, MASS_PROPERTIES, self.config.extension
            )
            error = InconsistentValue(
                f"TOTAL_MASS {supplied!r} disagrees with {derived!r} derived from the weights",
                path=path,
            )
            logger.warning("Keeping file-supplied value in %s: %s", path, error.message)
            report.record(error, MASS_PROPERTIES)


def write_aircraft(
    registry: ParameterRegistry,
    aircraft_name: str,
    resource_root: str | Path,
    extension: str = ".txt",
    encoding: str = "utf-8",
) -> list[Path]:
    """Write a registry as the three ``IDENTIFIER = VALUE`` resources.

    Only populated values are written, in declaration order. Interpolated
    stability derivatives have no scalar form and are skipped with a warning.

    Args:
        registry: Parameters to write.
        aircraft_name: Directory name to create under resource_root.
        resource_root: Root directory for aircraft resources.
        extension: Resource file extension.
        encoding: Text encoding.

    Returns:
        Paths of the written resources.

    Raises:
        InvalidReference: If aircraft_name is invalid.
        OSError: If a resource cannot be written.
    """
    name = validate_aircraft_name(aircraft_name)
    aircraft_dir = Path(resource_root) / name
    aircraft_dir.mkdir(parents=True, exist_ok=True)

    values: dict[str, dict[Enum, Any]] = {
        AERO: dict(registry.stability_derivatives),
        MASS_PROPERTIES: dict(registry.mass_properties),
        WING_GEOMETRY: dict(registry.wing_geometry),
    }

    written = []
    for category, enum_cls in CATEGORIES:
        lines = []
        for member in enum_cls:
            if member not in values[category]:
                continue
            value = values[category][member]
            if not getattr(value, "is_constant", True):
                logger.warning("Skipping interpolated %s for %s", member.value, name)
                continue
            lines.append(f"{member.value}{SEPARATOR}{float(value)!r}\n")

        path = resource_file(Path(resource_root), name, category, extension)
        with path.open("w", encoding=encoding) as f:
            f.writelines(lines)
        logger.debug("Wrote %d value(s) to %s", len(lines), path)
        written.append(path)

    return written
