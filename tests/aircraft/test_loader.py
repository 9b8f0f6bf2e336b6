"""Tests for the file-backed aircraft loader."""

import logging
from pathlib import Path

import pytest

from aeroparams.aero.stability_derivatives import Constant, Interpolated, LinearTable, StabilityDerivative
from aeroparams.aero.wing_geometry import WingGeometryField
from aeroparams.aircraft.defaults import build_default_registry
from aeroparams.aircraft.loader import (
    AircraftLoader,
    InconsistentValue,
    InvalidReference,
    LoadReport,
    ParseFailure,
    ResourceNotFound,
    ResourceUnreadable,
    parse_line,
    read_and_split,
    validate_aircraft_name,
    write_aircraft,
)
from aeroparams.aircraft.mass_properties import MassPropertyField
from aeroparams.aircraft.registry import MissingParameterError
from aeroparams.core.config import ModelConfig
from aeroparams.environment.environment import Environment


class TestParseLine:
    """Test parsing of single IDENTIFIER = VALUE lines."""

    def test_parse_valid_line(self) -> None:
        """Test a well-formed line."""
        member, value = parse_line("CL_ALPHA = 4.44", StabilityDerivative)

        assert member is StabilityDerivative.CL_ALPHA
        assert value == 4.44

    def test_parse_negative_and_exponent(self) -> None:
        """Test negative and scientific-notation values."""
        assert parse_line("CN_D_AIL = -3.5e-3", StabilityDerivative)[1] == pytest.approx(-0.0035)

    def test_missing_separator(self) -> None:
        """Test a line without ' = ' fails."""
        with pytest.raises(ParseFailure, match="1 token"):
            parse_line("CL_ALPHA=4.44", StabilityDerivative)

    def test_too_many_tokens(self) -> None:
        """Test a line with two separators fails."""
        with pytest.raises(ParseFailure, match="3 token"):
            parse_line("CL_ALPHA = 4.44 = 5", StabilityDerivative)

    def test_non_numeric_value(self) -> None:
        """Test a non-numeric value fails."""
        with pytest.raises(ParseFailure, match="not a number"):
            parse_line("CL_ALPHA = abc", StabilityDerivative)

    def test_non_finite_value(self) -> None:
        """Test NaN, infinity and overflowing values are rejected."""
        with pytest.raises(ParseFailure, match="not a number"):
            parse_line("CL_ALPHA = nan", StabilityDerivative)
        with pytest.raises(ParseFailure, match="not a number"):
            parse_line("CL_ALPHA = inf", StabilityDerivative)
        with pytest.raises(ParseFailure, match="not finite"):
            parse_line("CL_ALPHA = 1e999", StabilityDerivative)

    @pytest.mark.parametrize("raw", ["1_000", "0x10", "4.4f", "1e", "+", "."])
    def test_non_decimal_spellings_rejected(self, raw: str) -> None:
        """Test only plain decimal and scientific notation is accepted."""
        with pytest.raises(ParseFailure, match="not a number"):
            parse_line(f"WEIGHT_EMPTY = {raw}", MassPropertyField)

    @pytest.mark.parametrize("raw, expected", [("5", 5.0), ("-.5", -0.5), ("+2.", 2.0), ("1E+3", 1000.0)])
    def test_decimal_spellings_accepted(self, raw: str, expected: float) -> None:
        """Test the accepted numeric forms."""
        assert parse_line(f"WEIGHT_EMPTY = {raw}", MassPropertyField)[1] == expected

    def test_identifier_from_other_category(self) -> None:
        """Test identifiers are matched against the category's own enumeration."""
        with pytest.raises(ParseFailure, match="Unknown MassPropertyField"):
            parse_line("CL_ALPHA = 4.44", MassPropertyField)

        member, _ = parse_line("CG_X = 1.5", MassPropertyField)
        assert member is MassPropertyField.CG_X


class TestReadAndSplit:
    """Test reading resource files."""

    def test_reads_and_splits_lines(self, tmp_path: Path) -> None:
        """Test lines are split on the separator with line numbers."""
        path = tmp_path / "Aero.txt"
        path.write_text("CL_ALPHA = 4.44\n\n# comment\nCL_0 = 0.41\n", encoding="utf-8")

        rows = read_and_split(path)

        assert rows == [(1, ["CL_ALPHA", "4.44"]), (4, ["CL_0", "0.41"])]

    def test_handles_crlf_line_endings(self, tmp_path: Path) -> None:
        """Test Windows line endings are tolerated."""
        path = tmp_path / "Aero.txt"
        path.write_bytes(b"CL_ALPHA = 4.44\r\nCL_0 = 0.41\r\n")

        rows = read_and_split(path)

        assert rows[0][1] == ["CL_ALPHA", "4.44"]
        assert rows[1][1] == ["CL_0", "0.41"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ResourceNotFound."""
        with pytest.raises(ResourceNotFound) as exc_info:
            read_and_split(tmp_path / "nope.txt")

        assert exc_info.value.path == tmp_path / "nope.txt"

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """Test a directory in place of a file raises ResourceUnreadable."""
        (tmp_path / "Aero.txt").mkdir()

        with pytest.raises(ResourceUnreadable):
            read_and_split(tmp_path / "Aero.txt")

    def test_undecodable_bytes_do_not_abort_read(self, tmp_path: Path) -> None:
        """Test invalid UTF-8 on one line leaves the other lines readable."""
        path = tmp_path / "Aero.txt"
        path.write_bytes(b"CL_ALPHA = \xff\xfe\nCL_0 = 0.41\n")

        rows = read_and_split(path)

        assert [lineno for lineno, _ in rows] == [1, 2]
        assert rows[1][1] == ["CL_0", "0.41"]
        with pytest.raises(ParseFailure, match="not valid text"):
            parse_line(" = ".join(rows[0][1]), StabilityDerivative)


class TestValidateAircraftName:
    """Test aircraft name validation."""

    def test_valid_name(self) -> None:
        """Test plain names pass through."""
        assert validate_aircraft_name("Navion") == "Navion"

    @pytest.mark.parametrize("name", [None, "", "   ", ".", "..", "a/b", "a\\b", 42])
    def test_invalid_names(self, name: object) -> None:
        """Test names that cannot address a resource directory."""
        with pytest.raises(InvalidReference):
            validate_aircraft_name(name)


class TestAircraftLoader:
    """Test AircraftLoader.load()."""

    def test_load_complete_aircraft(self, model_config: ModelConfig, write_resource) -> None:
        """Test loading a fully specified aircraft."""
        write_resource("Test", "Aero", "CL_ALPHA = 5.0\nCM_Q = -10.5\n")
        write_resource(
            "Test",
            "MassProperties",
            "CG_X = 0.1\nCG_Y = 0.2\nCG_Z = 0.3\n"
            "J_X = 1.0\nJ_Y = 2.0\nJ_Z = 3.0\nJ_XZ = 4.0\n"
            "WEIGHT_EMPTY = 1000.0\nWEIGHT_FUEL = 200.0\nWEIGHT_PAYLOAD = 300.0\n",
        )
        write_resource("Test", "WingGeometry", "AC_X = 1.0\nAC_Y = 0.0\nAC_Z = -0.5\nS_WING = 150.0\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert report.ok
        assert report.loaded == {"Aero": 2, "MassProperties": 10, "WingGeometry": 4}
        assert registry.get_stability_derivative(StabilityDerivative.CL_ALPHA) == Constant(5.0)
        assert registry.center_of_gravity() == (0.1, 0.2, 0.3)
        assert registry.inertia_values() == (1.0, 2.0, 3.0, 4.0)
        assert registry.aerodynamic_center() == (1.0, 0.0, -0.5)
        assert registry.total_mass() == (1000.0 + 200.0 + 300.0) / 32.174

    def test_loaded_derivatives_are_constants(self, model_config: ModelConfig, write_resource) -> None:
        """Test file values are stored as Constant coefficients."""
        write_resource("Test", "Aero", "CD_0 = 0.03\n")

        registry, _ = AircraftLoader(model_config).load("Test")

        coefficient = registry.get_stability_derivative(StabilityDerivative.CD_0)
        assert isinstance(coefficient, Constant)
        assert float(coefficient) == 0.03

    def test_malformed_line_is_skipped(self, model_config: ModelConfig, write_resource) -> None:
        """Test one good and one malformed line yields only the good value."""
        path = write_resource("Test", "WingGeometry", "S_WING = 184.0\nB_WING 33.4\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert dict(registry.wing_geometry) == {WingGeometryField.S_WING: 184.0}
        failures = report.issues_of(ParseFailure)
        assert len(failures) == 1
        assert failures[0].category == "WingGeometry"
        assert failures[0].path == path
        assert failures[0].line == 2

    def test_malformed_line_is_logged(self, model_config: ModelConfig, write_resource, caplog) -> None:
        """Test parse failures are logged as warnings."""
        write_resource("Test", "Aero", "CL_ALPHA = oops\n")

        with caplog.at_level(logging.WARNING, logger="aeroparams.aircraft.loader"):
            AircraftLoader(model_config).load("Test")

        assert any("not a number" in record.getMessage() for record in caplog.records)

    def test_missing_aircraft(self, model_config: ModelConfig) -> None:
        """Test a nonexistent aircraft loads empty with one error per resource."""
        registry, report = AircraftLoader(model_config).load("Ghost")

        assert len(registry.stability_derivatives) == 0
        assert len(registry.wing_geometry) == 0
        assert len(registry.mass_properties) == 0
        not_found = report.issues_of(ResourceNotFound)
        assert [issue.category for issue in not_found] == ["Aero", "MassProperties", "WingGeometry"]
        assert report.loaded == {"Aero": 0, "MassProperties": 0, "WingGeometry": 0}

    def test_missing_resource_is_logged(self, model_config: ModelConfig, caplog) -> None:
        """Test missing resources are logged as errors."""
        with caplog.at_level(logging.ERROR, logger="aeroparams.aircraft.loader"):
            AircraftLoader(model_config).load("Ghost")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 3

    def test_partial_resources(self, model_config: ModelConfig, write_resource) -> None:
        """Test one missing resource does not stop the others loading."""
        write_resource("Test", "Aero", "CL_ALPHA = 4.0\n")
        write_resource("Test", "WingGeometry", "S_WING = 100.0\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert StabilityDerivative.CL_ALPHA in registry.stability_derivatives
        assert WingGeometryField.S_WING in registry.wing_geometry
        assert [issue.category for issue in report.issues] == ["MassProperties"]
        assert report.issues[0].kind == "ResourceNotFound"

    def test_unreadable_resource(self, model_config: ModelConfig, resource_root: Path, write_resource) -> None:
        """Test an unreadable resource is reported and the rest still load."""
        (resource_root / "Test" / "Aero.txt").mkdir(parents=True)
        write_resource("Test", "WingGeometry", "C_BAR = 5.7\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert registry.get_wing_geometry(WingGeometryField.C_BAR) == 5.7
        assert len(report.issues_of(ResourceUnreadable)) == 1
        assert len(report.issues_of(ResourceNotFound)) == 1

    @pytest.mark.parametrize("name", [None, "", "../escape"])
    def test_invalid_reference(self, model_config: ModelConfig, name: object) -> None:
        """Test an invalid name is reported per resource without raising."""
        registry, report = AircraftLoader(model_config).load(name)

        assert len(report.issues_of(InvalidReference)) == 3
        assert not registry.stability_derivatives
        assert not registry.mass_properties
        assert not registry.wing_geometry

    def test_category_uses_own_enumeration(self, model_config: ModelConfig, write_resource) -> None:
        """Test mass and wing resources match their own identifiers."""
        write_resource("Test", "MassProperties", "CG_X = 2.5\nCL_ALPHA = 4.4\n")
        write_resource("Test", "WingGeometry", "B_WING = 33.4\nCG_X = 9.9\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert registry.get_mass_property(MassPropertyField.CG_X) == 2.5
        assert registry.get_wing_geometry(WingGeometryField.B_WING) == 33.4
        assert len(report.issues_of(ParseFailure)) == 2

    def test_duplicate_identifier_last_wins(self, model_config: ModelConfig, write_resource) -> None:
        """Test a repeated identifier keeps the last value."""
        write_resource("Test", "WingGeometry", "S_WING = 100.0\nS_WING = 184.0\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert registry.get_wing_geometry(WingGeometryField.S_WING) == 184.0
        assert not report.issues_of(ParseFailure)

    def test_unpopulated_members_stay_absent(self, model_config: ModelConfig, write_resource) -> None:
        """Test accessors fail rather than returning zero for absent values."""
        write_resource("Test", "MassProperties", "CG_X = 1.0\n")

        registry, _ = AircraftLoader(model_config).load("Test")

        with pytest.raises(MissingParameterError):
            registry.center_of_gravity()
        with pytest.raises(MissingParameterError):
            registry.total_mass()
        assert "CG_Y" in registry.missing_parameters()["MassProperties"]

    def test_total_mass_without_all_weights_keeps_file_value(
        self, model_config: ModelConfig, write_resource
    ) -> None:
        """Test a file TOTAL_MASS is kept when weights are incomplete."""
        write_resource("Test", "MassProperties", "WEIGHT_EMPTY = 1000.0\nTOTAL_MASS = 42.0\n")

        registry, _ = AircraftLoader(model_config).load("Test")

        assert registry.total_mass() == 42.0

    def test_total_mass_derived_when_file_omits_it(
        self, model_config: ModelConfig, write_resource
    ) -> None:
        """Test TOTAL_MASS is derived from weights when the file has none."""
        write_resource(
            "Test", "MassProperties", "WEIGHT_EMPTY = 100.0\nWEIGHT_FUEL = 20.0\nWEIGHT_PAYLOAD = 40.0\n"
        )

        registry, report = AircraftLoader(model_config, Environment(gravity=10.0)).load("Test")

        assert registry.total_mass() == 16.0
        assert report.issues_of(InconsistentValue) == []

    def test_file_total_mass_kept_when_inconsistent(
        self, model_config: ModelConfig, write_resource, caplog
    ) -> None:
        """Test a file TOTAL_MASS is stored as given and a mismatch is reported."""
        path = write_resource(
            "Test",
            "MassProperties",
            "WEIGHT_EMPTY = 100.0\nWEIGHT_FUEL = 20.0\nWEIGHT_PAYLOAD = 40.0\nTOTAL_MASS = 5.0\n",
        )

        with caplog.at_level(logging.WARNING, logger="aeroparams.aircraft.loader"):
            registry, report = AircraftLoader(model_config).load("Test")

        assert registry.total_mass() == 5.0
        [issue] = report.issues_of(InconsistentValue)
        assert issue.category == "MassProperties"
        assert issue.path == path
        assert "TOTAL_MASS" in caplog.text

    def test_file_total_mass_matching_weights_not_reported(
        self, model_config: ModelConfig, write_resource
    ) -> None:
        """Test a file TOTAL_MASS that agrees with the weights raises no issue."""
        write_resource(
            "Test",
            "MassProperties",
            "WEIGHT_EMPTY = 100.0\nWEIGHT_FUEL = 20.0\nWEIGHT_PAYLOAD = 40.0\nTOTAL_MASS = 16.0\n",
        )

        registry, report = AircraftLoader(model_config, Environment(gravity=10.0)).load("Test")

        assert registry.total_mass() == 16.0
        assert report.ok

    def test_undecodable_line_keeps_other_values(self, model_config: ModelConfig, write_resource) -> None:
        """Test one undecodable line costs only that line."""
        path = write_resource("Test", "WingGeometry", "")
        path.write_bytes(b"S_WING = 184.0\nB_WING = 33.4\n# caf\xe9 note\nC_BAR = \xe95.7\nAC_X = 0.0\n")

        registry, report = AircraftLoader(model_config).load("Test")

        assert registry.get_wing_geometry(WingGeometryField.S_WING) == 184.0
        assert registry.get_wing_geometry(WingGeometryField.B_WING) == 33.4
        assert registry.get_wing_geometry(WingGeometryField.AC_X) == 0.0
        assert WingGeometryField.C_BAR not in registry.wing_geometry
        assert report.issues_of(ResourceUnreadable) == []
        [failure] = report.issues_of(ParseFailure)
        assert failure.line == 4
        assert failure.category == "WingGeometry"

    def test_seed_with_defaults(self, resource_root: Path, write_resource) -> None:
        """Test defaults fill identifiers absent from the files."""
        write_resource("Test", "WingGeometry", "S_WING = 200.0\n")
        config = ModelConfig(resource_root=resource_root, seed_with_defaults=True)

        registry, report = AircraftLoader(config).load("Test")

        assert registry.get_wing_geometry(WingGeometryField.S_WING) == 200.0
        assert registry.get_wing_geometry(WingGeometryField.B_WING) == 33.4
        assert registry.is_complete()
        assert len(report.issues_of(ResourceNotFound)) == 2

    def test_custom_extension(self, resource_root: Path) -> None:
        """Test the configured extension is used to locate resources."""
        aircraft_dir = resource_root / "Test"
        aircraft_dir.mkdir()
        (aircraft_dir / "WingGeometry.dat").write_text("C_BAR = 6.0\n", encoding="utf-8")
        config = ModelConfig(resource_root=resource_root, extension=".dat")

        registry, _ = AircraftLoader(config).load("Test")

        assert registry.get_wing_geometry(WingGeometryField.C_BAR) == 6.0

    def test_bundled_navion_matches_defaults(self) -> None:
        """Test the shipped Navion resources reproduce the default profile."""
        registry, report = AircraftLoader().load("Navion")

        assert report.ok
        assert registry == build_default_registry()


class TestWriteAircraft:
    """Test writing registries back to resources."""

    def test_round_trip_scalar_categories(self, resource_root: Path, model_config: ModelConfig) -> None:
        """Test written wing and mass values load back unchanged."""
        original = build_default_registry()

        paths = write_aircraft(original, "RoundTrip", resource_root)
        registry, report = AircraftLoader(model_config).load("RoundTrip")

        assert [p.name for p in paths] == ["Aero.txt", "MassProperties.txt", "WingGeometry.txt"]
        assert report.ok
        assert dict(registry.wing_geometry) == dict(original.wing_geometry)
        assert dict(registry.mass_properties) == dict(original.mass_properties)
        assert dict(registry.stability_derivatives) == dict(original.stability_derivatives)

    def test_round_trip_with_non_default_gravity(self, resource_root: Path, model_config: ModelConfig) -> None:
        """Test a written TOTAL_MASS loads back unchanged whatever the loader's gravity."""
        original = build_default_registry(Environment(gravity=9.80665))
        write_aircraft(original, "Metric", resource_root)

        registry, report = AircraftLoader(model_config).load("Metric")

        assert dict(registry.mass_properties) == dict(original.mass_properties)
        assert registry.total_mass() == original.total_mass()
        assert len(report.issues_of(InconsistentValue)) == 1

        registry, report = AircraftLoader(model_config, Environment(gravity=9.80665)).load("Metric")

        assert registry == original
        assert report.ok

    def test_written_format(self, resource_root: Path) -> None:
        """Test resources use the IDENTIFIER = VALUE line format."""
        write_aircraft(build_default_registry(), "Fmt", resource_root)

        lines = (resource_root / "Fmt" / "WingGeometry.txt").read_text(encoding="utf-8").splitlines()

        assert lines[0] == "AC_X = 0.0"
        assert lines[3] == "S_WING = 184.0"
        assert len(lines) == len(WingGeometryField)

    def test_interpolated_derivatives_skipped(self, resource_root: Path) -> None:
        """Test interpolated coefficients are not written."""
        builder = build_default_registry().to_builder()
        builder.set_stability_derivative(
            StabilityDerivative.CL_0, Interpolated(LinearTable([0.0, 1.0], [0.0, 1.0]), ("alpha",))
        )

        write_aircraft(builder.build(), "Interp", resource_root)

        content = (resource_root / "Interp" / "Aero.txt").read_text(encoding="utf-8")
        assert "CL_0 =" not in content
        assert "CL_ALPHA = 4.44" in content

    def test_invalid_name_raises(self, resource_root: Path) -> None:
        """Test writing under an invalid name raises."""
        with pytest.raises(InvalidReference):
            write_aircraft(build_default_registry(), "..", resource_root)


class TestLoadReport:
    """Test LoadReport helpers."""

    def test_empty_report_is_ok(self) -> None:
        """Test a report without issues is ok."""
        assert LoadReport(aircraft_name="Test").ok

    def test_issues_of_accepts_name(self) -> None:
        """Test filtering issues by kind name."""
        report = LoadReport(aircraft_name="Test")
        report.record(ResourceNotFound("gone", path=Path("x")), "Aero")

        assert len(report.issues_of("ResourceNotFound")) == 1
        assert report.issues_of(ParseFailure) == []
        assert not report.ok
