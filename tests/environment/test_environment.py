"""Tests for the environment collaborator."""

import pytest

from aeroparams.environment import GRAVITY_FT_S2, Environment


class TestEnvironment:
    """Test Environment."""

    def test_default_gravity(self) -> None:
        """Test default gravity points down with standard magnitude."""
        gravity = Environment().get_gravity()

        assert gravity.x == 0.0
        assert gravity.y == 0.0
        assert gravity.z == GRAVITY_FT_S2
        assert gravity[2] == pytest.approx(32.174)

    def test_custom_gravity(self) -> None:
        """Test a custom gravity magnitude."""
        assert Environment(gravity=9.80665).get_gravity().z == 9.80665
