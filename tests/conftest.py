"""Pytest configuration and fixtures for all tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from aeroparams.core.config import ModelConfig


@pytest.fixture
def resource_root(tmp_path: Path) -> Path:
    """Empty directory used as the aircraft resource root."""
    root = tmp_path / "aircraft"
    root.mkdir()
    return root


@pytest.fixture
def model_config(resource_root: Path) -> ModelConfig:
    """Loader settings pointing at the temporary resource root."""
    return ModelConfig(resource_root=resource_root)


@pytest.fixture
def write_resource(resource_root: Path) -> Callable[[str, str, str], Path]:
    """Write one resource file for an aircraft.

    Usage: write_resource("TestPlane", "Aero", "CL_ALPHA = 4.0\\n")
    """

    def _write(aircraft_name: str, category: str, content: str) -> Path:
        aircraft_dir = resource_root / aircraft_name
        aircraft_dir.mkdir(parents=True, exist_ok=True)
        path = aircraft_dir / f"{category}.txt"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
