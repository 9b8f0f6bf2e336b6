"""Resource path resolution for bundled configuration and aircraft data.

This module resolves file paths correctly whether running from a source
checkout or from a PyInstaller bundle.

Typical usage:
    from aeroparams.core.resource_path import get_config_path, get_data_path

    settings = get_config_path("settings.yaml")
    aircraft_root = get_data_path("aircraft")
"""

import sys
from pathlib import Path
from typing import Optional


def is_bundled() -> bool:
    """Check if running from a PyInstaller bundle.

    Returns:
        True if running from PyInstaller bundle, False if running from source.
    """
    return hasattr(sys, "_MEIPASS")


def get_bundle_dir() -> Optional[Path]:
    """Get the PyInstaller bundle directory if running from bundle.

    Returns:
        Path to the bundle directory, or None if not bundled.
    """
    if is_bundled():
        return Path(getattr(sys, "_MEIPASS"))
    return None


def get_project_root() -> Path:
    """Get the project root directory.

    Returns:
        Path to project root:
        - When running from source: The directory holding config/ and data/
        - When bundled: The temporary bundle directory containing resources

    Examples:
        >>> get_project_root()
        PosixPath('/Users/user/dev/aeroparams')  # From source
    """
    bundle_dir = get_bundle_dir()
    if bundle_dir is not None:
        return bundle_dir
    # From source, go up from src/aeroparams/core to project root
    return Path(__file__).parent.parent.parent.parent


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to a resource file or directory.

    Args:
        relative_path: Relative path from project root (e.g., "config/logging.yaml")

    Returns:
        Absolute path to the resource.
    """
    return get_project_root() / relative_path


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file.

    Args:
        config_file: Config filename or relative path (e.g., "settings.yaml").

    Returns:
        Absolute path to the config file.

    Examples:
        >>> str(get_config_path("logging.yaml"))
        '/Users/user/dev/aeroparams/config/logging.yaml'
    """
    return get_resource_path(f"config/{config_file}")


def get_data_path(data_file: str) -> Path:
    """Get path to a data file or directory.

    Args:
        data_file: Data filename or relative path (e.g., "aircraft/Navion").

    Returns:
        Absolute path to the data file or directory.

    Examples:
        >>> str(get_data_path("aircraft"))
        '/Users/user/dev/aeroparams/data/aircraft'
    """
    return get_resource_path(f"data/{data_file}")
