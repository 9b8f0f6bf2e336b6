"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access
and defaults, plus the typed settings consumed by the aircraft loader.

Typical usage example:
    from aeroparams.core.config import ConfigLoader, ModelConfig

    config = ModelConfig.from_file("config/settings.yaml")
    loader = AircraftLoader(config)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from aeroparams.core.errors import AeroParamsError
from aeroparams.core.logging_system import get_logger
from aeroparams.core.resource_path import get_data_path

logger = get_logger(__name__)


class ConfigError(AeroParamsError):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Provides loading, nested access, and default values for configuration.

    Examples:
        >>> config = ConfigLoader.load("config/settings.yaml")
        >>> root = config.get("aircraft.resource_root", default="data/aircraft")
    """

    def __init__(self, data: dict[str, Any], source: Path | None = None) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
            source: File the data was loaded from, if any.
        """
        self._data = data
        self.source = source

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If file cannot be loaded or is not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data, source=path)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.

        Examples:
            >>> config.get("aircraft.extension", default=".txt")
        """
        value: Any = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation).
            value: Value to set.
        """
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            key: Section key (supports dot notation).

        Returns:
            Configuration section as dictionary.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path to save configuration.

        Raises:
            ConfigError: If save fails.
        """
        path = Path(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, default_flow_style=False, sort_keys=False)

        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to save configuration: {e}") from e

        logger.info("Saved configuration to: %s", path)

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Other config values override existing ones.

        Args:
            other: ConfigLoader to merge from.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary.

        Returns:
            Configuration dictionary.
        """
        return self._data.copy()


def default_resource_root() -> Path:
    """Directory holding the bundled per-aircraft parameter resources."""
    return get_data_path("aircraft")


@dataclass
class ModelConfig:
    """Settings for locating and loading aircraft parameter resources.

    Attributes:
        resource_root: Directory to search for per-aircraft parameter resources.
            An aircraft named N is read from resource_root/N/.
        extension: File extension of each resource (including the dot).
        seed_with_defaults: Pre-populate the registry with the default profile
            before overlaying file values.
        encoding: Text encoding of the resource files.
    """

    resource_root: Path = field(default_factory=default_resource_root)
    extension: str = ".txt"
    seed_with_defaults: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Normalize and validate fields."""
        self.resource_root = Path(self.resource_root)
        if self.extension and not self.extension.startswith("."):
            raise ConfigError(f"Extension must start with '.': {self.extension!r}")

    @classmethod
    def from_loader(cls, config: ConfigLoader, base_dir: Path | None = None) -> "ModelConfig":
        """Build settings from the 'aircraft' section of a loaded config.

        Args:
            config: Loaded configuration.
            base_dir: Directory that relative resource_root paths are resolved
                against. Defaults to the config file's directory.

        Returns:
            ModelConfig with missing keys at their defaults.
        """
        section = config.get("aircraft", default={}) or {}
        if not isinstance(section, dict):
            raise ConfigError("Configuration key is not a section: aircraft")

        if base_dir is None and config.source is not None:
            base_dir = config.source.parent

        root = section.get("resource_root")
        if root is None:
            resource_root = default_resource_root()
        else:
            resource_root = Path(root).expanduser()
            if not resource_root.is_absolute() and base_dir is not None:
                resource_root = base_dir / resource_root

        return cls(
            resource_root=resource_root,
            extension=str(section.get("extension", ".txt")),
            seed_with_defaults=bool(section.get("seed_with_defaults", False)),
            encoding=str(section.get("encoding", "utf-8")),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "ModelConfig":
        """Load settings from a YAML file.

        Raises:
            ConfigError: If the file cannot be loaded.
        """
        return cls.from_loader(ConfigLoader.load(path))
