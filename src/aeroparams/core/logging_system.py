"""Logging system for the parameter model components.

This module provides YAML-configurable logging with per-component levels,
platform-aware log locations, and startup-based rotation.

Platform-specific log locations:
    - macOS: ~/Library/Logs/AeroParams/aeroparams.log
    - Linux: ~/.aeroparams/logs/aeroparams.log
    - Windows: %AppData%/AeroParams/Logs/aeroparams.log

Each initialization rotates logs, keeping the last 5 runs.

Typical usage example:
    from aeroparams.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded %d parameters", count)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

from aeroparams.core.errors import AeroParamsError

# Global configuration
_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(AeroParamsError):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/AeroParams
        - Linux: ~/.aeroparams/logs
        - Windows: %AppData%/AeroParams/Logs
    """
    system = platform.system()

    if system == "Darwin":  # macOS
        return Path.home() / "Library" / "Logs" / "AeroParams"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "AeroParams" / "Logs"
    else:  # Linux and other Unix-like systems
        return Path.home() / ".aeroparams" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "aeroparams.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames current log to aeroparams.log.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        new_log = log_dir / f"{log_filename}.{i + 1}"
        if old_log.exists():
            old_log.rename(new_log)

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(
    config_path: str | Path | None = None, use_platform_dir: bool = True, file_logging: bool = True
) -> None:
    """Initialize the logging system from YAML configuration.

    Applications call this once at startup. If nothing has, get_logger()
    falls back to console-only logging, which touches no files.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, use platform-specific log directory.
            If False, use directory from config (for development/testing).
        file_logging: If False, the combined log file is disabled and no log
            directory is created, whatever the config says.

    Raises:
        LoggingError: If the configuration file cannot be loaded.

    Examples:
        >>> initialize_logging("config/logging.yaml")
        >>> log = get_logger("aeroparams.aircraft.loader")
    """
    global _logging_config, _initialized

    if config_path:
        try:
            config_path = Path(config_path)
            if not config_path.exists():
                raise LoggingError(f"Logging config file not found: {config_path}")

            with config_path.open("r", encoding="utf-8") as f:
                _logging_config = yaml.safe_load(f) or {}

        except Exception as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
    else:
        _logging_config = _get_default_config()

    if not file_logging:
        _logging_config["combined_log"] = {**_logging_config.get("combined_log", {}), "enabled": False}

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    if _logging_config.get("combined_log", {}).get("enabled", True):
        _setup_directories()

        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_filename = _logging_config.get("combined_log", {}).get("filename", "aeroparams.log")
        keep_count = _logging_config.get("combined_log", {}).get("backup_count", 5)
        rotate_logs(log_dir, log_filename, keep_count)

    _configure_root_logger()

    # Component levels are applied on first get_logger() call
    _loggers_cache.clear()
    _initialized = True


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": True,
            "filename": "aeroparams.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _setup_directories() -> None:
    """Create log directories if they don't exist."""
    log_dir = Path(_logging_config.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter in handlers

    for handler in list(root_logger.handlers):
        if getattr(handler, "_aeroparams_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    if _logging_config.get("console", {}).get("enabled", True):
        console_handler = logging.StreamHandler()
        console_level = _logging_config.get("console", {}).get("level", "WARNING")
        console_handler.setLevel(getattr(logging, console_level))
        console_handler.setFormatter(_get_formatter())
        console_handler._aeroparams_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    if _logging_config.get("combined_log", {}).get("enabled", True):
        combined_config = _logging_config["combined_log"]
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / combined_config.get("filename", "aeroparams.log")

        # Rotation happens on startup, not by size
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(getattr(logging, _logging_config.get("level", "INFO")))
        file_handler.setFormatter(_get_formatter())
        file_handler._aeroparams_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that shows milliseconds with dot separator."""

    def formatTime(self, record, datefmt=None):
        """Format time with milliseconds using dot separator."""
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = time.strftime("%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    """Get the configured log formatter.

    Returns:
        Configured logging.Formatter instance.
    """
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Loggers are cached and reused. Each logger can have its own level
    specified in the logging config YAML under the 'components' section.

    Args:
        name: Logger name (typically the module's __name__).

    Returns:
        Configured logger instance.

    Examples:
        >>> log = get_logger(__name__)
        >>> log.warning("Skipping malformed line %d in %s", lineno, path)

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if not _initialized:
        initialize_logging(use_platform_dir=False, file_logging=False)

    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)

    component_config = _logging_config.get("components", {}).get(name, {})

    if component_config.get("enabled", True):
        if "level" in component_config:
            logger.setLevel(getattr(logging, component_config["level"]))
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush all handlers and close log files.

    Should be called at application shutdown.
    """
    global _initialized

    logging.shutdown()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_aeroparams_handler", False):
            root_logger.removeHandler(handler)
    _loggers_cache.clear()
    _initialized = False
