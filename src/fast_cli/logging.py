"""Python-standard logging configuration for the fast CLI.

Logging is configured with logging.config.dictConfig() from the YAML file
shipped in src/fast_cli/config/. Console output goes through Rich.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console

# One above CRITICAL, so nothing gets through
SILENT = logging.CRITICAL + 10

_LEVEL_ALIASES = {
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
}

CONFIG_DIR = Path(__file__).parent / "config"

# Log records go to stderr, command output to stdout (see logging.yaml)
stderr_console = Console(stderr=True)


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def resolve_level(level: str) -> tuple[str, int]:
    """Normalise a level name to its canonical name and numeric value.

    Accepts the standard names case-insensitively, plus ``warn`` and
    ``silent``.

    Raises:
        LoggingError: If the level name is unknown

    """
    name = level.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    if name == "SILENT":
        return name, SILENT

    numeric_level = logging.getLevelNamesMapping().get(name)
    if numeric_level is None:
        raise LoggingError(f"Invalid log level: {level}")
    return name, numeric_level


def get_config_path(config_name: str = "logging") -> Path:
    """Get the path to a packaged logging configuration file.

    Raises:
        LoggingError: If the configuration file does not exist

    """
    config_path = CONFIG_DIR / f"{config_name}.yaml"
    if not config_path.exists():
        raise LoggingError(
            f"No logging configuration found. Expected at: {config_path}"
        )
    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise LoggingError(f"Invalid configuration format in {config_path}")

        return config  # type: ignore[return-value]

    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e


def _apply_level(config: dict[str, Any], numeric_level: int) -> None:
    """Override logger and handler levels in a dictConfig mapping."""
    for logger_config in config.get("loggers", {}).values():
        logger_config["level"] = numeric_level

    if "root" in config:
        config["root"]["level"] = numeric_level

    # Handlers filter below their own level, so only ever lower them
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "level" in handler_config:
            current = handler_config["level"]
            if isinstance(current, str):
                current = logging.getLevelNamesMapping().get(current.upper(), logging.INFO)
            if numeric_level < current:
                handler_config["level"] = numeric_level


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL, SILENT)
        force_basic: Force basic console logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or "INFO")
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path()

        config = load_config(config_path)

        if level:
            _, numeric_level = resolve_level(level)
            _apply_level(config, numeric_level)

        logging.config.dictConfig(config)

        logging.getLogger(__name__).debug("Logging configured from: %s", config_path)

    except (LoggingError, ImportError, KeyError, ValueError) as e:
        fallback_level = level or "INFO"
        _setup_basic_logging(fallback_level)

        logging.getLogger(__name__).warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic console logging as fallback."""
    try:
        _, numeric_level = resolve_level(level)
    except LoggingError:
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
