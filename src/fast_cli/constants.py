"""Application-wide constants and per-user paths."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "fast"
VERSION = "0.1.0"

PROJECT_CONFIG_FILE = "xyx.config.json"

CONFIG_FILE_NAME = "config.json"
CONFIG_DEBOUNCE_DELAY = 0.1

LOGGER_NAME = "fast_cli"
DEFAULT_LOG_LEVEL = "INFO"


def get_app_dir() -> Path:
    """Per-user application directory (``$FAST_HOME`` or ``~/.fast``)."""
    override = os.getenv("FAST_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / f".{APP_NAME}"


def get_config_file() -> Path:
    """Path of the per-user JSON configuration file."""
    return get_app_dir() / CONFIG_FILE_NAME


def get_xyx_home() -> Path:
    """Directory shared with xyx-cli (``$XYX_CLI_HOME`` or ``~/.xyx-cli``)."""
    override = os.getenv("XYX_CLI_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".xyx-cli"
