"""Logger service backed by the standard logging module."""

from __future__ import annotations

import logging
from typing import Any

from fast_cli.constants import DEFAULT_LOG_LEVEL, LOGGER_NAME
from fast_cli.core.service import Service, ServiceContext
from fast_cli.logging import resolve_level, setup_logging


class LoggerService(Service):
    """Shared logger for commands and services.

    Configures logging once on registration; commands adjust verbosity with
    ``set_level()`` from their ``--log-level`` option.
    """

    def __init__(self, context: ServiceContext) -> None:
        super().__init__(context)
        self._logger = logging.getLogger(LOGGER_NAME)
        self._level = DEFAULT_LOG_LEVEL

    def on_register(self) -> None:
        setup_logging(level=self._level)

    @property
    def level(self) -> str:
        return self._level

    def set_level(self, level: str) -> None:
        """Reconfigure logging at the given level.

        Raises:
            LoggingError: If the level name is unknown

        """
        name, _ = resolve_level(level)
        if name == self._level:
            return
        self._level = name
        setup_logging(level=name)

    def get_logger(self, name: str) -> logging.Logger:
        """Return a child of the application logger."""
        return self._logger.getChild(name)

    def debug(self, msg: str, *args: Any) -> None:
        self._logger.debug(msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._logger.info(msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._logger.warning(msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._logger.error(msg, *args)
