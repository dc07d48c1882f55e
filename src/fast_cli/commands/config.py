"""``fast config``: read and write the per-user configuration."""

from __future__ import annotations

import json
from typing import Annotated, Any

import typer

from fast_cli.commands.errors import CLIError, cli_error_handler
from fast_cli.commands.options import LogLevelOption
from fast_cli.constants import DEFAULT_LOG_LEVEL
from fast_cli.core.command import CommandBase


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class ConfigCommand(CommandBase):
    """Get, set or unset a dotted key such as ``cloud.oss.bucket``."""

    def on_enable(self) -> None:
        self.program.command(
            name="config",
            help="Get or set a configuration value (e.g. cloud.oss.bucket).",
        )(self.action)

    def action(
        self,
        key: Annotated[str, typer.Argument(help="Dotted key, e.g. cloud.oss.region")],
        value: Annotated[
            str | None,
            typer.Argument(help="New value; JSON is accepted for numbers and objects"),
        ] = None,
        unset: Annotated[
            bool, typer.Option("--unset", help="Remove the key")
        ] = False,
        log_level: LogLevelOption = DEFAULT_LOG_LEVEL,
    ) -> None:
        logger = self.require_service("logger")
        config = self.require_service("config")
        with cli_error_handler("config", "Configuration failed"):
            logger.set_level(log_level)

            if unset:
                if value is not None:
                    raise CLIError("--unset does not take a value", command="config")
                if not config.delete_path(key):
                    raise CLIError(f"Key '{key}' is not set", command="config")
                config.flush()
                logger.info("Removed %s", key)
                return

            if value is None:
                current = config.get_path(key)
                if current is None:
                    raise CLIError(f"Key '{key}' is not set", command="config")
                typer.echo(json.dumps(current, indent=2, ensure_ascii=False))
                return

            config.set_path(key, parse_value(value))
            config.flush()
            logger.info("Set %s", key)
