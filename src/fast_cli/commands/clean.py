"""``fast clean``: drop platform files the template no longer ships."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fast_cli.commands.errors import cli_error_handler
from fast_cli.commands.options import LogLevelOption
from fast_cli.constants import DEFAULT_LOG_LEVEL
from fast_cli.core.command import CommandBase
from fast_cli.project.cleanup import Cleanup


class CleanCommand(CommandBase):
    """Remove entries of ``platform/<configId>`` absent from the template."""

    def on_enable(self) -> None:
        self.program.command(
            name="clean",
            help="Remove files of a platform directory that the template does not contain.",
        )(self.action)

    def action(
        self,
        config_id: Annotated[str, typer.Argument(help="Platform config ID, e.g. vivo@main")],
        dry_run: Annotated[
            bool,
            typer.Option("--dry-run", help="Only list what would be removed"),
        ] = False,
        log_level: LogLevelOption = DEFAULT_LOG_LEVEL,
    ) -> None:
        logger = self.require_service("logger")
        with cli_error_handler("clean", "Project cleanup failed"):
            logger.set_level(log_level)
            cleanup = Cleanup(logger.get_logger("cleanup"))
            cleanup.clean(config_id, Path.cwd(), dry_run=dry_run)
