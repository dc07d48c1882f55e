"""``fast result``: render and copy the release announcement of a build."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.text import Text

from fast_cli.commands.errors import cli_error_handler
from fast_cli.commands.options import LogLevelOption
from fast_cli.constants import DEFAULT_LOG_LEVEL
from fast_cli.core.command import CommandBase
from fast_cli.project.release import CHANGELOG_HEADING, format_changelog, render_release
from fast_cli.project.xyx_config import load_xyx_config
from fast_cli.system.clipboard import copy_to_clipboard
from fast_cli.system.editor import open_editor_and_read

console = Console()


class ResultCommand(CommandBase):
    """Print the release links of ``<configId>`` and copy them to the clipboard."""

    def on_enable(self) -> None:
        self.program.command(
            name="result",
            help="Show the release result of a platform build.",
        )(self.action)

    def action(
        self,
        config_id: Annotated[str, typer.Argument(help="Platform config ID, e.g. vivo@main#acme")],
        message: Annotated[
            bool,
            typer.Option("--message", "-m", help="Write a changelog in $EDITOR"),
        ] = False,
        copy: Annotated[
            bool,
            typer.Option("--copy/--no-copy", help="Copy the result to the clipboard"),
        ] = True,
        log_level: LogLevelOption = DEFAULT_LOG_LEVEL,
    ) -> None:
        logger = self.require_service("logger")
        with cli_error_handler("result", "Failed to render release result"):
            logger.set_level(log_level)
            project = load_xyx_config(Path.cwd())
            platform = project.platform(config_id)

            changelog = None
            if message:
                text = asyncio.run(open_editor_and_read(CHANGELOG_HEADING))
                changelog = format_changelog(text)

            result = render_release(config_id, platform, changelog)
            console.print(Text(result), soft_wrap=True)

            if copy and copy_to_clipboard(result):
                logger.info("Release result copied to clipboard")
