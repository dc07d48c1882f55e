"""``fast upload``: upload a build archive to object storage."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from fast_cli.commands.errors import cli_error_handler
from fast_cli.commands.options import LogLevelOption
from fast_cli.constants import DEFAULT_LOG_LEVEL
from fast_cli.core.command import CommandBase


class UploadCommand(CommandBase):
    """Upload a file and print its public URL."""

    def on_enable(self) -> None:
        self.program.command(
            name="upload",
            help="Upload a file to the cloud.",
        )(self.action)

    def action(
        self,
        file: Annotated[Path, typer.Argument(help="File to upload")],
        dest: Annotated[
            str | None,
            typer.Option("--dest", "-d", help="Object key, defaults to the file name"),
        ] = None,
        log_level: LogLevelOption = DEFAULT_LOG_LEVEL,
    ) -> None:
        logger = self.require_service("logger")
        upload = self.require_service("upload")
        with cli_error_handler("upload", "Upload failed"):
            logger.set_level(log_level)
            url = asyncio.run(upload.upload_file(file, dest))
            typer.echo(url)
