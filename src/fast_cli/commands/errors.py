"""Turning command failures into error panels and exit code 1.

Known failures (``FastError`` subclasses) are shown with their type and,
where there is an obvious next step, a hint. Anything else is reported the
same way, with its traceback kept for ``--log-level debug``.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from fast_cli.errors import (
    ConfigurationError,
    EditorError,
    FastError,
    ProjectConfigError,
    UploadError,
)

logger = logging.getLogger(__name__)
console = Console(stderr=True)

_HINTS: dict[type[FastError], str] = {
    ConfigurationError: "Set values with: fast config <key> <value>",
    ProjectConfigError: "Run inside a project containing xyx.config.json",
    EditorError: "Set EDITOR to your editor command",
    UploadError: "Re-run with --log-level debug to see each attempt",
}


class CLIError(FastError):
    """A command failure to report to the user.

    Attributes:
        command: Name of the command that failed (e.g. "clean", "upload")
        cause: The exception being reported, if any

    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.cause = cause
        self.__cause__ = cause

    @property
    def kind(self) -> str | None:
        """Type name of the reported exception, e.g. ``ConfigurationError``."""
        if self.cause is None:
            return None
        return type(self.cause).__name__

    @property
    def hint(self) -> str | None:
        for error_type, hint in _HINTS.items():
            if isinstance(self.cause, error_type):
                return hint
        return None


def render_error(title: str, error: CLIError) -> Panel:
    body = Text(str(error), style="red")
    if error.hint:
        body.append(f"\n{error.hint}", style="dim")

    if error.command:
        title = f"{title} (fast {error.command})"
    return Panel(
        body,
        title=f"❌ {title}",
        subtitle=error.kind,
        subtitle_align="right",
        border_style="red",
    )


def _fail(title: str, error: CLIError) -> NoReturn:
    logger.debug("%s: %s", title, error)
    console.print(render_error(title, error))
    raise typer.Exit(1) from error


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report any exception raised in the block and exit with code 1.

    Args:
        command: Command name shown in the panel title
        title: Panel title, e.g. "Upload failed"

    """
    try:
        yield
    except typer.Exit:
        raise
    except CLIError as e:
        e.command = e.command or command
        _fail(title, e)
    except FastError as e:
        _fail(title, CLIError(str(e), command=command, cause=e))
    except Exception as e:
        logger.debug("Unexpected error in %s", command, exc_info=True)
        _fail(title, CLIError(str(e) or type(e).__name__, command=command, cause=e))
