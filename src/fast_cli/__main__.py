"""Main entry point for the fast CLI.

Commands:
- clean: remove stale platform files against the cached template
- result: render and copy the release announcement of a build
- upload: upload a build archive to object storage
- config: read and write the per-user configuration
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv

from fast_cli.commands import COMMANDS
from fast_cli.commands.errors import cli_error_handler
from fast_cli.constants import get_app_dir
from fast_cli.core.kernel import Kernel


def build_kernel() -> Kernel:
    """Boot a kernel and register every command on it."""
    kernel = Kernel()
    asyncio.run(kernel.boot())
    for command in COMMANDS:
        kernel.register_command(command)
    return kernel


def main(args: list[str] | None = None) -> None:
    # The working directory's .env overrides the per-user one
    load_dotenv(get_app_dir() / ".env")
    load_dotenv(Path.cwd() / ".env", override=True)

    try:
        with cli_error_handler("boot", "Failed to start"):
            kernel = build_kernel()
    except typer.Exit as e:
        raise SystemExit(e.exit_code) from e

    try:
        kernel.app(args=args, prog_name="fast")
    finally:
        asyncio.run(kernel.shutdown())


if __name__ == "__main__":
    main()
