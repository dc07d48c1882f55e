"""CLI commands registered on the kernel."""

from fast_cli.commands.clean import CleanCommand
from fast_cli.commands.config import ConfigCommand
from fast_cli.commands.errors import CLIError, cli_error_handler
from fast_cli.commands.result import ResultCommand
from fast_cli.commands.upload import UploadCommand

COMMANDS = (CleanCommand, ResultCommand, UploadCommand, ConfigCommand)

__all__ = [
    "COMMANDS",
    "CLIError",
    "CleanCommand",
    "ConfigCommand",
    "ResultCommand",
    "UploadCommand",
    "cli_error_handler",
]
