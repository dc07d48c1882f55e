"""Base class for CLI commands bound to a kernel."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Literal, overload

import typer

if TYPE_CHECKING:
    from fast_cli.core.kernel import Kernel
    from fast_cli.services.config import ConfigService
    from fast_cli.services.logger import LoggerService
    from fast_cli.services.upload import UploadService


class CommandBase(abc.ABC):
    """A CLI command with its own Typer sub-parser.

    Constructing a command immediately calls ``on_enable()``, where the
    subclass declares its name, arguments, options and action on
    ``self.program``. The kernel then attaches the declared command to the
    root application. Actions pull shared services through
    ``require_service()`` while executing.

    Example:
        ```python
        class HelloCommand(CommandBase):
            def on_enable(self) -> None:
                self.program.command(name="hello")(self.action)

            def action(self, name: str) -> None:
                self.require_service("logger").info("Hello %s", name)
        ```

    """

    def __init__(self, kernel: Kernel) -> None:
        self.kernel = kernel
        self.program = typer.Typer()
        self.on_enable()

    @abc.abstractmethod
    def on_enable(self) -> None:
        """Declare the command on ``self.program``."""

    @overload
    def get_service(self, name: Literal["logger"]) -> LoggerService | None: ...
    @overload
    def get_service(self, name: Literal["config"]) -> ConfigService | None: ...
    @overload
    def get_service(self, name: Literal["upload"]) -> UploadService | None: ...
    @overload
    def get_service(self, name: str) -> Any | None: ...
    def get_service(self, name: str) -> Any | None:
        return self.kernel.service_manager.get(name)

    @overload
    def require_service(self, name: Literal["logger"]) -> LoggerService: ...
    @overload
    def require_service(self, name: Literal["config"]) -> ConfigService: ...
    @overload
    def require_service(self, name: Literal["upload"]) -> UploadService: ...
    @overload
    def require_service(self, name: str) -> Any: ...
    def require_service(self, name: str) -> Any:
        return self.kernel.service_manager.require(name)
