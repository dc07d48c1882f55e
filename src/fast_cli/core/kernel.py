"""Kernel owning the service manager and the root command-line application."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Annotated, TypeAlias

import typer

from fast_cli.constants import APP_NAME, VERSION
from fast_cli.core.manager import ServiceManager
from fast_cli.core.service import ServiceConstructor
from fast_cli.errors import KernelError

if TYPE_CHECKING:
    from fast_cli.core.command import CommandBase

logger = logging.getLogger(__name__)

DefinitionsBuilder: TypeAlias = Callable[[], Mapping[str, ServiceConstructor]]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {VERSION}")
        raise typer.Exit()


def _root_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show the version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """A high-performance CLI for fast development."""


def _default_definitions() -> Mapping[str, ServiceConstructor]:
    from fast_cli.services.registry import build_service_definitions

    return build_service_definitions()


class Kernel:
    """Wires services and commands together for one CLI process.

    The kernel defines the fixed service set on ``boot()``, realises and
    initialises every service, and exposes ``register_command()`` to attach
    command parsers to the root Typer application.
    """

    def __init__(
        self,
        definitions: DefinitionsBuilder | None = None,
        app: typer.Typer | None = None,
    ) -> None:
        """Initialise the kernel.

        Args:
            definitions: Builder returning the name -> constructor table of
                services to define on boot. Defaults to the built-in registry.
            app: Root Typer application. A new one named after the tool is
                created when omitted.

        """
        self._definitions = definitions or _default_definitions
        self.app = app or typer.Typer(
            name=APP_NAME,
            help="A high-performance CLI for fast development.",
            no_args_is_help=True,
            add_completion=False,
        )
        self.app.callback()(_root_callback)
        self.service_manager = ServiceManager(self)
        self.commands: list[CommandBase] = []
        self._booted = False

    @property
    def booted(self) -> bool:
        return self._booted

    async def boot(self) -> None:
        """Define all services and initialise them.

        Raises:
            KernelError: If the kernel is already booted or any service fails
                to instantiate or initialise

        """
        if self._booted:
            raise KernelError("Kernel is already booted")

        try:
            for name, ctor in self._definitions().items():
                self.service_manager.define(name, ctor)
            await self.service_manager.init_all()
        except Exception as e:
            raise KernelError(f"Failed to boot kernel: {e}") from e

        self._booted = True
        logger.debug("Kernel booted with services: %s", self.service_manager.get_names())

    def register_command(
        self, ctor: Callable[[Kernel], CommandBase]
    ) -> CommandBase:
        """Construct a command bound to this kernel and attach its parser.

        Raises:
            KernelError: If the kernel has not been booted

        """
        if not self._booted:
            raise KernelError("Kernel must be booted before registering commands")

        command = ctor(self)
        self.app.registered_commands.extend(command.program.registered_commands)
        self.commands.append(command)
        logger.debug("Registered command: %s", type(command).__name__)
        return command

    async def shutdown(self) -> None:
        """Destroy all services. Does nothing when the kernel is not booted.

        Raises:
            KernelError: If teardown fails

        """
        if not self._booted:
            return

        try:
            await self.service_manager.destroy_all()
        except Exception as e:
            raise KernelError(f"Failed to shut down kernel: {e}") from e
        self._booted = False
        logger.debug("Kernel shut down")
