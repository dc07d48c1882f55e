"""Tests for CommandBase."""

from __future__ import annotations

import pytest

from fast_cli.core.command import CommandBase
from fast_cli.core.kernel import Kernel
from fast_cli.core.service import Service
from fast_cli.errors import ServiceNotFoundError


class GreetCommand(CommandBase):
    def on_enable(self) -> None:
        self.enabled = True
        self.program.command(name="greet")(self.action)

    def action(self) -> None:
        pass


class TestCommandBase:
    """Test command construction and service access."""

    def test_on_enable_runs_during_construction(self):
        command = GreetCommand(Kernel(lambda: {}))

        assert command.enabled is True
        assert [c.name for c in command.program.registered_commands] == ["greet"]

    def test_subclass_must_implement_on_enable(self):
        class Incomplete(CommandBase):
            pass

        with pytest.raises(TypeError):
            Incomplete(Kernel(lambda: {}))  # type: ignore[abstract]

    async def test_services_resolve_through_kernel(self):
        kernel = Kernel(lambda: {"plain": Service})
        await kernel.boot()
        command = GreetCommand(kernel)

        assert command.require_service("plain") is kernel.service_manager.require("plain")
        assert command.get_service("missing") is None

    def test_require_unknown_service_raises(self):
        command = GreetCommand(Kernel(lambda: {}))

        with pytest.raises(ServiceNotFoundError, match="'upload'"):
            command.require_service("upload")
