"""Service kernel: services, service manager, kernel and command base."""

from fast_cli.core.command import CommandBase
from fast_cli.core.kernel import Kernel
from fast_cli.core.manager import ServiceManager
from fast_cli.core.service import Service, ServiceConstructor, ServiceContext

__all__ = [
    "CommandBase",
    "Kernel",
    "Service",
    "ServiceConstructor",
    "ServiceContext",
    "ServiceManager",
]
