"""fast: developer CLI for multi-platform HTML5 game builds."""

from fast_cli.constants import VERSION
from fast_cli.core import CommandBase, Kernel, Service, ServiceContext, ServiceManager

__version__ = VERSION

__all__ = [
    "CommandBase",
    "Kernel",
    "Service",
    "ServiceContext",
    "ServiceManager",
    "__version__",
]
