"""Service registration table.

The table is built once at startup by the kernel. Keeping it in its own
module means the core package never imports concrete services.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from fast_cli.core.service import ServiceConstructor
from fast_cli.services.config import ConfigService
from fast_cli.services.logger import LoggerService
from fast_cli.services.upload import UploadService

ServiceName: TypeAlias = Literal["logger", "config", "upload"]


def build_service_definitions() -> dict[str, ServiceConstructor]:
    """Return the name -> constructor table of built-in services."""
    return {
        "logger": LoggerService,
        "config": ConfigService,
        "upload": UploadService,
    }
