"""Built-in services: logger, config and upload."""

from fast_cli.services.config import ConfigService
from fast_cli.services.configuration import BaseServiceConfiguration, OSSConfiguration
from fast_cli.services.logger import LoggerService
from fast_cli.services.registry import build_service_definitions
from fast_cli.services.storage import ObjectStorageClient, OSSStorageClient, PutResult
from fast_cli.services.upload import UploadService

__all__ = [
    "BaseServiceConfiguration",
    "ConfigService",
    "LoggerService",
    "OSSConfiguration",
    "OSSStorageClient",
    "ObjectStorageClient",
    "PutResult",
    "UploadService",
    "build_service_definitions",
]
