"""Upload service wrapping the object storage client with retries."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from fast_cli.core.service import Service, ServiceContext
from fast_cli.errors import ConfigurationError, UploadError
from fast_cli.services.configuration import OSSConfiguration
from fast_cli.services.storage import ObjectStorageClient, OSSStorageClient

if TYPE_CHECKING:
    from fast_cli.services.config import ConfigService
    from fast_cli.services.logger import LoggerService


class UploadService(Service):
    """Uploads build archives to OSS and reports their public URL.

    The storage client is created on first use, so commands that never upload
    work without cloud credentials. Failed attempts are retried with
    exponential backoff: ``RETRY_BASE_DELAY * 2 ** (attempt - 1)`` seconds.
    """

    RETRY_BASE_DELAY = 0.5

    def __init__(self, context: ServiceContext) -> None:
        super().__init__(context)
        self._client: ObjectStorageClient | None = None
        self._oss_config: OSSConfiguration | None = None

    def on_register(self) -> None:
        self._logger: LoggerService = self.require_service("logger")
        self._config: ConfigService = self.require_service("config")

    def oss_configuration(self) -> OSSConfiguration:
        """Validate and return the ``cloud.oss`` configuration section.

        Raises:
            ConfigurationError: If the section is missing or invalid

        """
        if self._oss_config is not None:
            return self._oss_config

        properties = self._config.get_path("cloud.oss")
        if not properties:
            raise ConfigurationError(
                f"No cloud.oss configuration found in {self._config.config_file}"
            )
        if not isinstance(properties, dict):
            raise ConfigurationError("cloud.oss configuration must be an object")

        try:
            self._oss_config = OSSConfiguration.from_properties(properties)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid cloud.oss configuration: {e}") from e

        self._logger.debug(
            "cloud.oss configuration: region=%s bucket=%s domain=%s",
            self._oss_config.region,
            self._oss_config.bucket,
            self._oss_config.domain,
        )
        return self._oss_config

    def use_client(self, client: ObjectStorageClient) -> None:
        """Use the given client instead of building one from configuration."""
        self._client = client

    def _get_client(self) -> ObjectStorageClient:
        if self._client is None:
            self._client = OSSStorageClient(self.oss_configuration())
        return self._client

    def build_public_url(self, key: str, reported_url: str | None = None) -> str:
        """Derive the public URL of an uploaded object.

        Prefers the URL reported by the client, then the configured custom
        domain, then the bucket's default OSS host.
        """
        if reported_url:
            return reported_url

        config = self.oss_configuration()
        if config.domain:
            return f"https://{config.domain}/{key}"
        return f"http://{config.bucket}.{config.region}.aliyuncs.com/{key}"

    async def upload_file(self, file: str | Path, dest_name: str | None = None) -> str:
        """Upload a regular file and return its public URL.

        Args:
            file: Local path of the file to upload
            dest_name: Object key; defaults to the file's name

        Raises:
            UploadError: If the path is not a regular file or every attempt fails
            ConfigurationError: If cloud.oss is missing or invalid

        """
        path = Path(file)
        if not path.exists():
            raise UploadError(f"File not found or inaccessible: {path}", file=str(path))
        if not path.is_file():
            raise UploadError(f"Not a regular file: {path}", file=str(path))

        key = dest_name or path.name
        config = self.oss_configuration()
        client = self._get_client()
        max_attempts = config.max_attempts

        last_error: Exception | None = None
        for attempt in range(1, max_attempts + 1):
            self._logger.debug(
                'Uploading "%s" as "%s" (attempt %d/%d)', path, key, attempt, max_attempts
            )
            try:
                result = await asyncio.to_thread(client.put, key, str(path))
            except Exception as e:
                last_error = e
                self._logger.debug("Upload attempt %d failed: %s", attempt, e)
                if attempt < max_attempts:
                    delay = self.RETRY_BASE_DELAY * 2 ** (attempt - 1)
                    self._logger.debug("Retrying in %.1fs...", delay)
                    await asyncio.sleep(delay)
                continue

            url = self.build_public_url(result.name or key, result.url)
            self._logger.info("Upload succeeded: %s", url)
            return url

        raise UploadError(
            f'Failed to upload "{path}" after {max_attempts} attempts: {last_error}',
            file=str(path),
        ) from last_error
