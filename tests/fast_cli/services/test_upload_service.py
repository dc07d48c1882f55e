"""Tests for UploadService - retries, URL derivation and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from fast_cli.core.manager import ServiceManager
from fast_cli.errors import ConfigurationError, UploadError
from fast_cli.services import upload as upload_module
from fast_cli.services.configuration import OSSConfiguration
from fast_cli.services.storage import PutResult
from fast_cli.services.upload import UploadService

OSS_CONFIG = {
    "region": "oss-cn-hangzhou",
    "apiKey": "key",
    "apiKeySecret": "secret",
    "bucket": "games",
}


class FakeClient:
    """ObjectStorageClient failing a fixed number of times before succeeding."""

    def __init__(self, failures: int = 0, url: str | None = None) -> None:
        self.failures = failures
        self.url = url
        self.calls: list[tuple[str, str]] = []

    def put(self, key: str, file_path: str) -> PutResult:
        self.calls.append((key, file_path))
        if len(self.calls) <= self.failures:
            raise ConnectionError(f"attempt {len(self.calls)} refused")
        return PutResult(name=key, url=self.url)


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record backoff delays instead of sleeping."""
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(upload_module.asyncio, "sleep", fake_sleep)
    return delays


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    path = tmp_path / "build.zip"
    path.write_bytes(b"PK\x03\x04")
    return path


def _upload_service(manager: ServiceManager, write_config, **oss) -> UploadService:
    write_config({"cloud": {"oss": {**OSS_CONFIG, **oss}}})
    return manager.require("upload")


# =============================================================================
# Retries
# =============================================================================


class TestUploadRetries:
    """Test retry and backoff behaviour."""

    async def test_always_failing_client_exhausts_default_attempts(
        self, manager: ServiceManager, write_config, archive: Path, sleeps: list[float]
    ):
        # Arrange
        service = _upload_service(manager, write_config)
        client = FakeClient(failures=10)
        service.use_client(client)

        # Act
        with pytest.raises(UploadError) as exc_info:
            await service.upload_file(archive)

        # Assert
        assert len(client.calls) == 3
        assert sleeps == [0.5, 1.0]
        assert str(archive) in str(exc_info.value)
        assert "after 3 attempts" in str(exc_info.value)
        assert "attempt 3 refused" in str(exc_info.value)
        assert exc_info.value.file == str(archive)
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    async def test_transient_failure_then_success(
        self, manager: ServiceManager, write_config, archive: Path, sleeps: list[float]
    ):
        service = _upload_service(manager, write_config, domain="cdn.example.com")
        client = FakeClient(failures=1)
        service.use_client(client)

        url = await service.upload_file(archive)

        assert url == "https://cdn.example.com/build.zip"
        assert len(client.calls) == 2
        assert sleeps == [0.5]

    async def test_upload_retries_setting_is_respected(
        self, manager: ServiceManager, write_config, archive: Path, sleeps: list[float]
    ):
        service = _upload_service(manager, write_config, uploadRetries=5)
        client = FakeClient(failures=10)
        service.use_client(client)

        with pytest.raises(UploadError, match="after 5 attempts"):
            await service.upload_file(archive)

        assert sleeps == [0.5, 1.0, 2.0, 4.0]

    async def test_upload_retries_below_one_still_attempts_once(
        self, manager: ServiceManager, write_config, archive: Path, sleeps: list[float]
    ):
        service = _upload_service(manager, write_config, uploadRetries=0)
        client = FakeClient(failures=10)
        service.use_client(client)

        with pytest.raises(UploadError, match="after 1 attempts"):
            await service.upload_file(archive)

        assert len(client.calls) == 1
        assert sleeps == []


# =============================================================================
# Keys & URLs
# =============================================================================


class TestUploadUrls:
    """Test object keys and public URL derivation."""

    async def test_dest_name_is_used_as_object_key(
        self, manager: ServiceManager, write_config, archive: Path
    ):
        service = _upload_service(manager, write_config, domain="cdn.example.com")
        client = FakeClient()
        service.use_client(client)

        url = await service.upload_file(archive, "games/demo/1.0.0.zip")

        assert client.calls == [("games/demo/1.0.0.zip", str(archive))]
        assert url == "https://cdn.example.com/games/demo/1.0.0.zip"

    async def test_reported_url_is_preferred(
        self, manager: ServiceManager, write_config, archive: Path
    ):
        service = _upload_service(manager, write_config, domain="cdn.example.com")
        service.use_client(FakeClient(url="https://games.oss.example/build.zip"))

        url = await service.upload_file(archive)

        assert url == "https://games.oss.example/build.zip"

    def test_default_bucket_host_without_domain(
        self, manager: ServiceManager, write_config
    ):
        service = _upload_service(manager, write_config)

        url = service.build_public_url("foo.zip")

        assert url == "http://games.oss-cn-hangzhou.aliyuncs.com/foo.zip"

    def test_domain_scheme_and_trailing_slash_are_stripped(
        self, manager: ServiceManager, write_config
    ):
        service = _upload_service(manager, write_config, domain="https://cdn.example.com/")

        assert service.build_public_url("foo.zip") == "https://cdn.example.com/foo.zip"


# =============================================================================
# Validation
# =============================================================================


class TestUploadValidation:
    """Test input and configuration validation."""

    async def test_missing_file_raises(
        self, manager: ServiceManager, write_config, tmp_path: Path
    ):
        service = _upload_service(manager, write_config)
        client = FakeClient()
        service.use_client(client)

        with pytest.raises(UploadError, match="File not found"):
            await service.upload_file(tmp_path / "missing.zip")

        assert client.calls == []

    async def test_directory_is_rejected(
        self, manager: ServiceManager, write_config, tmp_path: Path
    ):
        service = _upload_service(manager, write_config)
        service.use_client(FakeClient())

        with pytest.raises(UploadError, match="Not a regular file"):
            await service.upload_file(tmp_path)

    async def test_missing_oss_section_raises_configuration_error(
        self, manager: ServiceManager, write_config, archive: Path
    ):
        write_config({"cloud": {}})
        service: UploadService = manager.require("upload")

        with pytest.raises(ConfigurationError, match="No cloud.oss configuration"):
            await service.upload_file(archive)

    def test_invalid_oss_section_raises_configuration_error(
        self, manager: ServiceManager, write_config
    ):
        write_config({"cloud": {"oss": {"region": "oss-cn-hangzhou"}}})
        service: UploadService = manager.require("upload")

        with pytest.raises(ConfigurationError, match="Invalid cloud.oss configuration"):
            service.oss_configuration()

    def test_unknown_oss_keys_are_rejected(self):
        with pytest.raises(ValueError):
            OSSConfiguration.from_properties({**OSS_CONFIG, "endpiont": "typo"})

    def test_numeric_values_are_read_as_strings(self):
        """Bare numbers stored by `fast config` still validate."""
        config = OSSConfiguration.from_properties(
            {**OSS_CONFIG, "bucket": 20240101, "apiKey": 12345, "apiKeySecret": 678}
        )

        assert config.bucket == "20240101"
        assert config.api_key == "12345"
        assert config.api_key_secret == "678"

    def test_oss_configuration_is_frozen(self):
        config = OSSConfiguration.from_properties(OSS_CONFIG)

        with pytest.raises(ValueError):
            config.bucket = "other"  # type: ignore[misc]

        assert config.max_attempts == 3
