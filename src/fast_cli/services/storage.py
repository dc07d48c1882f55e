"""Object storage client boundary.

The upload service only needs "put this file under this key" and, if the
backend reports one, the resulting URL. ``OSSStorageClient`` implements that
on top of the Aliyun ``oss2`` SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import oss2

from fast_cli.services.configuration import OSSConfiguration


@dataclass(frozen=True)
class PutResult:
    """Result of storing one object.

    Attributes:
        name: Object key the file was stored under
        url: URL reported by the backend, if any

    """

    name: str
    url: str | None = None


class ObjectStorageClient(Protocol):
    """Minimal blocking client used by UploadService."""

    def put(self, key: str, file_path: str) -> PutResult:
        """Upload a local file under the given object key."""
        ...


class OSSStorageClient:
    """ObjectStorageClient backed by an ``oss2.Bucket``.

    When a custom domain is configured the bucket is addressed through it
    (CNAME mode over HTTPS); otherwise the regional endpoint is used.
    """

    def __init__(self, config: OSSConfiguration) -> None:
        self._config = config
        auth = oss2.Auth(config.api_key, config.api_key_secret)
        if config.domain:
            self._bucket = oss2.Bucket(
                auth, f"https://{config.domain}", config.bucket, is_cname=True
            )
        else:
            self._bucket = oss2.Bucket(
                auth, f"https://{config.region}.aliyuncs.com", config.bucket
            )

    def put(self, key: str, file_path: str) -> PutResult:
        result = self._bucket.put_object_from_file(key, file_path)
        response = getattr(result.resp, "response", None)
        url = getattr(response, "url", None) or None
        return PutResult(name=key, url=url)
