"""Typed views over the per-user configuration document.

The configuration file is stored as plain JSON so that it stays human
editable; these pydantic models validate the sections services consume.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseServiceConfiguration(BaseModel):
    """Base class for service configuration sections.

    Features:
        - Pydantic validation for type safety
        - Immutable (frozen) once validated
        - Unknown keys are rejected so typos surface early
        - from_properties() factory for dictionary-based creation

    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation.

        Raises:
            ValidationError: If properties are invalid or missing required fields

        """
        return cls.model_validate(properties)


class OSSConfiguration(BaseServiceConfiguration):
    """Aliyun OSS credentials and bucket settings (``cloud.oss``).

    Keys in the JSON document use camelCase (``apiKey``, ``apiKeySecret``,
    ``uploadRetries``); attribute names are snake_case.
    Values set from the command line as bare numbers
    (``fast config cloud.oss.bucket 2024``) are read back as strings.

    Example:
        ```python
        config = OSSConfiguration.from_properties({
            "region": "oss-cn-hangzhou",
            "apiKey": "LTAI...",
            "apiKeySecret": "...",
            "bucket": "games",
            "domain": "cdn.example.com",
        })
        ```

    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    region: str = Field(min_length=1, description="OSS region, e.g. oss-cn-hangzhou")
    api_key: str = Field(alias="apiKey", min_length=1)
    api_key_secret: str = Field(alias="apiKeySecret", min_length=1)
    bucket: str = Field(min_length=1)
    domain: str | None = Field(
        default=None, description="Custom (CNAME) domain bound to the bucket"
    )
    upload_retries: int | None = Field(
        default=None,
        alias="uploadRetries",
        description="Maximum upload attempts (default 3, minimum 1)",
    )

    @field_validator("domain")
    @classmethod
    def normalise_domain(cls, v: str | None) -> str | None:
        """Strip the scheme and trailing slash from a custom domain."""
        if v is None:
            return None
        host = v.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
        return host or None

    @property
    def max_attempts(self) -> int:
        if self.upload_retries is None:
            return 3
        return max(1, self.upload_retries)


def default_config() -> dict[str, Any]:
    """Return a fresh default configuration document."""
    return {"cloud": {}}
