"""Project configuration (``xyx.config.json``) and cached template metadata."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fast_cli.constants import PROJECT_CONFIG_FILE, get_xyx_home
from fast_cli.errors import ProjectConfigError

logger = logging.getLogger(__name__)


class PlatformConfig(BaseModel):
    """Per-platform section of ``xyx.config.json``.

    Only the fields the CLI reads are declared; the build tooling keeps many
    more keys (resource maps, bundle settings, ...) which are preserved as
    extras.
    """

    model_config = ConfigDict(extra="allow")

    project_name: str
    version_name: str
    version_code: str | int | None = None
    project_id: str | None = None
    online_url: str | None = None


class TemplateData(BaseModel):
    """Metadata of the cached project template (``template/data.json``)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    cached_version: str = Field(alias="cachedVersion")
    last_update: int | None = Field(default=None, alias="lastUpdate")
    latest_version: str | None = Field(default=None, alias="latestVersion")
    latest_version_check: int | None = Field(default=None, alias="latestVersionCheck")


class XYXConfig:
    """Parsed ``xyx.config.json`` of a project."""

    def __init__(self, root: Path, data: dict[str, Any]) -> None:
        self.root = root
        self._data = data

    @property
    def common(self) -> dict[str, Any]:
        return self._data.get("common", {})

    def config_ids(self) -> list[str]:
        return [key for key in self._data if key != "common"]

    def platform(self, config_id: str) -> PlatformConfig:
        """Return the validated section of a config id.

        Raises:
            ProjectConfigError: If the id is unknown or its section is invalid

        """
        section = self._data.get(config_id)
        if config_id == "common" or not isinstance(section, dict):
            raise ProjectConfigError(f"configId {config_id} not found")
        try:
            return PlatformConfig.model_validate(section)
        except ValidationError as e:
            raise ProjectConfigError(
                f"Invalid configuration for {config_id}: {e}"
            ) from e


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ProjectConfigError(f"Failed to parse {path}: {e}") from e
    except OSError as e:
        raise ProjectConfigError(f"Failed to read {path}: {e}") from e


def find_project_root(start: Path, marker: str = PROJECT_CONFIG_FILE) -> Path | None:
    """Return the nearest directory at or above ``start`` containing ``marker``."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if (directory / marker).exists():
            return directory
    return None


def load_xyx_config(start: Path) -> XYXConfig:
    """Locate and parse the project's ``xyx.config.json``.

    Raises:
        ProjectConfigError: If no project config is found or it is invalid

    """
    root = find_project_root(start)
    if root is None:
        raise ProjectConfigError(
            f"Could not find {PROJECT_CONFIG_FILE} in {start} or any parent directory"
        )

    data = _read_json(root / PROJECT_CONFIG_FILE)
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{root / PROJECT_CONFIG_FILE} must contain an object")
    logger.debug("Project root: %s", root)
    return XYXConfig(root, data)


def get_template_dir() -> Path:
    return get_xyx_home() / "template"


def load_template_data() -> TemplateData:
    """Read ``template/data.json`` of the cached xyx template.

    Raises:
        ProjectConfigError: If the file is missing or invalid

    """
    data_path = get_template_dir() / "data.json"
    if not data_path.exists():
        raise ProjectConfigError(f"Template data file not found: {data_path}")

    try:
        return TemplateData.model_validate(_read_json(data_path))
    except ValidationError as e:
        raise ProjectConfigError(f"Invalid template data {data_path}: {e}") from e


def get_template_path() -> Path:
    """Directory of the currently cached template version."""
    template_data = load_template_data()
    template_path = get_template_dir() / f"xyx-template-{template_data.cached_version}"
    logger.debug("Template path: %s", template_path)
    return template_path
