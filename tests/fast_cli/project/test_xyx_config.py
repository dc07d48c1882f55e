"""Tests for project config and cached template lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fast_cli.errors import ProjectConfigError
from fast_cli.project.xyx_config import (
    find_project_root,
    get_template_path,
    load_template_data,
    load_xyx_config,
)


class TestLoadXYXConfig:
    """Test locating and reading xyx.config.json."""

    def test_config_found_from_nested_directory(self, project: Path):
        nested = project / "platform" / "vivo" / "deep"
        nested.mkdir(parents=True)

        config = load_xyx_config(nested)

        assert config.root == project.resolve()
        assert config.common == {"orientation": "portrait"}
        assert config.config_ids() == ["vivo@main#acme", "hippoo"]

    def test_platform_section_is_validated(self, project: Path):
        platform = load_xyx_config(project).platform("vivo@main#acme")

        assert platform.project_name == "Jump Jump"
        assert platform.version_name == "1.0.2"
        assert platform.online_url == "https://h5.acme.com/Jump/index.html"

    def test_unknown_config_id_raises(self, project: Path):
        with pytest.raises(ProjectConfigError, match="configId oppo not found"):
            load_xyx_config(project).platform("oppo")

    def test_common_is_not_a_config_id(self, project: Path):
        with pytest.raises(ProjectConfigError, match="configId common not found"):
            load_xyx_config(project).platform("common")

    def test_section_missing_required_fields_raises(self, tmp_path: Path):
        (tmp_path / "xyx.config.json").write_text(
            json.dumps({"vivo": {"project_name": "Jump"}}), encoding="utf-8"
        )

        with pytest.raises(ProjectConfigError, match="Invalid configuration for vivo"):
            load_xyx_config(tmp_path).platform("vivo")

    def test_malformed_json_raises(self, tmp_path: Path):
        (tmp_path / "xyx.config.json").write_text("{", encoding="utf-8")

        with pytest.raises(ProjectConfigError, match="Failed to parse"):
            load_xyx_config(tmp_path)

    def test_no_project_returns_none_root(self, tmp_path: Path):
        assert find_project_root(tmp_path) is None


class TestTemplate:
    """Test the cached template metadata."""

    def test_template_path_uses_cached_version(self, template: Path):
        assert get_template_path() == template
        assert load_template_data().last_update == 1700000000000

    def test_missing_data_file_raises(self, xyx_home: Path):
        with pytest.raises(ProjectConfigError, match="Template data file not found"):
            load_template_data()

    def test_data_without_cached_version_raises(self, xyx_home: Path):
        (xyx_home / "template").mkdir(parents=True)
        (xyx_home / "template" / "data.json").write_text("{}", encoding="utf-8")

        with pytest.raises(ProjectConfigError, match="Invalid template data"):
            load_template_data()
