"""Fixtures building a project tree and a cached xyx template."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

PROJECT_CONFIG = {
    "common": {"orientation": "portrait"},
    "vivo@main#acme": {
        "project_name": "Jump Jump",
        "version_name": "1.0.2",
        "version_code": 102,
        "online_url": "https://h5.acme.com/Jump/index.html",
    },
    "hippoo": {
        "project_name": "Jump Jump",
        "version_name": "2.0.0",
    },
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root containing xyx.config.json and platform directories."""
    root = tmp_path / "project"
    (root / "platform").mkdir(parents=True)
    (root / "xyx.config.json").write_text(
        json.dumps(PROJECT_CONFIG, ensure_ascii=False), encoding="utf-8"
    )
    return root


@pytest.fixture
def template(xyx_home: Path) -> Path:
    """Cached template at version 1.4.0 registered in template/data.json."""
    template_dir = xyx_home / "template"
    template_dir.mkdir(parents=True)
    (template_dir / "data.json").write_text(
        json.dumps({"cachedVersion": "1.4.0", "lastUpdate": 1700000000000}),
        encoding="utf-8",
    )
    path = template_dir / "xyx-template-1.4.0"
    path.mkdir()
    return path


@pytest.fixture
def make_tree():
    """Create files, or directories for names ending in "/"."""

    def _make(root: Path, entries: list[str]) -> None:
        root.mkdir(parents=True, exist_ok=True)
        for entry in entries:
            if entry.endswith("/"):
                (root / entry).mkdir(parents=True, exist_ok=True)
                (root / entry / "keep.txt").write_text("x", encoding="utf-8")
            else:
                (root / entry).write_text("x", encoding="utf-8")

    return _make
