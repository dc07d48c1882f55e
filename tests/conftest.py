"""Shared fixtures for fast CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every per-user path at a temporary directory.

    Keeps tests from reading or writing ``~/.fast`` and ``~/.xyx-cli`` and
    from picking up the developer's editor.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("FAST_HOME", str(home / ".fast"))
    monkeypatch.setenv("XYX_CLI_HOME", str(home / ".xyx-cli"))
    monkeypatch.delenv("EDITOR", raising=False)
    return home


@pytest.fixture
def fast_home(isolate_user_dirs: Path) -> Path:
    """The per-user application directory used by the config service."""
    return isolate_user_dirs / ".fast"


@pytest.fixture
def xyx_home(isolate_user_dirs: Path) -> Path:
    """The xyx-cli directory holding the cached template."""
    return isolate_user_dirs / ".xyx-cli"
