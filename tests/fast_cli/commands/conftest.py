"""Fixtures providing a booted kernel with every command registered."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fast_cli.__main__ import build_kernel
from fast_cli.core.kernel import Kernel


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def kernel() -> Iterator[Kernel]:
    kernel = build_kernel()
    yield kernel
    asyncio.run(kernel.shutdown())


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Project with one vivo platform; the working directory is its root."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "xyx.config.json").write_text(
        json.dumps(
            {
                "vivo@main#acme": {
                    "project_name": "Jump Jump",
                    "version_name": "1.0.2",
                    "online_url": "https://h5.acme.com/Jump/index.html",
                }
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(root)
    return root
