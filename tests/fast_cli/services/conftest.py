"""Fixtures providing a service manager with the built-in services."""

from __future__ import annotations

import atexit
import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from fast_cli.core.manager import ServiceManager
from fast_cli.services import build_service_definitions


@pytest.fixture
def write_config(fast_home: Path):
    """Write a config.json document before the config service loads it."""

    def _write(data: dict) -> Path:
        fast_home.mkdir(parents=True, exist_ok=True)
        path = fast_home / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def manager() -> Iterator[ServiceManager]:
    """ServiceManager with the built-in services defined but not realised."""
    manager = ServiceManager()
    for name, ctor in build_service_definitions().items():
        manager.define(name, ctor)

    yield manager

    if manager.is_instantiated("config"):
        config = manager.require("config")
        config.flush()
        atexit.unregister(config.flush)
