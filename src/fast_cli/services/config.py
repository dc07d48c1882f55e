"""Config service persisting the per-user JSON configuration document."""

from __future__ import annotations

import atexit
import copy
import json
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fast_cli.constants import CONFIG_DEBOUNCE_DELAY, get_config_file
from fast_cli.core.service import Service, ServiceContext
from fast_cli.errors import ConfigurationError
from fast_cli.services.configuration import default_config

if TYPE_CHECKING:
    from fast_cli.services.logger import LoggerService

_MISSING = object()


def _deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    result = dict(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigService(Service):
    """Loads, mutates and persists ``~/.fast/config.json``.

    Mutations mark the document dirty and schedule a debounced save: a burst
    of writes within ``DEBOUNCE_DELAY`` seconds results in a single disk
    write. ``flush()`` writes immediately and is registered with ``atexit``
    so pending changes survive process exit.
    """

    DEBOUNCE_DELAY = CONFIG_DEBOUNCE_DELAY

    def __init__(self, context: ServiceContext) -> None:
        super().__init__(context)
        self.config_file: Path = get_config_file()
        self._data: dict[str, Any] = default_config()
        self._dirty = False
        self._save_timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._logger: LoggerService | None = None

    def on_register(self) -> None:
        self._logger = self.require_service("logger")
        self.load_config()
        atexit.register(self.flush)

    async def on_destroy(self) -> None:
        self.flush()
        atexit.unregister(self.flush)

    def load_config(self) -> None:
        """Read the configuration file, falling back to defaults.

        A missing file yields the default document, which is then saved. A
        corrupt file is moved aside to ``config.json.bak`` before falling back.

        Raises:
            ConfigurationError: If the file exists but cannot be read

        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            raw = self.config_file.read_bytes()
        except FileNotFoundError:
            self._log("debug", "No config file at %s, creating defaults", self.config_file)
            self._reset_to_defaults()
            return
        except OSError as e:
            raise ConfigurationError(
                f"Failed to load config {self.config_file}: {e}"
            ) from e

        try:
            loaded = json.loads(raw.decode("utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("top-level value must be an object")
        except ValueError as e:
            backup = self.config_file.with_name(self.config_file.name + ".bak")
            self._log(
                "error",
                "Config file %s is corrupted (%s), backing it up to %s",
                self.config_file,
                e,
                backup,
            )
            self.config_file.replace(backup)
            self._reset_to_defaults()
            return

        with self._lock:
            self._data = _deep_merge(default_config(), loaded)

    def _reset_to_defaults(self) -> None:
        with self._lock:
            self._data = default_config()
            self._dirty = True
        self._request_save()

    def _log(self, level: str, msg: str, *args: Any) -> None:
        if self._logger is not None:
            getattr(self._logger, level)(msg, *args)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> None:
        """Write the document to disk and clear the dirty flag."""
        with self._lock:
            payload = json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(payload, encoding="utf-8")
            self._dirty = False

    def _request_save(self) -> None:
        timer = threading.Timer(self.DEBOUNCE_DELAY, self._on_save_timer)
        timer.daemon = True
        with self._lock:
            if self._save_timer is not None:
                self._save_timer.cancel()
            self._save_timer = timer
            timer.start()

    def _on_save_timer(self) -> None:
        with self._lock:
            # Superseded by a newer timer, which will do the write
            if self._save_timer is not threading.current_thread():
                return
            self._save_timer = None
        self.save()

    def flush(self) -> None:
        """Cancel any pending save and write pending changes synchronously."""
        with self._lock:
            if self._save_timer is not None:
                self._save_timer.cancel()
                self._save_timer = None
            dirty = self._dirty

        if dirty:
            self.save()

    @property
    def dirty(self) -> bool:
        return self._dirty

    # -------------------------------------------------------------------------
    # Top-level keys
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._dirty = True
        self._request_save()

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            del self._data[key]
            self._dirty = True
        self._request_save()

    def has(self, key: str) -> bool:
        return key in self._data

    # -------------------------------------------------------------------------
    # Dotted paths, e.g. "cloud.oss.bucket"
    # -------------------------------------------------------------------------

    def get_path(self, path: str, default: Any = None) -> Any:
        current: Any = self._data
        for part in path.split("."):
            if not isinstance(current, dict):
                return default
            current = current.get(part, _MISSING)
            if current is _MISSING:
                return default
        return current

    def set_path(self, path: str, value: Any) -> None:
        """Set a value, creating intermediate objects as needed.

        Raises:
            ConfigurationError: If an intermediate key holds a non-object value

        """
        *parents, last = path.split(".")
        with self._lock:
            current = self._data
            for part in parents:
                child = current.setdefault(part, {})
                if not isinstance(child, dict):
                    raise ConfigurationError(
                        f"Cannot set '{path}': '{part}' is not an object"
                    )
                current = child
            current[last] = value
            self._dirty = True
        self._request_save()

    def delete_path(self, path: str) -> bool:
        """Remove a value. Returns False when the path does not exist."""
        *parents, last = path.split(".")
        with self._lock:
            current: Any = self._data
            for part in parents:
                current = current.get(part) if isinstance(current, dict) else None
            if not isinstance(current, dict) or last not in current:
                return False
            del current[last]
            self._dirty = True
        self._request_save()
        return True

    def as_dict(self) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._data)
