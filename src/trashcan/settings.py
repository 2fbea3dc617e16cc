"""User settings stored as JSON under ``$XDG_CONFIG_HOME/trashcan``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from trashcan.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "trashcan"
_SETTINGS_FILE = "settings.json"

DEFAULTS: dict[str, Any] = {
    "trash.root": None,
    "put.on_collision": "rename",
    "empty.confirm": False,
}


class Settings:
    """Persistent settings with dot-notation keys.

    Keys map onto nested JSON objects, so ``put.on_collision`` is stored as
    ``{"put": {"on_collision": ...}}``. Unset keys fall back to ``DEFAULTS``.
    A missing or unreadable file behaves like an empty one.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data = self._read()

    @property
    def trash_root(self) -> Path | None:
        value = self.get("trash.root")
        return Path(value).expanduser() if value else None

    @property
    def on_collision(self) -> str:
        return self.get("put.on_collision")

    @property
    def confirm_empty(self) -> bool:
        return bool(self.get("empty.confirm"))

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return DEFAULTS.get(key, default)
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and write the file."""
        *parents, leaf = key.split(".")
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value
        self._write()

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.path, e)
