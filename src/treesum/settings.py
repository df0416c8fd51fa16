"""JSON-backed defaults for scan options."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from treesum.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "treesum"
_SETTINGS_FILE = "settings.json"


class Settings:
    """Read-only settings loaded from a JSON file.

    Uses dot-notation keys for nested access:
        settings.get("scan.maxsumsize")  # reads data["scan"]["maxsumsize"]
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_int(self, key: str, default: int, minimum: int = 0) -> int:
        """Get an integer value, falling back to *default* if it is unusable."""
        value = self.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            log.warning("Ignoring invalid setting %s=%r in %s", key, value, self._path)
            return default
        return value

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            log.warning("Could not load settings from %s: not a JSON object", self._path)
