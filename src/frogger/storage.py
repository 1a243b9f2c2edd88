"""
Persisted settings, stored as a flat JSON object.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from frogger.constants import SETTINGS_DIR_NAME, SETTINGS_FILE_NAME
from frogger.utils import logger


def default_settings_path() -> Path:
    return Path.home() / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


class SettingsStore:
    """
    Small key/value store backed by a JSON file.

    An unreadable file is treated as empty and rewritten on the next `set`.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else default_settings_path()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read settings {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def get_bool(self, key: str) -> bool:
        return self.get(key) is True

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, sort_keys=True)
