from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "last_source_dir": None,
        "last_destination_dir": None,
        "restore_last_dirs": True,
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except (OSError, TypeError) as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def restore_last_dirs(self) -> bool:
        return bool(self.get("restore_last_dirs", True))

    @property
    def last_source_dir(self) -> str | None:
        val = self.get("last_source_dir")
        return val if isinstance(val, str) and os.path.isdir(val) else None

    @property
    def last_destination_dir(self) -> str | None:
        val = self.get("last_destination_dir")
        return val if isinstance(val, str) and os.path.isdir(val) else None


def default_settings_path(base_dir: str) -> str:
    """``PHOTO_SORTER_SETTINGS`` if set, otherwise ``settings.json`` in ``base_dir``."""
    override = (os.getenv("PHOTO_SORTER_SETTINGS") or "").strip()
    if override:
        return override
    return os.path.join(base_dir, "settings.json")
