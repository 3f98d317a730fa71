"""Settings store for managing application settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from liquiprops.domains.configuration.drivers import NO_PRE_CONFIGURED_DRIVER
from liquiprops.shared.core.store import CONFIG_DIR, JSONFileStore

DEFAULT_DATABASE_TYPE_SETTING = "default_database_type"
CACHE_LOCATION_SETTING = "cache_location"


def _resolve_settings_path() -> Path:
    override = os.environ.get("LIQUIPROPS_SETTINGS_PATH", "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "settings.json"


class SettingsStore(JSONFileStore):
    """Store for managing application settings.

    Settings are stored as a JSON object in ~/.liquiprops/settings.json
    """

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or _resolve_settings_path())

    def load_all(self) -> dict[str, Any]:
        """Load all settings.

        Returns:
            Dictionary of settings, or empty dict if none exist.
        """
        data = self._read_json()
        return data if isinstance(data, dict) else {}

    def save_all(self, settings: dict[str, Any]) -> None:
        """Save all settings, replacing existing."""
        self._write_json(settings)

    def get(self, key: str, default: Any = None) -> Any:
        return self.load_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a specific setting.

        Args:
            key: Setting key.
            value: Setting value.
        """
        settings = self.load_all()
        settings[key] = value
        self.save_all(settings)

    def default_database_type(self) -> str:
        """Database type preselected for new connections."""
        value = self.get(DEFAULT_DATABASE_TYPE_SETTING)
        return value if isinstance(value, str) and value else NO_PRE_CONFIGURED_DRIVER

    def cache_path(self) -> Path:
        """Location of the recency cache file."""
        value = self.get(CACHE_LOCATION_SETTING)
        if isinstance(value, str) and value.strip():
            return Path(value).expanduser()
        return CONFIG_DIR / "cache.json"


# Module-level convenience functions
_store: SettingsStore | None = None
_store_path: Path | None = None


def _get_store() -> SettingsStore:
    global _store, _store_path
    path = _resolve_settings_path()
    if _store is None or _store_path != path:
        _store = SettingsStore(file_path=path)
        _store_path = path
    return _store


def get_settings_store() -> SettingsStore:
    """Get the settings store for the current settings path."""
    return _get_store()


def load_settings() -> dict:
    """Load app settings from config file."""
    return _get_store().load_all()


def save_settings(settings: dict) -> None:
    """Save app settings to config file."""
    _get_store().save_all(settings)
