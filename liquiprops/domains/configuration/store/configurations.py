"""Index of the liquibase.properties files known to the user."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from liquiprops.shared.core.errors import ConfigurationWriteError
from liquiprops.shared.core.store import CONFIG_DIR, JSONFileStore

if TYPE_CHECKING:
    from liquiprops.domains.cache.store.cache import CacheStore

logger = logging.getLogger(__name__)


class RemoveConfigurationOption(Enum):
    """What to remove together with a configuration. Each option includes the ones before it."""

    CACHE = "cache"
    SETTING = "setting"
    DELETE_ALL = "delete-all"

    def removes(self) -> tuple[RemoveConfigurationOption, ...]:
        options = tuple(RemoveConfigurationOption)
        return options[: options.index(self) + 1]


class ConfigurationStore(JSONFileStore):
    """Store for the configuration name -> properties file mapping.

    Stored as a JSON object in ~/.liquiprops/configurations.json:
    ``{"my db": "/abs/path/my-db.liquibase.properties"}``
    """

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or CONFIG_DIR / "configurations.json")

    def load_all(self) -> dict[str, str]:
        """Load all configurations.

        Returns:
            Mapping of name to path, or empty dict if none exist.
        """
        data = self._read_json()
        if not isinstance(data, dict):
            return {}
        return {str(name): path for name, path in data.items() if isinstance(path, str)}

    def save_all(self, configurations: dict[str, str]) -> None:
        self._write_json(configurations)

    def names(self) -> list[str]:
        """Return all configuration names, sorted."""
        return sorted(self.load_all())

    def path_of(self, name: str) -> str | None:
        return self.load_all().get(name)

    def name_of(self, path: str) -> str | None:
        """Return the first configuration name pointing at ``path``."""
        for name, configured in self.load_all().items():
            if configured == path:
                return name
        return None

    def add(self, name: str, path: str) -> None:
        """Add a new configuration.

        Raises:
            ValueError: If a configuration with the same name already exists.
        """
        configurations = self.load_all()
        if name in configurations:
            raise ValueError(f"Configuration '{name}' already exists")
        configurations[name] = path
        self.save_all(configurations)

    def remove(self, name: str, option: RemoveConfigurationOption, cache: CacheStore) -> bool:
        """Remove the configuration ``name`` as far as ``option`` says.

        ``CACHE`` only drops the cached values of the connection, ``SETTING``
        also drops the index entry, ``DELETE_ALL`` deletes the properties file too.

        Returns:
            True if ``name`` was a known configuration, False otherwise.

        Raises:
            ConfigurationWriteError: If the properties file could not be deleted.
        """
        configurations = self.load_all()
        path = configurations.get(name)
        if path is None:
            return False

        removes = option.removes()
        if RemoveConfigurationOption.CACHE in removes:
            cache.remove_connections([path])
        if RemoveConfigurationOption.SETTING in removes:
            del configurations[name]
            self.save_all(configurations)
        if RemoveConfigurationOption.DELETE_ALL in removes:
            try:
                Path(path).unlink(missing_ok=True)
            except OSError as exc:
                raise ConfigurationWriteError(path, exc) from exc

        logger.info('Configuration "%s" was removed with the option "%s".', name, option.value)
        return True
