"""Recency cache of contexts and changelogs per connection."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from liquiprops.shared.core.clock import Clock, SystemClock
from liquiprops.shared.core.store import CONFIG_DIR, JSONFileStore

logger = logging.getLogger(__name__)


def connection_identity(properties_path: str | os.PathLike[str]) -> str:
    """Return the cache key of a connection: the canonical absolute path of its properties file."""
    return str(Path(properties_path).expanduser().resolve())


@dataclass
class ChangelogUse:
    """A changelog file and when it was last used."""

    path: str
    last_used: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "lastUsed": self.last_used}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChangelogUse:
        """Create from dictionary."""
        return cls(path=str(data["path"]), last_used=int(data["lastUsed"]))


@dataclass
class CacheEntry:
    """Everything remembered for one connection."""

    contexts: list[str] = field(default_factory=list)
    changelogs: list[ChangelogUse] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "contexts": list(self.contexts),
            "changelogs": [use.to_dict() for use in self.changelogs],
        }

    @classmethod
    def from_dict(cls, data: Any) -> CacheEntry:
        """Create from a raw JSON value, skipping anything that does not fit."""
        if not isinstance(data, dict):
            return cls()
        raw_contexts = data.get("contexts")
        contexts = (
            list(dict.fromkeys(c for c in raw_contexts if isinstance(c, str)))
            if isinstance(raw_contexts, list)
            else []
        )
        changelogs: list[ChangelogUse] = []
        raw_changelogs = data.get("changelogs")
        if isinstance(raw_changelogs, list):
            for raw in raw_changelogs:
                try:
                    changelogs.append(ChangelogUse.from_dict(raw))
                except (KeyError, TypeError, ValueError):
                    continue
        return cls(contexts=contexts, changelogs=changelogs)


class CacheStore(JSONFileStore):
    """Store for recently used contexts and changelogs.

    The cache is stored as a JSON object in ~/.liquiprops/cache.json, keyed by
    connection identity (see ``connection_identity``)::

        {"/abs/path/db.liquibase.properties": {
            "contexts": ["dev", "test"],
            "changelogs": [{"path": "changelog.xml", "lastUsed": 1700000000000}]}}

    Contexts are replaced as a whole. Changelogs are a most-recently-used list
    of at most ``MAX_CHANGELOGS_PER_CONNECTION`` paths; when two changelogs have
    the same ``lastUsed``, the one stored first is evicted first.
    """

    MAX_CHANGELOGS_PER_CONNECTION = 5

    def __init__(self, file_path: Path | None = None, clock: Clock | None = None) -> None:
        super().__init__(file_path or CONFIG_DIR / "cache.json")
        self._clock = clock or SystemClock()

    def _load_all(self) -> dict[str, Any]:
        data = self._read_json()
        return data if isinstance(data, dict) else {}

    def read_all(self) -> dict[str, CacheEntry]:
        """Load the whole cache.

        Returns:
            Mapping of connection identity to entry; empty if the file is
            missing or cannot be parsed.
        """
        return {str(key): CacheEntry.from_dict(value) for key, value in self._load_all().items()}

    def is_empty(self) -> bool:
        return not self._load_all()

    def _read_entry(self, connection: str) -> CacheEntry | None:
        data = self._load_all()
        if connection not in data:
            return None
        return CacheEntry.from_dict(data[connection])

    def read_contexts(self, connection: str) -> list[str]:
        """Return the cached contexts of a connection, sorted ascending."""
        entry = self._read_entry(connection)
        return sorted(entry.contexts) if entry else []

    def replace_contexts(self, connection: str, contexts: Iterable[str]) -> None:
        """Replace all cached contexts of a connection.

        Contexts not in ``contexts`` are dropped, not kept.
        """
        data = self._load_all()
        entry = CacheEntry.from_dict(data.get(connection))
        entry.contexts = list(dict.fromkeys(contexts))
        data[connection] = entry.to_dict()
        self._write_json(data)

    def read_changelogs(self, connection: str) -> list[str]:
        """Return the recently used changelogs of a connection, most recent first."""
        entry = self._read_entry(connection)
        if entry is None:
            return []
        ordered = sorted(entry.changelogs, key=lambda use: use.last_used, reverse=True)
        return [use.path for use in ordered]

    def record_changelog_use(self, connection: str, changelog: str) -> None:
        """Mark a changelog as used now, evicting the least recently used one if needed."""
        data = self._load_all()
        entry = CacheEntry.from_dict(data.get(connection))
        now = self._clock.now()

        for use in entry.changelogs:
            if use.path == changelog:
                use.last_used = now
                break
        else:
            entry.changelogs.append(ChangelogUse(path=changelog, last_used=now))
            while len(entry.changelogs) > self.MAX_CHANGELOGS_PER_CONNECTION:
                oldest = min(
                    range(len(entry.changelogs)),
                    key=lambda index: (entry.changelogs[index].last_used, index),
                )
                evicted = entry.changelogs.pop(oldest)
                logger.debug("Evicted changelog %s from cache of %s", evicted.path, connection)

        data[connection] = entry.to_dict()
        self._write_json(data)

    def remove_all(self) -> bool:
        """Delete the whole cache file.

        Returns:
            True if a cache file was removed, False if there was none.
        """
        removed = self._delete()
        if removed:
            logger.info("Successfully removed all recently loaded elements.")
        return removed

    def remove_connections(self, connections: Iterable[str]) -> int:
        """Remove the entries of the given connections; unknown ones are ignored.

        Returns:
            Number of entries removed.
        """
        data = self._load_all()
        removed = 0
        for connection in connections:
            if connection in data:
                del data[connection]
                removed += 1
        if removed:
            self._write_json(data)
        return removed

    def cached_configurations(self, configurations: Mapping[str, str]) -> list[str]:
        """Return the configuration names (sorted) whose properties file has cached values.

        Args:
            configurations: Mapping of configuration name to connection identity.
        """
        cached = self._load_all()
        return sorted(name for name, path in configurations.items() if path in cached)

