"""CLI command handlers for the recency cache."""

from __future__ import annotations

from typing import Any

from liquiprops.domains.cache.store.cache import CacheStore, connection_identity
from liquiprops.domains.shell.store.settings import get_settings_store
from liquiprops.shared.core.errors import ConfigurationWriteError


def _cache() -> CacheStore:
    return CacheStore(get_settings_store().cache_path())


def cmd_cache_contexts(args: Any) -> int:
    """Show the cached contexts of a connection, replacing them first if --set is given."""
    cache = _cache()
    connection = connection_identity(args.path)
    if args.set is not None:
        try:
            cache.replace_contexts(connection, args.set)
        except ConfigurationWriteError as exc:
            print(f"Error: {exc}")
            return 1
    for context in cache.read_contexts(connection):
        print(context)
    return 0


def cmd_cache_changelogs(args: Any) -> int:
    """Show the recently used changelogs of a connection, recording --use first."""
    cache = _cache()
    connection = connection_identity(args.path)
    if args.use:
        try:
            cache.record_changelog_use(connection, args.use)
        except ConfigurationWriteError as exc:
            print(f"Error: {exc}")
            return 1
    for changelog in cache.read_changelogs(connection):
        print(changelog)
    return 0


def cmd_cache_clear(args: Any) -> int:
    """Remove the cached values of some connections, or the whole cache."""
    cache = _cache()
    if cache.is_empty():
        print("There are no elements stored to remove")
        return 0
    try:
        if args.paths:
            removed = cache.remove_connections(connection_identity(path) for path in args.paths)
            if removed:
                print(f"Successfully removed {removed} of the recently loaded elements.")
            else:
                print("None of the given elements were recently loaded.")
        else:
            cache.remove_all()
            print("Successfully removed all recently loaded elements.")
    except ConfigurationWriteError as exc:
        print(f"Error: {exc}")
        return 1
    return 0
