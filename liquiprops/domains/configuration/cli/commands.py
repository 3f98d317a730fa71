"""CLI command handlers for liquibase.properties configurations."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from liquiprops.domains.cache.store.cache import CacheStore, connection_identity
from liquiprops.domains.configuration.app.codec import (
    PASSWORD_MASK,
    PropertiesCodec,
    read_possible_reference_values,
)
from liquiprops.domains.configuration.domain.record import ConfigurationRecord, DatabaseConnectionRecord
from liquiprops.domains.configuration.drivers import DEFAULT_DRIVER_CATALOG, NO_PRE_CONFIGURED_DRIVER
from liquiprops.domains.configuration.store.configurations import (
    ConfigurationStore,
    RemoveConfigurationOption,
)
from liquiprops.domains.shell.store.settings import get_settings_store
from liquiprops.shared.core.errors import ConfigurationWriteError


def _console() -> Console:
    return Console()


def _codec() -> PropertiesCodec:
    settings = get_settings_store()
    return PropertiesCodec(DEFAULT_DRIVER_CATALOG, default_database_type=settings.default_database_type())


def _connection_rows(table: Table, label: str, connection: DatabaseConnectionRecord) -> None:
    driver = connection.database_type_key
    if driver == NO_PRE_CONFIGURED_DRIVER:
        driver = connection.driver_class_name or "-"
    table.add_row(f"{label} username", connection.username or "-")
    table.add_row(f"{label} password", PASSWORD_MASK if connection.password else "-")
    table.add_row(f"{label} url", connection.url or "-")
    table.add_row(f"{label} driver", driver)


def _record_table(record: ConfigurationRecord) -> Table:
    table = Table(title=record.name or None)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("changelogFile", record.changelog_file or "-")
    _connection_rows(table, "database", record.primary_connection)
    if record.reference_connection is not None:
        _connection_rows(table, "reference", record.reference_connection)
    table.add_row("classpath", "\n".join(record.classpath_entries) or "-")
    for key, value in record.additional_configuration.items():
        table.add_row(key, value)
    return table


def cmd_show(args: Any) -> int:
    """Show the parsed content of a properties file."""
    record = _codec().read_file(args.path, name=args.path)
    _console().print(_record_table(record))
    return 0


def cmd_preview(args: Any) -> int:
    """Print a properties file the way it would be saved, with passwords masked."""
    codec = _codec()
    record = codec.read_file(args.path)
    _console().print(Syntax(codec.preview(record), "properties", word_wrap=True))
    return 0


def cmd_normalize(args: Any) -> int:
    """Rewrite a properties file in canonical form."""
    codec = _codec()
    record = codec.read_file(args.path)
    try:
        codec.write_file(record, args.path)
    except ConfigurationWriteError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Normalized {args.path}")
    return 0


def cmd_reference_args(args: Any) -> int:
    """Print the reference arguments derived from a properties file."""
    for value in read_possible_reference_values(args.path):
        print(value)
    return 0


def cmd_drivers(args: Any) -> int:
    """List the pre-configured drivers."""
    table = Table()
    table.add_column("Database")
    table.add_column("Driver class")
    table.add_column("Default port", justify="right")
    table.add_column("Jar")
    for key, driver in DEFAULT_DRIVER_CATALOG.items():
        table.add_row(key, driver.driver_class, str(driver.port), driver.file_name())
    _console().print(table)
    return 0


def cmd_config_list(args: Any) -> int:
    """List all known configurations."""
    store = ConfigurationStore()
    configurations = store.load_all()
    if not configurations:
        print("No saved configurations.")
        return 0
    table = Table()
    table.add_column("Name")
    table.add_column("Properties file")
    for name in sorted(configurations):
        table.add_row(name, configurations[name])
    _console().print(table)
    return 0


def cmd_config_add(args: Any) -> int:
    """Register an existing properties file under a name."""
    store = ConfigurationStore()
    try:
        store.add(args.name, connection_identity(args.path))
    except (ValueError, ConfigurationWriteError) as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Configuration '{args.name}' added.")
    return 0


def cmd_config_remove(args: Any) -> int:
    """Remove a configuration from the cache, the index or the disk."""
    store = ConfigurationStore()
    option = RemoveConfigurationOption(args.mode)
    cache = CacheStore(get_settings_store().cache_path())
    try:
        removed = store.remove(args.name, option, cache)
    except ConfigurationWriteError as exc:
        print(f"Error: {exc}")
        return 1
    if not removed:
        print(f"Error: Configuration '{args.name}' not found")
        return 1
    print(f"Configuration '{args.name}' was removed with the option \"{option.value}\".")
    return 0
