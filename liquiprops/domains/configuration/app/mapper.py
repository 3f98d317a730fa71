"""Routing of single liquibase.properties entries onto a configuration record."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from liquiprops.domains.configuration.app.classpath import ClasspathAssembler
from liquiprops.domains.configuration.domain.record import (
    CHANGELOG_FILE_KEY,
    CLASSPATH_KEY,
    CONNECTION_KEYS,
    DRIVER_KEY,
    ConfigurationRecord,
    DatabaseConnectionRecord,
    create_dereferenced_key,
    is_reference_key,
)
from liquiprops.domains.configuration.drivers import DEFAULT_DRIVER_CATALOG, DriverCatalog

logger = logging.getLogger(__name__)


class PropertyKeyMapper:
    """Applies one raw ``(key, value)`` pair to a ``ConfigurationRecord``.

    The mapper never rejects a pair. Keys it does not know are kept verbatim
    in the additional configuration, so no value of a file is lost.
    """

    def __init__(
        self,
        catalog: DriverCatalog = DEFAULT_DRIVER_CATALOG,
        classpath: ClasspathAssembler | None = None,
    ):
        self.catalog = catalog
        self.classpath = classpath or ClasspathAssembler()

    def apply(self, record: ConfigurationRecord, raw_key: str, raw_value: str) -> ConfigurationRecord:
        """Return ``record`` with the pair applied.

        Args:
            record: The record built so far.
            raw_key: Key as written in the file, e.g. ``referenceUrl``.
            raw_value: Value as written in the file.

        Returns:
            A new record; later keys of the same canonical name overwrite earlier ones.
        """
        reference = is_reference_key(raw_key)
        key = create_dereferenced_key(raw_key) if reference else raw_key

        if key == CHANGELOG_FILE_KEY:
            # referenceChangelogFile overrides the changelog as well, there is
            # only one changelog per configuration
            return record.with_changelog_file(raw_value)

        if key == CLASSPATH_KEY:
            return record.with_classpath_entries(self.classpath.split(raw_value))

        if key in CONNECTION_KEYS:
            if reference:
                record = record.ensure_reference()
                connection = self._apply_to_connection(
                    record.reference_connection, key, raw_value  # type: ignore[arg-type]
                )
                return record.with_reference_connection(connection)
            return record.with_primary_connection(
                self._apply_to_connection(record.primary_connection, key, raw_value)
            )

        return record.with_additional(raw_key, raw_value)

    def apply_all(self, record: ConfigurationRecord, pairs: Iterable[tuple[str, str]]) -> ConfigurationRecord:
        for raw_key, raw_value in pairs:
            record = self.apply(record, raw_key, raw_value)
        return record

    def _apply_to_connection(
        self, connection: DatabaseConnectionRecord, key: str, value: str
    ) -> DatabaseConnectionRecord:
        if key != DRIVER_KEY:
            return connection.with_value(key, value)

        database_type = self.catalog.lookup_by_class_name(value)
        if database_type is not None:
            return connection.with_pre_configured_driver(database_type)
        logger.debug("Driver %r is not pre-configured, keeping it as custom driver", value)
        return connection.with_custom_driver(value)


__all__ = ["PropertyKeyMapper"]
