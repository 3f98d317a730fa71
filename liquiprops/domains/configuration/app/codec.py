"""Conversion between liquibase.properties text and configuration records.

``serialize`` is used both for saving and for the live preview that is
regenerated on every edit. Only ``preview`` masks the password; ``write_file``
always goes through the undisguised path, so a preview can never end up on disk.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from liquiprops.domains.configuration.app.classpath import ClasspathAssembler
from liquiprops.domains.configuration.app.mapper import PropertyKeyMapper
from liquiprops.domains.configuration.app.properties_format import (
    PropertiesWriter,
    read_pairs,
    unescape_value_colons,
)
from liquiprops.domains.configuration.domain.record import (
    CHANGELOG_FILE_KEY,
    CLASSPATH_KEY,
    DRIVER_KEY,
    ConfigurationRecord,
    ConfigurationStatus,
    DatabaseConnectionRecord,
    create_reference_key,
)
from liquiprops.domains.configuration.drivers import (
    DEFAULT_DRIVER_CATALOG,
    NO_PRE_CONFIGURED_DRIVER,
    DriverCatalog,
)
from liquiprops.shared.core.errors import ConfigurationWriteError

logger = logging.getLogger(__name__)

PASSWORD_MASK = "***"

# Keys of a plain connection that can be handed to a command as the reference side.
POSSIBLE_REFERENCE_KEYS: tuple[str, ...] = (
    "default-catalog-name",
    "default-schema-name",
    "driver",
    "driver-properties-file",
    "liquibase-catalog-name",
    "liquibase-schema-name",
    "password",
    "schemas",
    "username",
    "url",
)


class PropertiesCodec:
    """Parses and serializes liquibase.properties files."""

    def __init__(
        self,
        catalog: DriverCatalog = DEFAULT_DRIVER_CATALOG,
        *,
        separator: str = os.pathsep,
        default_database_type: str = NO_PRE_CONFIGURED_DRIVER,
    ):
        self.catalog = catalog
        self.classpath = ClasspathAssembler(separator)
        self.mapper = PropertyKeyMapper(catalog, self.classpath)
        self.default_database_type = default_database_type

    def parse_pairs(self, text: str) -> list[tuple[str, str]]:
        return read_pairs(text)

    def parse(self, text: str, *, name: str = "") -> ConfigurationRecord:
        """Build an ``EDIT`` record from properties text."""
        record = ConfigurationRecord.create(
            ConfigurationStatus.EDIT,
            name=name,
            default_database_type=self.default_database_type,
        )
        return self.mapper.apply_all(record, self.parse_pairs(text))

    def serialize(self, record: ConfigurationRecord, disguise_password: bool = False) -> str:
        """Render a record as properties text.

        Args:
            record: The record to render.
            disguise_password: Replace passwords with a mask. Preview only.

        Returns:
            The properties text, or an empty string for an empty record.
        """
        writer = PropertiesWriter()

        if record.changelog_file:
            writer.insert(CHANGELOG_FILE_KEY, record.changelog_file)

        if record.primary_connection.has_data():
            self._write_connection(writer, record.primary_connection, False, disguise_password)

        reference = record.reference_connection
        if reference is not None and reference.has_data():
            self._write_connection(writer, reference, True, disguise_password)

        classpath = self.classpath.assemble(record.classpath_entries)
        if classpath:
            writer.insert_comment("classpath for the database drivers")
            writer.insert(CLASSPATH_KEY, classpath)

        if record.additional_configuration:
            writer.insert_comment("additional configuration values")
            for key, value in record.additional_configuration.items():
                writer.insert(key, value)

        text = unescape_value_colons(writer.format())
        return f"{text}\n" if text else text

    def preview(self, record: ConfigurationRecord) -> str:
        """Render a record for display, with the passwords masked."""
        return self.serialize(record, disguise_password=True)

    def _write_connection(
        self,
        writer: PropertiesWriter,
        connection: DatabaseConnectionRecord,
        reference: bool,
        disguise_password: bool,
    ) -> None:
        def key_for(key: str) -> str:
            return create_reference_key(key) if reference else key

        writer.insert_comment(f"configuration for the {'reference ' if reference else ''}database")
        for key in ("username", "password", "url"):
            value = getattr(connection, key)
            if not value:
                continue
            if key == "password" and disguise_password:
                value = PASSWORD_MASK
            writer.insert(key_for(key), value)

        driver = self.catalog.driver_class_for(connection.database_type_key) or connection.driver_class_name
        if driver:
            writer.insert(key_for(DRIVER_KEY), driver)

    def read_file(self, path: str | os.PathLike[str], *, name: str = "") -> ConfigurationRecord:
        """Parse a properties file; a missing file gives an empty ``EDIT`` record."""
        return self.parse(_read_text(path), name=name)

    def write_file(self, record: ConfigurationRecord, path: str | os.PathLike[str]) -> None:
        """Save a record to disk.

        Raises:
            ConfigurationWriteError: If the file could not be written.
        """
        text = self.serialize(record)
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ConfigurationWriteError(target, exc) from exc
        logger.debug("Wrote configuration %r to %s", record.name, target)


def _read_text(path: str | os.PathLike[str]) -> str:
    """Read a properties file as UTF-8, or as ISO-8859-1 (the Java default) if it is not valid UTF-8."""
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        return ""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("%s is not valid UTF-8, reading it as ISO-8859-1", path)
        return data.decode("latin-1")


def read_properties(path: str | os.PathLike[str]) -> dict[str, str]:
    """Read a properties file as a plain mapping (later duplicates win).

    Returns:
        The key/value pairs, or an empty dict if the file does not exist.
    """
    return dict(read_pairs(_read_text(path)))


def read_changelog(path: str | os.PathLike[str]) -> str | None:
    """Read the ``changelogFile`` entry of a properties file."""
    return read_properties(path).get(CHANGELOG_FILE_KEY)


def read_url(path: str | os.PathLike[str]) -> str | None:
    """Read the ``url`` entry of a properties file."""
    return read_properties(path).get("url")


def _camel_case(kebab: str) -> str:
    return re.sub(r"-([a-z])", lambda match: match.group(1).upper(), kebab)


def read_possible_reference_values(path: str | os.PathLike[str]) -> list[str]:
    """Turn the plain connection values of a file into reference arguments.

    A file containing ``password: secret`` yields ``--reference-password=secret``,
    so another configuration can be compared against this one.
    """
    reference_keys = {_camel_case(key): f"--reference-{key}" for key in POSSIBLE_REFERENCE_KEYS}
    return [
        f"{reference_keys[key]}={value}"
        for key, value in read_properties(path).items()
        if key in reference_keys
    ]


def read_full_values(
    name: str,
    path: str | os.PathLike[str],
    *,
    catalog: DriverCatalog = DEFAULT_DRIVER_CATALOG,
    default_database_type: str = NO_PRE_CONFIGURED_DRIVER,
) -> ConfigurationRecord:
    """Load a properties file into an ``EDIT`` record named ``name``."""
    codec = PropertiesCodec(catalog, default_database_type=default_database_type)
    return codec.read_file(path, name=name)


__all__ = [
    "PASSWORD_MASK",
    "POSSIBLE_REFERENCE_KEYS",
    "PropertiesCodec",
    "read_changelog",
    "read_full_values",
    "read_possible_reference_values",
    "read_properties",
    "read_url",
]
