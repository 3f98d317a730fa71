"""Configuration domain models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

from liquiprops.domains.configuration.drivers import NO_PRE_CONFIGURED_DRIVER

# Prefix of every key of the reference connection, e.g. ``referenceUsername``.
REFERENCE_PREFIX = "reference"

CHANGELOG_FILE_KEY = "changelogFile"
CLASSPATH_KEY = "classpath"
DRIVER_KEY = "driver"
CONNECTION_KEYS: tuple[str, ...] = ("username", "password", "url", DRIVER_KEY)


def create_reference_key(key: str) -> str:
    """Transform a key into its reference form, e.g. ``username`` -> ``referenceUsername``."""
    return REFERENCE_PREFIX + key[:1].upper() + key[1:]


def create_dereferenced_key(key: str) -> str:
    """Transform a reference key back, e.g. ``referenceUsername`` -> ``username``."""
    stripped = key[len(REFERENCE_PREFIX) :] if key.startswith(REFERENCE_PREFIX) else key
    return stripped[:1].lower() + stripped[1:]


def is_reference_key(key: str) -> bool:
    """Check if a key carries the reference prefix followed by an upper-case letter."""
    rest = key[len(REFERENCE_PREFIX) :]
    return key.startswith(REFERENCE_PREFIX) and rest[:1].isupper()


# Keys that never end up in the additional configuration.
CONFIGURED_KEYS: frozenset[str] = frozenset(
    k for key in (CHANGELOG_FILE_KEY, CLASSPATH_KEY, *CONNECTION_KEYS) for k in (key, create_reference_key(key))
)


class ConfigurationStatus(Enum):
    """Whether a configuration is being created or an existing file is edited."""

    NEW = "NEW"
    EDIT = "EDIT"


@dataclass(frozen=True)
class DatabaseConnectionRecord:
    """Everything needed to connect to one database.

    ``driver_class_name`` only matters when ``database_type_key`` is
    ``NO_PRE_CONFIGURED_DRIVER``; otherwise the driver class comes from the
    driver catalog.
    """

    username: str = ""
    password: str = ""
    url: str = ""
    database_type_key: str = NO_PRE_CONFIGURED_DRIVER
    driver_class_name: str = ""

    @classmethod
    def create_default(cls, database_type_key: str = NO_PRE_CONFIGURED_DRIVER) -> DatabaseConnectionRecord:
        return cls(database_type_key=database_type_key)

    def has_data(self) -> bool:
        """Check if any value would be written for this connection."""
        return bool(
            self.username
            or self.password
            or self.url
            or self.driver_class_name
            or (self.database_type_key and self.database_type_key != NO_PRE_CONFIGURED_DRIVER)
        )

    def with_value(self, key: str, value: str) -> DatabaseConnectionRecord:
        """Return a copy with ``username``, ``password`` or ``url`` changed."""
        if key not in ("username", "password", "url"):
            raise KeyError(key)
        return replace(self, **{key: value})

    def with_pre_configured_driver(self, database_type_key: str) -> DatabaseConnectionRecord:
        return replace(self, database_type_key=database_type_key, driver_class_name="")

    def with_custom_driver(self, driver_class_name: str) -> DatabaseConnectionRecord:
        return replace(self, database_type_key=NO_PRE_CONFIGURED_DRIVER, driver_class_name=driver_class_name)


@dataclass(frozen=True)
class ConfigurationRecord:
    """A liquibase.properties file as an immutable record.

    Use ``create`` for empty data; every ``with_*`` method returns a new
    record and leaves the receiver untouched.
    """

    status: ConfigurationStatus = ConfigurationStatus.NEW
    name: str = ""
    changelog_file: str | None = None
    classpath_entries: tuple[str, ...] = ()
    primary_connection: DatabaseConnectionRecord = field(default_factory=DatabaseConnectionRecord)
    reference_connection: DatabaseConnectionRecord | None = None
    # NOTE: compared as a dict, so equality ignores insertion order
    additional_configuration: Mapping[str, str] = field(default_factory=dict)
    default_database_type: str = NO_PRE_CONFIGURED_DRIVER

    def __post_init__(self) -> None:
        object.__setattr__(self, "classpath_entries", tuple(self.classpath_entries))
        object.__setattr__(self, "additional_configuration", MappingProxyType(dict(self.additional_configuration)))

    @classmethod
    def create(
        cls,
        status: ConfigurationStatus = ConfigurationStatus.NEW,
        *,
        name: str = "",
        default_database_type: str = NO_PRE_CONFIGURED_DRIVER,
    ) -> ConfigurationRecord:
        return cls(
            status=status,
            name=name,
            primary_connection=DatabaseConnectionRecord.create_default(default_database_type),
            default_database_type=default_database_type,
        )

    def ensure_reference(self) -> ConfigurationRecord:
        """Return a record that has a reference connection, creating a default one if needed."""
        if self.reference_connection is not None:
            return self
        return replace(
            self,
            reference_connection=DatabaseConnectionRecord.create_default(self.default_database_type),
        )

    def without_reference(self) -> ConfigurationRecord:
        return replace(self, reference_connection=None)

    def with_name(self, name: str) -> ConfigurationRecord:
        return replace(self, name=name)

    def with_changelog_file(self, changelog_file: str | None) -> ConfigurationRecord:
        return replace(self, changelog_file=changelog_file)

    def with_classpath_entries(self, entries: Iterable[str]) -> ConfigurationRecord:
        return replace(self, classpath_entries=tuple(entries))

    def with_primary_connection(self, connection: DatabaseConnectionRecord) -> ConfigurationRecord:
        return replace(self, primary_connection=connection)

    def with_reference_connection(self, connection: DatabaseConnectionRecord) -> ConfigurationRecord:
        return replace(self, reference_connection=connection)

    def with_additional(self, key: str, value: str) -> ConfigurationRecord:
        """Return a copy with one additional value set (appended if the key is new)."""
        additional = dict(self.additional_configuration)
        additional[key] = value
        return replace(self, additional_configuration=additional)

    def without_additional(self, key: str) -> ConfigurationRecord:
        additional = {k: v for k, v in self.additional_configuration.items() if k != key}
        return replace(self, additional_configuration=additional)


__all__ = [
    "CHANGELOG_FILE_KEY",
    "CLASSPATH_KEY",
    "CONFIGURED_KEYS",
    "CONNECTION_KEYS",
    "ConfigurationRecord",
    "ConfigurationStatus",
    "DRIVER_KEY",
    "DatabaseConnectionRecord",
    "REFERENCE_PREFIX",
    "create_dereferenced_key",
    "create_reference_key",
    "is_reference_key",
]
