"""Pre-configured JDBC drivers and JDBC URL helpers.

The catalog is an immutable table built once and passed to whatever needs
driver lookups (the key mapper, the codec, the CLI).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

# Database type of a connection whose driver class is typed in by hand.
NO_PRE_CONFIGURED_DRIVER = "NO_PRE_CONFIGURED_DRIVER"


@dataclass(frozen=True)
class UrlParts:
    """The parts of a JDBC url."""

    server_address: str | None = None
    port: int | None = None
    database_name: str | None = None


@dataclass(frozen=True)
class DatabaseNameExtraction:
    """Where the database name starts in a url, and the name itself."""

    index: int
    database_name: str


@dataclass(frozen=True)
class UrlFlavor:
    """How a driver places the database name and parameters in its url."""

    extract_database_name: Callable[[str, Driver], DatabaseNameExtraction]
    build_database_name: Callable[[Driver, str], str]
    extract_parameters: Callable[[str], str]


@dataclass(frozen=True)
class Driver:
    """A driver the user can pick instead of typing a driver class."""

    driver_class: str
    url_for_download: str
    jdbc_name: str
    port: int
    separator: str
    flavor: UrlFlavor

    def file_name(self) -> str:
        """Return the file name the driver jar is saved under."""
        return self.url_for_download.rsplit("/", 1)[-1]

    def extract_url_parts(self, url: str) -> UrlParts:
        """Split a JDBC url into server address, port and database name.

        If the url has no recognisable ``host:port`` part, only the default
        port of the driver is returned.
        """
        url_to_check = url.replace(self.jdbc_name, "", 1)
        extraction = self.flavor.extract_database_name(url_to_check, self)

        head = url_to_check[: extraction.index] if extraction.index >= 0 else url_to_check
        parts = head.split(":")
        if len(parts) == 2:
            try:
                port = int(parts[1])
            except ValueError:
                return UrlParts(port=self.port)
            return UrlParts(
                server_address=parts[0],
                port=port,
                database_name=extraction.database_name,
            )
        return UrlParts(port=self.port)

    def build_url(
        self,
        old_url: str | None,
        new_values: UrlParts,
        server_address: str,
        port: int,
        database_name: str,
    ) -> str:
        """Build a JDBC url, keeping the parameters of ``old_url``.

        Values missing from ``new_values`` fall back to the given server
        address, port and database name.
        """
        parameters = self.flavor.extract_parameters(old_url) if old_url else ""
        database = self.flavor.build_database_name(
            self,
            new_values.database_name if new_values.database_name is not None else database_name,
        )
        server = new_values.server_address if new_values.server_address is not None else server_address
        port_value = new_values.port if new_values.port is not None else port
        return f"{self.jdbc_name}{server}:{port_value}{database}{parameters}"


def _extract_database_name_by_separator(url: str, driver: Driver) -> DatabaseNameExtraction:
    index = url.rfind(driver.separator)
    if index < 0:
        return DatabaseNameExtraction(index=index, database_name="")
    database_name = url[index + 1 :]
    if "?" in database_name:
        database_name = database_name[: database_name.index("?")]
    return DatabaseNameExtraction(index=index, database_name=database_name)


def _build_database_name_by_separator(driver: Driver, database_name: str) -> str:
    return f"{driver.separator}{database_name}"


def _extract_parameters(old_url: str) -> str:
    if "?" in old_url:
        return old_url[old_url.index("?") :]
    return ""


def _extract_database_name_for_mssql(url: str, driver: Driver) -> DatabaseNameExtraction:
    # jdbc:sqlserver://host:port;databaseName=name;p1=v1
    index = url.find(";")
    parameters = url[index + 1 :] if index >= 0 else ""
    database_name = "".join(
        parameter.split("=", 1)[1] if "=" in parameter else ""
        for parameter in parameters.split(driver.separator)
        if parameter.startswith("databaseName")
    )
    return DatabaseNameExtraction(index=index, database_name=database_name)


def _build_database_name_for_mssql(driver: Driver, database_name: str) -> str:
    return f"{driver.separator}databaseName={database_name}"


def _extract_parameters_for_mssql(old_url: str) -> str:
    if ";" not in old_url:
        return ""
    remaining = [
        parameter
        for parameter in old_url[old_url.index(";") + 1 :].split(";")
        if not parameter.startswith("databaseName")
    ]
    joined = ";".join(remaining)
    return f";{joined}" if joined else ""


SEPARATOR_FLAVOR = UrlFlavor(
    extract_database_name=_extract_database_name_by_separator,
    build_database_name=_build_database_name_by_separator,
    extract_parameters=_extract_parameters,
)

MSSQL_FLAVOR = UrlFlavor(
    extract_database_name=_extract_database_name_for_mssql,
    build_database_name=_build_database_name_for_mssql,
    extract_parameters=_extract_parameters_for_mssql,
)


class DriverCatalog(Mapping[str, Driver]):
    """Read-only table of database type key -> driver."""

    def __init__(self, drivers: Mapping[str, Driver]):
        self._drivers: Mapping[str, Driver] = MappingProxyType(dict(drivers))
        self._by_class: Mapping[str, str] = MappingProxyType(
            {driver.driver_class: key for key, driver in reversed(list(self._drivers.items()))}
        )

    def __getitem__(self, key: str) -> Driver:
        return self._drivers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._drivers)

    def __len__(self) -> int:
        return len(self._drivers)

    def lookup_by_key(self, key: str) -> Driver | None:
        return self._drivers.get(key)

    def lookup_by_class_name(self, class_name: str) -> str | None:
        """Return the database type key whose driver class is ``class_name``."""
        return self._by_class.get(class_name)

    def driver_class_for(self, key: str) -> str | None:
        driver = self._drivers.get(key)
        return driver.driver_class if driver else None


DEFAULT_DRIVER_CATALOG = DriverCatalog(
    {
        # https://mvnrepository.com/artifact/org.mariadb.jdbc/mariadb-java-client
        "MariaDB": Driver(
            driver_class="org.mariadb.jdbc.Driver",
            url_for_download="https://repo1.maven.org/maven2/org/mariadb/jdbc/mariadb-java-client/2.5.3/mariadb-java-client-2.5.3.jar",
            jdbc_name="jdbc:mariadb://",
            port=3306,
            separator="/",
            flavor=SEPARATOR_FLAVOR,
        ),
        # https://mvnrepository.com/artifact/com.mysql/mysql-connector-j
        "MySQL": Driver(
            driver_class="com.mysql.cj.jdbc.Driver",
            url_for_download="https://repo1.maven.org/maven2/com/mysql/mysql-connector-j/8.2.0/mysql-connector-j-8.2.0.jar",
            jdbc_name="jdbc:mysql://",
            port=3306,
            separator="/",
            flavor=SEPARATOR_FLAVOR,
        ),
        # https://mvnrepository.com/artifact/com.microsoft.sqlserver/mssql-jdbc
        "MS SQL": Driver(
            driver_class="com.microsoft.sqlserver.jdbc.SQLServerDriver",
            url_for_download="https://repo1.maven.org/maven2/com/microsoft/sqlserver/mssql-jdbc/12.2.0.jre11/mssql-jdbc-12.2.0.jre11.jar",
            jdbc_name="jdbc:sqlserver://",
            port=1443,
            separator=";",
            flavor=MSSQL_FLAVOR,
        ),
        # https://mvnrepository.com/artifact/org.postgresql/postgresql
        "PostgreSQL": Driver(
            driver_class="org.postgresql.Driver",
            url_for_download="https://repo1.maven.org/maven2/org/postgresql/postgresql/42.6.0/postgresql-42.6.0.jar",
            jdbc_name="jdbc:postgresql://",
            port=5432,
            separator="/",
            flavor=SEPARATOR_FLAVOR,
        ),
        # https://mvnrepository.com/artifact/com.oracle.database.jdbc/ojdbc11
        "Oracle": Driver(
            driver_class="oracle.jdbc.driver.OracleDriver",
            url_for_download="https://repo1.maven.org/maven2/com/oracle/database/jdbc/ojdbc11/23.2.0.0/ojdbc11-23.2.0.0.jar",
            jdbc_name="jdbc:oracle:thin:@",
            port=1521,
            separator=":",
            flavor=SEPARATOR_FLAVOR,
        ),
    }
)


__all__ = [
    "DEFAULT_DRIVER_CATALOG",
    "Driver",
    "DriverCatalog",
    "MSSQL_FLAVOR",
    "NO_PRE_CONFIGURED_DRIVER",
    "SEPARATOR_FLAVOR",
    "UrlFlavor",
    "UrlParts",
]
