"""Unit tests for the driver catalog and JDBC url helpers."""

from __future__ import annotations

import pytest

from liquiprops.domains.configuration.drivers import (
    DEFAULT_DRIVER_CATALOG,
    UrlParts,
)


class TestDriverCatalog:
    def test_default_catalog_keys(self):
        assert list(DEFAULT_DRIVER_CATALOG) == ["MariaDB", "MySQL", "MS SQL", "PostgreSQL", "Oracle"]

    def test_lookup_by_class_name(self):
        assert DEFAULT_DRIVER_CATALOG.lookup_by_class_name("org.postgresql.Driver") == "PostgreSQL"
        assert DEFAULT_DRIVER_CATALOG.lookup_by_class_name("com.example.Unknown") is None

    def test_lookup_by_key(self):
        driver = DEFAULT_DRIVER_CATALOG.lookup_by_key("MS SQL")
        assert driver is not None
        assert driver.port == 1443
        assert DEFAULT_DRIVER_CATALOG.lookup_by_key("SQLite") is None

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_DRIVER_CATALOG["SQLite"] = DEFAULT_DRIVER_CATALOG["MySQL"]  # type: ignore[index]

    def test_file_name(self):
        assert DEFAULT_DRIVER_CATALOG["PostgreSQL"].file_name() == "postgresql-42.6.0.jar"


class TestSeparatorUrls:
    def test_extract_url_parts(self):
        parts = DEFAULT_DRIVER_CATALOG["MariaDB"].extract_url_parts("jdbc:mariadb://h:3306/d?useSSL=false")
        assert parts == UrlParts(server_address="h", port=3306, database_name="d")

    def test_extract_without_port_gives_default_port(self):
        parts = DEFAULT_DRIVER_CATALOG["PostgreSQL"].extract_url_parts("jdbc:postgresql://localhost/db")
        assert parts == UrlParts(port=5432)

    def test_extract_with_invalid_port_gives_default_port(self):
        parts = DEFAULT_DRIVER_CATALOG["MySQL"].extract_url_parts("jdbc:mysql://h:abc/db")
        assert parts == UrlParts(port=3306)

    def test_build_url_keeps_parameters(self):
        driver = DEFAULT_DRIVER_CATALOG["MariaDB"]
        url = driver.build_url(
            "jdbc:mariadb://old:3306/old?useSSL=false",
            UrlParts(database_name="new"),
            "localhost",
            3307,
            "ignored",
        )
        assert url == "jdbc:mariadb://localhost:3307/new?useSSL=false"


class TestMssqlUrls:
    def test_extract_url_parts(self):
        parts = DEFAULT_DRIVER_CATALOG["MS SQL"].extract_url_parts(
            "jdbc:sqlserver://db.local:1433;databaseName=sales;encrypt=true"
        )
        assert parts == UrlParts(server_address="db.local", port=1433, database_name="sales")

    def test_build_url_replaces_database_name(self):
        driver = DEFAULT_DRIVER_CATALOG["MS SQL"]
        url = driver.build_url(
            "jdbc:sqlserver://db.local:1433;databaseName=sales;encrypt=true",
            UrlParts(server_address="other", port=1434, database_name="hr"),
            "unused",
            0,
            "unused",
        )
        assert url == "jdbc:sqlserver://other:1434;databaseName=hr;encrypt=true"
