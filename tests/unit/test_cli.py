"""Tests for the liquiprops command line."""

from __future__ import annotations

import pytest

from liquiprops.cli import main
from liquiprops.domains.cache.store.cache import CacheStore, connection_identity
from liquiprops.domains.configuration.store.configurations import ConfigurationStore
from liquiprops.domains.shell.store.settings import CACHE_LOCATION_SETTING, get_settings_store


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Keep the cache and the configuration index of every test in tmp_path."""
    monkeypatch.setattr("liquiprops.domains.configuration.store.configurations.CONFIG_DIR", tmp_path)
    get_settings_store().set(CACHE_LOCATION_SETTING, str(tmp_path / "cache.json"))
    return tmp_path


@pytest.fixture
def properties_file(workspace):
    path = workspace / "app.liquibase.properties"
    path.write_text(
        "changelogFile: a.xml\n"
        "username: u\n"
        "password: secret\n"
        "driver: org.mariadb.jdbc.Driver\n"
        "lorem: ipsum\n",
        encoding="utf-8",
    )
    return path


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "usage: liquiprops" in capsys.readouterr().out


def test_show(properties_file, capsys) -> None:
    assert main(["show", str(properties_file)]) == 0
    out = capsys.readouterr().out
    assert "a.xml" in out
    assert "MariaDB" in out
    assert "secret" not in out


def test_preview_masks_password(properties_file, capsys) -> None:
    assert main(["preview", str(properties_file)]) == 0
    out = capsys.readouterr().out
    assert "password=***" in out
    assert "secret" not in out


def test_normalize_rewrites_file(properties_file, capsys) -> None:
    assert main(["normalize", str(properties_file)]) == 0
    text = properties_file.read_text(encoding="utf-8")
    assert text.startswith("changelogFile=a.xml\n#configuration for the database\n")
    assert "password=secret\n" in text
    assert "driver=org.mariadb.jdbc.Driver\n" in text


def test_reference_args(properties_file, capsys) -> None:
    assert main(["reference-args", str(properties_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "--reference-username=u",
        "--reference-password=secret",
        "--reference-driver=org.mariadb.jdbc.Driver",
    ]


def test_drivers(capsys) -> None:
    assert main(["drivers"]) == 0
    out = capsys.readouterr().out
    assert "PostgreSQL" in out
    assert "5432" in out


class TestConfigCommands:
    def test_add_list_remove(self, workspace, properties_file, capsys):
        assert main(["config", "add", "app", str(properties_file)]) == 0
        assert ConfigurationStore().path_of("app") == connection_identity(properties_file)

        assert main(["config", "add", "app", str(properties_file)]) == 1
        assert "Error: Configuration 'app' already exists" in capsys.readouterr().out

        assert main(["config", "list"]) == 0
        assert "app" in capsys.readouterr().out

        assert main(["config", "remove", "app", "--mode", "delete-all"]) == 0
        assert ConfigurationStore().path_of("app") is None
        assert not properties_file.exists()

    def test_remove_one_of_two_names_for_the_same_file(self, workspace, properties_file, capsys):
        main(["config", "add", "first", str(properties_file)])
        main(["config", "add", "second", str(properties_file)])

        assert main(["config", "remove", "second", "--mode", "setting"]) == 0
        assert ConfigurationStore().names() == ["first"]

    def test_remove_unknown(self, workspace, capsys):
        assert main(["config", "remove", "missing"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_list_empty(self, workspace, capsys):
        assert main(["config", "list"]) == 0
        assert "No saved configurations." in capsys.readouterr().out

    def test_missing_subcommand(self, workspace, capsys):
        assert main(["config"]) == 1


class TestCacheCommands:
    def test_contexts(self, workspace, properties_file, capsys):
        assert main(["cache", "contexts", str(properties_file), "--set", "test", "dev"]) == 0
        assert capsys.readouterr().out.splitlines() == ["dev", "test"]

        cache = CacheStore(workspace / "cache.json")
        assert cache.read_contexts(connection_identity(properties_file)) == ["dev", "test"]

    def test_changelogs(self, workspace, properties_file, capsys):
        assert main(["cache", "changelogs", str(properties_file), "--use", "a.xml"]) == 0
        assert capsys.readouterr().out.splitlines() == ["a.xml"]

    def test_clear(self, workspace, properties_file, capsys):
        assert main(["cache", "clear"]) == 0
        assert "no elements" in capsys.readouterr().out

        main(["cache", "contexts", str(properties_file), "--set", "dev"])
        capsys.readouterr()
        assert main(["cache", "clear", str(properties_file)]) == 0
        assert "Successfully removed 1 " in capsys.readouterr().out
        assert CacheStore(workspace / "cache.json").read_all() == {}

    def test_clear_unknown_path_reports_nothing_removed(self, workspace, properties_file, capsys):
        main(["cache", "contexts", str(properties_file), "--set", "dev"])
        capsys.readouterr()

        assert main(["cache", "clear", str(workspace / "other.liquibase.properties")]) == 0
        out = capsys.readouterr().out
        assert "Successfully" not in out
        assert "None of the given elements" in out
        assert CacheStore(workspace / "cache.json").read_contexts(connection_identity(properties_file)) == ["dev"]
