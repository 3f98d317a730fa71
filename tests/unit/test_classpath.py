"""Unit tests for classpath assembly."""

from __future__ import annotations

import pytest

from liquiprops.domains.configuration.app.classpath import ClasspathAssembler, unquote


@pytest.fixture
def assembler():
    return ClasspathAssembler(":")


class TestAssemble:
    def test_dedup_keeps_first_seen_order(self, assembler):
        result = assembler.assemble(["a", "a", '"a"', "b"])
        assert result == '"a":"b"'

    def test_blank_entries_are_dropped(self, assembler):
        assert assembler.assemble(["", "  ", '""', "lib/x.jar"]) == '"lib/x.jar"'

    def test_empty_input_gives_empty_string(self, assembler):
        assert assembler.assemble([]) == ""

    def test_separator_override(self, assembler):
        assert assembler.assemble(["a", "b"], ";") == '"a";"b"'

    def test_idempotent_when_regenerated(self, assembler):
        once = assembler.assemble(['"a"', "b", "c", "b"])
        twice = assembler.assemble(assembler.split(once))
        assert once == twice
        assert once.count('""') == 0


class TestSplit:
    def test_split_strips_one_quote_pair(self, assembler):
        assert assembler.split('"a.jar":"b.jar"') == ["a.jar", "b.jar"]

    def test_split_drops_blank_entries(self, assembler):
        assert assembler.split('"a.jar"::  :"b.jar"') == ["a.jar", "b.jar"]

    def test_unquote_leaves_unbalanced_quotes(self):
        assert unquote('"a') == '"a'
        assert unquote('"') == '"'
        assert unquote('"a"') == "a"
