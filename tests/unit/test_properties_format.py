"""Unit tests for the properties text format."""

from __future__ import annotations

from liquiprops.domains.configuration.app.properties_format import (
    PropertiesWriter,
    read_pairs,
    unescape_value_colons,
)


class TestReadPairs:
    def test_separators(self):
        text = "a=1\nb: 2\nc 3\nd   =   4\n"
        assert read_pairs(text) == [("a", "1"), ("b", "2"), ("c", "3"), ("d", "4")]

    def test_comments_and_blank_lines_are_skipped(self):
        text = "# comment\n! other comment\n\n   \nkey=value\n"
        assert read_pairs(text) == [("key", "value")]

    def test_line_continuation(self):
        text = "classpath=a.jar:\\\n    b.jar\nnext=1"
        assert read_pairs(text) == [("classpath", "a.jar:b.jar"), ("next", "1")]

    def test_escaped_backslash_does_not_continue(self):
        assert read_pairs("path=C:\\\\\nnext=1") == [("path", "C:\\"), ("next", "1")]

    def test_escapes(self):
        assert read_pairs("k=tab\\there\\u0041") == [("k", "tab\there" + "A")]

    def test_escaped_separator_in_key(self):
        assert read_pairs("my\\:key=value") == [("my:key", "value")]

    def test_windows_line_endings(self):
        assert read_pairs("a=1\r\nb=2\r\n") == [("a", "1"), ("b", "2")]

    def test_duplicates_are_kept_in_order(self):
        assert read_pairs("a=1\na=2") == [("a", "1"), ("a", "2")]

    def test_entries_without_key_are_skipped(self):
        assert read_pairs("=novalue\nok=1") == [("ok", "1")]

    def test_broken_unicode_escape_is_kept_literally(self):
        assert read_pairs("broken=\\u12\nok=1") == [("broken", "\\u12"), ("ok", "1")]

    def test_escaped_backslash_before_u_is_not_an_escape(self):
        assert read_pairs("path=C:\\\\users") == [("path", "C:\\users")]

    def test_key_without_value(self):
        assert read_pairs("flag") == [("flag", "")]


class TestPropertiesWriter:
    def test_entries_and_comments(self):
        writer = PropertiesWriter()
        writer.insert_comment("section")
        writer.insert("key", "value")
        assert writer.format() == "#section\nkey=value"

    def test_colons_are_escaped_until_unescaped(self):
        writer = PropertiesWriter()
        writer.insert("my:key", "jdbc:h2:mem")
        text = writer.format()
        assert text == "my\\:key=jdbc\\:h2\\:mem"
        assert unescape_value_colons(text) == "my\\:key=jdbc:h2:mem"

    def test_comment_lines_are_left_alone(self):
        assert unescape_value_colons("#a\\:b\nk=v\\:w") == "#a\\:b\nk=v:w"

    def test_written_text_reads_back(self):
        writer = PropertiesWriter()
        values = {
            "a key": "  spaced",
            "url": "jdbc:x://h:1/d",
            "multi": "line1\nline2",
            "hash#": "#v",
            "umlaut": "g\xe4st",
            "trailing": "C:\\",
        }
        for key, value in values.items():
            writer.insert(key, value)
        assert dict(read_pairs(unescape_value_colons(writer.format()))) == values
