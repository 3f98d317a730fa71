"""Reading and writing the ``.properties`` text format.

The line format itself (separators, comments, continuation lines and
escapes) is handled by ``javaproperties``; this module adds the ordered
pair view the codec works on and the colon post-processing of written text.
"""

from __future__ import annotations

import logging
import re

import javaproperties

logger = logging.getLogger(__name__)

# A ``\u`` that is not itself escaped and not followed by four hex digits.
_BROKEN_UNICODE_ESCAPE = re.compile(r"(?<!\\)((?:\\\\)*)\\u(?![0-9A-Fa-f]{4})")


def _keep_broken_unicode_escapes(text: str) -> str:
    """Escape the backslash of invalid ``\\u`` sequences so they read back literally."""
    return _BROKEN_UNICODE_ESCAPE.sub(lambda match: f"{match.group(1)}\\\\u", text)


def read_pairs(text: str) -> list[tuple[str, str]]:
    """Parse properties text into ordered ``(key, value)`` pairs.

    Duplicate keys are kept in file order. Lines without a key are skipped,
    invalid ``\\u`` escapes are kept as literal text.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in javaproperties.loads(_keep_broken_unicode_escapes(text), object_pairs_hook=list):
        if not key:
            logger.debug("Skipping properties entry without key (value %r)", value)
            continue
        pairs.append((key, value))
    return pairs


def unescape_value_colons(text: str) -> str:
    """Turn every ``\\:`` in the value part of ``key=value`` lines back into ``:``.

    Keys keep their escapes, otherwise a colon in a key would end the key.
    """
    lines: list[str] = []
    for line in text.split("\n"):
        stripped = line.lstrip(" \t\f")
        if not stripped or stripped[0] in "#!":
            lines.append(line)
            continue
        separator = _separator_index(line)
        lines.append(line[: separator + 1] + line[separator + 1 :].replace("\\:", ":"))
    return "\n".join(lines)


def _separator_index(line: str) -> int:
    index = 0
    while index < len(line):
        if line[index] == "\\":
            index += 2
            continue
        if line[index] == "=":
            return index
        index += 1
    return len(line)


class PropertiesWriter:
    """Collects entries and comments and formats them as properties text."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def insert(self, key: str, value: str) -> None:
        self._lines.append(javaproperties.join_key_value(key, value))

    def insert_comment(self, comment: str) -> None:
        self._lines.append(javaproperties.to_comment(comment))

    def format(self) -> str:
        return "\n".join(self._lines)


__all__ = [
    "PropertiesWriter",
    "read_pairs",
    "unescape_value_colons",
]
