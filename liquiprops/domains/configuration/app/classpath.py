"""Classpath assembly for liquibase.properties files."""

from __future__ import annotations

import os
from collections.abc import Iterable

QUOTE = '"'


def unquote(entry: str) -> str:
    """Strip one pair of wrapping double quotes, if present."""
    if len(entry) >= 2 and entry.startswith(QUOTE) and entry.endswith(QUOTE):
        return entry[1:-1]
    return entry


class ClasspathAssembler:
    """Builds the deduplicated, quoted classpath value and splits it again.

    ``assemble(split(assemble(x)))`` equals ``assemble(x)``: entries are
    quoted exactly once no matter how often the value is regenerated.
    """

    def __init__(self, separator: str = os.pathsep):
        self.separator = separator

    def assemble(self, entries: Iterable[str], separator: str | None = None) -> str:
        """Join classpath entries into one value.

        Args:
            entries: Raw entries as typed, with or without wrapping quotes.
            separator: Overrides the platform separator.

        Returns:
            Entries wrapped in double quotes, blank ones dropped, duplicates
            removed (first one wins), joined by the separator.
        """
        sep = self.separator if separator is None else separator
        seen: dict[str, None] = {}
        for entry in entries:
            path = unquote(entry)
            if not path.strip():
                continue
            seen.setdefault(path, None)
        return sep.join(f"{QUOTE}{entry}{QUOTE}" for entry in seen)

    def split(self, value: str, separator: str | None = None) -> list[str]:
        """Split a classpath value into unquoted, non-blank entries."""
        sep = self.separator if separator is None else separator
        paths = (unquote(entry.strip()) for entry in value.split(sep))
        return [path for path in paths if path.strip()]


__all__ = ["ClasspathAssembler", "unquote"]
