"""Exceptions shared across liquiprops."""

from __future__ import annotations

from os import PathLike


class LiquipropsError(Exception):
    """Base class for errors raised by liquiprops."""


class ConfigurationWriteError(LiquipropsError):
    """Raised when a properties file, cache file or index could not be written.

    The original ``OSError`` is kept as ``cause``; nothing is retried.
    """

    def __init__(self, path: str | PathLike[str], cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to write {self.path}: {cause}")
