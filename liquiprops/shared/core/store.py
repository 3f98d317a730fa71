"""Base store class with common JSON file operations."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from liquiprops.shared.core.errors import ConfigurationWriteError

# Shared config directory - can be overridden via environment variable for testing
CONFIG_DIR = Path(os.environ.get("LIQUIPROPS_CONFIG_DIR", Path.home() / ".liquiprops"))

logger = logging.getLogger(__name__)


class JSONFileStore:
    """Base class for JSON file-backed stores.

    Every mutation is a full read, an in-memory change and a full rewrite of
    the document. There is no locking: two processes writing the same file
    concurrently can lose updates (last writer wins).
    """

    def __init__(self, file_path: Path):
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        """Get the store's file path."""
        return self._file_path

    def _ensure_dir(self) -> None:
        """Ensure the parent directory of the store exists."""
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def _read_json(self) -> Any:
        """Read and parse JSON from file.

        Returns:
            Parsed JSON data, or None if the file doesn't exist, is unreadable or is invalid.
        """
        if not self._file_path.exists():
            return None
        try:
            with open(self._file_path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            logger.debug("Ignoring unparsable store file %s", self._file_path)
            return None
        except OSError as exc:
            logger.debug("Ignoring unreadable store file %s: %s", self._file_path, exc)
            return None

    def _write_json(self, data: Any) -> None:
        """Write data as JSON to file atomically.

        Uses temp file + rename so a crash never leaves a half-written document.

        Args:
            data: Data to serialize and write.

        Raises:
            ConfigurationWriteError: If the file could not be written.
        """
        try:
            self._ensure_dir()
            # Create temp file in same directory (required for atomic rename)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._file_path.parent,
                prefix=".tmp_",
                suffix=".json",
            )
        except OSError as exc:
            raise ConfigurationWriteError(self._file_path, exc) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            _discard(tmp_path)
            raise ConfigurationWriteError(self._file_path, exc) from exc
        except Exception:
            _discard(tmp_path)
            raise

    def _delete(self) -> bool:
        """Delete the backing file.

        Returns:
            True if a file was removed, False if there was nothing to remove.
        """
        try:
            self._file_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise ConfigurationWriteError(self._file_path, exc) from exc
        return True

    def exists(self) -> bool:
        """Check if the store file exists."""
        return self._file_path.exists()


def _discard(tmp_path: str) -> None:
    try:
        os.unlink(tmp_path)
    except OSError:
        pass
