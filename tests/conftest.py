"""Pytest fixtures for liquiprops tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="liquiprops-test-config-"))
os.environ.setdefault("LIQUIPROPS_CONFIG_DIR", str(_TEST_CONFIG_DIR))


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Point the settings file at a fresh temporary path for every test."""
    monkeypatch.setenv("LIQUIPROPS_SETTINGS_PATH", str(tmp_path / "settings.json"))
    yield
