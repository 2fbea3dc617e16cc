"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime

import pytest

from trashcan.config import TrashConfig
from trashcan.core.manager import TrashManager

FIXED_NOW = datetime(2026, 10, 19, 12, 30, 45)


@pytest.fixture(autouse=True)
def isolate_xdg(tmp_path, monkeypatch):
    """Keep tests away from the real user trash and settings."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("TRASHCAN_ROOT", raising=False)


@pytest.fixture
def trash_root(tmp_path):
    return tmp_path / "Trash"


@pytest.fixture
def manager(trash_root):
    """A manager bound to a temporary trash with a fixed clock."""
    return TrashManager(TrashConfig(root=trash_root), clock=lambda: FIXED_NOW)


@pytest.fixture
def workdir(tmp_path):
    """Directory holding the files that get trashed."""
    work = tmp_path / "work"
    work.mkdir()
    return work
