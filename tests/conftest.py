"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

from treesum.models.session import ScanConfig, ScanSession


@pytest.fixture
def lines() -> list[str]:
    """Collects every line a session writes."""
    return []


@pytest.fixture
def session(tmp_path, lines):
    """Session rooted at ``tmp_path`` that writes into ``lines``."""
    s = ScanSession(config=ScanConfig(), out=lines.append)
    s.start_root(tmp_path, os.stat(tmp_path).st_dev)
    return s


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Point the settings lookup at an empty temp config directory."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "treesum" / "settings.json"
