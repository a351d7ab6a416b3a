# ABOUTME: Shared fixtures for mcpsync tests
# ABOUTME: HOME points at a temp dir so global configs and backups never touch the real user
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME (and APPDATA) at an empty temp directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root

