"""Shared pytest fixtures for hostlayout tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from hostlayout.infrastructure.store import LayoutStore


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated XDG config directory; no HOSTLAYOUT_* env leaks in."""
    base = tmp_path / "config"
    base.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base))
    for var in ("HOSTLAYOUT_CONFIG", "HOSTLAYOUT_CONFIG_DIR", "HOSTLAYOUT_HOSTS"):
        monkeypatch.delenv(var, raising=False)
    return base


@pytest.fixture
def layout_path(config_dir: Path) -> Path:
    """Where the CLI keeps the layout under the isolated config dir."""
    return config_dir / "hostlayout" / "layout.json"


@pytest.fixture
def store(tmp_path: Path) -> LayoutStore:
    """LayoutStore on a not-yet-existing directory."""
    return LayoutStore(tmp_path / "state" / "layout.json")
