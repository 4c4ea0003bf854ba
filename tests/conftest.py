"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from fvm.home import get_resolver


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Point every platform config root into tmp_path and reset the resolver."""
    monkeypatch.delenv("FVM_HOME", raising=False)
    monkeypatch.delenv("AppData", raising=False)
    monkeypatch.delenv("FVM_LOG_LEVEL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "user"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "user" / ".config"))
    get_resolver.cache_clear()
    yield
    get_resolver.cache_clear()


@pytest.fixture()
def fvm_home_env(monkeypatch, tmp_path) -> Path:
    """Set FVM_HOME to a not-yet-existing directory and return it."""
    home = tmp_path / "fvmhome"
    monkeypatch.setenv("FVM_HOME", str(home))
    return home


def make_home(path: Path, *, config: str | None = None) -> Path:
    """Create a marked fvm home, optionally with config.yaml contents."""
    path.mkdir(parents=True, exist_ok=True)
    (path / ".fvmhome").touch()
    if config is not None:
        (path / "config.yaml").write_text(config)
    return path


def snapshot(path: Path) -> set[str]:
    """Return every path under *path*, relative to it."""
    return {str(p.relative_to(path)) for p in path.rglob("*")}
