from __future__ import annotations

from pathlib import Path

import pytest

from functionkit import __version__
from functionkit.cli import main as cli_main
from functionkit.plugins.loader import load_service_plugins
from functionkit.settings import RuntimeSettings
from tests._helpers import write_project


@pytest.fixture()
def runtime_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RuntimeSettings:
    runtime = tmp_path / "runtime"
    home = runtime / "home"
    log_dir = runtime / "logs"
    for directory in (home, log_dir):
        directory.mkdir(parents=True, exist_ok=True)
    settings = RuntimeSettings(home_dir=home, log_dir=log_dir, cli_version=__version__)
    monkeypatch.setattr(cli_main, "SETTINGS", settings, raising=False)
    monkeypatch.setattr(
        cli_main,
        "load_service_plugins",
        lambda: load_service_plugins(include_entry_points=False),
        raising=False,
    )
    return settings


@pytest.fixture()
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    write_project(root, [{"name": "api", "plugin": "service-node", "path": "backend/api"}])
    monkeypatch.chdir(root)
    return root


@pytest.fixture()
def answer(monkeypatch: pytest.MonkeyPatch):
    def _install(*answers: str) -> None:
        iterator = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(iterator))

    return _install
