from __future__ import annotations

import json

import pytest

from functionkit.cli import main as cli_main
from functionkit.settings import RuntimeSettings
from functionkit.utils.telemetry import record_event


def test_telemetry_report_tail_clear(runtime_settings: RuntimeSettings, capsys: pytest.CaptureFixture[str]) -> None:
    record_event(runtime_settings, "functions.add", {"function": "a"})
    record_event(runtime_settings, "functions.add", {"function": "b"})

    assert cli_main.main(["telemetry", "report"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["by_event"] == {"functions.add": 2}

    assert cli_main.main(["telemetry", "tail", "--limit", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["payload"] == {"function": "b"}

    assert cli_main.main(["telemetry", "clear"]) == 0
    assert not runtime_settings.telemetry_file.exists()


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("fnkit ")
