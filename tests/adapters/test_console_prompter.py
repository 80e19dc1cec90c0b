from __future__ import annotations

from typing import Iterator

import pytest

from functionkit.adapters.console_prompter import ConsolePrompter
from functionkit.ports.prompter import Choice

CHOICES = [
    Choice(title="api", value="api-instance", description="Select api instance"),
    Choice(title="worker", value="worker-instance"),
]


def _reader(answers: list[str]):
    iterator: Iterator[str] = iter(answers)
    return lambda prompt="": next(iterator)


def test_select_returns_value(capsys: pytest.CaptureFixture[str]) -> None:
    prompter = ConsolePrompter(_reader(["2"]))
    assert prompter.select("Select an instance", CHOICES) == "worker-instance"
    output = capsys.readouterr().out
    assert "Select an instance:" in output
    assert "1. api" in output
    assert "Select api instance" in output


def test_select_reasks_on_invalid_answer(capsys: pytest.CaptureFixture[str]) -> None:
    prompter = ConsolePrompter(_reader(["7", "abc", "1"]))
    assert prompter.select("Select an instance", CHOICES) == "api-instance"
    assert capsys.readouterr().out.count("Enter a value between 1 and 2.") == 2


@pytest.mark.parametrize("answer", ["", "q", "QUIT"])
def test_select_cancel_answers(answer: str) -> None:
    assert ConsolePrompter(_reader([answer])).select("Select", CHOICES) is None


def test_select_cancel_on_eof() -> None:
    def reader(prompt: str = "") -> str:
        raise EOFError

    assert ConsolePrompter(reader).select("Select", CHOICES) is None


def test_select_without_choices_does_not_prompt() -> None:
    assert ConsolePrompter(_reader([])).select("Select", []) is None


def test_select_reads_builtin_input(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt="": "1")
    assert ConsolePrompter().select("Select", CHOICES) == "api-instance"
