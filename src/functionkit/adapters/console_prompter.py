"""Numbered-menu prompter reading answers from standard input."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from functionkit.ports.prompter import Choice, Prompter

CANCEL_ANSWERS = {"", "q", "quit"}


class ConsolePrompter(Prompter):
    def __init__(self, reader: Callable[[str], str] | None = None) -> None:
        self._reader = reader

    def select(self, message: str, choices: Sequence[Choice]) -> Any | None:
        options = list(choices)
        if not options:
            return None
        print(f"{message}:")
        for index, choice in enumerate(options, start=1):
            print(f"  {index}. {choice.title}")
            if choice.description:
                print(f"     {choice.description}")
        while True:
            try:
                answer = self._read(f"Select [1-{len(options)}, Enter to cancel]: ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                return None
            if answer.lower() in CANCEL_ANSWERS:
                return None
            if answer.isdigit():
                index = int(answer)
                if 1 <= index <= len(options):
                    return options[index - 1].value
            print(f"Enter a value between 1 and {len(options)}.")

    def _read(self, prompt: str) -> str:
        # resolved per call so tests can patch builtins.input
        reader = self._reader or input
        return reader(prompt)
