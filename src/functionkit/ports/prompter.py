"""Port definition for interactive selection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class Choice:
    title: str
    value: Any
    description: str = ""


class Prompter(ABC):
    @abstractmethod
    def select(self, message: str, choices: Sequence[Choice]) -> Any | None:
        """Return the value of the picked choice, or None when the user cancels."""
