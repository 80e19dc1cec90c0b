"""Port definition for the filesystem operations the workflows need."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence


class FunctionFileSystem(ABC):
    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return whether a file or directory exists at path."""

    @abstractmethod
    def list_directories(self, path: Path) -> Sequence[str]:
        """Return the sorted names of the directories directly under path."""

    @abstractmethod
    def rename(self, source: Path, target: Path) -> None:
        """Rename source to target."""

    @abstractmethod
    def copy_tree(self, source: Path, target: Path) -> list[Path]:
        """Copy the contents of source into target, overwriting existing files.

        Returns the copied files relative to target.
        """

    @abstractmethod
    def replace_token(self, path: Path, token: str, value: str) -> None:
        """Replace every occurrence of token in the file at path."""

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Write content to path, creating parent directories."""
