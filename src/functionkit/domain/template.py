"""Domain model for action templates stored on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import FunctionkitError

ACTION_DESCRIPTOR = "action.graphql"
ACTION_PLACEHOLDER = "actionName"


class TemplateNotFoundError(FunctionkitError):
    pass


@dataclass(frozen=True)
class ActionTemplate:
    plugin: str
    root_dir: Path

    @property
    def descriptor_file(self) -> Path:
        return self.root_dir / ACTION_DESCRIPTOR

    def validate(self) -> None:
        if not self.root_dir.is_dir():
            raise TemplateNotFoundError(f"Action template directory missing for {self.plugin}: {self.root_dir}")
        if not self.descriptor_file.is_file():
            raise TemplateNotFoundError(f"Action descriptor missing for {self.plugin}: {self.descriptor_file}")
