"""Service plugins: the kinds of backend service a project can host."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .template import ActionTemplate

ACTION_TEMPLATE_DIR = "action"
FUNCTION_TEMPLATE_STEM = "function"


@dataclass(frozen=True)
class ServicePlugin:
    """A service technology and the templates it ships.

    ``template_root`` holds an ``action/`` folder copied by
    ``function:attach-action`` and a ``function<ext>`` file used by
    ``functions:add``.
    """

    name: str
    handler_file: str
    function_extension: str
    template_root: Path

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("service plugin name must be a non-empty string")
        if not self.function_extension.startswith("."):
            raise ValueError(f"function extension for {self.name} must start with '.'")

    def action_template_path(self) -> Path:
        return self.template_root / ACTION_TEMPLATE_DIR

    def action_template(self) -> ActionTemplate:
        return ActionTemplate(plugin=self.name, root_dir=self.action_template_path())

    def function_template_path(self) -> Path:
        return self.template_root / f"{FUNCTION_TEMPLATE_STEM}{self.function_extension}"
