"""Scaffold a new function file inside a service instance."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from functionkit.domain.errors import FunctionkitError
from functionkit.domain.naming import sanitize
from functionkit.domain.project import ServiceInstance
from functionkit.ports.filesystem import FunctionFileSystem
from functionkit.ports.prompter import Choice, Prompter

NO_INSTANCES_FOUND = "No functions.action instances found"


class FunctionScaffoldError(FunctionkitError):
    """Raised when a function file cannot be created."""


@dataclass(frozen=True)
class ScaffoldResult:
    instance_name: str
    function_name: str
    path: Path


class FunctionScaffoldService:
    def __init__(
        self,
        instances: Sequence[ServiceInstance],
        prompter: Prompter,
        filesystem: FunctionFileSystem,
    ) -> None:
        self._instances = list(instances)
        self._prompter = prompter
        self._fs = filesystem

    def add(self, function_name: str) -> ScaffoldResult | None:
        """Write the plugin's function template for ``function_name``.

        Returns None when the user declines the instance prompt.
        """

        if not self._instances:
            raise FunctionScaffoldError(NO_INSTANCES_FOUND)
        name = sanitize(function_name)
        choices = [
            Choice(title=instance.name, value=instance, description=f"Select {instance.name} instance")
            for instance in self._instances
        ]
        instance = self._prompter.select("Select an instance", choices)
        if instance is None:
            return None

        template_path = instance.plugin.function_template_path()
        target = instance.functions_path / f"{name}{instance.plugin.function_extension}"
        try:
            content = template_path.read_text(encoding="utf-8")
            self._fs.write_text(target, content)
        except OSError as exc:
            raise FunctionScaffoldError(f"Failed to write {target}: {exc}") from exc
        return ScaffoldResult(instance_name=instance.name, function_name=name, path=target)
