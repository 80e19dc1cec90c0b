"""Attach a plugin's action template to an existing function directory."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Sequence

from functionkit.domain.errors import FunctionkitError
from functionkit.domain.naming import canonicalize, sanitize
from functionkit.domain.project import ServiceInstance
from functionkit.domain.service import ServicePlugin
from functionkit.domain.template import ACTION_DESCRIPTOR, ACTION_PLACEHOLDER
from functionkit.ports.filesystem import FunctionFileSystem
from functionkit.ports.prompter import Choice, Prompter

STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

NO_PLUGIN_SELECTED = "No plugin selected"
NO_INSTANCES_FOUND = "No service instances found"


class PreconditionMissingError(FunctionkitError):
    """A directory or file the workflow relies on is absent."""


class FunctionNameCollisionError(FunctionkitError):
    """The canonical function name is already taken by a sibling directory."""


class ActionMaterializationError(FunctionkitError):
    """Renaming, copying or rewriting files failed."""


class AttachState(str, Enum):
    SELECT_PLUGIN = "select-plugin"
    SELECT_INSTANCE = "select-instance"
    SELECT_FUNCTION = "select-function"
    VALIDATE = "validate"
    NORMALIZE = "normalize"
    RENAME = "rename"
    MATERIALIZE = "materialize"
    DONE = "done"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({AttachState.DONE, AttachState.CANCELLED})


@dataclass
class AttachSession:
    state: AttachState = AttachState.SELECT_PLUGIN
    plugin_name: str | None = None
    instance: ServiceInstance | None = None
    raw_name: str | None = None
    canonical_name: str | None = None
    action_name: str | None = None
    cancelled_at: AttachState | None = None
    message: str | None = None
    copied_files: List[Path] = field(default_factory=list)

    @property
    def functions_path(self) -> Path:
        assert self.instance is not None
        return self.instance.functions_path

    @property
    def function_path(self) -> Path:
        assert self.canonical_name is not None
        return self.functions_path / self.canonical_name


@dataclass(frozen=True)
class AttachResult:
    status: str
    plugin_name: str | None
    instance_name: str | None
    raw_name: str | None
    canonical_name: str | None
    function_path: Path | None
    copied_files: Sequence[Path]
    cancelled_at: AttachState | None = None
    message: str | None = None

    @property
    def renamed(self) -> bool:
        return self.status == STATUS_COMPLETED and self.raw_name != self.canonical_name

    def as_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "plugin": self.plugin_name,
            "instance": self.instance_name,
            "function": self.canonical_name,
            "renamed": self.renamed,
            "cancelled_at": self.cancelled_at.value if self.cancelled_at else None,
            "files": [path.as_posix() for path in self.copied_files],
        }


class AttachActionService:
    """Drive the attach-action workflow as a linear state machine.

    Each state handler returns the next state. Declined prompts move to
    ``CANCELLED``; missing prerequisites raise ``PreconditionMissingError``
    before anything on disk changes, except that a successful rename is
    kept when a later step fails.
    """

    def __init__(
        self,
        plugins: Mapping[str, ServicePlugin],
        instances: Sequence[ServiceInstance],
        prompter: Prompter,
        filesystem: FunctionFileSystem,
        *,
        service_names: Sequence[str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._plugins = plugins
        self._instances = list(instances)
        self._prompter = prompter
        self._fs = filesystem
        self._service_names = list(service_names) if service_names is not None else list(plugins)
        self._cwd = cwd or Path.cwd()
        self._handlers: Dict[AttachState, Callable[[AttachSession], AttachState]] = {
            AttachState.SELECT_PLUGIN: self._select_plugin,
            AttachState.SELECT_INSTANCE: self._select_instance,
            AttachState.SELECT_FUNCTION: self._select_function,
            AttachState.VALIDATE: self._validate,
            AttachState.NORMALIZE: self._normalize,
            AttachState.RENAME: self._rename,
            AttachState.MATERIALIZE: self._materialize,
        }

    def run(self) -> AttachResult:
        session = AttachSession()
        while session.state not in TERMINAL_STATES:
            session.state = self._handlers[session.state](session)
        return self._result(session)

    def instances_for(self, plugin_name: str) -> list[ServiceInstance]:
        return [instance for instance in self._instances if instance.plugin.name == plugin_name]

    # selection chain

    def _select_plugin(self, session: AttachSession) -> AttachState:
        choices = [
            Choice(title=name, value=name, description="Select a language for your service")
            for name in self._service_names
        ]
        picked = self._prompter.select("Select a service plugin", choices)
        if not picked:
            return self._cancel(session, NO_PLUGIN_SELECTED)
        session.plugin_name = picked
        return AttachState.SELECT_INSTANCE

    def _select_instance(self, session: AttachSession) -> AttachState:
        assert session.plugin_name is not None
        plugin = self._plugins.get(session.plugin_name)
        if plugin is None or not self.instances_for(plugin.name):
            raise PreconditionMissingError(NO_INSTANCES_FOUND)
        # every project instance is offered; the plugin pick only gates the step
        choices = [
            Choice(title=instance.name, value=instance, description=f"Select {instance.name} instance")
            for instance in self._instances
        ]
        picked = self._prompter.select("Select an instance", choices)
        if picked is None:
            return self._cancel(session)
        session.instance = picked
        return AttachState.SELECT_FUNCTION

    def _select_function(self, session: AttachSession) -> AttachState:
        functions_path = session.functions_path
        directories = list(self._fs.list_directories(functions_path)) if self._fs.exists(functions_path) else []
        if not directories:
            raise PreconditionMissingError(
                f"No functions found in {self._relative(functions_path)}. Please add one and try again!"
            )
        choices = [Choice(title=name, value=name) for name in directories]
        picked = self._prompter.select("Select a function", choices)
        if not picked:
            return self._cancel(session)
        session.raw_name = picked
        return AttachState.VALIDATE

    # filesystem steps

    def _validate(self, session: AttachSession) -> AttachState:
        assert session.raw_name is not None
        if not self._fs.exists(session.functions_path / session.raw_name):
            raise PreconditionMissingError(self._missing(session.raw_name, session.functions_path, kind="folder"))
        return AttachState.NORMALIZE

    def _normalize(self, session: AttachSession) -> AttachState:
        assert session.raw_name is not None
        session.canonical_name = canonicalize(session.raw_name)
        session.action_name = sanitize(session.canonical_name)
        return AttachState.RENAME

    def _rename(self, session: AttachSession) -> AttachState:
        assert session.raw_name is not None and session.canonical_name is not None
        if session.raw_name == session.canonical_name:
            return AttachState.MATERIALIZE
        source = session.functions_path / session.raw_name
        target = session.function_path
        if self._fs.exists(target):
            raise FunctionNameCollisionError(
                f'Cannot rename "{session.raw_name}" to "{session.canonical_name}": '
                f'"{self._relative(target)}" already exists.'
            )
        try:
            self._fs.rename(source, target)
        except OSError as exc:
            raise ActionMaterializationError(f"Failed to rename {self._relative(source)}: {exc}") from exc
        return AttachState.MATERIALIZE

    def _materialize(self, session: AttachSession) -> AttachState:
        assert session.instance is not None and session.action_name is not None
        function_path = session.function_path
        handler_file = session.instance.plugin.handler_file
        if not self._fs.exists(function_path / handler_file):
            raise PreconditionMissingError(self._missing(handler_file, function_path))

        template = session.instance.action_template()
        template.validate()
        try:
            session.copied_files = self._fs.copy_tree(template.root_dir, function_path)
        except OSError as exc:
            raise ActionMaterializationError(
                f"Failed to copy action template into {self._relative(function_path)}: {exc}"
            ) from exc

        descriptor = function_path / ACTION_DESCRIPTOR
        if not self._fs.exists(descriptor):
            raise ActionMaterializationError(
                f"Action template for {template.plugin} did not provide {ACTION_DESCRIPTOR}"
            )
        try:
            self._fs.replace_token(descriptor, ACTION_PLACEHOLDER, session.action_name)
        except OSError as exc:
            raise ActionMaterializationError(f"Failed to rewrite {self._relative(descriptor)}: {exc}") from exc
        return AttachState.DONE

    # helpers

    def _cancel(self, session: AttachSession, message: str | None = None) -> AttachState:
        session.cancelled_at = session.state
        session.message = message
        return AttachState.CANCELLED

    def _missing(self, label: str, where: Path, *, kind: str = "file") -> str:
        return f'Missing "{label}" {kind} in "{self._relative(where)}". Please add one and try again!'

    def _relative(self, path: Path) -> str:
        return os.path.relpath(path, self._cwd)

    def _result(self, session: AttachSession) -> AttachResult:
        completed = session.state is AttachState.DONE
        return AttachResult(
            status=STATUS_COMPLETED if completed else STATUS_CANCELLED,
            plugin_name=session.plugin_name,
            instance_name=session.instance.name if session.instance else None,
            raw_name=session.raw_name,
            canonical_name=session.canonical_name,
            function_path=session.function_path if completed else None,
            copied_files=list(session.copied_files),
            cancelled_at=session.cancelled_at,
            message=session.message,
        )
