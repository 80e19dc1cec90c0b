"""Domain model for projects and the service instances they declare."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Mapping

import yaml

from .errors import FunctionkitError
from .service import ServicePlugin
from .template import ActionTemplate

PROJECT_DIR = ".functionkit"
PROJECT_DESCRIPTOR = "project.yaml"
FUNCTIONS_DIR = "functions"


class ProjectNotInitialisedError(FunctionkitError):
    """Raised when a path does not contain a project descriptor."""


class ProjectConfigError(FunctionkitError):
    """Raised when the project descriptor cannot be interpreted."""


@dataclass(frozen=True)
class ProjectId:
    """Identifier of a project (its root path)."""

    root: Path

    @classmethod
    def from_existing(cls, path: Path) -> "ProjectId":
        resolved = path.expanduser().resolve()
        if (resolved / PROJECT_DIR / PROJECT_DESCRIPTOR).exists():
            return cls(root=resolved)
        raise ProjectNotInitialisedError(
            f"Path {resolved} has no {PROJECT_DIR}/{PROJECT_DESCRIPTOR}; declare your service instances there first."
        )

    def descriptor_path(self) -> Path:
        return self.root / PROJECT_DIR / PROJECT_DESCRIPTOR


@dataclass(frozen=True)
class ServiceInstance:
    """One configured occurrence of a service plugin inside a project."""

    name: str
    plugin: ServicePlugin
    installation_path: Path
    project_root: Path

    @property
    def root(self) -> Path:
        return self.project_root / self.installation_path

    @property
    def functions_path(self) -> Path:
        return self.root / FUNCTIONS_DIR

    def action_template_path(self) -> Path:
        return self.plugin.action_template_path()

    def action_template(self) -> ActionTemplate:
        return self.plugin.action_template()


def load_instances(project_id: ProjectId, plugins: Mapping[str, ServicePlugin]) -> list[ServiceInstance]:
    descriptor = project_id.descriptor_path()
    if not descriptor.exists():
        raise ProjectNotInitialisedError(f"Project descriptor missing: {descriptor}")
    try:
        data = yaml.safe_load(descriptor.read_text("utf-8"))
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"{descriptor}: invalid YAML: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{descriptor}: top level must be a mapping")
    entries = data.get("instances") or []
    if not isinstance(entries, list):
        raise ProjectConfigError(f"{descriptor}: 'instances' must be a list")

    instances: list[ServiceInstance] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        instance = _instance_from_entry(project_id, plugins, entry, f"{descriptor}: instances[{index}]")
        if instance.name in seen:
            raise ProjectConfigError(f"{descriptor}: duplicate instance name '{instance.name}'")
        seen.add(instance.name)
        instances.append(instance)
    return instances


def _instance_from_entry(
    project_id: ProjectId,
    plugins: Mapping[str, ServicePlugin],
    entry: Any,
    where: str,
) -> ServiceInstance:
    if not isinstance(entry, dict):
        raise ProjectConfigError(f"{where} must be a mapping")
    values: dict[str, str] = {}
    for key in ("name", "plugin", "path"):
        value = str(entry.get(key) or "").strip()
        if not value:
            raise ProjectConfigError(f"{where} missing '{key}'")
        values[key] = value
    plugin = plugins.get(values["plugin"])
    if plugin is None:
        available = ", ".join(sorted(plugins)) or "none"
        raise ProjectConfigError(f"{where} uses unknown plugin '{values['plugin']}' (available: {available})")
    relative = PurePosixPath(values["path"])
    if relative.is_absolute() or ".." in relative.parts:
        raise ProjectConfigError(f"{where} path must stay inside the project: {values['path']}")
    return ServiceInstance(
        name=values["name"],
        plugin=plugin,
        installation_path=Path(*relative.parts),
        project_root=project_id.root,
    )
