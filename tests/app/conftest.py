from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from functionkit.domain.project import ProjectId, ServiceInstance, load_instances
from functionkit.plugins.loader import ServicePluginRegistry, load_service_plugins
from tests._helpers import write_project


@dataclass
class Project:
    root: Path
    plugins: ServicePluginRegistry
    instances: list[ServiceInstance]

    def functions_dir(self, instance_name: str) -> Path:
        for instance in self.instances:
            if instance.name == instance_name:
                return instance.functions_path
        raise KeyError(instance_name)


@pytest.fixture()
def project(tmp_path: Path) -> Project:
    root = tmp_path / "workspace"
    root.mkdir()
    write_project(
        root,
        [
            {"name": "api", "plugin": "service-node", "path": "backend/api"},
            {"name": "worker", "plugin": "service-python", "path": "backend/worker"},
        ],
    )
    plugins = load_service_plugins(include_entry_points=False)
    instances = load_instances(ProjectId.from_existing(root), plugins)
    return Project(root=root, plugins=plugins, instances=instances)
