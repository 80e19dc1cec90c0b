from __future__ import annotations

from pathlib import Path

import pytest

from functionkit.domain.project import (
    PROJECT_DESCRIPTOR,
    PROJECT_DIR,
    ProjectConfigError,
    ProjectId,
    ProjectNotInitialisedError,
    load_instances,
)
from functionkit.plugins.loader import load_service_plugins
from tests._helpers import write_project


@pytest.fixture()
def plugins():
    return load_service_plugins(include_entry_points=False)


def test_from_existing_requires_descriptor(tmp_path: Path) -> None:
    with pytest.raises(ProjectNotInitialisedError):
        ProjectId.from_existing(tmp_path)


def test_load_instances(tmp_path: Path, plugins) -> None:
    write_project(
        tmp_path,
        [
            {"name": "api", "plugin": "service-node", "path": "backend/api"},
            {"name": "jobs", "plugin": "service-go", "path": "services/jobs"},
        ],
    )
    project_id = ProjectId.from_existing(tmp_path)
    instances = load_instances(project_id, plugins)

    assert [instance.name for instance in instances] == ["api", "jobs"]
    api = instances[0]
    assert api.plugin.name == "service-node"
    assert api.functions_path == tmp_path.resolve() / "backend" / "api" / "functions"
    assert api.action_template_path() == plugins["service-node"].template_root / "action"
    assert api.action_template().descriptor_file.name == "action.graphql"


def test_empty_descriptor_has_no_instances(tmp_path: Path, plugins) -> None:
    descriptor = tmp_path / PROJECT_DIR / PROJECT_DESCRIPTOR
    descriptor.parent.mkdir(parents=True)
    descriptor.write_text("", encoding="utf-8")
    assert load_instances(ProjectId.from_existing(tmp_path), plugins) == []


@pytest.mark.parametrize(
    ("entries", "message"),
    [
        ([{"name": "api", "plugin": "service-node"}], "missing 'path'"),
        ([{"name": "api", "plugin": "service-cobol", "path": "api"}], "unknown plugin 'service-cobol'"),
        ([{"name": "api", "plugin": "service-node", "path": "/srv/api"}], "must stay inside the project"),
        ([{"name": "api", "plugin": "service-node", "path": "../api"}], "must stay inside the project"),
        (
            [
                {"name": "api", "plugin": "service-node", "path": "a"},
                {"name": "api", "plugin": "service-go", "path": "b"},
            ],
            "duplicate instance name 'api'",
        ),
        (["api"], "must be a mapping"),
    ],
)
def test_invalid_instances(tmp_path: Path, plugins, entries, message: str) -> None:
    write_project(tmp_path, entries)
    with pytest.raises(ProjectConfigError, match=message):
        load_instances(ProjectId.from_existing(tmp_path), plugins)


def test_invalid_yaml(tmp_path: Path, plugins) -> None:
    descriptor = tmp_path / PROJECT_DIR / PROJECT_DESCRIPTOR
    descriptor.parent.mkdir(parents=True)
    descriptor.write_text("instances: [\n", encoding="utf-8")
    with pytest.raises(ProjectConfigError, match="invalid YAML"):
        load_instances(ProjectId.from_existing(tmp_path), plugins)
