"""Service plugins shipped with fnkit."""

from __future__ import annotations

from pathlib import Path

from functionkit.domain.service import ServicePlugin
from functionkit.plugins import ServicePluginRegistrar

TEMPLATES_ROOT = Path(__file__).resolve().parents[1] / "templates"

BUILTIN_SERVICES = (
    ("service-node", "handler.js", ".js"),
    ("service-python", "handler.py", ".py"),
    ("service-go", "handler.go", ".go"),
)


def builtin_plugins() -> list[ServicePlugin]:
    return [
        ServicePlugin(
            name=name,
            handler_file=handler_file,
            function_extension=extension,
            template_root=TEMPLATES_ROOT / name,
        )
        for name, handler_file, extension in BUILTIN_SERVICES
    ]


def register(registrar: ServicePluginRegistrar) -> None:
    for plugin in builtin_plugins():
        registrar.add_service(plugin)
