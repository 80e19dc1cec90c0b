"""Runtime service plugin loading."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterator

from functionkit.domain.service import ServicePlugin
from functionkit.plugins import ServicePluginProvider, iter_entry_points
from functionkit.plugins import builtin


class ServicePluginRegistry(Mapping):
    """Service plugins by name, in registration order."""

    def __init__(self) -> None:
        self._plugins: Dict[str, ServicePlugin] = {}

    def add_service(self, plugin: ServicePlugin) -> None:
        if plugin.name in self._plugins:
            raise ValueError(f"Service plugin {plugin.name} already registered")
        self._plugins[plugin.name] = plugin

    def names(self) -> list[str]:
        return list(self._plugins)

    def __getitem__(self, name: str) -> ServicePlugin:
        return self._plugins[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)


def load_service_plugins(*, include_entry_points: bool = True) -> ServicePluginRegistry:
    registry = ServicePluginRegistry()
    builtin.register(registry)
    if not include_entry_points:
        return registry
    for entry_point in iter_entry_points():
        provider = entry_point.load()
        if isinstance(provider, ServicePluginProvider):
            provider.register(registry)
    return registry
