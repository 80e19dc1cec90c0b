"""Service plugin registration for fnkit."""

from __future__ import annotations

from importlib import metadata
from typing import Iterable, Protocol, runtime_checkable

from functionkit.domain.service import ServicePlugin

ENTRY_POINT_GROUP = "functionkit.service_plugins"


class ServicePluginRegistrar(Protocol):  # pragma: no cover
    def add_service(self, plugin: ServicePlugin) -> None:
        ...


@runtime_checkable
class ServicePluginProvider(Protocol):  # pragma: no cover
    def register(self, registrar: ServicePluginRegistrar) -> None:
        ...


def iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=ENTRY_POINT_GROUP)
