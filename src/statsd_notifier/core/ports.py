"""Ports (interfaces) used by the core emitter.

Ports define the minimal contracts for the metrics client, plugin registry and
build log so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from statsd_notifier.core.config import GlobalConfig


class MetricsClientPort(Protocol):
    """Gauge emission required by the emitter."""

    def gauge(self, stat: str, value: int) -> None:
        ...

    def close(self) -> None:
        ...


class BuildLogPort(Protocol):
    """Text sink for the build's console log."""

    def println(self, line: str) -> None:
        ...


class PluginRegistryPort(Protocol):
    """Lookup of installed companion plugins by identifier."""

    def is_installed(self, plugin_id: str) -> bool:
        ...


class ClientFactoryPort(Protocol):
    def __call__(self, global_config: GlobalConfig, build_log: BuildLogPort) -> MetricsClientPort:
        ...
