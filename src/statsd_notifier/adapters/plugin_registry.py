"""Plugin registry adapter.

Installed companion plugins are declared in the ``plugins`` list of the
config document.
"""

from __future__ import annotations

from typing import Iterable


class ConfiguredPluginRegistry:
    """Satisfies the PluginRegistryPort from a list of plugin identifiers."""

    def __init__(self, installed: Iterable[str]) -> None:
        self._installed = {str(plugin_id).strip().lower() for plugin_id in installed}

    def is_installed(self, plugin_id: str) -> bool:
        return plugin_id.lower() in self._installed

    def installed(self) -> set[str]:
        return set(self._installed)
