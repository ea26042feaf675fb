"""Plugins tab: which companion plugins are installed."""

from __future__ import annotations

from textual.containers import Container, Vertical
from textual.widgets import Static, Switch

from statsd_notifier.core import capabilities


class PluginsTab(Container):
    """Switches for the plugin registry read by the capability checks."""

    def compose(self):
        with Vertical(id="plugins-panel"):
            yield Static("Installed companion plugins", id="plugins-title")
            for plugin_id in capabilities.COMPANION_PLUGINS:
                yield Static(plugin_id, classes="form-label")
                yield Switch(value=False, id=f"plugin-{plugin_id}")

    def on_mount(self) -> None:
        self.reload_from_config()

    def reload_from_config(self) -> None:
        installed = self._get_plugins()
        with self.prevent(Switch.Changed):
            for plugin_id in capabilities.COMPANION_PLUGINS:
                self.query_one(f"#plugin-{plugin_id}", Switch).value = plugin_id in installed

    def _get_plugins(self) -> set[str]:
        return {str(plugin_id) for plugin_id in self.app.config_state.section("plugins", list)}

    def on_switch_changed(self, event: Switch.Changed) -> None:
        if not event.switch.id:
            return
        plugin_id = event.switch.id.removeprefix("plugin-")
        plugins = self._get_plugins()
        if (plugin_id in plugins) == event.value:
            return
        if event.value:
            plugins.add(plugin_id)
        else:
            plugins.discard(plugin_id)
        self.app.update_config_section("plugins", sorted(plugins))
        # Applicability of the notifier step depends on this registry.
        self.app.refresh_jobs_tab()
