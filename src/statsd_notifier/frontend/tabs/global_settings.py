"""Global StatsD settings tab."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Vertical
from textual.widgets import Input, Static

from statsd_notifier.core.config import DEFAULT_STATSD_PORT

from ..validators import FormValidation, check_host, check_port, check_prefix

_DEFAULTS = {"host": "", "port": DEFAULT_STATSD_PORT, "prefix": ""}


class GlobalSettingsTab(Container):
    """Form for the process-wide StatsD host, port and prefix."""

    def compose(self):
        with Vertical(id="global-panel"):
            yield Static("StatsD", id="global-title")
            yield Static("host", classes="form-label")
            yield Input(placeholder="metrics.local", id="global-host")
            yield Static("", id="global-host-error", classes="settings-error")
            yield Static("port", classes="form-label")
            yield Input(placeholder=str(DEFAULT_STATSD_PORT), id="global-port")
            yield Static("", id="global-port-error", classes="settings-error")
            yield Static("prefix", classes="form-label")
            yield Input(placeholder="ci", id="global-prefix")
            yield Static("", id="global-prefix-error", classes="settings-error")

    def on_mount(self) -> None:
        self.reload_from_config()

    def reload_from_config(self) -> None:
        section = self._get_section()
        with self.prevent(Input.Changed):
            for key, default in _DEFAULTS.items():
                value = section.get(key, default)
                self.query_one(f"#global-{key}", Input).value = "" if value is None else str(value)
                self._set_error(f"global-{key}-error", FormValidation.ok())

    def _get_section(self) -> dict[str, Any]:
        return self.app.config_state.section("statsd")

    def _update_field(self, key: str, value: Any) -> None:
        section = self._get_section()
        if section.get(key, _DEFAULTS[key]) == value:
            return
        section[key] = value
        self.app.update_config_section("statsd", section)

    def _set_error(self, error_id: str, validation: FormValidation) -> None:
        self.query_one(f"#{error_id}", Static).update(validation.message)

    @on(Input.Changed, "#global-host")
    def _on_host_changed(self, event: Input.Changed) -> None:
        self._set_error("global-host-error", check_host(event.value))
        self._update_field("host", event.value.strip())

    @on(Input.Changed, "#global-port")
    def _on_port_changed(self, event: Input.Changed) -> None:
        self._set_error("global-port-error", check_port(event.value))
        stripped = event.value.strip()
        # Non-numeric input is kept as typed; saving the form rejects it.
        self._update_field("port", int(stripped) if stripped.isdigit() else stripped)

    @on(Input.Changed, "#global-prefix")
    def _on_prefix_changed(self, event: Input.Changed) -> None:
        self._set_error("global-prefix-error", check_prefix(event.value))
        self._update_field("prefix", event.value.strip())
