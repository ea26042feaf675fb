"""Textual config panel for statsd-notifier.

The panel edits an in-memory copy of the JSON document. Saving sends the
StatsD form through ``JsonConfigStore.configure_global``, so a port that is
not a number is refused before anything is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

from statsd_notifier import DISPLAY_NAME, __version__
from statsd_notifier.adapters.json_config_store import JsonConfigStore
from statsd_notifier.core.errors import ConfigError

from .constants import STATSD_GREEN
from .modals import ReloadConfirmScreen, UnsavedChangesScreen
from .state import ConfigState
from .tabs.global_settings import GlobalSettingsTab
from .tabs.jobs import JobsTab
from .tabs.plugins import PluginsTab


class ConfigPanelApp(App):
    """Editor for the StatsD connection, job steps and installed plugins."""

    CSS_PATH = "app.tcss"
    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
    ]

    def __init__(self, config_path: Path, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.store = JsonConfigStore(config_path)
        self.config_state = ConfigState()

    def compose(self) -> ComposeResult:
        with Horizontal(id="header"):
            with Vertical(id="header-info"):
                yield Static(Text.assemble(("STATSD", STATSD_GREEN), (" NOTIFIER", "bold")), id="title")
                yield Static(f"{DISPLAY_NAME} v{__version__} | {self.store.path}", classes="subtle")
                yield Static("", id="header-status")
            with Horizontal(id="header-actions"):
                yield Button("Save", id="save-btn", variant="success")
                yield Button("Reload", id="reload-btn")
        yield Tabs(
            Tab("Global", id="global"),
            Tab("Jobs", id="jobs"),
            Tab("Plugins", id="plugins"),
            id="tabs",
        )
        with ContentSwitcher(id="content", initial="global"):
            yield GlobalSettingsTab(id="global", classes="config-tab")
            yield JobsTab(id="jobs", classes="config-tab")
            yield PluginsTab(id="plugins", classes="config-tab")
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab.id:
            self.query_one("#content", ContentSwitcher).current = event.tab.id

    @on(Button.Pressed, "#save-btn")
    def action_save_config(self) -> None:
        self._save_config()

    @on(Button.Pressed, "#reload-btn")
    def action_reload_config(self) -> None:
        self._confirm_unsaved(ReloadConfirmScreen(), self._load_config)

    def action_request_quit(self) -> None:
        self._confirm_unsaved(UnsavedChangesScreen(), self.exit)

    def _confirm_unsaved(self, prompt: ModalScreen[str], proceed: Callable[[], Any]) -> None:
        """Run ``proceed`` now, or once the prompt allows it when edits are pending."""
        if not self.config_state.dirty:
            proceed()
            return

        def on_choice(choice: str | None) -> None:
            if choice in ("discard", "reload") or (choice == "save" and self._save_config()):
                proceed()

        self.push_screen(prompt, on_choice)

    def _load_config(self) -> None:
        try:
            self.config_state.data = self.store.read()
            self.config_state.error = None
        except ConfigError as exc:
            self.config_state.data = None
            self.config_state.error = str(exc)
        self.config_state.dirty = False
        self._refresh_header()
        for tab in self.query(".config-tab"):
            tab.reload_from_config()

    def _save_config(self) -> bool:
        data = self.config_state.data
        if data is None:
            return self._report_error("nothing to save")
        try:
            data["statsd"] = self.store.configure_global(self.config_state.section("statsd")).to_dict()
            self.store.write(data)
        except ValueError as exc:
            return self._report_error(f"port must be an integer: {exc}")
        except (OSError, ConfigError) as exc:
            return self._report_error(f"save failed: {exc}")
        self.config_state.dirty = False
        self.config_state.error = None
        self._refresh_header()
        return True

    def _report_error(self, message: str) -> bool:
        self.config_state.error = message
        self._refresh_header()
        return False

    def _refresh_header(self) -> None:
        text, css_class = self.config_state.status()
        status = self.query_one("#header-status", Static)
        status.remove_class("status-loaded", "status-modified", "status-error")
        status.add_class(css_class)
        status.update(text)
        self.query_one("#save-btn", Button).disabled = (
            self.config_state.data is None or not self.config_state.dirty
        )

    def update_config_section(self, section: str, value: Any) -> None:
        """Replace a section of the in-memory document; the panel becomes modified."""
        self.config_state.set_section(section, value)
        self._refresh_header()

    def refresh_jobs_tab(self) -> None:
        for tab in self.query(JobsTab):
            tab.reload_from_config()
