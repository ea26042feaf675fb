"""Jobs tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static, Switch

from statsd_notifier import DISPLAY_NAME
from statsd_notifier.adapters.plugin_registry import ConfiguredPluginRegistry
from statsd_notifier.core import capabilities

from ..modals import AddJobScreen, DeleteJobScreen

_FLAG_SWITCHES = {
    "send_checkstyle": "#job-send-checkstyle",
    "send_pmd": "#job-send-pmd",
    "send_junit": "#job-send-junit",
}


class JobsTab(Container):
    """Jobs tab listing notifier steps; only the send switches are editable."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._current_job: Optional[str] = None
        self._table_ready = False

    def compose(self):
        with Vertical(id="jobs-panel"):
            with Horizontal(id="jobs-body"):
                with Container(id="jobs-left"):
                    yield DataTable(id="jobs-table", cursor_type="row")
                with Container(id="jobs-right"):
                    yield Static("Step details", id="jobs-title")
                    yield Static("prefix", classes="form-label")
                    yield Static("", id="job-prefix")
                    yield Static("metric names", classes="form-label")
                    yield Static("", id="job-names")
                    yield Static("send checkstyle", classes="form-label")
                    yield Switch(value=False, id="job-send-checkstyle")
                    yield Static("send pmd", classes="form-label")
                    yield Switch(value=False, id="job-send-pmd")
                    yield Static("send junit", classes="form-label")
                    yield Switch(value=False, id="job-send-junit")
            yield Static("", id="jobs-applicability")
            with Horizontal(id="jobs-actions"):
                yield Button("Add", id="add-job", variant="success")
                yield Button("Delete", id="delete-job", variant="error")

    def on_mount(self) -> None:
        table = self.query_one("#jobs-table", DataTable)
        table.add_column("job", key="job", width=20)
        table.add_column("prefix", key="prefix", width=20)
        table.add_column("checkstyle", key="send_checkstyle", width=11)
        table.add_column("pmd", key="send_pmd", width=6)
        table.add_column("junit", key="send_junit", width=6)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_config()
        self._set_form_state(None)

    def reload_from_config(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#jobs-table", DataTable)
        table.clear()
        for name, job in sorted(self._get_jobs().items()):
            table.add_row(
                name,
                job.get("prefix", ""),
                self._yes_no(job.get("send_checkstyle")),
                self._yes_no(job.get("send_pmd")),
                self._yes_no(job.get("send_junit")),
                key=name,
            )
        if self._current_job not in self._get_jobs():
            self._current_job = None
            self._set_form_state(None)
        self._update_action_state()

    def _get_jobs(self) -> dict[str, dict[str, Any]]:
        return self.app.config_state.section("jobs")

    def _set_jobs(self, jobs: dict[str, dict[str, Any]]) -> None:
        self.app.update_config_section("jobs", jobs)

    def _is_applicable(self) -> bool:
        registry = ConfiguredPluginRegistry(self.app.config_state.section("plugins", list))
        return capabilities.is_applicable(registry)

    def _update_action_state(self) -> None:
        applicable = self._is_applicable()
        self.query_one("#add-job", Button).disabled = not applicable
        self.query_one("#delete-job", Button).disabled = self._current_job is None
        note = "" if applicable else f"{DISPLAY_NAME} needs the checkstyle or pmd plugin"
        self.query_one("#jobs-applicability", Static).update(note)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._current_job = self._coerce_row_key(event.row_key)
        self._set_form_state(self._current_job)
        self._update_action_state()

    @on(Switch.Changed, "#job-send-checkstyle")
    def _on_send_checkstyle(self, event: Switch.Changed) -> None:
        self._update_flag("send_checkstyle", bool(event.value))

    @on(Switch.Changed, "#job-send-pmd")
    def _on_send_pmd(self, event: Switch.Changed) -> None:
        self._update_flag("send_pmd", bool(event.value))

    @on(Switch.Changed, "#job-send-junit")
    def _on_send_junit(self, event: Switch.Changed) -> None:
        self._update_flag("send_junit", bool(event.value))

    def _update_flag(self, key: str, value: bool) -> None:
        if self._current_job is None:
            return
        jobs = self._get_jobs()
        job = jobs.get(self._current_job)
        if job is None or job.get(key) == value:
            return
        job[key] = value
        self._set_jobs(jobs)
        table = self.query_one("#jobs-table", DataTable)
        table.update_cell(self._current_job, key, self._yes_no(value))

    @on(Button.Pressed, "#add-job")
    def _on_add_job(self) -> None:
        self.app.push_screen(AddJobScreen(set(self._get_jobs())), self._handle_add_job)

    @on(Button.Pressed, "#delete-job")
    def _on_delete_job(self) -> None:
        if self._current_job is None:
            return
        self.app.push_screen(DeleteJobScreen(self._current_job), self._handle_delete_job)

    def _handle_add_job(self, payload: dict[str, Any] | None) -> None:
        if not payload:
            return
        jobs = self._get_jobs()
        jobs[payload["name"]] = payload["config"]
        self._set_jobs(jobs)
        self.reload_from_config()

    def _handle_delete_job(self, confirmed: bool | None) -> None:
        if not confirmed or self._current_job is None:
            return
        jobs = self._get_jobs()
        jobs.pop(self._current_job, None)
        self._set_jobs(jobs)
        self._current_job = None
        self.reload_from_config()
        self._set_form_state(None)

    def _set_form_state(self, job_name: Optional[str]) -> None:
        job = self._get_jobs().get(job_name) if job_name is not None else None
        prefix_display = self.query_one("#job-prefix", Static)
        names_display = self.query_one("#job-names", Static)
        if job is None:
            prefix_display.update("")
            names_display.update("")
            with self.prevent(Switch.Changed):
                for selector in _FLAG_SWITCHES.values():
                    switch = self.query_one(selector, Switch)
                    switch.value = False
                    switch.disabled = True
        else:
            prefix = job.get("prefix", "")
            prefix_display.update(prefix)
            names_display.update(
                "\n".join(
                    [
                        f"{prefix}.{job.get('checkstyle_prefix', '')}",
                        f"{prefix}.{job.get('pmd_prefix', '')}",
                        f"{prefix}.{job.get('junit_prefix', '')}.*",
                    ]
                )
            )
            with self.prevent(Switch.Changed):
                for key, selector in _FLAG_SWITCHES.items():
                    switch = self.query_one(selector, Switch)
                    switch.value = bool(job.get(key, False))
                    switch.disabled = False

    @staticmethod
    def _yes_no(value: Any) -> str:
        return "yes" if value else "no"

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
