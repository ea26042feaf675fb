"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static, Switch

from statsd_notifier.core.config import NotifierConfig

from .validators import check_job_name


class UnsavedChangesScreen(ModalScreen[str]):
    """Prompt when exiting with unsaved changes."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Unsaved changes", classes="modal-title"),
            Static("Write the edited settings before leaving the panel?", classes="modal-body"),
            Horizontal(
                Button("Save", id="unsaved-save", variant="success"),
                Button("Discard", id="unsaved-discard", variant="error"),
                Button("Cancel", id="unsaved-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "unsaved-save":
            self.dismiss("save")
        elif event.button.id == "unsaved-discard":
            self.dismiss("discard")
        else:
            self.dismiss("cancel")


class ReloadConfirmScreen(ModalScreen[str]):
    """Prompt when reloading with unsaved changes."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Reload config?", classes="modal-title"),
            Static("Edits not yet written to the config file will be lost.", classes="modal-body"),
            Horizontal(
                Button("Save", id="reload-save"),
                Button("Reload", id="reload-reload", variant="warning"),
                Button("Cancel", id="reload-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reload-save":
            self.dismiss("save")
        elif event.button.id == "reload-reload":
            self.dismiss("reload")
        else:
            self.dismiss("cancel")


class AddJobScreen(ModalScreen[dict[str, Any] | None]):
    """Modal form for adding a notifier step to a job.

    Metric name fragments are set here once; afterwards only the send
    switches can be changed.
    """

    def __init__(self, existing_jobs: set[str]) -> None:
        super().__init__()
        self._existing_jobs = existing_jobs

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Add notifier step", classes="modal-title"),
            Static("", id="add-error", classes="modal-error"),
            Static("job", classes="form-label"),
            Input(placeholder="backend", id="add-job-name"),
            Static("prefix", classes="form-label"),
            Input(placeholder="backend", id="add-prefix"),
            Static("checkstyle_prefix", classes="form-label"),
            Input(value="checkstyle", id="add-checkstyle-prefix"),
            Static("pmd_prefix", classes="form-label"),
            Input(value="pmd", id="add-pmd-prefix"),
            Static("junit_prefix", classes="form-label"),
            Input(value="junit", id="add-junit-prefix"),
            Horizontal(
                Static("checkstyle", classes="form-label"),
                Switch(value=True, id="add-send-checkstyle"),
                Static("pmd", classes="form-label"),
                Switch(value=True, id="add-send-pmd"),
                Static("junit", classes="form-label"),
                Switch(value=True, id="add-send-junit"),
                classes="modal-switches",
            ),
            Horizontal(
                Button("Add", id="add-confirm", variant="success"),
                Button("Cancel", id="add-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-cancel":
            self.dismiss(None)
            return
        if event.button.id != "add-confirm":
            return
        name = self.query_one("#add-job-name", Input).value
        validation = check_job_name(name, self._existing_jobs)
        if not validation.is_ok:
            self.query_one("#add-error", Static).update(validation.message)
            return
        config = NotifierConfig(
            prefix=self.query_one("#add-prefix", Input).value.strip(),
            send_checkstyle=bool(self.query_one("#add-send-checkstyle", Switch).value),
            send_pmd=bool(self.query_one("#add-send-pmd", Switch).value),
            send_junit=bool(self.query_one("#add-send-junit", Switch).value),
            checkstyle_prefix=self.query_one("#add-checkstyle-prefix", Input).value.strip(),
            pmd_prefix=self.query_one("#add-pmd-prefix", Input).value.strip(),
            junit_prefix=self.query_one("#add-junit-prefix", Input).value.strip(),
        )
        self.dismiss({"name": name.strip(), "config": config.to_dict()})


class DeleteJobScreen(ModalScreen[bool]):
    """Confirm removal of a job's notifier step."""

    def __init__(self, job_name: str) -> None:
        super().__init__()
        self._job_name = job_name

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Delete notifier step?", classes="modal-title"),
            Static(self._job_name, classes="modal-body"),
            Horizontal(
                Button("Delete", id="delete-confirm", variant="error"),
                Button("Cancel", id="delete-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "delete-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
