"""Validation helpers for config editing.

The StatsD form handlers accept any value: host, port and prefix are checked
only when the client is built at emission time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormValidation:
    kind: str
    message: str = ""

    @classmethod
    def ok(cls) -> "FormValidation":
        return cls("ok")

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls("error", message)

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"


def check_host(value: str) -> FormValidation:
    return FormValidation.ok()


def check_port(value: str) -> FormValidation:
    return FormValidation.ok()


def check_prefix(value: str) -> FormValidation:
    return FormValidation.ok()


def check_job_name(value: str, existing: set[str]) -> FormValidation:
    name = value.strip()
    if not name:
        return FormValidation.error("job name is required")
    if name in existing:
        return FormValidation.error(f"job {name} already has a notifier step")
    return FormValidation.ok()
