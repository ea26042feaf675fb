"""In-memory copy of the config document shown by the panel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ConfigState:
    data: dict[str, Any] | None = None
    dirty: bool = False
    error: str | None = None

    def section(self, key: str, default_type: type = dict) -> Any:
        """Return a section of the document, or an empty one of the expected type."""
        value = (self.data or {}).get(key)
        if isinstance(value, default_type):
            return value
        return default_type()

    def set_section(self, key: str, value: Any) -> None:
        if self.data is None:
            self.data = {}
        self.data[key] = value
        self.dirty = True

    def status(self) -> tuple[str, str]:
        """Header text and its CSS class."""
        if self.error:
            return f"config: {self.error}", "status-error"
        if self.dirty:
            return "config: modified *", "status-modified"
        return "config: loaded", "status-loaded"
