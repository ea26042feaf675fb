"""JSON config store adapter.

All persisted settings live in one JSON document:

- ``statsd``: global connection (host, port, prefix)
- ``plugins``: identifiers of installed companion plugins
- ``jobs``: one notifier step configuration per job name
- ``logging``: tool logging (read by the app layer)

Every write is a read-modify-write of the whole document so sections owned by
other writers are preserved.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from statsd_notifier.core.config import DEFAULT_STATSD_PORT, GlobalConfig, NotifierConfig
from statsd_notifier.core.errors import ConfigError

LOGGER = logging.getLogger(__name__)


class JsonConfigStore:
    """Thin JSON file wrapper for global, plugin and per-job settings."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, Any]:
        """Return the whole document, or an empty one when the file is missing."""

        if not self._path.exists():
            return {}
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{self._path.name} error: {exc.msg}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError("config root must be an object")
        return loaded

    def write(self, data: Mapping[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(data, indent=2, ensure_ascii=True) + "\n",
            encoding="utf-8",
        )

    def _update_section(self, key: str, value: Any) -> None:
        data = self.read()
        data[key] = value
        self.write(data)

    # Global configuration.

    def load_global(self) -> GlobalConfig:
        section = self.read().get("statsd")
        if not isinstance(section, dict):
            return GlobalConfig()
        return GlobalConfig.from_dict(section)

    def save_global(self, config: GlobalConfig) -> None:
        self._update_section("statsd", config.to_dict())
        LOGGER.info("Saved StatsD settings to %s", self._path)

    def configure_global(self, form_data: Mapping[str, Any]) -> GlobalConfig:
        """Apply an administrative form submission and persist it."""

        port_raw = form_data.get("port")
        port = DEFAULT_STATSD_PORT if port_raw in (None, "") else int(port_raw)
        config = GlobalConfig(
            host=str(form_data.get("host", "")),
            port=port,
            prefix=str(form_data.get("prefix", "")),
        )
        self.save_global(config)
        return config

    # Companion plugin registry.

    def installed_plugins(self) -> list[str]:
        plugins = self.read().get("plugins")
        if not isinstance(plugins, list):
            return []
        return [str(plugin_id) for plugin_id in plugins]

    def set_installed_plugins(self, plugins: Iterable[str]) -> None:
        self._update_section("plugins", sorted({str(plugin_id) for plugin_id in plugins}))

    # Per-job step configuration.

    def load_jobs(self) -> dict[str, NotifierConfig]:
        jobs = self.read().get("jobs")
        if not isinstance(jobs, dict):
            return {}
        return {
            str(name): NotifierConfig.from_dict(raw)
            for name, raw in jobs.items()
            if isinstance(raw, dict)
        }

    def get_job(self, name: str) -> Optional[NotifierConfig]:
        jobs = self.read().get("jobs")
        if not isinstance(jobs, dict) or not isinstance(jobs.get(name), dict):
            return None
        try:
            return NotifierConfig.from_dict(jobs[name])
        except ConfigError as exc:
            raise ConfigError(f"job {name!r}: {exc}") from exc

    def add_job(self, name: str, config: NotifierConfig) -> None:
        data = self.read()
        jobs = data.get("jobs")
        if not isinstance(jobs, dict):
            jobs = {}
        if name in jobs:
            raise ConfigError(f"job {name!r} already has a notifier step")
        jobs[name] = config.to_dict()
        data["jobs"] = jobs
        self.write(data)

    def set_job_flags(
        self,
        name: str,
        *,
        send_checkstyle: Optional[bool] = None,
        send_pmd: Optional[bool] = None,
        send_junit: Optional[bool] = None,
    ) -> NotifierConfig:
        """Toggle the send switches of an existing step and persist it."""

        config = self.get_job(name)
        if config is None:
            raise ConfigError(f"job {name!r} has no notifier step")
        if send_checkstyle is not None:
            config.send_checkstyle = send_checkstyle
        if send_pmd is not None:
            config.send_pmd = send_pmd
        if send_junit is not None:
            config.send_junit = send_junit

        data = self.read()
        data.setdefault("jobs", {})[name] = config.to_dict()
        self.write(data)
        return config

    def remove_job(self, name: str) -> bool:
        data = self.read()
        jobs = data.get("jobs")
        if not isinstance(jobs, dict) or name not in jobs:
            return False
        jobs.pop(name)
        self.write(data)
        return True
