"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from statsd_notifier.core.errors import ConfigError

DEFAULT_STATSD_PORT = 8125

# Name fragments are fixed once a step is created; only the send_* switches move.
_FIXED_FIELDS = frozenset({"prefix", "checkstyle_prefix", "pmd_prefix", "junit_prefix"})


def _flag(raw: dict[str, Any], key: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, not {value!r}")
    return value


@dataclass
class NotifierConfig:
    """Per-job step settings: what to send and under which metric names."""

    prefix: str
    send_checkstyle: bool
    send_pmd: bool
    send_junit: bool
    checkstyle_prefix: str
    pmd_prefix: str
    junit_prefix: str

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} cannot be changed after the step is created")
        super().__setattr__(name, value)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NotifierConfig":
        return cls(
            prefix=str(raw.get("prefix", "")),
            send_checkstyle=_flag(raw, "send_checkstyle"),
            send_pmd=_flag(raw, "send_pmd"),
            send_junit=_flag(raw, "send_junit"),
            checkstyle_prefix=str(raw.get("checkstyle_prefix", "")),
            pmd_prefix=str(raw.get("pmd_prefix", "")),
            junit_prefix=str(raw.get("junit_prefix", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "prefix": self.prefix,
            "send_checkstyle": self.send_checkstyle,
            "send_pmd": self.send_pmd,
            "send_junit": self.send_junit,
            "checkstyle_prefix": self.checkstyle_prefix,
            "pmd_prefix": self.pmd_prefix,
            "junit_prefix": self.junit_prefix,
        }


@dataclass(frozen=True)
class GlobalConfig:
    """Process-wide StatsD connection settings."""

    host: str = ""
    # Kept as loaded; the client factory rejects values that are not a port number.
    port: Any = DEFAULT_STATSD_PORT
    prefix: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "GlobalConfig":
        return cls(
            host=str(raw.get("host") or ""),
            port=raw.get("port", DEFAULT_STATSD_PORT),
            prefix=str(raw.get("prefix", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"host": self.host, "port": self.port, "prefix": self.prefix}
