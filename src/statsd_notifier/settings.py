"""Static settings for statsd-notifier.

All user-editable settings (StatsD connection, installed plugins, job steps,
logging) live in a single JSON file. This module only decides where that file
is and which environment overrides apply.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

CONFIG_ENV_VAR = "STATSD_NOTIFIER_CONFIG"
STARTED_AT_ENV_VAR = "BUILD_STARTED_AT"
DEFAULT_CONFIG_NAME = "config.json"

# Defaults for the optional "logging" section.
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "logs/statsd-notifier.log"
DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Pick the config file: CLI flag, then environment, then ./config.json."""

    if explicit:
        return Path(explicit)
    load_dotenv()
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_CONFIG_NAME


def parse_started_at(value: str) -> datetime:
    """Parse an ISO 8601 timestamp or epoch seconds; naive times are UTC."""

    stripped = value.strip()
    try:
        epoch = float(stripped)
    except ValueError:
        epoch = None
    if epoch is not None:
        try:
            return datetime.fromtimestamp(epoch, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"epoch seconds out of range: {stripped}") from exc
    parsed = datetime.fromisoformat(stripped.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_started_at(explicit: Optional[str] = None) -> datetime:
    """Build start time: CLI flag, then BUILD_STARTED_AT, then now."""

    if explicit:
        return parse_started_at(explicit)
    load_dotenv()
    from_env = os.getenv(STARTED_AT_ENV_VAR)
    if from_env:
        return parse_started_at(from_env)
    return datetime.now(timezone.utc)
