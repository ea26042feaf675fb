"""StatsD client factory for statsd-notifier.

The client is built once per emission pass from the global configuration and
closed by the emitter when the pass ends.
"""

from __future__ import annotations

import logging
from typing import Any

from statsd_notifier.adapters.statsd_client import BuildLogErrorHandler, NotifyingStatsClient
from statsd_notifier.core.config import GlobalConfig
from statsd_notifier.core.errors import ClientConfigurationError
from statsd_notifier.core.ports import BuildLogPort


def build_client(global_config: GlobalConfig, build_log: BuildLogPort) -> NotifyingStatsClient:
    """Create a StatsD client from the global configuration.

    The host is resolved here, so an unresolvable host or an invalid port fails
    at construction and is raised as ClientConfigurationError.
    """

    logging.getLogger(__name__).info(
        "Initializing StatsD client for %s:%s (prefix=%r)",
        global_config.host,
        global_config.port,
        global_config.prefix,
    )

    if not global_config.host.strip():
        raise ClientConfigurationError("StatsD host is not configured")
    port = _port_number(global_config.port)

    try:
        return NotifyingStatsClient(
            host=global_config.host,
            port=port,
            prefix=global_config.prefix,
            error_handler=BuildLogErrorHandler(build_log),
        )
    except (OSError, OverflowError, TypeError, ValueError) as exc:
        raise ClientConfigurationError(str(exc)) from exc


def _port_number(value: Any) -> int:
    # bool is an int subclass; JSON true/false is not a port.
    if isinstance(value, bool):
        raise ClientConfigurationError(f"port is not an integer: {value!r}")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        raise ClientConfigurationError(f"port is not an integer: {value!r}")
    if not 0 < value < 65536:
        raise ClientConfigurationError(f"port out of range: {value}")
    return value
