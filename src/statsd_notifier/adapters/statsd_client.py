"""StatsD transport adapter.

Wraps ``statsd.StatsClient`` so that UDP send failures reach an error callback
instead of being dropped silently by the library.
"""

from __future__ import annotations

import socket
from typing import Callable, Optional

from statsd import StatsClient

from statsd_notifier.core.ports import BuildLogPort

ErrorHandler = Callable[[Exception], None]


class NotifyingStatsClient(StatsClient):
    """Fire-and-forget UDP StatsD client that reports send failures."""

    def __init__(
        self,
        host: str,
        port: int,
        prefix: Optional[str] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(host=host, port=port, prefix=prefix or None)
        self._error_handler = error_handler

    def _send(self, data: str) -> None:
        try:
            self._sock.sendto(data.encode("ascii"), self._addr)
        except (socket.error, RuntimeError, UnicodeEncodeError) as exc:
            if self._error_handler is not None:
                self._error_handler(exc)


class BuildLogErrorHandler:
    """Write transport exceptions to the build log without raising."""

    def __init__(self, build_log: BuildLogPort) -> None:
        self._build_log = build_log

    def __call__(self, exc: Exception) -> None:
        self._build_log.println(f"Error: {type(exc).__name__}: {exc}")
