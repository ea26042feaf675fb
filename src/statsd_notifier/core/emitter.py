"""Core metrics emission pass.

This module is integration-agnostic. It only relies on ports for the metrics
client, plugin registry and build log, so the CLI or any other runner can
drive it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from statsd_notifier.core import capabilities
from statsd_notifier.core.config import GlobalConfig, NotifierConfig
from statsd_notifier.core.errors import ClientConfigurationError
from statsd_notifier.core.models import BuildResultView, EmissionLog, MetricSample, SkipReason
from statsd_notifier.core.ports import (
    BuildLogPort,
    ClientFactoryPort,
    MetricsClientPort,
    PluginRegistryPort,
)

LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _RecordingLog:
    """Forward build log lines while keeping a copy for the EmissionLog."""

    def __init__(self, wrapped: BuildLogPort, outcome: EmissionLog) -> None:
        self._wrapped = wrapped
        self._outcome = outcome

    def println(self, line: str) -> None:
        self._outcome.lines.append(line)
        self._wrapped.println(line)


class MetricsEmitter:
    """Reads a finished build's results and sends them to StatsD as gauges."""

    def __init__(
        self,
        client_factory: ClientFactoryPort,
        registry: PluginRegistryPort,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._client_factory = client_factory
        self._registry = registry
        self._clock = clock or _utcnow

    def emit(
        self,
        config: NotifierConfig,
        global_config: GlobalConfig,
        result: BuildResultView,
        build_log: BuildLogPort,
    ) -> EmissionLog:
        """Run one emission pass. Never raises on client or transport failure."""

        outcome = EmissionLog()
        log = _RecordingLog(build_log, outcome)

        try:
            client = self._client_factory(global_config, log)
        except ClientConfigurationError as exc:
            cause = exc.__cause__ or exc
            log.println(f"Error when creating StatsD client: {type(cause).__name__}: {cause}")
            LOGGER.warning("StatsD client for %s:%s not created: %s", global_config.host, global_config.port, cause)
            outcome.aborted = True
            return outcome

        try:
            if config.send_checkstyle:
                self._handle_checkstyle(config, result, client, log, outcome)
            if config.send_pmd:
                self._handle_pmd(config, result, client, log, outcome)
            if config.send_junit:
                self._handle_junit(config, result, client, log, outcome)
        finally:
            client.close()

        LOGGER.info("Emission pass finished: gauges=%s, skipped=%s", len(outcome.samples), len(outcome.skipped))
        return outcome

    def _handle_checkstyle(
        self,
        config: NotifierConfig,
        result: BuildResultView,
        client: MetricsClientPort,
        log: BuildLogPort,
        outcome: EmissionLog,
    ) -> None:
        if not capabilities.is_checkstyle_installed(self._registry):
            log.println("Checkstyle metric can't be handled. Checkstyle plugin is not installed")
            outcome.skipped[capabilities.CHECKSTYLE] = SkipReason.PLUGIN_MISSING
            return

        if result.checkstyle_warnings is None:
            log.println("Can not find checkstyle metrics to be sent to StatsD")
            outcome.skipped[capabilities.CHECKSTYLE] = SkipReason.RESULT_MISSING
            return

        self._gauge(client, outcome, f"{config.prefix}.{config.checkstyle_prefix}", result.checkstyle_warnings)

    def _handle_pmd(
        self,
        config: NotifierConfig,
        result: BuildResultView,
        client: MetricsClientPort,
        log: BuildLogPort,
        outcome: EmissionLog,
    ) -> None:
        if not capabilities.is_pmd_installed(self._registry):
            log.println("PMD metric can't be handled. PMD plugin is not installed")
            outcome.skipped[capabilities.PMD] = SkipReason.PLUGIN_MISSING
            return

        if result.pmd_warnings is None:
            log.println("Can not find pmd metrics to be sent to StatsD")
            outcome.skipped[capabilities.PMD] = SkipReason.RESULT_MISSING
            return

        self._gauge(client, outcome, f"{config.prefix}.{config.pmd_prefix}", result.pmd_warnings)

    def _handle_junit(
        self,
        config: NotifierConfig,
        result: BuildResultView,
        client: MetricsClientPort,
        log: BuildLogPort,
        outcome: EmissionLog,
    ) -> None:
        if not capabilities.is_junit_installed(self._registry):
            log.println("Junit metric can't be handled. Junit plugin is not installed")
            outcome.skipped[capabilities.JUNIT] = SkipReason.PLUGIN_MISSING
            return

        junit = result.junit
        if junit is None:
            log.println("Can not find Junit metrics to be sent to StatsD")
            outcome.skipped[capabilities.JUNIT] = SkipReason.RESULT_MISSING
            return

        # Elapsed time up to this step, not the build's recorded duration.
        # A start time in the future (clock skew) reports 0.
        duration_seconds = max(0, int((self._clock() - result.started_at).total_seconds()))

        base = f"{config.prefix}.{config.junit_prefix}"
        self._gauge(client, outcome, f"{base}.TotalTests", junit.total)
        self._gauge(client, outcome, f"{base}.FailedTests", junit.failed)
        self._gauge(client, outcome, f"{base}.SkippedTests", junit.skipped)
        self._gauge(client, outcome, f"{base}.BuildDuration", duration_seconds)

    @staticmethod
    def _gauge(client: MetricsClientPort, outcome: EmissionLog, name: str, value: int) -> None:
        client.gauge(name, value)
        outcome.samples.append(MetricSample(name=name, value=value))
        LOGGER.debug("Gauge %s=%s", name, value)
