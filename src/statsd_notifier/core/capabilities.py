"""Companion plugin identifiers and capability checks."""

from __future__ import annotations

from statsd_notifier.core.ports import PluginRegistryPort

CHECKSTYLE = "checkstyle"
PMD = "pmd"
JUNIT = "junit"

COMPANION_PLUGINS = (CHECKSTYLE, PMD, JUNIT)


def is_checkstyle_installed(registry: PluginRegistryPort) -> bool:
    return registry.is_installed(CHECKSTYLE)


def is_pmd_installed(registry: PluginRegistryPort) -> bool:
    return registry.is_installed(PMD)


def is_junit_installed(registry: PluginRegistryPort) -> bool:
    return registry.is_installed(JUNIT)


def is_applicable(registry: PluginRegistryPort) -> bool:
    """Return True when the notifier step can be offered for a job.

    Only Checkstyle and PMD gate applicability; a registry with JUnit alone
    does not make the step available.
    """

    return is_checkstyle_installed(registry) or is_pmd_installed(registry)
