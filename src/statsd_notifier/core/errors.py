"""Errors raised across the core/adapter boundary."""

from __future__ import annotations


class ClientConfigurationError(Exception):
    """The StatsD client could not be built from the global configuration."""


class ReportError(Exception):
    """A companion report exists but cannot be parsed."""


class ConfigError(Exception):
    """The configuration document is unreadable or has the wrong shape."""
