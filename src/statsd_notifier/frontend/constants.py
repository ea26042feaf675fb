"""Shared constants for the Textual UI."""

from __future__ import annotations

STATSD_GREEN = "#6CC24A"
