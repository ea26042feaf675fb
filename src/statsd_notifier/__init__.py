"""Publish build analysis results (Checkstyle, PMD, JUnit) to StatsD."""

__version__ = "1.0.0"

DISPLAY_NAME = "Publish results to StatsD"
