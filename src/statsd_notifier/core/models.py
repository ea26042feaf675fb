"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to report formats or to the StatsD client library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class JunitSummary:
    """Test counts collected from the build's JUnit reports."""

    total: int
    failed: int
    skipped: int


@dataclass(frozen=True)
class BuildResultView:
    """Read-only view over what a finished build produced.

    A ``None`` field means the corresponding analysis did not run for the build.
    """

    started_at: datetime
    checkstyle_warnings: Optional[int] = None
    pmd_warnings: Optional[int] = None
    junit: Optional[JunitSummary] = None


@dataclass(frozen=True)
class MetricSample:
    """One gauge value sent to StatsD."""

    name: str
    value: int


class SkipReason(str, Enum):
    PLUGIN_MISSING = "plugin_missing"
    RESULT_MISSING = "result_missing"


@dataclass
class EmissionLog:
    """Outcome of one emission pass."""

    lines: list[str] = field(default_factory=list)
    samples: list[MetricSample] = field(default_factory=list)
    skipped: dict[str, SkipReason] = field(default_factory=dict)
    aborted: bool = False

    def sample_names(self) -> list[str]:
        return [sample.name for sample in self.samples]
