"""Companion report readers.

Turn the XML reports written by Checkstyle, PMD and JUnit into the counts the
core reads from a BuildResultView. A missing report is "no result", not an
error; a report that exists but is not valid XML raises ReportError.
"""

from __future__ import annotations

import glob
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, Optional

from statsd_notifier.core.errors import ReportError
from statsd_notifier.core.models import JunitSummary

LOGGER = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    # PMD 6+ reports are namespaced: {http://pmd.sourceforge.net/report/2.0.0}violation
    return tag.rsplit("}", 1)[-1]


def _iter_named(root: ET.Element, name: str) -> Iterator[ET.Element]:
    for element in root.iter():
        if isinstance(element.tag, str) and _local_name(element.tag) == name:
            yield element


def _parse(path: Path) -> ET.Element:
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise ReportError(f"{path}: {exc}") from exc


def read_checkstyle_warnings(path: Path | str) -> Optional[int]:
    """Count <error> entries of a checkstyle-result.xml, or None if absent."""

    report = Path(path)
    if not report.is_file():
        LOGGER.warning("Checkstyle report not found: %s", report)
        return None

    root = _parse(report)
    return sum(
        1
        for file_element in _iter_named(root, "file")
        for child in file_element
        if isinstance(child.tag, str) and _local_name(child.tag) == "error"
    )


def read_pmd_warnings(path: Path | str) -> Optional[int]:
    """Count <violation> entries of a pmd.xml, or None if absent."""

    report = Path(path)
    if not report.is_file():
        LOGGER.warning("PMD report not found: %s", report)
        return None

    root = _parse(report)
    return sum(1 for _ in _iter_named(root, "violation"))


def _expand_patterns(patterns: Iterable[str]) -> list[Path]:
    paths: list[Path] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True))
        if not matches and Path(pattern).is_file():
            matches = [pattern]
        for match in matches:
            path = Path(match)
            if path.is_file() and path not in paths:
                paths.append(path)
    return paths


def read_junit_summary(patterns: Iterable[str]) -> Optional[JunitSummary]:
    """Aggregate test cases across every JUnit XML file matching the patterns.

    A test case counts as failed when it carries <failure> or <error>, and as
    skipped when it carries <skipped>.
    """

    patterns = list(patterns)
    paths = _expand_patterns(patterns)
    if not paths:
        LOGGER.warning("No JUnit reports matched %s", patterns)
        return None

    total = failed = skipped = 0
    for path in paths:
        root = _parse(path)
        for case in _iter_named(root, "testcase"):
            total += 1
            outcomes = {_local_name(child.tag) for child in case if isinstance(child.tag, str)}
            if outcomes & {"failure", "error"}:
                failed += 1
            elif "skipped" in outcomes:
                skipped += 1
    LOGGER.info("Read %s JUnit report(s): total=%s failed=%s skipped=%s", len(paths), total, failed, skipped)
    return JunitSummary(total=total, failed=failed, skipped=skipped)
