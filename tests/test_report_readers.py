from __future__ import annotations

import pytest

from statsd_notifier.adapters.report_readers import (
    read_checkstyle_warnings,
    read_junit_summary,
    read_pmd_warnings,
)
from statsd_notifier.core.errors import ReportError
from statsd_notifier.core.models import JunitSummary

CHECKSTYLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<checkstyle version="10.12.0">
  <file name="src/main/java/App.java">
    <error line="3" severity="warning" message="Missing javadoc." source="JavadocType"/>
    <error line="9" severity="error" message="Line is longer than 100 characters." source="LineLength"/>
  </file>
  <file name="src/main/java/Clean.java"/>
  <file name="src/main/java/Util.java">
    <error line="1" severity="warning" message="Unused import." source="UnusedImports"/>
  </file>
</checkstyle>
"""

PMD_XML = """<?xml version="1.0" encoding="UTF-8"?>
<pmd xmlns="http://pmd.sourceforge.net/report/2.0.0" version="6.55.0">
  <file name="src/main/java/App.java">
    <violation beginline="3" rule="UnusedPrivateField" priority="3">Avoid unused private fields.</violation>
    <violation beginline="7" rule="EmptyCatchBlock" priority="3">Avoid empty catch blocks.</violation>
  </file>
</pmd>
"""

JUNIT_SUITE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="AppTest" tests="4" failures="1" errors="1" skipped="1">
  <testcase name="passes" classname="AppTest"/>
  <testcase name="fails" classname="AppTest"><failure message="boom"/></testcase>
  <testcase name="errors" classname="AppTest"><error message="npe"/></testcase>
  <testcase name="skips" classname="AppTest"><skipped/></testcase>
</testsuite>
"""

JUNIT_SUITES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites>
  <testsuite name="UtilTest">
    <testcase name="one" classname="UtilTest"/>
    <testcase name="two" classname="UtilTest"/>
  </testsuite>
</testsuites>
"""


def test_checkstyle_counts_errors_across_files(tmp_path) -> None:
    report = tmp_path / "checkstyle-result.xml"
    report.write_text(CHECKSTYLE_XML, encoding="utf-8")

    assert read_checkstyle_warnings(report) == 3


def test_pmd_counts_namespaced_violations(tmp_path) -> None:
    report = tmp_path / "pmd.xml"
    report.write_text(PMD_XML, encoding="utf-8")

    assert read_pmd_warnings(report) == 2


def test_missing_reports_mean_no_result(tmp_path) -> None:
    assert read_checkstyle_warnings(tmp_path / "nope.xml") is None
    assert read_pmd_warnings(tmp_path / "nope.xml") is None
    assert read_junit_summary([str(tmp_path / "reports" / "*.xml")]) is None


def test_junit_aggregates_matching_files(tmp_path) -> None:
    reports = tmp_path / "surefire-reports"
    reports.mkdir()
    (reports / "TEST-AppTest.xml").write_text(JUNIT_SUITE_XML, encoding="utf-8")
    (reports / "TEST-UtilTest.xml").write_text(JUNIT_SUITES_XML, encoding="utf-8")

    summary = read_junit_summary([str(reports / "TEST-*.xml")])

    assert summary == JunitSummary(total=6, failed=2, skipped=1)


def test_junit_same_file_from_two_patterns_counts_once(tmp_path) -> None:
    report = tmp_path / "TEST-AppTest.xml"
    report.write_text(JUNIT_SUITE_XML, encoding="utf-8")

    summary = read_junit_summary([str(report), str(tmp_path / "*.xml")])

    assert summary == JunitSummary(total=4, failed=2, skipped=1)


def test_malformed_report_raises(tmp_path) -> None:
    report = tmp_path / "checkstyle-result.xml"
    report.write_text("<checkstyle><file>", encoding="utf-8")

    with pytest.raises(ReportError):
        read_checkstyle_warnings(report)
