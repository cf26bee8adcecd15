"""JUnit XML report of a finished run."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Error, Failure, JUnitXml, Skipped, TestCase
from junitparser import TestSuite as JUnitSuite

from testy.i18n import I18n
from testy.metrics import duration_stats
from testy.observer import RunObserver

if TYPE_CHECKING:
    from testy.runner import Runner
    from testy.suite import TestSuite
    from testy.test import Test


def _case_for(test: Test, suite: TestSuite, i18n: I18n) -> TestCase:
    case = TestCase(test.name)
    case.classname = suite.name
    case.time = round(test.duration(), 6)

    result = test.result()
    if result is None or result.is_success():
        return case

    detail = i18n.render(result.detail())
    location = result.location()
    if test.is_failure():
        entry = Failure(detail)
    elif test.is_error():
        entry = Error(detail)
        exception = getattr(result, "exception", None)
        if exception is not None:
            entry.type = type(exception).__name__
    elif test.is_pending():
        entry = Skipped(f"pending: {detail}" if detail else "pending")
    else:
        entry = Skipped("skipped")
    if location:
        entry.text = location
    case.result = [entry]
    return case


def build_junit(runner: Runner, i18n: I18n | None = None) -> JUnitXml:
    """One <testsuite> per suite that ran, one <testcase> per test in registration order."""
    i18n = i18n or I18n.default()
    xml = JUnitXml("testy")

    for suite in runner.suites_run:
        junit_suite = JUnitSuite(suite.name)
        stats = duration_stats([suite])
        for stat_name, value in stats.to_dict().items():
            if value is not None:
                junit_suite.add_property(f"duration_{stat_name}", str(value))
        if runner.configuration.random_order:
            junit_suite.add_property("random_seed", str(runner.seed()))

        for test in suite.tests():
            junit_suite.add_testcase(_case_for(test, suite, i18n))

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        junit_suite.time = round(sum(t.duration() for t in suite.tests()), 6)

        # Use append (not +=) to preserve properties and time
        xml.append(junit_suite)

    return xml


def write_junit(path: Path, runner: Runner, i18n: I18n | None = None) -> Path:
    """Write junit.xml for a finished run, return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    build_junit(runner, i18n).write(str(path), pretty=True)
    return path


class JUnitReporter(RunObserver):
    """Writes a JUnit XML report when the run finishes."""

    def __init__(self, path: Path, i18n: I18n | None = None):
        self.path = path
        self.i18n = i18n

    def on_run_finish(self, runner: Runner) -> None:
        write_junit(self.path, runner, self.i18n)
