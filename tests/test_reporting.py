"""Tests for the JUnit XML report and the console reporter."""

import pytest
from junitparser import Error, Failure, JUnitXml, Skipped

from testy.config import Configuration
from testy.i18n import I18n
from testy.reporting import ConsoleReporter, Formatter, JUnitReporter, write_junit
from testy.reporting.junit import build_junit
from testy.suite import TestSuite


def _mixed_suite(name="mixed"):
    def body(s):
        s.test("passes", lambda t: t.is_true(True))
        s.test("fails", lambda t: t.that(1).is_equal_to(2))
        s.test("errors", lambda t: 1 / 0)
        s.test("is pending", lambda t: t.pending("later"))
        s.test("is skipped", lambda t: t.is_true(True), skip=True)

    return TestSuite(name, body)


@pytest.fixture()
def mixed_runner(run_suites):
    return run_suites(_mixed_suite(), TestSuite("green", lambda s: s.test("ok", lambda t: t.is_true(True))))


@pytest.fixture()
def junit_file(tmp_path, mixed_runner):
    path = tmp_path / "reports" / "junit.xml"
    write_junit(path, mixed_runner)
    return path


def _case(xml, suite_name, case_name):
    junit_suite = next(s for s in xml if s.name == suite_name)
    return next(c for c in junit_suite if c.name == case_name)


# ---------------------------------------------------------------------------
# write_junit tests
# ---------------------------------------------------------------------------


def test_write_junit_creates_file(junit_file):
    assert junit_file.exists()


def test_write_junit_returns_path(tmp_path, mixed_runner):
    path = tmp_path / "junit.xml"
    assert write_junit(path, mixed_runner) == path


def test_junit_one_testsuite_per_suite(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    assert [s.name for s in xml] == ["mixed", "green"]


def test_junit_counts(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    mixed = next(s for s in xml if s.name == "mixed")
    assert mixed.tests == 5
    assert mixed.failures == 1
    assert mixed.errors == 1
    assert mixed.skipped == 2


def test_junit_testcase_classname(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    for junit_suite in xml:
        for case in junit_suite:
            assert case.classname == junit_suite.name


def test_junit_failure_message_is_translated(junit_file):
    case = _case(JUnitXml.fromfile(str(junit_file)), "mixed", "fails")
    failure = next(r for r in case.result if isinstance(r, Failure))
    assert failure.message == "Expected 1 to be equal to 2"
    assert "test_reporting.py:" in failure.text


def test_junit_error_records_the_exception_type(junit_file):
    case = _case(JUnitXml.fromfile(str(junit_file)), "mixed", "errors")
    error = next(r for r in case.result if isinstance(r, Error))
    assert error.type == "ZeroDivisionError"
    assert error.message == "ZeroDivisionError: division by zero"


def test_junit_pending_is_skipped_with_reason(junit_file):
    case = _case(JUnitXml.fromfile(str(junit_file)), "mixed", "is pending")
    skipped = next(r for r in case.result if isinstance(r, Skipped))
    assert skipped.message == "pending: later"


def test_junit_passing_case_has_no_result(junit_file):
    case = _case(JUnitXml.fromfile(str(junit_file)), "green", "ok")
    assert list(case.result) == []


def test_junit_duration_properties(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    green = next(s for s in xml if s.name == "green")
    prop_names = {p.name for p in green.properties()}
    assert {"duration_avg", "duration_min", "duration_max", "duration_stddev"} <= prop_names
    assert "random_seed" not in prop_names


def test_junit_records_the_seed_with_random_order(run_suites):
    runner = run_suites(_mixed_suite(), configuration=Configuration(random_order=True, seed=11))
    junit_suite = next(iter(build_junit(runner)))
    props = {p.name: p.value for p in junit_suite.properties()}
    assert props["random_seed"] == "11"


def test_junit_leaves_out_suites_that_did_not_run(run_suites):
    failing = TestSuite("first", lambda s: s.test("fails", lambda t: t.is_true(False)))
    never = TestSuite("never", lambda s: s.test("ok", lambda t: t.is_true(True)))
    runner = run_suites(failing, never, configuration=Configuration(fail_fast=True))
    assert [s.name for s in build_junit(runner)] == ["first"]


def test_junit_messages_follow_the_language(run_suites):
    runner = run_suites(_mixed_suite())
    case = _case(build_junit(runner, I18n("es")), "mixed", "fails")
    failure = next(r for r in case.result if isinstance(r, Failure))
    assert failure.message.startswith("Se esperaba")


def test_junit_reporter_writes_on_run_finish(tmp_path, run_suites):
    path = tmp_path / "out.xml"
    run_suites(_mixed_suite(), observer=JUnitReporter(path))
    assert path.exists()


# ---------------------------------------------------------------------------
# ConsoleReporter tests
# ---------------------------------------------------------------------------


def test_console_reporter_prints_the_whole_run(run_suites):
    lines = []
    formatter = Formatter(I18n(), echo=lines.append, color=False)
    reporter = ConsoleReporter(formatter, Configuration(), ["tests"], show_durations=True)
    run_suites(_mixed_suite(), observer=reporter)

    output = "\n".join(lines)
    assert "Starting testy..." in output
    assert "[OK] passes" in output
    assert "[FAIL] fails" in output
    assert "[ERROR] errors" in output
    assert "[WIP] is pending" in output
    assert "[SKIP] is skipped" in output
    assert "Failures summary:" in output
    assert "Test durations (s):" in output
