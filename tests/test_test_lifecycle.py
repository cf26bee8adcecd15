"""Tests for running a single test: outcomes, hooks and lifecycle."""

import asyncio

import pytest

from testy.context import RunContext
from testy.errors import ConfigurationError, LifecycleError
from testy.i18n import I18nMessage
from testy.result import Error, Failure, Pending, Skipped, Success
from testy.test import Test


# --- outcomes ---


def test_a_passing_assertion_is_a_success(result_of_a_test_with):
    result = result_of_a_test_with(lambda t: t.that(1).is_equal_to(1))
    assert isinstance(result, Success)


def test_a_failing_assertion_is_a_failure_with_location(result_of_a_test_with):
    result = result_of_a_test_with(lambda t: t.that(1).is_equal_to(2))
    assert isinstance(result, Failure)
    assert result.detail() == I18nMessage.of("equality_assertion_be_equal_to", "1", "2")
    assert "test_test_lifecycle.py:" in result.location()


def test_an_unexpected_exception_is_an_error(result_of_a_test_with):
    def body(t):
        raise KeyError("missing")

    result = result_of_a_test_with(body)
    assert isinstance(result, Error)
    assert result.detail() == "KeyError: 'missing'"
    assert isinstance(result.exception, KeyError)
    assert "test_test_lifecycle.py:" in result.location()


def test_explicit_fail_without_message_uses_the_default(result_of_a_test_with):
    result = result_of_a_test_with(lambda t: t.fail())
    assert result.is_failure()
    assert result.detail() == I18nMessage.of("explicitly_failed")
    assert str(result.detail()) == "Explicitly failed"


def test_explicit_fail_with_message(result_of_a_test_with):
    result = result_of_a_test_with(lambda t: t.fail("not today"))
    assert result.detail() == "not today"


def test_explicit_pending_with_and_without_reason(run_single_test):
    with_reason = run_single_test(lambda t: t.pending("waiting on the API"))
    without_reason = run_single_test(lambda t: t.pending())
    assert with_reason.result() == Pending(reason="waiting on the API", explicit=True)
    assert without_reason.result() == Pending(reason=None, explicit=True)
    assert with_reason.is_explicitly_marked_pending()


def test_a_test_without_body_is_implicitly_pending(run_single_test):
    calls = []
    test = run_single_test(None, before=lambda: calls.append("before"))
    assert test.is_pending()
    assert not test.is_explicitly_marked_pending()
    assert calls == []


def test_a_test_without_assertions_is_an_error(result_of_a_test_with):
    result = result_of_a_test_with(lambda t: None)
    assert result.is_error()
    assert result.detail() == I18nMessage.of("test_without_assertions")


def test_first_failed_assertion_ends_the_body(run_single_test):
    reached = []

    def body(t):
        t.that(1).is_equal_to(2)
        reached.append(True)
        t.that(1).is_equal_to(1)

    test = run_single_test(body)
    assert test.is_failure()
    assert reached == []
    assert test.assertion_count() == 1


# --- signals caught by the test's own code ---


def test_a_failed_assertion_inside_except_exception_is_still_a_failure(run_single_test):
    def body(t):
        t.that(1).is_equal_to(1)
        try:
            t.that(1).is_equal_to(2)
        except Exception:
            pass

    test = run_single_test(body)
    assert test.is_failure()
    assert test.result().detail() == I18nMessage.of("equality_assertion_be_equal_to", "1", "2")


def test_a_failed_assertion_survives_a_catch_all(run_single_test):
    reached = []

    def body(t):
        try:
            t.that("a").is_equal_to("b")
        except BaseException:
            reached.append(True)
        t.that(1).is_equal_to(1)

    test = run_single_test(body)
    assert reached == [True]
    assert test.is_failure()
    assert test.result().detail() == I18nMessage.of("equality_assertion_be_equal_to", "'a'", "'b'")


def test_explicit_fail_inside_except_exception_is_still_a_failure(run_single_test):
    def body(t):
        try:
            t.fail("caught")
        except Exception:
            pass
        t.is_true(True)

    test = run_single_test(body)
    assert test.is_failure()
    assert test.result().detail() == "caught"


def test_explicit_pending_inside_except_exception_is_still_pending(run_single_test):
    def body(t):
        try:
            t.pending("caught")
        except Exception:
            pass
        t.is_true(True)

    test = run_single_test(body)
    assert test.result() == Pending(reason="caught", explicit=True)


def test_a_failure_after_a_swallowed_pending_wins(run_single_test):
    def body(t):
        try:
            t.pending()
        except BaseException:
            pass
        t.is_true(False)

    assert run_single_test(body).is_failure()


def test_explicit_fail_outside_the_body_is_a_lifecycle_error(run_single_test):
    handles = []
    run_single_test(lambda t: handles.append(t) or t.is_true(True))
    with pytest.raises(LifecycleError, match="not running"):
        handles[0].fail()


def test_an_explicitly_skipped_test_does_not_run(mocker):
    body = mocker.Mock()
    test = Test("skipped", body, skip=True)
    asyncio.run(test.run(RunContext()))
    assert test.result() == Skipped()
    body.assert_not_called()


def test_a_skip_predicate_skips_matching_tests():
    test = Test("slow one", lambda t: t.is_true(True))
    context = RunContext(skip_predicate=lambda candidate: "slow" in candidate.name)
    asyncio.run(test.run(context))
    assert test.is_skipped()


# --- async bodies ---


def test_async_body_is_awaited(result_of_a_test_with):
    async def body(t):
        await asyncio.sleep(0)
        t.that("done").is_equal_to("done")

    assert result_of_a_test_with(body).is_success()


def test_async_body_failure_is_recorded(result_of_a_test_with):
    async def body(t):
        await asyncio.sleep(0)
        t.that("done").is_equal_to("pending")

    assert result_of_a_test_with(body).is_failure()


# --- hooks ---


def test_hooks_run_around_the_body(run_single_test):
    calls = []

    def body(t):
        calls.append("body")
        t.is_true(True)

    run_single_test(
        body, before=lambda: calls.append("before"), after=lambda: calls.append("after")
    )
    assert calls == ["before", "body", "after"]


def test_async_hooks_are_awaited(run_single_test):
    calls = []

    async def before():
        await asyncio.sleep(0)
        calls.append("before")

    test = run_single_test(lambda t: t.is_true(bool(calls)), before=before)
    assert test.is_success()


def test_an_error_in_before_skips_the_body_but_runs_after(run_single_test):
    calls = []

    def before():
        raise RuntimeError("cannot connect")

    def body(t):
        calls.append("body")

    test = run_single_test(body, before=before, after=lambda: calls.append("after"))
    assert test.is_error()
    assert test.result().detail() == "RuntimeError: cannot connect"
    assert calls == ["after"]


def test_after_runs_once_when_the_body_raises(run_single_test):
    calls = []

    def body(t):
        raise ValueError("boom")

    test = run_single_test(body, after=lambda: calls.append("after"))
    assert test.is_error()
    assert calls == ["after"]


def test_an_error_in_after_overrides_a_success(run_single_test):
    def after():
        raise RuntimeError("cleanup failed")

    test = run_single_test(lambda t: t.is_true(True), after=after)
    assert test.is_error()
    assert test.result().detail() == "RuntimeError: cleanup failed"


def test_an_error_in_after_overrides_a_failure(run_single_test):
    def after():
        raise RuntimeError("cleanup failed")

    test = run_single_test(lambda t: t.is_true(False), after=after)
    assert test.is_error()


def test_a_second_error_in_after_does_not_override_the_first(run_single_test):
    def body(t):
        raise ValueError("boom")

    def after():
        raise AssertionError("ignored")

    test = run_single_test(body, after=after)
    assert test.result().detail() == "ValueError: boom"


def test_pending_in_body_with_failing_after_is_an_error(run_single_test):
    test = run_single_test(lambda t: t.pending("later"), after=lambda: 1 / 0)
    assert test.is_error()


# --- lifecycle ---


def test_a_test_cannot_run_twice(run_single_test):
    test = run_single_test(lambda t: t.is_true(True))
    assert test.state().value == "finished"
    with pytest.raises(LifecycleError, match="already run"):
        asyncio.run(test.run(RunContext()))


def test_asserting_after_the_test_finished_is_a_lifecycle_error(run_single_test):
    handles = []

    def body(t):
        handles.append(t)
        t.is_true(True)

    run_single_test(body)
    with pytest.raises(LifecycleError, match="not running"):
        handles[0].that(1).is_equal_to(1)


def test_duration_is_recorded(run_single_test):
    test = run_single_test(lambda t: t.is_true(True))
    assert test.duration() >= 0


def test_full_name_without_suite():
    assert Test("alone").full_name() == "alone"


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_invalid_test_name_is_rejected(name):
    with pytest.raises(ConfigurationError, match="valid name"):
        Test(name, lambda t: None)


def test_non_callable_body_is_rejected():
    with pytest.raises(ConfigurationError, match="valid body"):
        Test("named", "not a function")


# --- fail fast ---


def test_a_failure_requests_abort_when_fail_fast_is_on():
    context = RunContext(fail_fast=True)
    asyncio.run(Test("fails", lambda t: t.is_true(False)).run(context))
    assert context.abort_requested


def test_a_failure_does_not_request_abort_without_fail_fast():
    context = RunContext()
    asyncio.run(Test("fails", lambda t: t.is_true(False)).run(context))
    assert not context.abort_requested


def test_pending_does_not_request_abort():
    context = RunContext(fail_fast=True)
    asyncio.run(Test("later").run(context))
    assert not context.abort_requested
