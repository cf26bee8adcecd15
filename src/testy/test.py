"""A single named test and its lifecycle."""

from __future__ import annotations

import inspect
import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from testy.assertions import Assertion, AssertionOutcome
from testy.errors import (
    AssertionFailed,
    ConfigurationError,
    ExplicitFailure,
    LifecycleError,
    PendingSignal,
)
from testy.i18n import I18nMessage
from testy.locations import caller_location, exception_location
from testy.result import Error, Failure, Pending, Skipped, Success, TestResult

if TYPE_CHECKING:
    from testy.context import RunContext
    from testy.suite import TestSuite

TestBody = Callable[[Assertion], Any]


class TestState(str, Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    FINISHED = "finished"


class Test:
    """A named unit of work.

    The body receives an :class:`~testy.assertions.Assertion` handle and may be
    a coroutine function. A test without a body is implicitly pending.
    """

    __test__ = False

    def __init__(self, name: str, body: TestBody | None = None, *, skip: bool = False):
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(
                "Test does not have a valid name. Please enter a non-empty string to name this test."
            )
        if body is not None and not callable(body):
            raise ConfigurationError(
                f"Test '{name}' does not have a valid body. Please provide a function as the test body."
            )
        self.name = name
        self.body = body
        self.suite: TestSuite | None = None
        self._explicitly_skipped = skip
        self._state = TestState.NOT_STARTED
        self._result: TestResult | None = None
        self._assertion_count = 0
        self._duration = 0.0

    def __repr__(self) -> str:
        return f"Test({self.name!r}, state={self._state.value})"

    # Accessing

    def full_name(self) -> str:
        if self.suite is None:
            return self.name
        return f"{self.suite.name} > {self.name}"

    def result(self) -> TestResult | None:
        return self._result

    def state(self) -> TestState:
        return self._state

    def assertion_count(self) -> int:
        return self._assertion_count

    def duration(self) -> float:
        """Seconds spent running hooks and body."""
        return self._duration

    # Testing

    def is_success(self) -> bool:
        return self._result is not None and self._result.is_success()

    def is_failure(self) -> bool:
        return self._result is not None and self._result.is_failure()

    def is_error(self) -> bool:
        return self._result is not None and self._result.is_error()

    def is_pending(self) -> bool:
        return self._result is not None and self._result.is_pending()

    def is_skipped(self) -> bool:
        return self._result is not None and self._result.is_skipped()

    def is_explicitly_marked_pending(self) -> bool:
        return isinstance(self._result, Pending) and self._result.explicit

    def is_explicitly_skipped(self) -> bool:
        return self._explicitly_skipped

    # Reporting

    def report_outcome(self, outcome: AssertionOutcome) -> None:
        """Record an evaluated assertion. A failed one ends the body."""
        self._ensure_running()
        self._assertion_count += 1
        if not outcome.passed:
            location = caller_location()
            self._record(Failure(outcome.message, location))
            raise AssertionFailed(outcome.message, location)

    def report_failure(self, message: I18nMessage | str) -> None:
        self._ensure_running()
        location = caller_location()
        self._record(Failure(message, location))
        raise ExplicitFailure(message, location)

    def report_pending(self, reason: str | None) -> None:
        self._ensure_running()
        self._record(Pending(reason=reason, explicit=True))
        raise PendingSignal(reason)

    # Executing

    async def run(self, context: RunContext) -> None:
        if self._state is not TestState.NOT_STARTED:
            raise LifecycleError(f"Test '{self.name}' has already run")

        logger = context.logger
        if self._explicitly_skipped or context.should_skip(self):
            logger.debug(f"Skipping test '{self.full_name()}'")
            self._finish(Skipped(), context)
            return
        if self.body is None:
            logger.debug(f"Test '{self.full_name()}' has no body, marking as pending")
            self._finish(Pending(reason=None, explicit=False), context)
            return

        self._state = TestState.RUNNING
        logger.debug(f"Running test '{self.full_name()}'")
        started = time.perf_counter()

        hooks = context.hooks
        if hooks.before is None or await self._attempt(hooks.before):
            await self._attempt(self.body, Assertion(self))
        if hooks.after is not None:
            await self._attempt(hooks.after)

        self._duration = time.perf_counter() - started
        if self._result is None:
            if self._assertion_count > 0:
                self._result = Success()
            else:
                self._result = Error(I18nMessage.of("test_without_assertions"))
        self._finish(self._result, context)

    # Private

    async def _attempt(self, block: Callable[..., Any], *args: Any) -> bool:
        """Run a hook or the body, turning whatever it raises into a candidate result.

        Returns True when the block completed without raising.
        """
        try:
            outcome = block(*args)
            if inspect.isawaitable(outcome):
                await outcome
        except (AssertionFailed, ExplicitFailure) as signal:
            self._record(Failure(signal.message, signal.location))
        except PendingSignal as signal:
            self._record(Pending(reason=signal.reason, explicit=True))
        except Exception as exc:
            self._record(Error.from_exception(exc, exception_location(exc.__traceback__)))
        else:
            return True
        return False

    def _ensure_running(self) -> None:
        if self._state is not TestState.RUNNING:
            raise LifecycleError(
                f"Cannot assert on test '{self.name}' because it is not running. "
                "Assertions must be made inside the test body."
            )

    def _record(self, result: TestResult) -> None:
        if self._result is None or result.priority > self._result.priority:
            self._result = result

    def _finish(self, result: TestResult, context: RunContext) -> None:
        self._result = result
        self._state = TestState.FINISHED
        context.logger.debug(
            f"Test '{self.full_name()}' finished: {type(result).__name__.lower()}"
        )
        if result.is_failure() or result.is_error():
            context.request_abort()
