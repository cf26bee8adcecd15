"""Named groups of tests sharing before/after hooks."""

from __future__ import annotations

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from testy.errors import ConfigurationError, LifecycleError
from testy.test import Test, TestBody

if TYPE_CHECKING:
    from testy.context import Hook, RunContext

SuiteBody = Callable[["TestSuite"], Any]


class SuiteState(str, Enum):
    DECLARED = "declared"
    DEFINING = "defining"
    RUNNING = "running"
    FINISHED = "finished"


class TestSuite:
    """A grouping of tests under a name.

    The definition body is evaluated once, when the suite runs, and receives
    the suite so it can register tests and hooks::

        @suite("stack")
        def stack_suite(s):
            state = {}

            @s.before
            def create():
                state["stack"] = []

            @s.test("starts empty")
            def _(t):
                t.that(state["stack"]).is_empty()
    """

    __test__ = False

    BEFORE_HOOK_NAME = "before"
    AFTER_HOOK_NAME = "after"

    def __init__(self, name: str, body: SuiteBody):
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(
                "Suite does not have a valid name. Please enter a non-empty string to name this suite."
            )
        if not callable(body):
            raise ConfigurationError(
                f"Suite '{name}' does not have a valid body. "
                "Please provide a function to declare the suite body."
            )
        self.name = name
        self._body = body
        self._tests: list[Test] = []
        self._execution_order: list[Test] = []
        self._before: Hook | None = None
        self._after: Hook | None = None
        self._current_test: Test | None = None
        self._state = SuiteState.DECLARED

    def __repr__(self) -> str:
        return f"TestSuite({self.name!r}, tests={len(self._tests)}, state={self._state.value})"

    # Configuring

    def add_test(self, test: Test) -> Test:
        if self._state in (SuiteState.RUNNING, SuiteState.FINISHED):
            raise ConfigurationError(
                f"Cannot add test '{test.name}' to suite '{self.name}': the suite is already running."
            )
        test.suite = self
        self._tests.append(test)
        return test

    def test(
        self, name: str, body: TestBody | None = None, *, skip: bool = False
    ) -> Any:
        """Register a test. Without a body, returns a decorator.

        ``s.test("name")`` used as a plain call (never decorating anything)
        leaves a test without body, which is reported as pending.
        """
        if body is not None:
            return self.add_test(Test(name, body, skip=skip))

        test = self.add_test(Test(name, None, skip=skip))

        def decorator(fn: TestBody) -> TestBody:
            if not callable(fn):
                raise ConfigurationError(
                    f"Test '{name}' does not have a valid body. Please provide a function as the test body."
                )
            test.body = fn
            return fn

        return decorator

    def before(self, hook: Hook) -> Hook:
        """Register code to run before each test. Only one per suite."""
        self._validate_hook(self.BEFORE_HOOK_NAME, hook, self._before)
        self._before = hook
        return hook

    def after(self, hook: Hook) -> Hook:
        """Register code to run after each test, whatever its outcome. Only one per suite."""
        self._validate_hook(self.AFTER_HOOK_NAME, hook, self._after)
        self._after = hook
        return hook

    # Executing

    async def run(self, context: RunContext) -> None:
        if self._state is not SuiteState.DECLARED:
            raise LifecycleError(f"Suite '{self.name}' has already run")

        context.observer.on_suite_start(self)
        self._evaluate_definition()
        self._state = SuiteState.RUNNING

        self._execution_order = list(self._tests)
        if context.random_order:
            context.rng.shuffle(self._execution_order)
        context.install_hooks(self._before, self._after)
        context.logger.debug(
            f"Running suite '{self.name}' with {len(self._tests)} test(s)"
        )

        for test in self._execution_order:
            # tests run in sequence, parallel execution is not supported
            self._current_test = test
            await test.run(context)
            context.observer.on_test_result(test)

        self._current_test = None
        self._state = SuiteState.FINISHED
        context.observer.on_suite_finish(self)

    # Counting

    def total_count(self) -> int:
        return len(self._tests)

    def success_count(self) -> int:
        return sum(1 for test in self._tests if test.is_success())

    def pending_count(self) -> int:
        return sum(1 for test in self._tests if test.is_pending())

    def errors_count(self) -> int:
        return sum(1 for test in self._tests if test.is_error())

    def skipped_count(self) -> int:
        return sum(1 for test in self._tests if test.is_skipped())

    def failures_count(self) -> int:
        return (
            self.total_count()
            - self.success_count()
            - self.pending_count()
            - self.errors_count()
            - self.skipped_count()
        )

    # Accessing

    def tests(self) -> list[Test]:
        """Tests in registration order."""
        return list(self._tests)

    def execution_order(self) -> list[Test]:
        return list(self._execution_order)

    def current_test(self) -> Test | None:
        return self._current_test

    def state(self) -> SuiteState:
        return self._state

    def before_hook(self) -> Hook | None:
        return self._before

    def after_hook(self) -> Hook | None:
        return self._after

    def all_failures_and_errors(self) -> list[Test]:
        return [test for test in self._tests if test.is_failure() or test.is_error()]

    # Private

    def _evaluate_definition(self) -> None:
        self._state = SuiteState.DEFINING
        outcome = self._body(self)
        if inspect.iscoroutine(outcome):
            outcome.close()
            raise ConfigurationError(
                f"Suite '{self.name}' has an asynchronous body. "
                "Suite bodies only declare tests and hooks, use a regular function."
            )

    def _validate_hook(self, hook_name: str, hook: Any, existing: Hook | None) -> None:
        if self._state in (SuiteState.RUNNING, SuiteState.FINISHED):
            raise ConfigurationError(
                f"Cannot register a {hook_name}() hook in suite '{self.name}': the suite is already running."
            )
        if existing is not None:
            raise ConfigurationError(
                f"There is already a {hook_name}() block in suite '{self.name}'. "
                f"Please leave just one {hook_name}() block and run again the tests."
            )
        if not callable(hook):
            raise ConfigurationError(
                f"The {hook_name}() hook in suite '{self.name}' must include a function. "
                f"Please provide a function or remove the {hook_name}() and run again the tests."
            )


def suite(name: str) -> Callable[[SuiteBody], TestSuite]:
    """Declare a suite from its definition function.

    The decorated name refers to the resulting :class:`TestSuite`, which is
    what test-file discovery collects.
    """

    def decorator(body: SuiteBody) -> TestSuite:
        return TestSuite(name, body)

    return decorator
