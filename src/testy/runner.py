"""Suite registry and the runner that executes registered suites in order."""

from __future__ import annotations

import logging
import time
from typing import Iterable

from testy.config import Configuration
from testy.context import RunContext
from testy.errors import LifecycleError
from testy.observer import RunObserver
from testy.suite import TestSuite
from testy.test import Test


class SuiteRegistry:
    """Ordered collection of the suites a run will execute."""

    def __init__(self, suites: Iterable[TestSuite] = ()):
        self._suites: list[TestSuite] = []
        for s in suites:
            self.register(s)

    def register(self, suite: TestSuite) -> TestSuite:
        self._suites.append(suite)
        return suite

    def suites(self) -> list[TestSuite]:
        return list(self._suites)

    def __len__(self) -> int:
        return len(self._suites)


class Runner:
    """Orchestrates a test run over every registered suite."""

    def __init__(
        self,
        registry: SuiteRegistry,
        configuration: Configuration | None = None,
        observer: RunObserver | None = None,
        logger: logging.Logger | None = None,
    ):
        self.registry = registry
        self.configuration = configuration or Configuration()
        self.observer = observer or RunObserver()
        self.logger = logger or logging.getLogger("testy")
        self.context: RunContext | None = None
        self.suites_run: list[TestSuite] = []
        self.elapsed_seconds = 0.0
        self._started = False

    async def run(self) -> None:
        """Run suites in registration order, one at a time.

        ConfigurationError raised while a suite declares its tests propagates:
        it is fatal to the whole run.
        """
        if self._started:
            raise LifecycleError("This runner has already run")
        self._started = True

        context = RunContext.from_configuration(
            self.configuration, observer=self.observer, logger=self.logger
        )
        self.context = context
        self.logger.debug(
            f"Starting run: {len(self.registry)} suite(s), fail_fast={context.fail_fast}, "
            f"random_order={context.random_order}, seed={context.seed}"
        )

        started = time.perf_counter()
        self.observer.on_run_start()
        for test_suite in self.registry.suites():
            if context.abort_requested:
                self.logger.debug(
                    f"Fail fast: not starting suite '{test_suite.name}'"
                )
                break
            await test_suite.run(context)
            self.suites_run.append(test_suite)
        self.elapsed_seconds = time.perf_counter() - started

        self.logger.debug(
            f"Run finished: {self.success_count()}/{self.total_count()} test(s) passed"
        )
        self.observer.on_run_finish(self)

    # Counting

    def total_count(self) -> int:
        return sum(s.total_count() for s in self.registry.suites())

    def success_count(self) -> int:
        return sum(s.success_count() for s in self.registry.suites())

    def pending_count(self) -> int:
        return sum(s.pending_count() for s in self.registry.suites())

    def errors_count(self) -> int:
        return sum(s.errors_count() for s in self.registry.suites())

    def skipped_count(self) -> int:
        return sum(s.skipped_count() for s in self.registry.suites())

    def failures_count(self) -> int:
        return sum(s.failures_count() for s in self.registry.suites())

    # Accessing

    def suites(self) -> list[TestSuite]:
        return self.registry.suites()

    def all_failures_and_errors(self) -> list[Test]:
        return [test for s in self.registry.suites() for test in s.all_failures_and_errors()]

    def has_errors_or_failures(self) -> bool:
        return len(self.all_failures_and_errors()) > 0

    def seed(self) -> int | None:
        return self.context.seed if self.context is not None else None

    def aborted(self) -> bool:
        """True when fail-fast left at least one suite out of the run."""
        return self._started and len(self.suites_run) < len(self.registry)

    def skipped_suites_count(self) -> int:
        return len(self.registry) - len(self.suites_run)
