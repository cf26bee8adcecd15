"""Callbacks the engine invokes while a run progresses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from testy.runner import Runner
    from testy.suite import TestSuite
    from testy.test import Test


class RunObserver:
    """No-op observer. Reporters override the callbacks they care about."""

    def on_run_start(self) -> None:
        pass

    def on_suite_start(self, suite: TestSuite) -> None:
        pass

    def on_suite_finish(self, suite: TestSuite) -> None:
        pass

    def on_test_result(self, test: Test) -> None:
        pass

    def on_run_finish(self, runner: Runner) -> None:
        pass


class ObserverGroup(RunObserver):
    """Forwards every callback to each observer, in order."""

    def __init__(self, observers: Iterable[RunObserver] = ()):
        self.observers = list(observers)

    def add(self, observer: RunObserver) -> None:
        self.observers.append(observer)

    def on_run_start(self) -> None:
        for observer in self.observers:
            observer.on_run_start()

    def on_suite_start(self, suite: TestSuite) -> None:
        for observer in self.observers:
            observer.on_suite_start(suite)

    def on_suite_finish(self, suite: TestSuite) -> None:
        for observer in self.observers:
            observer.on_suite_finish(suite)

    def on_test_result(self, test: Test) -> None:
        for observer in self.observers:
            observer.on_test_result(test)

    def on_run_finish(self, runner: Runner) -> None:
        for observer in self.observers:
            observer.on_run_finish(runner)
