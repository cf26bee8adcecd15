"""Observer that prints run progress through the formatter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from testy.metrics import duration_stats
from testy.observer import RunObserver
from testy.reporting.formatter import Formatter

if TYPE_CHECKING:
    from testy.config import Configuration
    from testy.runner import Runner
    from testy.suite import TestSuite
    from testy.test import Test


class ConsoleReporter(RunObserver):
    """Prints progress and summaries through a :class:`Formatter`."""

    def __init__(
        self,
        formatter: Formatter,
        configuration: Configuration,
        paths: Sequence[str],
        show_durations: bool = False,
    ):
        self.formatter = formatter
        self.configuration = configuration
        self.paths = list(paths)
        self.show_durations = show_durations

    def on_run_start(self) -> None:
        self.formatter.display_initial_information(self.configuration, self.paths)

    def on_suite_start(self, suite: TestSuite) -> None:
        self.formatter.display_suite_start(suite)

    def on_suite_finish(self, suite: TestSuite) -> None:
        self.formatter.display_suite_end(suite)

    def on_test_result(self, test: Test) -> None:
        self.formatter.display_test_result(test)

    def on_run_finish(self, runner: Runner) -> None:
        self.formatter.display_runner_end(runner)
        if self.show_durations:
            self.formatter.display_duration_stats(duration_stats(runner.suites()))
