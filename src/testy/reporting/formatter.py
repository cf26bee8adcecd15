"""Console rendering of run progress and summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Sequence

import typer

from testy.i18n import I18n, I18nMessage

if TYPE_CHECKING:
    from testy.config import Configuration
    from testy.metrics import MetricStatistics
    from testy.runner import Runner
    from testy.suite import TestSuite
    from testy.test import Test

CONSOLE_WIDTH = 80

Echo = Callable[[str], Any]


class Formatter:
    def __init__(self, i18n: I18n, echo: Echo = typer.echo, color: bool = True):
        self.i18n = i18n
        self._echo = echo
        self._color = color
        self._file_filter = ""

    # run

    def display_initial_information(
        self, configuration: Configuration, paths: Sequence[str]
    ) -> None:
        self._file_filter = configuration.filter
        self._display_separator()
        self._echo(self._styled(self._t("starting_testy"), bold=True))

        labels = [
            (self._t("running_tests_in"), ", ".join(paths)),
            (self._t("fail_fast"), self._human_boolean(configuration.fail_fast)),
            (self._t("random_order"), self._human_boolean(configuration.random_order)),
        ]
        if configuration.random_order and configuration.seed is not None:
            labels.append((self._t("seed"), str(configuration.seed)))
        padding = max(len(label) for label, _ in labels)
        for label, value in labels:
            self._echo(f"{label.ljust(padding)} : {value}")
        self._display_separator()

    def display_runner_end(self, runner: Runner) -> None:
        self._display_errors_and_failures_summary(runner)
        self._display_general_summary(runner)

    def display_duration_stats(self, stats: MetricStatistics) -> None:
        if stats.avg is None:
            return
        self._echo(
            self._t("duration_stats", stats.avg, stats.min, stats.max, stats.stddev)
        )

    def display_error(self, message: I18nMessage | str) -> None:
        self._echo(self._styled(self.i18n.render(message), fg="red"))

    def display_warning(self, message: I18nMessage | str) -> None:
        self._echo(self._styled(self.i18n.render(message), fg="yellow"))

    # suites

    def display_suite_start(self, suite: TestSuite) -> None:
        self._echo(f"\n{suite.name}:")
        self._display_separator("-")

    def display_suite_end(self, suite: TestSuite) -> None:
        self._display_separator("-")
        self._echo(f"{self._t('summary_of')} {suite.name}:")
        self._display_count_for(suite)
        self._display_separator()

    # test results

    def display_success_result(self, test: Test) -> None:
        self._display_result(self._t("ok"), test, "green")

    def display_pending_result(self, test: Test) -> None:
        self._display_result(self._t("wip"), test, "yellow")
        if test.is_explicitly_marked_pending():
            self._display_result_detail(test.result().detail())

    def display_skipped_result(self, test: Test) -> None:
        self._display_result(self._t("skip"), test, "bright_black")

    def display_failure_result(self, test: Test, fail_type: str = "fail") -> None:
        result = test.result()
        self._display_result(self._t(fail_type), test, "red")
        self._display_result_detail(result.detail())
        self._display_result_detail(result.location())

    def display_error_result(self, test: Test) -> None:
        self.display_failure_result(test, "error")

    def display_test_result(self, test: Test) -> None:
        if test.is_success():
            self.display_success_result(test)
        elif test.is_pending():
            self.display_pending_result(test)
        elif test.is_skipped():
            self.display_skipped_result(test)
        elif test.is_error():
            self.display_error_result(test)
        else:
            self.display_failure_result(test)

    # private

    def _display_result(self, status: str, test: Test, color: str) -> None:
        label = self._styled(status, fg=color, bold=True)
        self._echo(f"[{label}] {self._styled(test.name, fg=color)}")

    def _display_result_detail(self, detail: I18nMessage | str | None) -> None:
        text = self.i18n.render(detail)
        if text:
            self._echo(f"  => {text}")

    def _display_errors_and_failures_summary(self, runner: Runner) -> None:
        if runner.has_errors_or_failures():
            self._echo(f"\n{self._t('failures_summary')}")
            for test in runner.all_failures_and_errors():
                self.display_failure_result(test, "fail" if test.is_failure() else "error")
            self._display_separator()

    def _display_general_summary(self, runner: Runner) -> None:
        self._echo(f"\n{self._t('total')}")
        self._display_count_for(runner)
        if runner.aborted():
            self.display_warning(
                I18nMessage.of("aborted_by_fail_fast", runner.skipped_suites_count())
            )
        self._echo(f"{self._t('total_time')}: {runner.elapsed_seconds:.3f}s")
        self._display_separator()

    def _display_count_for(self, counted: TestSuite | Runner) -> None:
        total = counted.total_count()
        parts = [
            self._t("tests_count", total),
            self._display_if_non_zero(counted.success_count(), self._t("passed"), "green"),
            self._display_if_non_zero(counted.failures_count(), self._t("failed"), "red"),
            self._display_if_non_zero(counted.errors_count(), self._t("errors"), "red"),
            self._display_if_non_zero(counted.pending_count(), self._t("pending"), "yellow"),
            self._display_if_non_zero(counted.skipped_count(), self._t("skipped"), "yellow"),
        ]
        self._echo("".join(parts))
        if total == 0:
            self._echo(
                self._styled(
                    "\n" + self._t("zero_tests_warning", self._file_filter), fg="yellow"
                )
            )

    def _display_if_non_zero(self, quantity: int, word: str, color: str) -> str:
        if quantity <= 0:
            return ""
        return f", {self._styled(f'{quantity} {word}', fg=color)}"

    def _display_separator(self, character: str = "=") -> None:
        self._echo(character * CONSOLE_WIDTH)

    def _styled(self, text: str, fg: str | None = None, bold: bool | None = None) -> str:
        if not self._color:
            return text
        return typer.style(text, fg=fg, bold=bold)

    def _human_boolean(self, value: bool) -> str:
        return self._t("yes") if value else self._t("no")

    def _t(self, key: str, *params: Any) -> str:
        return self.i18n.translate(key, *params)
