"""Terminal outcomes of a test run."""

from __future__ import annotations

from dataclasses import dataclass

from testy.i18n import I18nMessage


@dataclass(frozen=True)
class TestResult:
    """Base for every outcome a test can end with.

    Attributes:
        priority: Used to resolve conflicting signals within one run; a
            result only replaces the current one when its priority is
            strictly higher (error > failure > pending > success).
    """

    __test__ = False

    priority = 0

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return False

    def is_error(self) -> bool:
        return False

    def is_pending(self) -> bool:
        return False

    def is_skipped(self) -> bool:
        return False

    def detail(self) -> I18nMessage | str | None:
        """The message or reason shown under the status line, if any."""
        return None

    def location(self) -> str | None:
        return None


@dataclass(frozen=True)
class Success(TestResult):
    priority = 1

    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Pending(TestResult):
    reason: str | None = None
    explicit: bool = True

    priority = 2

    def is_pending(self) -> bool:
        return True

    def detail(self) -> str | None:
        return self.reason


@dataclass(frozen=True)
class Failure(TestResult):
    message: I18nMessage | str = I18nMessage.of("explicitly_failed")
    source: str | None = None

    priority = 3

    def is_failure(self) -> bool:
        return True

    def detail(self) -> I18nMessage | str:
        return self.message

    def location(self) -> str | None:
        return self.source


@dataclass(frozen=True)
class Error(TestResult):
    message: I18nMessage | str
    source: str | None = None
    exception: BaseException | None = None

    priority = 4

    def is_error(self) -> bool:
        return True

    def detail(self) -> I18nMessage | str:
        return self.message

    def location(self) -> str | None:
        return self.source

    @classmethod
    def from_exception(cls, exc: BaseException, source: str | None = None) -> Error:
        text = str(exc)
        message = f"{type(exc).__name__}: {text}" if text else type(exc).__name__
        return cls(message=message, source=source, exception=exc)


@dataclass(frozen=True)
class Skipped(TestResult):
    def is_skipped(self) -> bool:
        return True
