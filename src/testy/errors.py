"""Error types and the internal control signals used while running tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from testy.i18n import I18nMessage


class TestyError(Exception):
    """Base class for errors raised by the framework itself."""

    __test__ = False


class ConfigurationError(TestyError):
    """An invalid suite/test declaration or an invalid configuration.

    Always fatal to the run: it is never recorded as a test outcome.
    """


class LifecycleError(TestyError):
    """A test or suite was used outside of its lifecycle (e.g. run twice)."""


class TestSignal(BaseException):
    """Base for signals raised inside a test body and caught at the test boundary.

    The outcome is already recorded on the test when a signal is raised; the
    signal only ends the body early.
    """

    __test__ = False


class AssertionFailed(TestSignal):
    def __init__(self, message: I18nMessage | str, location: str | None = None):
        super().__init__(message)
        self.message = message
        self.location = location


class ExplicitFailure(TestSignal):
    def __init__(self, message: I18nMessage | str, location: str | None = None):
        super().__init__(message)
        self.message = message
        self.location = location


class PendingSignal(TestSignal):
    def __init__(self, reason: str | None = None):
        super().__init__(reason)
        self.reason = reason
