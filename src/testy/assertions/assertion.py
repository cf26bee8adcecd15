"""The handle a test body receives to make assertions and signal outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from testy.assertions.base import (
    Comparison,
    Emptiness,
    Equality,
    ExceptionExpectation,
    Identity,
    Inclusion,
    InclusionMode,
    Match,
    Nothing,
    NumericCompare,
    NumericOperator,
    RaiseMode,
    Size,
    Truthiness,
)
from testy.assertions.equality import Criteria
from testy.assertions.evaluation import evaluate
from testy.i18n import I18nMessage

if TYPE_CHECKING:
    from testy.test import Test


class AssertionTarget:
    """The actual value under test, bound to the test that records the outcome."""

    def __init__(self, actual: Any, test: Test):
        self._actual = actual
        self._test = test

    def _check(self, comparison: Comparison) -> None:
        self._test.report_outcome(evaluate(self._actual, comparison))

    # equality

    def is_equal_to(self, expected: Any, criteria: Criteria | None = None) -> None:
        self._check(Equality(expected, criteria=criteria))

    def is_not_equal_to(self, expected: Any, criteria: Criteria | None = None) -> None:
        self._check(Equality(expected, negated=True, criteria=criteria))

    def is_nearly_equal_to(self, expected: float, precision: int = 4) -> None:
        self._check(NumericCompare(expected, NumericOperator.NEARLY_EQUAL, precision))

    # identity

    def is_identical_to(self, expected: Any) -> None:
        self._check(Identity(expected))

    def is_not_identical_to(self, expected: Any) -> None:
        self._check(Identity(expected, negated=True))

    # strings

    def matches(self, pattern: Any) -> None:
        self._check(Match(pattern))

    def does_not_match(self, pattern: Any) -> None:
        self._check(Match(pattern, negated=True))

    # booleans and None

    def is_true(self) -> None:
        self._check(Truthiness(True))

    def is_false(self) -> None:
        self._check(Truthiness(False))

    def is_nothing(self) -> None:
        self._check(Nothing())

    def is_not_nothing(self) -> None:
        self._check(Nothing(negated=True))

    # collections

    def includes(self, expected: Any) -> None:
        self._check(Inclusion(expected, InclusionMode.INCLUDES))

    def does_not_include(self, expected: Any) -> None:
        self._check(Inclusion(expected, InclusionMode.DOES_NOT_INCLUDE))

    def is_included_in(self, container: Any) -> None:
        self._check(Inclusion(container, InclusionMode.INCLUDED_IN))

    def is_not_included_in(self, container: Any) -> None:
        self._check(Inclusion(container, InclusionMode.NOT_INCLUDED_IN))

    def includes_exactly(self, *expected: Any) -> None:
        self._check(Inclusion(list(expected), InclusionMode.EXACTLY))

    def includes_all_of(self, expected: Iterable[Any]) -> None:
        self._check(Inclusion(list(expected), InclusionMode.ALL_OF))

    def includes_none_of(self, expected: Iterable[Any]) -> None:
        self._check(Inclusion(list(expected), InclusionMode.NONE_OF))

    def is_empty(self) -> None:
        self._check(Emptiness())

    def is_not_empty(self) -> None:
        self._check(Emptiness(negated=True))

    def has_size(self, expected: int) -> None:
        self._check(Size(expected))

    # numbers

    def is_greater_than(self, expected: Any) -> None:
        self._check(NumericCompare(expected, NumericOperator.GREATER_THAN))

    def is_greater_than_or_equal_to(self, expected: Any) -> None:
        self._check(NumericCompare(expected, NumericOperator.GREATER_THAN_OR_EQUAL))

    def is_less_than(self, expected: Any) -> None:
        self._check(NumericCompare(expected, NumericOperator.LESS_THAN))

    def is_less_than_or_equal_to(self, expected: Any) -> None:
        self._check(NumericCompare(expected, NumericOperator.LESS_THAN_OR_EQUAL))

    # errors

    def raises(self, expected: Any) -> None:
        self._check(ExceptionExpectation(expected, RaiseMode.RAISES))

    def does_not_raise(self, expected: Any) -> None:
        self._check(ExceptionExpectation(expected, RaiseMode.DOES_NOT_RAISE))

    def does_not_raise_any_errors(self) -> None:
        self._check(ExceptionExpectation(None, RaiseMode.DOES_NOT_RAISE_ANY))


class Assertion:
    """Passed to every test body.

    Usage::

        @s.test("adds numbers")
        def _(t):
            t.that(1 + 1).is_equal_to(2)
    """

    def __init__(self, test: Test):
        self._test = test

    def that(self, actual: Any) -> AssertionTarget:
        return AssertionTarget(actual, self._test)

    def fail(self, message: str | None = None) -> None:
        """End the test with a failure. Without a message a default text is used."""
        self._test.report_failure(message if message else I18nMessage.of("explicitly_failed"))

    def pending(self, reason: str | None = None) -> None:
        """End the test as a work in progress."""
        self._test.report_pending(reason)

    # shortcuts

    def are_equal(self, actual: Any, expected: Any, criteria: Criteria | None = None) -> None:
        self.that(actual).is_equal_to(expected, criteria)

    def are_not_equal(self, actual: Any, expected: Any, criteria: Criteria | None = None) -> None:
        self.that(actual).is_not_equal_to(expected, criteria)

    def are_identical(self, actual: Any, expected: Any) -> None:
        self.that(actual).is_identical_to(expected)

    def are_not_identical(self, actual: Any, expected: Any) -> None:
        self.that(actual).is_not_identical_to(expected)

    def is_matching(self, actual: Any, pattern: Any) -> None:
        self.that(actual).matches(pattern)

    def is_true(self, actual: Any) -> None:
        self.that(actual).is_true()

    def is_false(self, actual: Any) -> None:
        self.that(actual).is_false()

    def is_nothing(self, actual: Any) -> None:
        self.that(actual).is_nothing()

    def is_not_nothing(self, actual: Any) -> None:
        self.that(actual).is_not_nothing()

    def is_empty(self, actual: Any) -> None:
        self.that(actual).is_empty()

    def is_not_empty(self, actual: Any) -> None:
        self.that(actual).is_not_empty()
