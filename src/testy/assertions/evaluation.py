"""Evaluation of comparisons into pass/fail outcomes."""

from __future__ import annotations

import operator
import re
from typing import Any

from testy.assertions.base import (
    AssertionOutcome,
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
from testy.assertions.equality import are_identical, deep_equals, is_indeterminate_identity
from testy.assertions.rendering import render

_NUMERIC_OPERATORS = {
    NumericOperator.GREATER_THAN: (operator.gt, "numeric_assertion_be_greater_than"),
    NumericOperator.GREATER_THAN_OR_EQUAL: (
        operator.ge,
        "numeric_assertion_be_greater_than_or_equal_to",
    ),
    NumericOperator.LESS_THAN: (operator.lt, "numeric_assertion_be_less_than"),
    NumericOperator.LESS_THAN_OR_EQUAL: (
        operator.le,
        "numeric_assertion_be_less_than_or_equal_to",
    ),
}

_INCLUSION_KEYS = {
    InclusionMode.INCLUDES: "inclusion_assertion_include",
    InclusionMode.DOES_NOT_INCLUDE: "inclusion_assertion_not_include",
    InclusionMode.INCLUDED_IN: "inclusion_assertion_be_included_in",
    InclusionMode.NOT_INCLUDED_IN: "inclusion_assertion_not_be_included_in",
    InclusionMode.EXACTLY: "inclusion_assertion_include_exactly",
    InclusionMode.ALL_OF: "inclusion_assertion_include_all_of",
    InclusionMode.NONE_OF: "inclusion_assertion_include_none_of",
}


def _outcome(passed: bool, key: str, *params: Any) -> AssertionOutcome:
    if passed:
        return AssertionOutcome.success()
    return AssertionOutcome.failure(key, *params)


def check_equality(actual: Any, comparison: Equality) -> AssertionOutcome:
    equal = deep_equals(actual, comparison.expected, comparison.criteria)
    if comparison.negated:
        return _outcome(
            not equal,
            "equality_assertion_be_not_equal_to",
            render(actual),
            render(comparison.expected),
        )
    return _outcome(
        equal, "equality_assertion_be_equal_to", render(actual), render(comparison.expected)
    )


def check_identity(actual: Any, comparison: Identity) -> AssertionOutcome:
    if is_indeterminate_identity(actual, comparison.expected):
        return AssertionOutcome.failure("identity_assertion_failed_due_to_undetermination")

    identical = are_identical(actual, comparison.expected)
    if comparison.negated:
        return _outcome(
            not identical,
            "identity_assertion_be_not_identical_to",
            render(actual),
            render(comparison.expected),
        )
    return _outcome(
        identical,
        "identity_assertion_be_identical_to",
        render(actual),
        render(comparison.expected),
    )


def check_match(actual: Any, comparison: Match) -> AssertionOutcome:
    matched = re.search(comparison.pattern, actual) is not None
    if comparison.negated:
        return _outcome(
            not matched, "match_assertion_not_match", render(actual), render(comparison.pattern)
        )
    return _outcome(matched, "match_assertion_match", render(actual), render(comparison.pattern))


def check_truthiness(actual: Any, comparison: Truthiness) -> AssertionOutcome:
    if comparison.expected:
        return _outcome(actual is True, "boolean_assertion_be_true", render(actual))
    return _outcome(actual is False, "boolean_assertion_be_false", render(actual))


def check_nothing(actual: Any, comparison: Nothing) -> AssertionOutcome:
    if comparison.negated:
        return _outcome(actual is not None, "nothing_assertion_be_not_nothing", render(actual))
    return _outcome(actual is None, "nothing_assertion_be_nothing", render(actual))


def _contains(container: Any, item: Any) -> bool:
    if isinstance(container, str):
        return isinstance(item, str) and item in container
    if isinstance(container, dict):
        if isinstance(item, dict):
            return all(k in container and deep_equals(container[k], v) for k, v in item.items())
        return item in container
    return any(deep_equals(element, item) for element in container)


def _includes_exactly(actual: Any, expected: Any) -> bool:
    remaining = list(actual)
    for item in expected:
        for index, candidate in enumerate(remaining):
            if deep_equals(candidate, item):
                del remaining[index]
                break
        else:
            return False
    return not remaining


def check_inclusion(actual: Any, comparison: Inclusion) -> AssertionOutcome:
    expected = comparison.expected
    mode = comparison.mode
    if mode is InclusionMode.INCLUDES:
        passed = _contains(actual, expected)
    elif mode is InclusionMode.DOES_NOT_INCLUDE:
        passed = not _contains(actual, expected)
    elif mode is InclusionMode.INCLUDED_IN:
        passed = _contains(expected, actual)
    elif mode is InclusionMode.NOT_INCLUDED_IN:
        passed = not _contains(expected, actual)
    elif mode is InclusionMode.EXACTLY:
        passed = _includes_exactly(actual, expected)
    elif mode is InclusionMode.ALL_OF:
        passed = all(_contains(actual, item) for item in expected)
    elif mode is InclusionMode.NONE_OF:
        passed = not any(_contains(actual, item) for item in expected)
    else:
        raise ValueError(f"Unknown inclusion mode: '{mode}'")
    return _outcome(passed, _INCLUSION_KEYS[mode], render(actual), render(expected))


def check_emptiness(actual: Any, comparison: Emptiness) -> AssertionOutcome:
    empty = len(actual) == 0
    if comparison.negated:
        return _outcome(not empty, "emptiness_assertion_be_not_empty", render(actual))
    return _outcome(empty, "emptiness_assertion_be_empty", render(actual))


def check_size(actual: Any, comparison: Size) -> AssertionOutcome:
    size = len(actual)
    return _outcome(
        size == comparison.expected,
        "size_assertion_have_size",
        render(actual),
        comparison.expected,
        size,
    )


def check_numeric(actual: Any, comparison: NumericCompare) -> AssertionOutcome:
    if comparison.operator is NumericOperator.NEARLY_EQUAL:
        passed = round(abs(actual - comparison.expected), comparison.precision) == 0
        return _outcome(
            passed,
            "equality_assertion_be_nearly_equal_to",
            render(actual),
            render(comparison.expected),
            comparison.precision,
        )
    compare, key = _NUMERIC_OPERATORS[comparison.operator]
    return _outcome(
        bool(compare(actual, comparison.expected)),
        key,
        render(actual),
        render(comparison.expected),
    )


def _matches_error(error: BaseException, expected: Any) -> bool:
    if expected is None:
        return True
    if isinstance(expected, type) and issubclass(expected, BaseException):
        return isinstance(error, expected)
    if isinstance(expected, BaseException):
        return type(error) is type(expected) and deep_equals(list(error.args), list(expected.args))
    if isinstance(expected, (str, re.Pattern)):
        return re.search(expected, str(error)) is not None
    raise TypeError(f"Cannot match a raised error against {render(expected)}")


def check_exception(actual: Any, comparison: ExceptionExpectation) -> AssertionOutcome:
    if not callable(actual):
        raise TypeError(f"Expected a callable to check for errors, got {render(actual)}")

    try:
        actual()
    except Exception as error:
        raised: Exception | None = error
    else:
        raised = None

    expected = comparison.expected
    if comparison.mode is RaiseMode.RAISES:
        if raised is None:
            return AssertionOutcome.failure("exception_assertion_raise_nothing", render(expected))
        return _outcome(
            _matches_error(raised, expected),
            "exception_assertion_raise",
            render(expected),
            render(raised),
        )
    if comparison.mode is RaiseMode.DOES_NOT_RAISE:
        if raised is None:
            return AssertionOutcome.success()
        if not _matches_error(raised, expected):
            raise raised
        return AssertionOutcome.failure(
            "exception_assertion_not_raise", render(expected), render(raised)
        )
    if raised is None:
        return AssertionOutcome.success()
    return AssertionOutcome.failure("exception_assertion_not_raise_any", render(raised))


def evaluate(actual: Any, comparison: Comparison) -> AssertionOutcome:
    """Dispatch a comparison to its checker.

    Raises ValueError for comparisons outside the supported set. Any other
    exception raised while comparing (e.g. ``len()`` of a number) propagates
    unchanged so the test records it as an error rather than a failure.
    """
    if isinstance(comparison, Equality):
        return check_equality(actual, comparison)
    elif isinstance(comparison, Identity):
        return check_identity(actual, comparison)
    elif isinstance(comparison, Match):
        return check_match(actual, comparison)
    elif isinstance(comparison, Truthiness):
        return check_truthiness(actual, comparison)
    elif isinstance(comparison, Nothing):
        return check_nothing(actual, comparison)
    elif isinstance(comparison, Inclusion):
        return check_inclusion(actual, comparison)
    elif isinstance(comparison, Emptiness):
        return check_emptiness(actual, comparison)
    elif isinstance(comparison, Size):
        return check_size(actual, comparison)
    elif isinstance(comparison, NumericCompare):
        return check_numeric(actual, comparison)
    elif isinstance(comparison, ExceptionExpectation):
        return check_exception(actual, comparison)
    raise ValueError(f"Unknown comparison type: '{type(comparison).__name__}'")
