"""Structural equality and identity rules used by the assertion engine."""

from __future__ import annotations

from typing import Any, Callable

Criteria = Callable[[Any, Any], bool] | str

_SCALARS = (int, float, complex, str, bytes, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)


def _has_custom_eq(value: Any) -> bool:
    return type(value).__eq__ is not object.__eq__


def deep_equals(actual: Any, expected: Any, criteria: Criteria | None = None) -> bool:
    """Compare two values field-by-field / element-by-element.

    ``criteria`` replaces the default comparison: either a two-argument
    callable, or the name of an attribute (or zero-argument method) whose
    values are compared instead.
    """
    if criteria is not None:
        return _compare_with_criteria(actual, expected, criteria)
    return _deep_equals(actual, expected, set())


def _compare_with_criteria(actual: Any, expected: Any, criteria: Criteria) -> bool:
    if callable(criteria):
        return bool(criteria(actual, expected))
    left = getattr(actual, criteria)
    right = getattr(expected, criteria)
    if callable(left) and callable(right):
        left, right = left(), right()
    return _deep_equals(left, right, set())


def _deep_equals(actual: Any, expected: Any, visiting: set[tuple[int, int]]) -> bool:
    if actual is expected:
        return True
    if isinstance(actual, _SCALARS) or isinstance(expected, _SCALARS):
        if _is_number(actual) and _is_number(expected):
            return actual == expected
        return type(actual) is type(expected) and actual == expected

    pair = (id(actual), id(expected))
    if pair in visiting:
        return True
    visiting = visiting | {pair}

    if isinstance(actual, dict) and isinstance(expected, dict):
        if actual.keys() != expected.keys():
            return False
        return all(_deep_equals(actual[k], expected[k], visiting) for k in actual)
    if isinstance(actual, (list, tuple)) and isinstance(expected, (list, tuple)):
        if type(actual) is not type(expected) or len(actual) != len(expected):
            return False
        return all(_deep_equals(a, e, visiting) for a, e in zip(actual, expected))
    if isinstance(actual, (set, frozenset)) and isinstance(expected, (set, frozenset)):
        return actual == expected
    if type(actual) is not type(expected):
        return False
    if _has_custom_eq(actual):
        return bool(actual == expected)
    if hasattr(actual, "__dict__") and hasattr(expected, "__dict__"):
        return _deep_equals(vars(actual), vars(expected), visiting)
    return False


def is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALARS)


def are_identical(actual: Any, expected: Any) -> bool:
    """Scalars are identical when they have the same type and value; anything else by reference."""
    if actual is expected:
        return True
    if is_scalar(actual) and is_scalar(expected):
        return type(actual) is type(expected) and actual == expected
    return actual is expected


def is_indeterminate_identity(actual: Any, expected: Any) -> bool:
    """Identity of the absent value with itself is not a meaningful question."""
    return actual is None and expected is None
