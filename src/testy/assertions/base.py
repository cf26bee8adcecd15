"""Base data structures for the assertion engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from testy.assertions.equality import Criteria
from testy.i18n import I18nMessage


@dataclass(frozen=True)
class AssertionOutcome:
    """Result of evaluating a single comparison.

    Attributes:
        passed: Whether the comparison held.
        message: Failure description (stable key plus rendered operands).
            ``None`` when the comparison passed.
    """

    passed: bool
    message: I18nMessage | None = None

    @classmethod
    def success(cls) -> AssertionOutcome:
        return cls(passed=True)

    @classmethod
    def failure(cls, key: str, *params: Any) -> AssertionOutcome:
        return cls(passed=False, message=I18nMessage.of(key, *params))


class InclusionMode(str, Enum):
    INCLUDES = "includes"
    DOES_NOT_INCLUDE = "does_not_include"
    INCLUDED_IN = "included_in"
    NOT_INCLUDED_IN = "not_included_in"
    EXACTLY = "exactly"
    ALL_OF = "all_of"
    NONE_OF = "none_of"


class NumericOperator(str, Enum):
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    NEARLY_EQUAL = "~="


class RaiseMode(str, Enum):
    RAISES = "raises"
    DOES_NOT_RAISE = "does_not_raise"
    DOES_NOT_RAISE_ANY = "does_not_raise_any"


@dataclass(frozen=True)
class Comparison:
    """Marker base for the closed set of comparisons ``evaluate`` understands."""


@dataclass(frozen=True)
class Equality(Comparison):
    expected: Any
    negated: bool = False
    criteria: Criteria | None = None


@dataclass(frozen=True)
class Identity(Comparison):
    expected: Any
    negated: bool = False


@dataclass(frozen=True)
class Match(Comparison):
    pattern: Any
    negated: bool = False


@dataclass(frozen=True)
class Truthiness(Comparison):
    expected: bool


@dataclass(frozen=True)
class Nothing(Comparison):
    negated: bool = False


@dataclass(frozen=True)
class Inclusion(Comparison):
    expected: Any
    mode: InclusionMode = InclusionMode.INCLUDES


@dataclass(frozen=True)
class Emptiness(Comparison):
    negated: bool = False


@dataclass(frozen=True)
class Size(Comparison):
    expected: int


@dataclass(frozen=True)
class NumericCompare(Comparison):
    expected: Any
    operator: NumericOperator
    precision: int = 4


@dataclass(frozen=True)
class ExceptionExpectation(Comparison):
    expected: Any = None
    mode: RaiseMode = RaiseMode.RAISES
