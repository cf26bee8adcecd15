"""Assertion engine: comparisons, their evaluation and the fluent API."""

from testy.assertions.assertion import Assertion, AssertionTarget
from testy.assertions.base import AssertionOutcome
from testy.assertions.evaluation import evaluate

__all__ = ["Assertion", "AssertionOutcome", "AssertionTarget", "evaluate"]
