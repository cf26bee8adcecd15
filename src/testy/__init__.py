"""A minimal testing framework: suites, hooks, readable assertions."""

from testy.assertions import Assertion, AssertionTarget
from testy.config import Configuration, load_configuration
from testy.context import RunContext
from testy.errors import ConfigurationError, LifecycleError, TestyError
from testy.observer import ObserverGroup, RunObserver
from testy.runner import Runner, SuiteRegistry
from testy.suite import TestSuite, suite
from testy.test import Test

__all__ = [
    "Assertion",
    "AssertionTarget",
    "Configuration",
    "ConfigurationError",
    "LifecycleError",
    "ObserverGroup",
    "RunContext",
    "RunObserver",
    "Runner",
    "SuiteRegistry",
    "Test",
    "TestSuite",
    "TestyError",
    "load_configuration",
    "suite",
]
