"""Pytest configuration and fixtures."""

import asyncio
import logging

import pytest

from testy.context import RunContext
from testy.runner import Runner, SuiteRegistry
from testy.test import Test


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up testy loggers after each test to prevent name collisions."""
    yield

    # Remove all testy loggers from registry
    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("testy")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


# ---------------------------------------------------------------------------
# Run helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def run_single_test():
    """Run one test in a fresh context, optionally with hooks; returns the test."""

    def _run(body, *, before=None, after=None, context=None, name="just a test"):
        test = Test(name, body)
        ctx = context or RunContext()
        ctx.install_hooks(before, after)
        asyncio.run(test.run(ctx))
        return test

    return _run


@pytest.fixture
def result_of_a_test_with(run_single_test):
    """Result of a test whose body is ``body``."""

    def _result(body):
        return run_single_test(body).result()

    return _result


@pytest.fixture
def run_suites():
    """Run the given suites with a configuration; returns the runner."""

    def _run(*suites, configuration=None, observer=None):
        runner = Runner(SuiteRegistry(suites), configuration, observer)
        asyncio.run(runner.run())
        return runner

    return _run
