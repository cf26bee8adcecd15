"""Locate test files and collect the suites they declare."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Iterable

from testy.config import Configuration
from testy.errors import ConfigurationError
from testy.suite import TestSuite


def find_test_files(paths: Iterable[Path], configuration: Configuration) -> list[Path]:
    """Expand files and directories into the sorted list of matching test files."""
    found: list[Path] = []
    for path in paths:
        if not path.exists():
            raise ConfigurationError(f"Path not found: {path}")
        if path.is_file():
            candidates = [path]
        else:
            candidates = sorted(f for f in path.rglob("*.py") if f.is_file())
        for candidate in candidates:
            if configuration.matches_file(candidate) and candidate.resolve() not in found:
                found.append(candidate.resolve())
    return found


def _module_name_for(path: Path) -> str:
    # note: unique per path so test files with the same name do not collide
    digest = hashlib.sha1(str(path).encode()).hexdigest()[:10]
    return f"testy_loaded_{path.stem}_{digest}"


def load_module_suites(path: Path) -> list[TestSuite]:
    """Import a test file in isolation and return its suites in definition order."""
    module_name = _module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot load test file: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        raise

    suites: list[TestSuite] = []
    for value in vars(module).values():
        if isinstance(value, TestSuite) and value not in suites:
            suites.append(value)
    return suites


def load_suites(
    paths: Iterable[Path],
    configuration: Configuration,
    logger: logging.Logger | None = None,
) -> list[TestSuite]:
    if logger is None:
        logger = logging.getLogger("testy")

    suites: list[TestSuite] = []
    for path in find_test_files(paths, configuration):
        logger.debug(f"Loading test file {path}")
        loaded = load_module_suites(path)
        logger.debug(f"Found {len(loaded)} suite(s) in {path}")
        for s in loaded:
            # a suite imported from another test file is only run once
            if s not in suites:
                suites.append(s)
    return suites
