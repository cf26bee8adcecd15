"""Run configuration: the YAML file, its validation and CLI overrides."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml
from expandvars import ExpandvarsException, expandvars
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from testy.errors import ConfigurationError

if TYPE_CHECKING:
    from testy.test import Test

DEFAULT_CONFIG_FILE = ".testy.yaml"


class Language(str, Enum):
    EN = "en"
    ES = "es"


class Configuration(BaseModel):
    """Read-only settings consumed by the runner at run start."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    directory: str = "."
    filter: str = r"_test\.py$"
    language: Language = Language.EN
    fail_fast: bool = False
    random_order: bool = False
    seed: int | None = None
    suite_filter: str | None = None
    test_filter: str | None = None

    @field_validator("filter", "suite_filter", "test_filter")
    @classmethod
    def must_be_valid_regex(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"'{v}' is not a valid regular expression: {e}") from e
        return v

    def with_overrides(self, **overrides: Any) -> Configuration:
        """Return a copy where every override that is not None replaces the current value."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return Configuration(**values)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    def skip_predicate(self) -> Callable[[Test], bool]:
        """Build the predicate deciding which tests are skipped by name filters."""
        suite_pattern = re.compile(self.suite_filter) if self.suite_filter else None
        test_pattern = re.compile(self.test_filter) if self.test_filter else None

        def should_skip(test: Test) -> bool:
            if suite_pattern is not None:
                suite_name = test.suite.name if test.suite is not None else ""
                if not suite_pattern.search(suite_name):
                    return True
            if test_pattern is not None and not test_pattern.search(test.name):
                return True
            return False

        return should_skip

    def matches_file(self, path: Path) -> bool:
        return re.search(self.filter, path.name) is not None


def _expand(value: Any) -> Any:
    if isinstance(value, str):
        return expandvars(value, nounset=True)
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v) for v in value]
    return value


def load_configuration(path: Path | None = None) -> Configuration:
    """Load and validate a configuration from a YAML file.

    ``${VAR}`` and ``${VAR:-default}`` references in string values are
    expanded from the environment. A missing default file means defaults;
    an explicitly requested file that does not exist is an error.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.exists():
            return Configuration()
    elif not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    try:
        expanded = _expand(raw)
    except ExpandvarsException as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    try:
        return Configuration(**expanded)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}:\n{e}") from e
