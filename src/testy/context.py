"""Mutable state threaded through one run."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from testy.observer import RunObserver

if TYPE_CHECKING:
    from testy.config import Configuration
    from testy.test import Test

Hook = Callable[[], Any]
SkipPredicate = Callable[["Test"], bool]


def _never_skip(test: Test) -> bool:
    return False


@dataclass
class Hooks:
    before: Hook | None = None
    after: Hook | None = None


@dataclass
class RunContext:
    """Owned by the runner and handed by reference to every suite and test.

    Only the currently running suite or test mutates it; runs are strictly
    sequential so no locking is involved.
    """

    fail_fast: bool = False
    random_order: bool = False
    seed: int | None = None
    skip_predicate: SkipPredicate = _never_skip
    observer: RunObserver = field(default_factory=RunObserver)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("testy"))
    hooks: Hooks = field(default_factory=Hooks)
    abort_requested: bool = False
    rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        if self.seed is None:
            self.seed = random.SystemRandom().randrange(2**32)
        self.rng = random.Random(self.seed)

    @classmethod
    def from_configuration(
        cls,
        configuration: Configuration,
        observer: RunObserver | None = None,
        logger: logging.Logger | None = None,
    ) -> RunContext:
        return cls(
            fail_fast=configuration.fail_fast,
            random_order=configuration.random_order,
            seed=configuration.seed,
            skip_predicate=configuration.skip_predicate(),
            observer=observer or RunObserver(),
            logger=logger or logging.getLogger("testy"),
        )

    def should_skip(self, test: Test) -> bool:
        return self.skip_predicate(test)

    def install_hooks(self, before: Hook | None, after: Hook | None) -> None:
        self.hooks = Hooks(before=before, after=after)

    def request_abort(self) -> None:
        if self.fail_fast and not self.abort_requested:
            self.logger.debug("Fail fast: abort requested, no further suites will start")
            self.abort_requested = True
