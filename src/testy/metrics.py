"""Duration statistics over the tests of a run."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from testy.suite import TestSuite


@dataclass
class MetricStatistics:
    """Statistics for a numeric metric (e.g. test durations)."""

    avg: float | None
    min: float | None
    max: float | None
    stddev: float | None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


def compute_stats(values: list[float | int | None]) -> MetricStatistics:
    """Compute avg, min, max, stddev for a list of numeric values."""
    nums = [v for v in values if v is not None]
    if not nums:
        return MetricStatistics(avg=None, min=None, max=None, stddev=None)

    arr = np.array(nums)
    return MetricStatistics(
        avg=round(float(np.mean(arr)), 4),
        min=round(float(np.min(arr)), 4),
        max=round(float(np.max(arr)), 4),
        stddev=round(float(np.std(arr)), 4),
    )


def duration_stats(suites: list[TestSuite]) -> MetricStatistics:
    """Duration statistics over the tests that actually executed a body."""
    durations = [
        test.duration()
        for s in suites
        for test in s.tests()
        if not test.is_skipped() and not (test.is_pending() and not test.is_explicitly_marked_pending())
    ]
    return compute_stats(durations)
