"""Base reporter interface."""

import math
from abc import ABC, abstractmethod

from strbench.core.exceptions import ReportError
from strbench.harness import ComparisonResult
from strbench.performance.benchmark import BenchmarkResult

# (threshold in seconds, unit label, multiplier)
TIME_UNITS: list[tuple[float, str, float]] = [
    (1.0, "s", 1.0),
    (1e-3, "ms", 1e3),
    (1e-6, "µs", 1e6),
]


def format_time(seconds: float) -> str:
    """Format a duration with the largest unit that keeps it >= 1."""
    magnitude = abs(seconds)
    for threshold, unit, multiplier in TIME_UNITS:
        if magnitude >= threshold:
            return f"{seconds * multiplier:.6f} {unit}"
    return f"{seconds * 1e9:.6f} ns"


def validate_statistics(result: BenchmarkResult) -> None:
    """Check that a result carries a finite mean and quantile pair.

    Raises:
        ReportError: If the statistics are not in the expected shape.
    """
    stats = result.statistics
    bounds = getattr(stats, "quantile_bounds", None)
    if not isinstance(bounds, tuple) or len(bounds) != 2:
        raise ReportError(f"{result.name}: missing quantile bounds")
    values = (stats.mean, *bounds)
    if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in values):
        raise ReportError(f"{result.name}: non-finite statistics {values}")


class Reporter(ABC):
    """Base class for reporters.

    Reporters format and output comparison results in various formats.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the reporter name."""

    @abstractmethod
    def report(self, comparison: ComparisonResult) -> None:
        """Generate and output the report.

        Args:
            comparison: Benchmark results for every candidate.
        """
