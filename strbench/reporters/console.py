"""Console reporter for terminal output."""

import sys
from io import StringIO
from typing import TextIO

from strbench.candidates import Workload
from strbench.harness import ComparisonResult
from strbench.performance.benchmark import BenchmarkResult
from strbench.reporters.base import Reporter, format_time
from strbench.statistics import StabilityLevel

_OUTLIER_LABELS = {
    "low_severe": "low-severe",
    "low_mild": "low-mild",
    "high_mild": "high-mild",
    "high_severe": "high-severe",
}


class ConsoleReporter(Reporter):
    """Reporter that writes benchmark statistics to the terminal.

    Each candidate is reported as soon as its benchmark finishes
    (``write_result``); ``write_summary`` closes the run with the raw
    means of all candidates.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        use_colors: bool = True,
        verbose: bool = False,
    ) -> None:
        """Initialize the console reporter.

        Args:
            output: Output stream (defaults to sys.stdout).
            use_colors: Whether to use ANSI color codes.
            verbose: Whether to show stability and outlier details.
        """
        self._output = output or sys.stdout
        self._use_colors = use_colors and self._supports_color()
        self._verbose = verbose

    @property
    def name(self) -> str:
        """Return the reporter name."""
        return "console"

    def _supports_color(self) -> bool:
        """Check if the output stream is a terminal."""
        if isinstance(self._output, StringIO):
            return False
        if not hasattr(self._output, "isatty"):
            return False
        return self._output.isatty()

    def _color(self, text: str, color_code: str) -> str:
        if not self._use_colors:
            return text
        return f"\033[{color_code}m{text}\033[0m"

    def _bold(self, text: str) -> str:
        return self._color(text, "1")

    def _yellow(self, text: str) -> str:
        return self._color(text, "33")

    def _red(self, text: str) -> str:
        return self._color(text, "31")

    def _write(self, text: str = "") -> None:
        self._output.write(text + "\n")

    def report(self, comparison: ComparisonResult) -> None:
        """Write the full report for a finished comparison."""
        self.write_header(comparison.workload)
        for result in comparison.results:
            self.write_result(result)
        self.write_summary(comparison)

    def write_header(self, workload: Workload) -> None:
        self._write(self._bold("String concatenation benchmark"))
        self._write(f"Workload: {workload.describe()}")

    def write_result(self, result: BenchmarkResult) -> None:
        """Write the statistics block for one candidate."""
        stats = result.statistics
        lower_pct, upper_pct = (level * 100 for level in stats.quantile_levels)

        self._write()
        self._write(self._bold(f"{result.name}:"))
        self._write(
            f"Evaluation count : {result.evaluation_count} in "
            f"{result.sample_count} samples of {result.batch_size} calls."
        )
        self._write(f"             Execution time mean : {format_time(stats.mean)}")
        self._write(f"    Execution time std-deviation : {format_time(stats.std)}")
        self._write(
            f"   Execution time lower quantile : "
            f"{format_time(stats.lower_quantile)} ({lower_pct:4.1f}%)"
        )
        self._write(
            f"   Execution time upper quantile : "
            f"{format_time(stats.upper_quantile)} ({upper_pct:4.1f}%)"
        )
        self._write_outliers(result)
        if self._verbose:
            self._write_stability(result)
        self._write(f"Raw mean {result.name}: {result.mean_seconds!r} s")

    def _write_outliers(self, result: BenchmarkResult) -> None:
        outliers = result.outliers
        if outliers.total == 0:
            return
        n = result.sample_count
        self._write(
            f"Found {outliers.total} outliers in {n} samples "
            f"({outliers.total / n * 100:.1f} %)"
        )
        for key, count in outliers.to_dict().items():
            if count:
                label = _OUTLIER_LABELS[key]
                self._write(f"\t{label:<12}\t {count} ({count / n * 100:.1f} %)")

    def _write_stability(self, result: BenchmarkResult) -> None:
        stability = result.stability
        line = f"Stability: {stability.level.value} (CV={stability.cv:.4f})"
        if stability.level == StabilityLevel.CRITICAL:
            line = self._red(line)
        elif stability.level == StabilityLevel.UNSTABLE:
            line = self._yellow(line)
        self._write(line)

    def write_summary(self, comparison: ComparisonResult) -> None:
        """Write the raw mean of every candidate with two decimals."""
        width = max((len(name) for name in comparison.names), default=0)
        self._write()
        self._write("Mean times (ns):")
        for name, mean_ns in zip(comparison.names, comparison.mean_ns):
            self._write(f"{name:<{width}} : {mean_ns:.2f} ns")

        speedup = comparison.speedup
        if speedup is not None:
            self._write(
                f"{comparison.names[-1]} is {speedup:.1f}x faster than "
                f"{comparison.names[0]}"
            )
