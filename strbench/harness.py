"""Sequential comparison of the concatenation candidates."""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from strbench.candidates import CANDIDATES, Workload
from strbench.core.exceptions import CandidateMismatchError
from strbench.core.settings import RunnerSettings
from strbench.performance.benchmark import Benchmark, BenchmarkResult

logger = logging.getLogger(__name__)

LOG_FLOOR = 1e-9


def log10_floor(value: float) -> float:
    """Base-10 logarithm with non-positive input clamped to ``1e-9``."""
    return math.log10(max(value, LOG_FLOOR))


@dataclass
class ComparisonResult:
    """Benchmark results for every candidate on one workload, in run order."""

    workload: Workload
    results: list[BenchmarkResult]

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.results]

    @property
    def mean_ns(self) -> list[float]:
        return [r.mean_ns for r in self.results]

    @property
    def log_means(self) -> list[float]:
        """log10 of each mean latency in nanoseconds."""
        return [log10_floor(m) for m in self.mean_ns]

    @property
    def speedup(self) -> float | None:
        """How many times faster the last candidate is than the first."""
        if len(self.results) < 2:
            return None
        baseline, fastest = self.results[0].mean_seconds, self.results[-1].mean_seconds
        if fastest <= 0:
            return None
        return baseline / fastest

    def to_dict(self, include_samples: bool = False) -> dict[str, Any]:
        return {
            "workload": {
                "fragment": self.workload.fragment,
                "count": self.workload.count,
            },
            "results": [r.to_dict(include_samples) for r in self.results],
            "log10_mean_ns": self.log_means,
            "speedup": self.speedup,
        }


def verify_candidates(
    workload: Workload,
    candidates: dict[str, Callable[[Sequence[str]], str]],
) -> None:
    """Check that every candidate produces the same output for the workload.

    Raises:
        CandidateMismatchError: If any candidate disagrees with the first.
    """
    expected: str | None = None
    for name, candidate in candidates.items():
        output = candidate(workload.fragments)
        if expected is None:
            expected = output
        elif output != expected:
            raise CandidateMismatchError(expected, output, name)


def run_comparison(
    workload: Workload,
    runner_settings: RunnerSettings | None = None,
    candidates: dict[str, Callable[[Sequence[str]], str]] | None = None,
    on_result: Callable[[BenchmarkResult], None] | None = None,
) -> ComparisonResult:
    """
    Benchmark each candidate on the workload, one after the other.

    A candidate is fully benchmarked before the next one starts.

    Args:
        workload: Input fragments shared by all candidates.
        runner_settings: Benchmark runner configuration.
        candidates: Name -> strategy mapping (defaults to CANDIDATES).
        on_result: Optional callback invoked after each candidate finishes.

    Returns:
        ComparisonResult with one BenchmarkResult per candidate.
    """
    candidates = candidates if candidates is not None else CANDIDATES
    benchmark = Benchmark.from_settings(runner_settings or RunnerSettings())

    verify_candidates(workload, candidates)

    results: list[BenchmarkResult] = []
    fragments = workload.fragments
    for name, candidate in candidates.items():
        logger.info("Benchmarking %s on %s", name, workload.describe())
        result = benchmark.run(
            name,
            lambda candidate=candidate: candidate(fragments),
            metadata={"fragment_count": workload.count},
        )
        logger.info(
            "Finished %s: %d samples, mean %.3e s",
            name,
            result.sample_count,
            result.mean_seconds,
        )
        results.append(result)
        if on_result is not None:
            on_result(result)

    return ComparisonResult(workload=workload, results=results)
