"""Adaptive benchmark runner.

Runs a zero-argument callable through a warmup period and then collects
per-call timing samples. Calls that are too fast to time individually are
grouped into batches whose total duration clears a minimum threshold; the
sample is then the batch duration divided by the batch size.
"""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from strbench.core.settings import RunnerSettings
from strbench.statistics import (
    OutlierCounts,
    StabilityAssessment,
    StatisticalResult,
    StatisticsCalculator,
)

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Result of benchmarking a single callable."""

    name: str
    samples: list[float]
    batch_size: int
    warmup_calls: int
    total_seconds: float
    statistics: StatisticalResult
    stability: StabilityAssessment
    outliers: OutlierCounts
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def evaluation_count(self) -> int:
        """Number of timed calls (warmup excluded)."""
        return self.sample_count * self.batch_size

    @property
    def mean_seconds(self) -> float:
        return self.statistics.mean

    @property
    def mean_ns(self) -> float:
        """Mean time in nanoseconds."""
        return self.statistics.mean * 1e9

    def to_dict(self, include_samples: bool = False) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "name": self.name,
            "sample_count": self.sample_count,
            "batch_size": self.batch_size,
            "evaluation_count": self.evaluation_count,
            "warmup_calls": self.warmup_calls,
            "total_seconds": self.total_seconds,
            "mean_ns": self.mean_ns,
            "statistics": self.statistics.to_dict(),
            "stability": {
                "level": self.stability.level.value,
                "cv": round(self.stability.cv, 4),
                "message": self.stability.message,
            },
            "outliers": self.outliers.to_dict(),
            "metadata": self.metadata,
        }
        if include_samples:
            data["samples"] = list(self.samples)
        return data


class Benchmark:
    """
    Benchmark runner with warmup, adaptive batching and a time budget.

    Sampling stops as soon as the desired sample count is reached or the
    time budget runs out, whichever comes first. At least one sample is
    always collected, however slow the callable.
    """

    def __init__(
        self,
        samples: int = 30,
        max_samples: int = 1000,
        time_budget_seconds: float = 10.0,
        warmup_seconds: float = 0.5,
        min_batch_seconds: float = 0.001,
        calculator: StatisticsCalculator | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Initialize benchmark runner.

        Args:
            samples: Desired number of samples.
            max_samples: Hard cap on the number of samples.
            time_budget_seconds: Time allowed for sampling (warmup excluded).
            warmup_seconds: Warmup period; the callable runs at least once.
            min_batch_seconds: Minimum total duration of one timed batch.
            calculator: Statistics calculator for the summary.
            clock: Monotonic clock returning seconds.
        """
        if samples < 1:
            raise ValueError(f"samples must be >= 1, got {samples}")
        if max_samples < samples:
            raise ValueError(
                f"max_samples ({max_samples}) must be >= samples ({samples})"
            )
        self.samples = samples
        self.max_samples = max_samples
        self.time_budget_seconds = time_budget_seconds
        self.warmup_seconds = warmup_seconds
        self.min_batch_seconds = min_batch_seconds
        self.calculator = calculator or StatisticsCalculator()
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: RunnerSettings) -> "Benchmark":
        return cls(
            samples=settings.samples,
            max_samples=settings.max_samples,
            time_budget_seconds=settings.time_budget_seconds,
            warmup_seconds=settings.warmup_seconds,
            min_batch_seconds=settings.min_batch_seconds,
        )

    def warmup(self, func: Callable[[], Any]) -> tuple[int, float]:
        """
        Run the callable until the warmup period has elapsed.

        Returns:
            Tuple of (number of warmup calls, estimated seconds per call).
        """
        calls = 0
        start = self._clock()
        while True:
            func()
            calls += 1
            elapsed = self._clock() - start
            if elapsed >= self.warmup_seconds:
                break
        return calls, elapsed / calls

    def batch_size_for(self, per_call_seconds: float) -> int:
        """Number of calls per timed batch for a given per-call estimate."""
        if per_call_seconds >= self.min_batch_seconds:
            return 1
        if per_call_seconds <= 0:
            # Below clock resolution; fall back to a generous batch
            return max(1, math.ceil(self.min_batch_seconds / 1e-9))
        ratio = self.min_batch_seconds / per_call_seconds
        # Division noise must not push an exact multiple to the next integer
        return math.ceil(ratio * (1 - 1e-9))

    def run(
        self,
        name: str,
        func: Callable[[], Any],
        metadata: dict[str, Any] | None = None,
    ) -> BenchmarkResult:
        """
        Run a synchronous benchmark.

        Exceptions raised by ``func`` propagate unchanged.

        Args:
            name: Benchmark name.
            func: Zero-argument callable to benchmark.
            metadata: Optional metadata to include in results.

        Returns:
            BenchmarkResult with samples and statistics.
        """
        warmup_calls, per_call = self.warmup(func)
        batch_size = self.batch_size_for(per_call)
        logger.debug(
            "Warmup for %s: %d calls, %.3e s/call, batch size %d",
            name,
            warmup_calls,
            per_call,
            batch_size,
        )

        times: list[float] = []
        clock = self._clock
        start_total = clock()

        while len(times) < self.max_samples:
            start = clock()
            for _ in range(batch_size):
                func()
            end = clock()
            times.append((end - start) / batch_size)

            if len(times) >= self.samples:
                break
            if end - start_total >= self.time_budget_seconds:
                logger.info(
                    "Time budget of %.2fs exhausted for %s after %d samples",
                    self.time_budget_seconds,
                    name,
                    len(times),
                )
                break

        total_seconds = clock() - start_total

        stats, stability = self.calculator.compute_with_stability(times)
        return BenchmarkResult(
            name=name,
            samples=times,
            batch_size=batch_size,
            warmup_calls=warmup_calls,
            total_seconds=total_seconds,
            statistics=stats,
            stability=stability,
            outliers=self.calculator.classify_outliers(times),
            metadata=metadata or {},
        )
