"""Shared pytest fixtures for strbench tests."""

import os
from collections.abc import Callable

import pytest

from strbench.candidates import Workload
from strbench.core.logging import reset_logging
from strbench.core.settings import RunnerSettings
from strbench.harness import ComparisonResult
from strbench.performance.benchmark import BenchmarkResult
from strbench.statistics import StatisticsCalculator


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep stray config files and STRBENCH_ variables out of every test."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("STRBENCH_"):
            monkeypatch.delenv(name)
    yield
    reset_logging()


@pytest.fixture
def small_workload() -> Workload:
    """A workload small enough to benchmark in milliseconds."""
    return Workload(fragment="abc", count=200)


@pytest.fixture
def fast_runner_settings() -> RunnerSettings:
    """Runner settings that finish quickly."""
    return RunnerSettings(
        samples=5,
        max_samples=10,
        time_budget_seconds=0.5,
        warmup_seconds=0.0,
        min_batch_seconds=0.0005,
    )


@pytest.fixture
def make_result() -> Callable[..., BenchmarkResult]:
    """Factory building a BenchmarkResult from raw samples in seconds."""

    def _make(
        name: str = "candidate",
        samples: list[float] | None = None,
        batch_size: int = 1,
    ) -> BenchmarkResult:
        samples = samples or [1e-3, 1.1e-3, 0.9e-3, 1.05e-3]
        calculator = StatisticsCalculator()
        stats, stability = calculator.compute_with_stability(samples)
        return BenchmarkResult(
            name=name,
            samples=samples,
            batch_size=batch_size,
            warmup_calls=1,
            total_seconds=sum(samples) * batch_size,
            statistics=stats,
            stability=stability,
            outliers=calculator.classify_outliers(samples),
        )

    return _make


@pytest.fixture
def comparison(
    make_result: Callable[..., BenchmarkResult], small_workload: Workload
) -> ComparisonResult:
    """A two-candidate comparison with the buffer 100x faster."""
    return ComparisonResult(
        workload=small_workload,
        results=[
            make_result("reduce str", [1e-3, 1.2e-3, 0.8e-3, 1e-3]),
            make_result("string buffer", [1e-5, 1.2e-5, 0.8e-5, 1e-5], 50),
        ],
    )
