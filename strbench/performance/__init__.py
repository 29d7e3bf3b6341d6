"""Timing infrastructure for strbench.

Usage:
    from strbench.performance import Benchmark

    result = Benchmark(samples=10).run("noop", lambda: None)
    print(result.statistics.mean)
"""

from strbench.performance.benchmark import Benchmark, BenchmarkResult

__all__ = [
    "Benchmark",
    "BenchmarkResult",
]
