"""Reporters for benchmark comparisons."""

from strbench.reporters.base import Reporter, format_time, validate_statistics
from strbench.reporters.chart import ChartReporter
from strbench.reporters.console import ConsoleReporter
from strbench.reporters.json_reporter import JSONReporter

__all__ = [
    "ChartReporter",
    "ConsoleReporter",
    "JSONReporter",
    "Reporter",
    "format_time",
    "validate_statistics",
]
