"""strbench exceptions."""


class StrBenchError(Exception):
    """Base exception for all strbench errors."""


class ConfigurationError(StrBenchError):
    """Invalid or unreadable configuration."""


class CandidateMismatchError(StrBenchError):
    """Candidates produced different output for the same workload."""

    def __init__(self, expected: str, actual: str, candidate: str):
        self.expected_length = len(expected)
        self.actual_length = len(actual)
        self.candidate = candidate
        super().__init__(
            f"Candidate '{candidate}' output differs from the reference "
            f"(length {self.actual_length} vs {self.expected_length})"
        )


class ReportError(StrBenchError):
    """Statistics are not in the shape a reporter needs."""


class ChartRenderError(ReportError):
    """Chart could not be rendered, saved or displayed."""
