"""Unit tests for strbench.core.exceptions module."""

from strbench.core.exceptions import (
    CandidateMismatchError,
    ChartRenderError,
    ConfigurationError,
    ReportError,
    StrBenchError,
)


class TestStrBenchError:
    """Tests for StrBenchError base class."""

    def test_is_exception(self):
        assert issubclass(StrBenchError, Exception)

    def test_message(self):
        assert str(StrBenchError("Test error message")) == "Test error message"


class TestHierarchy:
    """Tests for the exception hierarchy."""

    def test_configuration_error(self):
        assert issubclass(ConfigurationError, StrBenchError)

    def test_chart_render_error_is_report_error(self):
        assert issubclass(ChartRenderError, ReportError)
        assert issubclass(ReportError, StrBenchError)


class TestCandidateMismatchError:
    """Tests for CandidateMismatchError."""

    def test_attributes_and_message(self):
        error = CandidateMismatchError("abcabc", "abc", "string buffer")
        assert error.candidate == "string buffer"
        assert error.expected_length == 6
        assert error.actual_length == 3
        assert "string buffer" in str(error)
        assert "3 vs 6" in str(error)
