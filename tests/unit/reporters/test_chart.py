"""Tests for the chart reporter."""

import math
from pathlib import Path
from unittest.mock import patch

import pytest

from strbench.core.exceptions import ChartRenderError, ReportError
from strbench.reporters.chart import DEFAULT_TITLE, DEFAULT_Y_LABEL, ChartReporter


class TestChartReporter:
    """Tests for ChartReporter."""

    def test_name(self) -> None:
        assert ChartReporter().name == "chart"

    def test_build_figure(self, comparison) -> None:
        figure = ChartReporter().build_figure(comparison)
        ax = figure.axes[0]

        assert ax.get_title() == DEFAULT_TITLE
        assert ax.get_ylabel() == DEFAULT_Y_LABEL
        labels = [t.get_text() for t in ax.get_xticklabels()]
        assert labels == ["reduce str", "string buffer"]
        heights = [bar.get_height() for bar in ax.patches]
        assert heights == pytest.approx([6.0, 4.0])

    def test_saves_png(self, comparison, tmp_path: Path) -> None:
        path = tmp_path / "charts" / "comparison.png"
        ChartReporter(output_path=path).report(comparison)
        assert path.exists()
        assert path.read_bytes().startswith(b"\x89PNG")

    def test_no_output_path_no_file(self, comparison, tmp_path: Path) -> None:
        ChartReporter(output_path=None).report(comparison)
        assert list(tmp_path.iterdir()) == []

    def test_save_failure_raises_chart_error(self, comparison, tmp_path: Path) -> None:
        reporter = ChartReporter(output_path=tmp_path / "c.png")
        with patch(
            "matplotlib.figure.Figure.savefig", side_effect=OSError("disk full")
        ):
            with pytest.raises(ChartRenderError, match="disk full"):
                reporter.report(comparison)

    def test_malformed_statistics(self, comparison) -> None:
        result = comparison.results[0]
        result.statistics = result.statistics.model_copy(
            update={"lower_quantile": math.nan}
        )
        with pytest.raises(ReportError):
            ChartReporter().report(comparison)

    def test_show_uses_pyplot(self, comparison) -> None:
        with patch("matplotlib.pyplot.show") as show:
            ChartReporter(output_path=None, show=True).report(comparison)
        show.assert_called_once()

    def test_show_failure(self, comparison) -> None:
        with patch("matplotlib.pyplot.show", side_effect=RuntimeError("no display")):
            with pytest.raises(ChartRenderError, match="no display"):
                ChartReporter(output_path=None, show=True).report(comparison)
