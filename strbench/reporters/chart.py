"""Bar chart of log-scaled mean latency per candidate."""

import logging
from pathlib import Path

from matplotlib.figure import Figure

from strbench.core.exceptions import ChartRenderError
from strbench.harness import ComparisonResult
from strbench.reporters.base import Reporter, validate_statistics

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "String concatenation (log10 ns)"
DEFAULT_Y_LABEL = "log10 mean time (ns)"


class ChartReporter(Reporter):
    """Renders a categorical bar chart with one bar per candidate.

    The chart is saved to ``output_path`` and, when ``show`` is set, opened
    in an interactive window. Failures surface as ChartRenderError so the
    caller can downgrade them to a warning.
    """

    def __init__(
        self,
        output_path: Path | str | None = None,
        show: bool = False,
        title: str = DEFAULT_TITLE,
        y_label: str = DEFAULT_Y_LABEL,
    ) -> None:
        self._output_path = Path(output_path) if output_path else None
        self._show = show
        self._title = title
        self._y_label = y_label

    @property
    def name(self) -> str:
        """Return the reporter name."""
        return "chart"

    def _draw(self, figure: Figure, comparison: ComparisonResult) -> None:
        ax = figure.add_subplot()
        bars = ax.bar(comparison.names, comparison.log_means, color=["C3", "C0"])
        ax.bar_label(bars, fmt="%.2f")
        ax.set_title(self._title)
        ax.set_ylabel(self._y_label)
        figure.tight_layout()

    def build_figure(self, comparison: ComparisonResult) -> Figure:
        """Build the figure without touching any display backend.

        Raises:
            ReportError: If any result lacks usable statistics.
        """
        for result in comparison.results:
            validate_statistics(result)

        figure = Figure(figsize=(6, 4))
        self._draw(figure, comparison)
        return figure

    def report(self, comparison: ComparisonResult) -> None:
        """Render the chart, save it and optionally display it.

        Raises:
            ReportError: If the statistics are malformed.
            ChartRenderError: If the chart cannot be saved or displayed.
        """
        figure = self.build_figure(comparison)

        if self._output_path:
            try:
                self._output_path.parent.mkdir(parents=True, exist_ok=True)
                figure.savefig(self._output_path, dpi=150)
            except (OSError, ValueError) as e:
                raise ChartRenderError(
                    f"Cannot save chart to {self._output_path}: {e}"
                ) from e
            logger.info("Saved chart to %s", self._output_path)

        if self._show:
            self._display(comparison)

    def _display(self, comparison: ComparisonResult) -> None:
        # pyplot is only needed for an interactive window
        try:
            import matplotlib.pyplot as plt

            figure = plt.figure(figsize=(6, 4))
            self._draw(figure, comparison)
            plt.show()
            plt.close(figure)
        except (RuntimeError, ImportError) as e:
            raise ChartRenderError(f"Cannot display chart: {e}") from e
