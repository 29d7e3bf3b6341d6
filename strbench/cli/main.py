"""Main CLI entry point for strbench."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from strbench import __version__
from strbench.candidates import Workload
from strbench.core.exceptions import ReportError, StrBenchError
from strbench.core.logging import configure_logging
from strbench.core.settings import StrBenchSettings, get_settings
from strbench.harness import ComparisonResult, run_comparison
from strbench.reporters import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
    format_time,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 2


def _create_results_table(comparison: ComparisonResult) -> Table:
    """Create a Rich table summarising every candidate.

    Args:
        comparison: Finished comparison.

    Returns:
        Populated Rich Table instance.
    """
    table = Table(title="Comparison", show_header=True, header_style="bold cyan")
    table.add_column("Candidate", style="green", no_wrap=True)
    table.add_column("Samples", style="yellow", justify="right")
    table.add_column("Mean", style="magenta", justify="right")
    table.add_column("Std dev", justify="right")
    table.add_column("2.5%", style="blue", justify="right")
    table.add_column("97.5%", style="blue", justify="right")
    table.add_column("log10 ns", style="dim", justify="right")

    for result, log_mean in zip(comparison.results, comparison.log_means):
        stats = result.statistics
        table.add_row(
            result.name,
            str(result.sample_count),
            format_time(stats.mean),
            format_time(stats.std),
            format_time(stats.lower_quantile),
            format_time(stats.upper_quantile),
            f"{log_mean:.2f}",
        )
    return table


def _collect_overrides(
    count: int | None,
    fragment: str | None,
    samples: int | None,
    budget: float | None,
    chart: bool | None,
    chart_output: Path | None,
    show: bool,
    log_level: str | None,
) -> dict[str, Any]:
    """Turn explicitly given CLI options into nested settings overrides."""
    sections: dict[str, dict[str, Any]] = {
        "workload": {"count": count, "fragment": fragment},
        "runner": {"samples": samples, "time_budget_seconds": budget},
        "chart": {
            "enabled": chart,
            "output_path": chart_output,
            "show": show or None,
        },
        "logging": {"level": log_level},
    }
    overrides: dict[str, Any] = {}
    for section, values in sections.items():
        given = {k: v for k, v in values.items() if v is not None}
        if given:
            overrides[section] = given
    return overrides


def _render_chart(settings: StrBenchSettings, comparison: ComparisonResult) -> None:
    """Render the chart, downgrading any failure to a warning."""
    reporter = ChartReporter(
        output_path=settings.chart.output_path,
        show=settings.chart.show,
    )
    try:
        reporter.report(comparison)
    except ReportError as e:
        logger.warning("Chart skipped: %s", e)
        click.echo(f"Warning: chart skipped: {e}", err=True)
        return
    if settings.chart.output_path:
        click.echo(f"\nChart saved to {settings.chart.output_path}")


def execute(
    settings: StrBenchSettings,
    table: bool = False,
    json_output: Path | None = None,
    verbose: bool = False,
) -> ComparisonResult:
    """Run the comparison described by ``settings`` and report it."""
    workload = Workload(
        fragment=settings.workload.fragment,
        count=settings.workload.count,
    )
    console = ConsoleReporter(verbose=verbose)
    console.write_header(workload)

    comparison = run_comparison(
        workload,
        settings.runner,
        on_result=console.write_result,
    )
    console.write_summary(comparison)

    if table:
        Console().print(_create_results_table(comparison))

    if json_output:
        JSONReporter(output_file=json_output, include_samples=True).report(
            comparison
        )
        click.echo(f"Results written to {json_output}")

    if settings.chart.enabled:
        _render_chart(settings, comparison)

    return comparison


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="strbench")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """strbench - compare naive and buffered string concatenation.

    Running without a command benchmarks both strategies with the default
    workload and saves the comparison chart.

    Examples:

      strbench

      strbench run --count 20000 --samples 10 --no-chart

      strbench run --json-output results.json --table
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(run_cmd)


@cli.command(name="run")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(path_type=Path),
    help="Path to strbench.config.yaml configuration file",
)
@click.option("--count", type=int, help="Number of fragments in the workload")
@click.option("--fragment", type=str, help="Fragment repeated in the workload")
@click.option("--samples", type=int, help="Desired samples per candidate")
@click.option(
    "--budget",
    type=float,
    help="Time budget per candidate in seconds",
)
@click.option(
    "--chart/--no-chart",
    default=None,
    help="Render the comparison chart",
)
@click.option(
    "--chart-output",
    type=click.Path(path_type=Path),
    help="Where to save the chart image",
)
@click.option("--show", is_flag=True, help="Open the chart in a window")
@click.option(
    "--json-output",
    type=click.Path(path_type=Path),
    help="Write results (including samples) to a JSON file",
)
@click.option("--table", is_flag=True, help="Print a summary table")
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    help="Log level",
)
@click.option("--verbose", "-v", is_flag=True, help="Show stability details")
def run_cmd(
    config_file: Path | None = None,
    count: int | None = None,
    fragment: str | None = None,
    samples: int | None = None,
    budget: float | None = None,
    chart: bool | None = None,
    chart_output: Path | None = None,
    show: bool = False,
    json_output: Path | None = None,
    table: bool = False,
    log_level: str | None = None,
    verbose: bool = False,
) -> None:
    """Benchmark both concatenation strategies and report the results.

    Exit Codes:

      0 - Benchmark completed (chart failures are only warnings)
      2 - Error occurred (invalid config, mismatching candidates, etc.)
    """
    overrides = _collect_overrides(
        count, fragment, samples, budget, chart, chart_output, show, log_level
    )

    try:
        settings = get_settings(config_file=config_file, **overrides)
        configure_logging(
            level=settings.logging.level,
            json_output=settings.logging.json_output,
            log_file=settings.logging.file,
            module_levels=settings.logging.modules,
        )
        execute(settings, table=table, json_output=json_output, verbose=verbose)
    except StrBenchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


@cli.command(name="version")
def version_cmd() -> None:
    """Show strbench version information."""
    click.echo(f"strbench v{__version__}")
    click.echo(f"Python: {sys.version.split()[0]}")
    click.echo(f"Platform: {sys.platform}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
