"""JSON export of a comparison, for plotting or diffing runs elsewhere."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from strbench import __version__
from strbench.harness import ComparisonResult
from strbench.reporters.base import Reporter


class JSONReporter(Reporter):
    """Writes the comparison as one JSON document.

    The document carries the workload, one entry per candidate (statistics,
    stability, outliers and optionally the raw per-call samples in seconds)
    and a ``summary`` naming the fastest and slowest candidates.
    """

    FORMAT_VERSION = "1.0"

    def __init__(
        self,
        output_file: Path | str | None = None,
        output: TextIO | None = None,
        indent: int | None = 2,
        include_samples: bool = False,
    ) -> None:
        """
        Args:
            output_file: File to write; parent directories are created.
                Takes precedence over ``output``.
            output: Stream used when no file is given (default stdout).
            indent: JSON indentation, None for a single line.
            include_samples: Also dump every timing sample.
        """
        self._output_file = Path(output_file) if output_file else None
        self._output = output
        self._indent = indent
        self._include_samples = include_samples

    @property
    def name(self) -> str:
        return "json"

    def report(self, comparison: ComparisonResult) -> None:
        document = self.build_document(comparison)

        if self._output_file is None:
            self._dump(document, self._output or sys.stdout)
            return

        self._output_file.parent.mkdir(parents=True, exist_ok=True)
        with self._output_file.open("w", encoding="utf-8") as f:
            self._dump(document, f)

    def _dump(self, document: dict[str, Any], stream: TextIO) -> None:
        json.dump(document, stream, indent=self._indent)
        stream.write("\n")

    def build_document(self, comparison: ComparisonResult) -> dict[str, Any]:
        document: dict[str, Any] = {
            "version": self.FORMAT_VERSION,
            "strbench_version": __version__,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        document.update(comparison.to_dict(include_samples=self._include_samples))
        document["summary"] = self._summary(comparison)
        return document

    @staticmethod
    def _summary(comparison: ComparisonResult) -> dict[str, Any]:
        if not comparison.results:
            return {"fastest": None, "slowest": None}
        by_mean = sorted(comparison.results, key=lambda r: r.mean_seconds)
        return {
            "fastest": by_mean[0].name,
            "slowest": by_mean[-1].name,
            "mean_ns": dict(zip(comparison.names, comparison.mean_ns)),
        }
