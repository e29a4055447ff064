"""Report generation for benchmark runs."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from variantbench.harness.types import Failed, RunReport, Summary


class ReportGenerator:
    """Renders a RunReport as text, markdown, CSV, or JSON.

    Failed variants are always listed, with their error, so a reader can
    tell them apart from slow ones.
    """

    def to_text(self, report: RunReport, title: str | None = None) -> str:
        """Fixed-width table for terminal output.

        Args:
            report: Harness result
            title: Optional heading line

        Returns:
            Rendered table
        """
        pct = self._pct_label(report.percentile)
        relative = report.relative_to_fastest()

        header = (
            f"{'variant':<28} {'n':>4} {'min ms':>10} {'median ms':>10} "
            f"{'mean ms':>10} {pct + ' ms':>10} {'max ms':>10} {'relative':>9}"
        )
        lines = []
        if title:
            lines.append(title)
        lines.append("=" * len(header))
        lines.append(header)
        lines.append("-" * len(header))

        for label, outcome in report.items():
            if isinstance(outcome, Summary):
                lines.append(
                    f"{label:<28} {outcome.count:>4} {outcome.min_ms:>10.3f} "
                    f"{outcome.median_ms:>10.3f} {outcome.mean_ms:>10.3f} "
                    f"{outcome.percentile_ms:>10.3f} {outcome.max_ms:>10.3f} "
                    f"{relative[label]:>8.2f}x"
                )
            else:
                lines.append(f"{label:<28} [FAIL] {self._describe_failure(outcome)}")

        lines.append("=" * len(header))
        return "\n".join(lines)

    def to_markdown(self, report: RunReport, output_path: str, title: str = "Benchmark Results") -> None:
        """Generate markdown report with a summary table.

        Args:
            report: Harness result
            output_path: Path to output markdown file
            title: Report heading
        """
        pct = self._pct_label(report.percentile)
        relative = report.relative_to_fastest()

        lines = []
        lines.append(f"# {title}")
        lines.append("")
        lines.append(f"**Repetitions:** {report.repetitions}")
        lines.append(f"**Fastest:** {report.fastest() or 'n/a'}")
        lines.append("")

        lines.append(f"| Variant | N | Min (ms) | Median (ms) | Mean (ms) | {pct} (ms) | Max (ms) | Relative |")
        lines.append("|---------|---|----------|-------------|-----------|----------|----------|----------|")

        for label, outcome in report.items():
            if not isinstance(outcome, Summary):
                continue
            lines.append(
                f"| {label} | {outcome.count} | {outcome.min_ms:.3f} | "
                f"{outcome.median_ms:.3f} | {outcome.mean_ms:.3f} | "
                f"{outcome.percentile_ms:.3f} | {outcome.max_ms:.3f} | "
                f"{relative[label]:.2f}x |"
            )

        failed = report.failed
        if failed:
            lines.append("")
            lines.append("## Failures")
            lines.append("")
            for label, outcome in failed.items():
                lines.append(f"- **{label}**: {self._describe_failure(outcome)}")

        lines.append("")

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write("\n".join(lines))

    def to_csv(self, report: RunReport, output_path: str) -> None:
        """Generate flat CSV with one row per measurement.

        Args:
            report: Harness result
            output_path: Path to output CSV file
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(
                f, fieldnames=["variant", "repetition", "duration_ns", "status"]
            )
            writer.writeheader()

            for label, outcome in report.items():
                status = "failed" if isinstance(outcome, Failed) else "ok"
                for measurement in report.measurements.get(label, ()):
                    writer.writerow(
                        {
                            "variant": label,
                            "repetition": measurement.index,
                            "duration_ns": measurement.duration_ns,
                            "status": status,
                        }
                    )

    def to_json(self, report: RunReport, output_path: str) -> None:
        """Generate machine-readable JSON.

        Args:
            report: Harness result
            output_path: Path to output JSON file
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(self.as_data(report), f, indent=2)

    def as_data(self, report: RunReport) -> dict[str, Any]:
        return {
            "repetitions": report.repetitions,
            "percentile": report.percentile,
            "started_at": report.started_at,
            "duration_seconds": report.duration_seconds,
            "fastest": report.fastest(),
            "variants": report.summaries_as_dict(),
        }

    def write(self, report: RunReport, output_dir: str, name: str, formats: list[str]) -> list[str]:
        """Write the report in each requested format.

        Args:
            report: Harness result
            output_dir: Directory to write into (created if needed)
            name: File stem
            formats: Any of "text", "markdown", "csv", "json"

        Returns:
            Paths written

        Raises:
            ValueError: On an unknown format
        """
        output_path = Path(output_dir)
        written = []
        for fmt in formats:
            if fmt == "markdown":
                path = output_path / f"{name}.md"
                self.to_markdown(report, str(path), title=name)
            elif fmt == "csv":
                path = output_path / f"{name}.csv"
                self.to_csv(report, str(path))
            elif fmt == "json":
                path = output_path / f"{name}.json"
                self.to_json(report, str(path))
            elif fmt == "text":
                path = output_path / f"{name}.txt"
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(self.to_text(report, title=name) + "\n")
            else:
                raise ValueError(f"Unknown report format: {fmt}")
            written.append(str(path))
        return written

    @staticmethod
    def _pct_label(percentile: float) -> str:
        return f"p{percentile:g}"

    @staticmethod
    def _describe_failure(outcome: Failed) -> str:
        cause = outcome.cause
        where = (
            f"repetition {outcome.error.repetition}"
            if outcome.error.repetition
            else "setup or teardown"
        )
        return f"{type(cause).__name__}: {cause} ({where}, {len(outcome.measurements)} completed)"
