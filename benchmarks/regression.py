"""Regression detection for benchmark results."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from variantbench.harness.types import RunReport

logger = logging.getLogger(__name__)


def to_baseline(results: dict[str, RunReport]) -> dict[str, dict[str, dict]]:
    """Convert suite_name -> RunReport into the JSON baseline layout.

    Only successful variants are stored; a failure has no timing to compare.
    """
    return {
        suite: {label: summary.as_dict() for label, summary in report.succeeded.items()}
        for suite, report in results.items()
    }


class RegressionDetector:
    """Compare current benchmarks against stored baseline."""

    def __init__(self, baseline_path: str = "benchmarks/baseline.json", threshold_pct: float = 20.0):
        self.baseline_path = Path(baseline_path)
        self.threshold_pct = threshold_pct
        self.baseline = self._load_baseline()

    def _load_baseline(self) -> dict:
        """Load baseline from disk."""
        if not self.baseline_path.exists():
            logger.info(f"No baseline at {self.baseline_path}")
            return {}
        with open(self.baseline_path, "r") as f:
            return json.load(f)

    def check(self, results: dict[str, RunReport]) -> list[str]:
        """Return list of warnings for variants slower than the threshold.

        Args:
            results: Dict of suite_name -> RunReport

        Returns:
            List of warning strings describing regressions
        """
        warnings = []
        if not self.baseline:
            return warnings

        current = to_baseline(results)
        for suite, variants in current.items():
            baseline_suite = self.baseline.get(suite, {})

            for label, summary in variants.items():
                if label not in baseline_suite:
                    continue

                current_ms = summary.get("mean_ms", 0)
                baseline_ms = baseline_suite[label].get("mean_ms", 0)

                if baseline_ms == 0:
                    continue

                pct_change = ((current_ms - baseline_ms) / baseline_ms) * 100

                if pct_change > self.threshold_pct:
                    warnings.append(
                        f"[WARN] {suite}/{label}: {pct_change:+.1f}% slower "
                        f"(baseline: {baseline_ms:.3f}ms, current: {current_ms:.3f}ms)"
                    )

        return warnings

    def update_baseline(self, results: dict[str, RunReport], path: str | None = None) -> None:
        """Save current results as new baseline.

        Args:
            results: Dict of suite_name -> RunReport
            path: Optional custom path (defaults to self.baseline_path)
        """
        save_path = Path(path) if path else self.baseline_path
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            json.dump(to_baseline(results), f, indent=2)
