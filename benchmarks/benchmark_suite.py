"""Benchmark suite for tracking variantbench suite timings across changes."""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from benchmarks.regression import RegressionDetector
from variantbench.config import HarnessConfig
from variantbench.harness.report import ReportGenerator
from variantbench.harness.runner import BenchmarkHarness
from variantbench.harness.types import RunReport
from variantbench.suites import run_suite

BENCHMARK_CONFIGS = {
    "growth": {"n": 20_000},
    "apply": {"rows": 20_000},
    "vectorize": {"rows": 50_000, "min_length": 1_000},
    "parallel": {"n": 1_000_000, "chunks": 8, "workers": 4},
    "fileio": {"rows": 50_000},
}


class BenchmarkRunner:
    """Run benchmark suite and track performance metrics."""

    def __init__(self, configs: dict | None = None, config: HarnessConfig | None = None):
        self.configs = configs or BENCHMARK_CONFIGS
        self.harness = BenchmarkHarness(config)

    def run_single(self, name: str, params: dict, repetitions: int | None = None) -> RunReport:
        """Run a single suite.

        Args:
            name: Suite name
            params: Keyword arguments for the suite's build()
            repetitions: Timed runs per variant (harness default if None)

        Returns:
            RunReport for the suite
        """
        print(f"Running {name}...")

        report, _ = run_suite(name, self.harness, repetitions=repetitions, params=params)

        fastest = report.fastest()
        status = "[OK]" if report.ok else "[FAIL]"
        print(f"  {status} {name}: {len(report)} variants, fastest: {fastest or 'n/a'}")

        return report

    def run_all(self, only: str | None = None, repetitions: int | None = None) -> dict[str, RunReport]:
        """Run all suites (or single if --only specified).

        Args:
            only: Optional suite name to run in isolation
            repetitions: Timed runs per variant

        Returns:
            Dict of suite_name -> RunReport
        """
        results = {}

        if only:
            if only not in self.configs:
                raise ValueError(f"Unknown benchmark: {only}")
            results[only] = self.run_single(only, self.configs[only], repetitions)
        else:
            for name, params in self.configs.items():
                results[name] = self.run_single(name, params, repetitions)

        return results

    def print_summary(self, results: dict[str, RunReport], warnings: list[str] | None = None) -> None:
        """Print formatted summary of results.

        Args:
            results: Dict of suite_name -> RunReport
            warnings: Optional list of regression warnings
        """
        generator = ReportGenerator()

        print("\n" + "=" * 70)
        print("BENCHMARK SUMMARY")
        print("=" * 70)

        for name, report in results.items():
            print(generator.to_text(report, title=name))
            print()

        if warnings:
            print("\n" + "=" * 70)
            print("REGRESSIONS DETECTED")
            print("=" * 70)
            for warning in warnings:
                print(warning)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for benchmark suite.

    Returns:
        0 on success, 1 if any variant failed, 2 on invalid settings or arguments
    """
    parser = argparse.ArgumentParser(description="Run variantbench suite benchmarks")
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Compare against baseline",
    )
    parser.add_argument(
        "--update-baseline",
        action="store_true",
        help="Save results as new baseline",
    )
    parser.add_argument(
        "--only",
        type=str,
        help="Run only the specified suite",
    )
    parser.add_argument(
        "--repetitions",
        type=int,
        help="Timed runs per variant",
    )
    parser.add_argument(
        "--baseline-path",
        type=str,
        help="Path to baseline file",
    )

    args = parser.parse_args(argv)

    try:
        config = HarnessConfig()
        baseline_path = args.baseline_path or config.baseline_path
        runner = BenchmarkRunner(config=config)
        results = runner.run_all(only=args.only, repetitions=args.repetitions)
    except ValidationError as err:
        print(f"Invalid VARIANTBENCH_* settings: {err}", file=sys.stderr)
        return 2
    except ValueError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2

    warnings = []
    if args.compare:
        detector = RegressionDetector(baseline_path, threshold_pct=config.regression_threshold_pct)
        warnings = detector.check(results)

    runner.print_summary(results, warnings)

    if args.update_baseline:
        detector = RegressionDetector(baseline_path, threshold_pct=config.regression_threshold_pct)
        detector.update_baseline(results)
        print(f"\n[OK] Baseline updated at {baseline_path}")

    return 0 if all(report.ok for report in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
