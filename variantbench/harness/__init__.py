"""Benchmark harness for comparing alternative implementations of one computation.

Times labelled variants sequentially, summarizes each one, and renders the
results as text, markdown, CSV, or JSON.
"""

from __future__ import annotations

from variantbench.harness.equivalence import EquivalenceReport, check_equivalence
from variantbench.harness.plan import BenchmarkPlan, SuiteEntry
from variantbench.harness.report import ReportGenerator
from variantbench.harness.runner import BenchmarkHarness, run
from variantbench.harness.types import Failed, Measurement, RunReport, Summary, Variant

__all__ = [
    "BenchmarkHarness",
    "run",
    "Variant",
    "Measurement",
    "Summary",
    "Failed",
    "RunReport",
    "ReportGenerator",
    "BenchmarkPlan",
    "SuiteEntry",
    "EquivalenceReport",
    "check_equivalence",
]
