"""Benchmarking harness for variantbench performance tracking."""

from benchmarks.benchmark_suite import BENCHMARK_CONFIGS, BenchmarkRunner
from benchmarks.regression import RegressionDetector

__all__ = ["BenchmarkRunner", "BENCHMARK_CONFIGS", "RegressionDetector"]
