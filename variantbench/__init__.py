"""variantbench: micro-benchmarks for equivalent implementations."""

from __future__ import annotations

from variantbench.config import HarnessConfig
from variantbench.errors import (
    EquivalenceError,
    InvalidConfiguration,
    VariantBenchError,
    VariantFailure,
)
from variantbench.harness import (
    BenchmarkHarness,
    Failed,
    Measurement,
    RunReport,
    Summary,
    Variant,
    check_equivalence,
    run,
)

__version__ = "0.1.0"

__all__ = [
    "HarnessConfig",
    "BenchmarkHarness",
    "run",
    "Variant",
    "Measurement",
    "Summary",
    "Failed",
    "RunReport",
    "check_equivalence",
    "VariantBenchError",
    "InvalidConfiguration",
    "VariantFailure",
    "EquivalenceError",
]
