"""Configuration settings for the benchmark harness.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via VARIANTBENCH_* environment variables.
"""

from typing import Literal, get_args

from pydantic import Field
from pydantic_settings import BaseSettings

ReportFormat = Literal["text", "markdown", "csv", "json"]
REPORT_FORMATS: tuple[str, ...] = get_args(ReportFormat)


class HarnessConfig(BaseSettings):
    """Defaults applied to a benchmark run when the caller does not override them."""

    # Execution
    repetitions: int = Field(default=10, ge=1)
    warmup: int = Field(default=0, ge=0)  # untimed executions before measuring

    # Summary statistics
    percentile: float = Field(default=95.0, gt=0.0, le=100.0)

    # Output
    output_dir: str = "data/benchmarks"
    formats: list[ReportFormat] = Field(default=["text"])

    # Regression tracking
    baseline_path: str = "benchmarks/baseline.json"
    regression_threshold_pct: float = Field(default=20.0, ge=0.0)

    # Logging
    log_level: str = "WARNING"

    model_config = {"env_prefix": "VARIANTBENCH_"}
