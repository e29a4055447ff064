"""Benchmark plan configuration with YAML support."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from variantbench.config import REPORT_FORMATS
from variantbench.errors import InvalidConfiguration


@dataclass
class SuiteEntry:
    """One suite to run, with optional overrides."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)  # passed to the suite's build()
    repetitions: int | None = None  # falls back to the plan's repetitions
    check_equivalence: bool = False


@dataclass
class BenchmarkPlan:
    """A named list of suites sharing run settings.

    Example YAML:

        name: techniques
        repetitions: 20
        percentile: 90
        suites:
          - name: growth
            params: {n: 50000}
          - name: parallel
            repetitions: 5
    """

    name: str
    suites: list[SuiteEntry]
    description: str = ""
    repetitions: int = 10
    percentile: float = 95.0
    warmup: int = 0
    output_dir: str = "data/benchmarks"
    formats: list[str] = field(default_factory=lambda: ["text"])

    @classmethod
    def from_yaml(cls, path: str) -> BenchmarkPlan:
        """Load a plan from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            BenchmarkPlan instance

        Raises:
            ImportError: If pyyaml is not installed
            FileNotFoundError: If file doesn't exist
            InvalidConfiguration: If the content is not a valid plan
        """
        try:
            import yaml  # type: ignore[import-untyped]
        except ImportError as err:
            raise ImportError(
                "pyyaml is required for YAML loading. Install with: pip install pyyaml"
            ) from err

        with open(path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise InvalidConfiguration(f"Plan file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> BenchmarkPlan:
        """Build a plan from a dictionary.

        Suites may be given as plain names or as mappings.

        Raises:
            InvalidConfiguration: On missing name or suites, bad suite entries,
                or unknown report formats
        """
        if "name" not in data:
            raise InvalidConfiguration("Plan requires a 'name'")

        suites = []
        for suite_data in data.get("suites", []):
            if isinstance(suite_data, str):
                suites.append(SuiteEntry(name=suite_data))
            elif isinstance(suite_data, dict) and "name" in suite_data:
                suites.append(
                    SuiteEntry(
                        name=suite_data["name"],
                        params=suite_data.get("params", {}) or {},
                        repetitions=suite_data.get("repetitions"),
                        check_equivalence=suite_data.get("check_equivalence", False),
                    )
                )
            else:
                raise InvalidConfiguration(f"Invalid suite entry: {suite_data!r}")

        if not suites:
            raise InvalidConfiguration(f"Plan '{data['name']}' lists no suites")

        formats = data.get("formats", ["text"])
        if not isinstance(formats, list):
            raise InvalidConfiguration(f"Plan formats must be a list, got {formats!r}")
        unknown = [fmt for fmt in formats if fmt not in REPORT_FORMATS]
        if unknown:
            raise InvalidConfiguration(
                f"Unknown report format(s): {', '.join(map(str, unknown))} "
                f"(choose from {', '.join(REPORT_FORMATS)})"
            )

        return cls(
            name=data["name"],
            description=data.get("description", ""),
            suites=suites,
            repetitions=data.get("repetitions", 10),
            percentile=data.get("percentile", 95.0),
            warmup=data.get("warmup", 0),
            output_dir=data.get("output_dir", "data/benchmarks"),
            formats=formats,
        )
