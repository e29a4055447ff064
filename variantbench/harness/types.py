"""Core data types for benchmark runs."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any

from variantbench.errors import VariantFailure
from variantbench.harness import stats

NS_PER_MS = 1_000_000
NS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class Variant:
    """One labelled candidate computation.

    ``computation`` is called with no arguments. When ``resource`` is given
    it must return a context manager; the harness enters it once around all
    of the variant's repetitions (untimed) and calls ``computation(handle)``
    with the value it yields. Use this for worker pools or connections the
    variant owns.
    """

    label: str
    computation: Callable[..., Any]
    resource: Callable[[], AbstractContextManager[Any]] | None = None

    @classmethod
    def of(cls, label: str, computation: Callable[[], Any]) -> Variant:
        return cls(label=label, computation=computation)

    @classmethod
    def scoped(
        cls,
        label: str,
        resource: Callable[[], AbstractContextManager[Any]],
        computation: Callable[[Any], Any],
    ) -> Variant:
        """Variant whose computation receives a resource held for its repetitions only."""
        return cls(label=label, computation=computation, resource=resource)


@dataclass(frozen=True)
class Measurement:
    """Elapsed wall-clock duration of one repetition."""

    label: str
    index: int  # 1-based repetition number
    duration_ns: int

    @property
    def duration_ms(self) -> float:
        return self.duration_ns / NS_PER_MS

    @property
    def duration_seconds(self) -> float:
        return self.duration_ns / NS_PER_SECOND


@dataclass(frozen=True)
class Summary:
    """Aggregate timing statistics for one variant."""

    label: str
    count: int
    min_ns: int
    max_ns: int
    mean_ns: float
    median_ns: float
    percentile: float
    percentile_ns: float
    stdev_ns: float

    @classmethod
    def from_measurements(
        cls,
        label: str,
        measurements: tuple[Measurement, ...],
        percentile: float = 95.0,
    ) -> Summary:
        """Build a summary from a variant's measurements.

        Args:
            label: Variant label
            measurements: Non-empty measurement tuple for that variant
            percentile: Which percentile to report, in (0, 100]

        Returns:
            New Summary instance

        Raises:
            ValueError: If there are no measurements
        """
        if not measurements:
            raise ValueError(f"No measurements recorded for '{label}'")

        durations = [m.duration_ns for m in measurements]
        return cls(
            label=label,
            count=len(durations),
            min_ns=min(durations),
            max_ns=max(durations),
            mean_ns=stats.mean(durations),
            median_ns=stats.median(durations),
            percentile=percentile,
            percentile_ns=stats.percentile(durations, percentile),
            stdev_ns=stats.stdev(durations),
        )

    @property
    def min_ms(self) -> float:
        return self.min_ns / NS_PER_MS

    @property
    def max_ms(self) -> float:
        return self.max_ns / NS_PER_MS

    @property
    def mean_ms(self) -> float:
        return self.mean_ns / NS_PER_MS

    @property
    def median_ms(self) -> float:
        return self.median_ns / NS_PER_MS

    @property
    def percentile_ms(self) -> float:
        return self.percentile_ns / NS_PER_MS

    @property
    def stdev_ms(self) -> float:
        return self.stdev_ns / NS_PER_MS

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "count": self.count,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "mean_ms": self.mean_ms,
            "median_ms": self.median_ms,
            "percentile": self.percentile,
            "percentile_ms": self.percentile_ms,
            "stdev_ms": self.stdev_ms,
        }


@dataclass(frozen=True)
class Failed:
    """Failure marker recorded in place of a Summary."""

    label: str
    error: VariantFailure
    measurements: tuple[Measurement, ...] = ()

    @property
    def cause(self) -> BaseException:
        """The exception the computation raised, unmodified."""
        return self.error.cause

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "failed": True,
            "repetition": self.error.repetition,
            "completed": len(self.measurements),
            "error_type": type(self.cause).__name__,
            "error": str(self.cause),
        }


Outcome = Summary | Failed


@dataclass(frozen=True)
class RunReport(Mapping[str, Outcome]):
    """Result of one harness run: label -> Summary or Failed, in variant order.

    Raw measurements stay available per label, in execution order, for
    callers that want to look for warm-up effects.
    """

    outcomes: dict[str, Outcome]
    measurements: dict[str, tuple[Measurement, ...]]
    repetitions: int
    percentile: float
    started_at: float = 0.0  # time.time() when the run began
    duration_seconds: float = 0.0

    def __getitem__(self, label: str) -> Outcome:
        return self.outcomes[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> dict[str, Summary]:
        return {k: v for k, v in self.outcomes.items() if isinstance(v, Summary)}

    @property
    def failed(self) -> dict[str, Failed]:
        return {k: v for k, v in self.outcomes.items() if isinstance(v, Failed)}

    @property
    def ok(self) -> bool:
        return not self.failed

    def fastest(self) -> str | None:
        """Label of the successful variant with the lowest mean, if any."""
        summaries = self.succeeded
        if not summaries:
            return None
        return min(summaries.values(), key=lambda s: s.mean_ns).label

    def relative_to_fastest(self) -> dict[str, float]:
        """Mean duration of each successful variant divided by the fastest mean."""
        summaries = self.succeeded
        best = self.fastest()
        if best is None:
            return {}

        best_mean = summaries[best].mean_ns
        if best_mean <= 0:
            return {label: 1.0 for label in summaries}
        return {label: s.mean_ns / best_mean for label, s in summaries.items()}

    def summaries_as_dict(self) -> dict[str, dict[str, Any]]:
        """Plain-dict view, suitable for JSON baselines."""
        return {label: outcome.as_dict() for label, outcome in self.outcomes.items()}
