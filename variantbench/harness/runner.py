"""Benchmark harness: time labelled variants and summarize them."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from contextlib import ExitStack
from typing import Any, Callable

from pydantic import ValidationError

from variantbench.config import HarnessConfig
from variantbench.errors import InvalidConfiguration, VariantFailure
from variantbench.harness.types import Failed, Measurement, Outcome, RunReport, Summary, Variant

logger = logging.getLogger(__name__)

VariantSpec = Variant | tuple[str, Callable[..., Any]]


def coerce_variants(
    variants: Iterable[VariantSpec] | Mapping[str, Callable[..., Any]],
) -> list[Variant]:
    """Normalize caller input into a list of Variant objects.

    Accepts Variant instances, (label, computation) pairs, or a mapping of
    label -> computation (order preserved).

    Raises:
        InvalidConfiguration: If an entry is malformed
    """
    if isinstance(variants, Mapping):
        items: Iterable[Any] = list(variants.items())
    else:
        items = variants

    result = []
    for item in items:
        if isinstance(item, Variant):
            result.append(item)
        elif isinstance(item, tuple) and len(item) == 2:
            result.append(Variant(label=item[0], computation=item[1]))
        else:
            raise InvalidConfiguration(
                f"Expected Variant or (label, computation) pair, got {item!r}"
            )
    return result


def validate_variants(variants: list[Variant]) -> None:
    """Reject an empty variant set, bad or duplicate labels, and non-callables.

    Raises:
        InvalidConfiguration: On the first problem found
    """
    if not variants:
        raise InvalidConfiguration("At least one variant is required")

    seen: set[str] = set()
    for variant in variants:
        if not isinstance(variant.label, str) or not variant.label:
            raise InvalidConfiguration(f"Variant label must be a non-empty string: {variant.label!r}")
        if variant.label in seen:
            raise InvalidConfiguration(f"Duplicate variant label: {variant.label}")
        seen.add(variant.label)
        if not callable(variant.computation):
            raise InvalidConfiguration(f"Computation for '{variant.label}' is not callable")
        if variant.resource is not None and not callable(variant.resource):
            raise InvalidConfiguration(f"Resource for '{variant.label}' is not callable")


def validate(variants: list[Variant], repetitions: Any, percentile: Any, warmup: Any) -> None:
    """Check run parameters before anything executes.

    Raises:
        InvalidConfiguration: On empty variant set, bad or duplicate labels,
            non-callable computations, or out-of-range numeric parameters
    """
    validate_variants(variants)

    if isinstance(repetitions, bool) or not isinstance(repetitions, int) or repetitions < 1:
        raise InvalidConfiguration(f"repetitions must be a positive integer, got {repetitions!r}")

    if isinstance(warmup, bool) or not isinstance(warmup, int) or warmup < 0:
        raise InvalidConfiguration(f"warmup must be a non-negative integer, got {warmup!r}")

    if isinstance(percentile, bool) or not isinstance(percentile, (int, float)):
        raise InvalidConfiguration(f"percentile must be a number, got {percentile!r}")
    if not 0.0 < percentile <= 100.0:
        raise InvalidConfiguration(f"percentile must be within (0, 100], got {percentile}")


class BenchmarkHarness:
    """Runs variants sequentially on the calling thread and summarizes timings.

    The harness holds no state between runs; each call to ``run`` starts
    from empty measurement sets.
    """

    def __init__(self, config: HarnessConfig | None = None):
        """Initialize harness.

        Args:
            config: Defaults for repetitions, percentile and warmup.
                    Loaded from VARIANTBENCH_* environment variables if omitted.

        Raises:
            InvalidConfiguration: If the environment holds invalid settings
        """
        if config is None:
            try:
                config = HarnessConfig()
            except ValidationError as err:
                raise InvalidConfiguration(f"Invalid harness settings: {err}") from err
        self.config = config

    def run(
        self,
        variants: Iterable[VariantSpec] | Mapping[str, Callable[..., Any]],
        repetitions: int | None = None,
        *,
        percentile: float | None = None,
        warmup: int | None = None,
    ) -> RunReport:
        """Execute every variant ``repetitions`` times and summarize.

        Args:
            variants: Ordered variants, (label, computation) pairs, or a mapping
            repetitions: Timed executions per variant (default from config)
            percentile: Percentile reported in each Summary (default from config)
            warmup: Untimed executions per variant before measuring (default from config)

        Returns:
            RunReport mapping each label to a Summary or a Failed marker

        Raises:
            InvalidConfiguration: If parameters are invalid; nothing has run
        """
        variant_list = coerce_variants(variants)
        repetitions = self.config.repetitions if repetitions is None else repetitions
        percentile = self.config.percentile if percentile is None else percentile
        warmup = self.config.warmup if warmup is None else warmup
        validate(variant_list, repetitions, percentile, warmup)

        logger.info(
            f"Benchmarking {len(variant_list)} variants x {repetitions} repetitions"
        )

        started_at = time.time()
        start = time.perf_counter_ns()

        outcomes: dict[str, Outcome] = {}
        recorded: dict[str, tuple[Measurement, ...]] = {}

        for variant in variant_list:
            measurements, failure = self._run_variant(variant, repetitions, warmup)
            recorded[variant.label] = measurements

            if failure is not None:
                outcomes[variant.label] = Failed(
                    label=variant.label, error=failure, measurements=measurements
                )
                logger.warning(str(failure))
            else:
                summary = Summary.from_measurements(variant.label, measurements, percentile)
                outcomes[variant.label] = summary
                logger.info(
                    f"{variant.label}: mean {summary.mean_ms:.3f}ms, "
                    f"median {summary.median_ms:.3f}ms over {summary.count} runs"
                )

        return RunReport(
            outcomes=outcomes,
            measurements=recorded,
            repetitions=repetitions,
            percentile=float(percentile),
            started_at=started_at,
            duration_seconds=(time.perf_counter_ns() - start) / 1e9,
        )

    def _run_variant(
        self, variant: Variant, repetitions: int, warmup: int
    ) -> tuple[tuple[Measurement, ...], VariantFailure | None]:
        """Time one variant. Stops at the first exception.

        Returns:
            (measurements in execution order, failure or None)
        """
        measurements: list[Measurement] = []
        failure: VariantFailure | None = None

        try:
            with ExitStack() as stack:
                if variant.resource is not None:
                    handle = stack.enter_context(variant.resource())
                    args: tuple[Any, ...] = (handle,)
                else:
                    args = ()

                # 0 marks a failure outside the timed repetitions (warm-up)
                repetition = 0
                try:
                    for _ in range(warmup):
                        variant.computation(*args)

                    for repetition in range(1, repetitions + 1):
                        t0 = time.perf_counter_ns()
                        variant.computation(*args)
                        elapsed = time.perf_counter_ns() - t0
                        measurements.append(Measurement(variant.label, repetition, elapsed))
                        logger.debug(f"{variant.label} [{repetition}/{repetitions}] {elapsed}ns")
                except Exception as err:
                    # Recorded before the resource exits; a resource that
                    # suppresses the exception must not hide the failure.
                    failure = VariantFailure(variant.label, repetition, err)
                    raise
        except Exception as err:
            if failure is None:
                failure = VariantFailure(variant.label, 0, err)

        return tuple(measurements), failure


def run(
    variants: Iterable[VariantSpec] | Mapping[str, Callable[..., Any]],
    repetitions: int | None = None,
    *,
    percentile: float | None = None,
    warmup: int | None = None,
    config: HarnessConfig | None = None,
) -> RunReport:
    """Benchmark variants with a one-off harness. See BenchmarkHarness.run."""
    return BenchmarkHarness(config).run(
        variants, repetitions, percentile=percentile, warmup=warmup
    )
