"""Opt-in output equivalence check for variants.

The harness never looks at what a variant returns. Callers who want to make
sure their candidates agree run this once before (or after) timing them.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterable, Mapping
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any

from variantbench.errors import EquivalenceError, InvalidConfiguration
from variantbench.harness.runner import VariantSpec, coerce_variants, validate_variants

logger = logging.getLogger(__name__)


@dataclass
class EquivalenceReport:
    """Per-label outcome of comparing each variant's result to the reference."""

    reference: str
    matches: dict[str, bool]
    errors: dict[str, Exception]

    @property
    def ok(self) -> bool:
        return not self.errors and all(self.matches.values())

    @property
    def mismatched(self) -> list[str]:
        return [label for label, same in self.matches.items() if not same] + list(self.errors)

    def assert_all(self) -> None:
        """Raise EquivalenceError unless every variant matched the reference."""
        if not self.ok:
            raise EquivalenceError(self.reference, self.mismatched)


def _execute(variant) -> Any:
    with ExitStack() as stack:
        if variant.resource is not None:
            handle = stack.enter_context(variant.resource())
            return variant.computation(handle)
        return variant.computation()


def check_equivalence(
    variants: Iterable[VariantSpec] | Mapping[str, Callable[..., Any]],
    equal: Callable[[Any, Any], bool] = operator.eq,
    reference: str | None = None,
) -> EquivalenceReport:
    """Run every variant once and compare its result with the reference variant.

    If the reference itself raises, nothing can be compared: the report
    carries that error under the reference label and no matches.

    Args:
        variants: Same input accepted by BenchmarkHarness.run
        equal: Comparator returning True when two results agree
        reference: Label of the reference variant (first variant by default)

    Returns:
        EquivalenceReport

    Raises:
        InvalidConfiguration: On input ``run`` would reject, or an unknown reference
    """
    variant_list = coerce_variants(variants)
    validate_variants(variant_list)

    by_label = {v.label: v for v in variant_list}
    reference = reference or variant_list[0].label
    if reference not in by_label:
        raise InvalidConfiguration(f"Unknown reference variant: {reference}")

    try:
        expected = _execute(by_label[reference])
    except Exception as err:
        logger.warning(f"Reference {reference} raised during equivalence check: {err}")
        return EquivalenceReport(reference=reference, matches={}, errors={reference: err})

    matches: dict[str, bool] = {reference: True}
    errors: dict[str, Exception] = {}

    for variant in variant_list:
        if variant.label == reference:
            continue
        try:
            actual = _execute(variant)
        except Exception as err:
            logger.warning(f"{variant.label} raised during equivalence check: {err}")
            errors[variant.label] = err
            continue

        same = bool(equal(expected, actual))
        matches[variant.label] = same
        if not same:
            logger.warning(f"{variant.label} disagrees with reference {reference}")

    return EquivalenceReport(reference=reference, matches=matches, errors=errors)


def allclose(expected: Any, actual: Any, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
    """Numeric comparator for sequences, numpy arrays or pandas objects."""
    import numpy as np

    return bool(
        np.allclose(np.asarray(expected, dtype=float), np.asarray(actual, dtype=float), rtol, atol)
    )


def frames_equal(expected: Any, actual: Any) -> bool:
    """Comparator for pandas DataFrames, ignoring index and dtype differences."""
    import pandas as pd

    try:
        pd.testing.assert_frame_equal(
            expected.reset_index(drop=True),
            actual.reset_index(drop=True),
            check_dtype=False,
        )
    except AssertionError:
        return False
    return True
