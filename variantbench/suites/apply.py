"""Explicit loops vs map, comprehensions and pandas apply over one column."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pandas as pd

from variantbench.harness.types import Variant
from variantbench.suites.data import make_table


def scale(x: float) -> float:
    return x * 2.0 + 1.0


@contextmanager
def build(rows: int = 20_000, seed: int = 42) -> Iterator[list[Variant]]:
    """Apply ``scale`` to every value of the score column.

    Args:
        rows: Table size
        seed: Table seed
    """
    scores = make_table(rows, seed)["score"]
    series = pd.Series(scores)

    def for_loop() -> list[float]:
        out = []
        for x in scores:
            out.append(scale(x))
        return out

    variants = [
        Variant.of("for_loop", for_loop),
        Variant.of("map", lambda: list(map(scale, scores))),
        Variant.of("comprehension", lambda: [scale(x) for x in scores]),
        Variant.of("series_apply", lambda: series.apply(scale)),
        Variant.of("series_vectorized", lambda: series * 2.0 + 1.0),
    ]
    yield variants
