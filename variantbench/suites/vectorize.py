"""Row-at-a-time Python vs numpy and pandas column arithmetic."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np
import pandas as pd

from variantbench.harness.types import Variant
from variantbench.suites.data import make_table


@contextmanager
def build(rows: int = 50_000, min_length: int = 1_000, seed: int = 42) -> Iterator[list[Variant]]:
    """Total span length of the rows whose span exceeds ``min_length``.

    Args:
        rows: Table size
        min_length: Filter threshold on end - start + 1
        seed: Table seed
    """
    table = make_table(rows, seed)
    starts = table["start"]
    ends = table["end"]
    start_arr = np.asarray(starts, dtype=np.int64)
    end_arr = np.asarray(ends, dtype=np.int64)
    frame = pd.DataFrame({"start": starts, "end": ends})

    def python_loop() -> int:
        total = 0
        for s, e in zip(starts, ends):
            length = e - s + 1
            if length > min_length:
                total += length
        return total

    def with_numpy() -> int:
        lengths = end_arr - start_arr + 1
        return int(lengths[lengths > min_length].sum())

    def with_pandas() -> int:
        lengths = frame["end"] - frame["start"] + 1
        return int(lengths[lengths > min_length].sum())

    def with_query() -> int:
        lengths = frame.assign(length=frame["end"] - frame["start"] + 1)
        return int(lengths.query(f"length > {min_length}")["length"].sum())

    yield [
        Variant.of("python_loop", python_loop),
        Variant.of("numpy", with_numpy),
        Variant.of("pandas", with_pandas),
        Variant.of("pandas_query", with_query),
    ]
