"""Reading and filtering a delimited file with different readers.

The file is written once into a temporary directory before any variant
runs and removed when the suite context exits.
"""

from __future__ import annotations

import csv
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pandas as pd
import pyarrow.compute as pc
import pyarrow.csv as pacsv

from variantbench.harness.types import Variant
from variantbench.suites.data import make_table, write_delimited

Result = tuple[int, float]


def read_csv_module(path: Path, category: str) -> Result:
    count = 0
    total = 0.0
    with open(path, newline="") as f:
        for row in csv.DictReader(f):
            if row["category"] == category:
                count += 1
                total += float(row["score"])
    return count, total


def read_pandas(path: Path, category: str, engine: str = "c") -> Result:
    frame = pd.read_csv(path, engine=engine)
    selected = frame.loc[frame["category"] == category, "score"]
    return int(selected.size), float(selected.sum())


def read_pandas_usecols(path: Path, category: str) -> Result:
    frame = pd.read_csv(path, usecols=["category", "score"], dtype={"category": "category"})
    selected = frame.loc[frame["category"] == category, "score"]
    return int(selected.size), float(selected.sum())


def read_pyarrow(path: Path, category: str) -> Result:
    table = pacsv.read_csv(path)
    selected = table.filter(pc.equal(table["category"], category))
    total = pc.sum(selected["score"]).as_py()
    return selected.num_rows, float(total or 0.0)


@contextmanager
def build(rows: int = 100_000, category: str = "alpha", seed: int = 42) -> Iterator[list[Variant]]:
    """Count rows of one category and sum their score column.

    Args:
        rows: Rows in the generated file
        category: Category to keep
        seed: Table seed
    """
    workdir = Path(tempfile.mkdtemp(prefix="variantbench-"))
    try:
        path = write_delimited(make_table(rows, seed), workdir / "table.csv")
        yield [
            Variant.of("csv_module", lambda: read_csv_module(path, category)),
            Variant.of("pandas_c", lambda: read_pandas(path, category)),
            Variant.of("pandas_usecols", lambda: read_pandas_usecols(path, category)),
            Variant.of("pandas_pyarrow", lambda: read_pandas(path, category, engine="pyarrow")),
            Variant.of("pyarrow", lambda: read_pyarrow(path, category)),
        ]
    finally:
        shutil.rmtree(workdir, ignore_errors=True)
