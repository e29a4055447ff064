"""Deterministic synthetic tabular data shared by the bundled suites."""

from __future__ import annotations

import csv
import random
from pathlib import Path
from typing import Any

CATEGORIES = ["alpha", "beta", "gamma", "delta"]
COLUMNS = ["id", "category", "start", "end", "score"]


def make_table(rows: int = 10_000, seed: int = 42) -> dict[str, list[Any]]:
    """Build a column-oriented table.

    Args:
        rows: Number of rows
        seed: Random seed; the same seed always gives the same table

    Returns:
        Dict of column name -> list of values
    """
    rng = random.Random(seed)
    starts = [rng.randint(1, 1_000_000) for _ in range(rows)]
    return {
        "id": list(range(1, rows + 1)),
        "category": [rng.choice(CATEGORIES) for _ in range(rows)],
        "start": starts,
        "end": [s + rng.randint(0, 5_000) for s in starts],
        "score": [round(rng.uniform(0.0, 100.0), 3) for _ in range(rows)],
    }


def write_delimited(table: dict[str, list[Any]], path: Path, delimiter: str = ",") -> Path:
    """Write a table produced by make_table as a delimited text file with a header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(COLUMNS)
        writer.writerows(zip(*(table[c] for c in COLUMNS)))
    return path
