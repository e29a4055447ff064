"""Growing a sequence element by element vs allocating it up front."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np

from variantbench.harness.types import Variant


def append_in_loop(n: int) -> list[int]:
    out = []
    for i in range(n):
        out.append(i * i)
    return out


def concatenate_in_loop(n: int) -> list[int]:
    # Rebuilds the list every iteration
    out: list[int] = []
    for i in range(n):
        out = out + [i * i]
    return out


def preallocate(n: int) -> list[int]:
    out = [0] * n
    for i in range(n):
        out[i] = i * i
    return out


def comprehension(n: int) -> list[int]:
    return [i * i for i in range(n)]


def numpy_vector(n: int) -> np.ndarray:
    values = np.arange(n, dtype=np.int64)
    return values * values


@contextmanager
def build(n: int = 20_000, include_concatenate: bool = False) -> Iterator[list[Variant]]:
    """Squares of 0..n-1, built five different ways.

    Args:
        n: Sequence length
        include_concatenate: Also time the quadratic ``out = out + [x]`` form;
            off by default since it dominates the run for large n
    """
    variants = [
        Variant.of("append", lambda: append_in_loop(n)),
        Variant.of("preallocate", lambda: preallocate(n)),
        Variant.of("comprehension", lambda: comprehension(n)),
        Variant.of("numpy", lambda: numpy_vector(n)),
    ]
    if include_concatenate:
        variants.insert(0, Variant.of("concatenate", lambda: concatenate_in_loop(n)))
    yield variants
