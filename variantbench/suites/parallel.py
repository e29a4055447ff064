"""Serial execution vs thread and process pools.

Each pool variant owns its executor. By default the pool is created once
around the variant's repetitions and excluded from timing; pass
``include_pool_setup=True`` to start and stop a pool inside every
repetition instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from contextlib import contextmanager

from variantbench.harness.types import Variant


def sum_of_squares(bounds: tuple[int, int]) -> int:
    """CPU-bound work unit; module-level so process pools can pickle it."""
    lo, hi = bounds
    total = 0
    for i in range(lo, hi):
        total += i * i
    return total


def make_chunks(n: int, chunks: int) -> list[tuple[int, int]]:
    """Split range(n) into ``chunks`` contiguous half-open intervals."""
    step = max(1, -(-n // chunks))
    return [(lo, min(lo + step, n)) for lo in range(0, n, step)]


def run_on(pool: Executor, chunks: list[tuple[int, int]]) -> int:
    return sum(pool.map(sum_of_squares, chunks))


@contextmanager
def build(
    n: int = 2_000_000,
    chunks: int = 8,
    workers: int = 4,
    include_pool_setup: bool = False,
) -> Iterator[list[Variant]]:
    """Sum of squares below ``n`` split into ``chunks`` work units.

    Args:
        n: Upper bound (exclusive)
        chunks: Number of work units
        workers: Pool size for the thread and process variants
        include_pool_setup: Time pool start-up and shutdown as part of each repetition
    """
    work = make_chunks(n, chunks)

    def serial() -> int:
        return sum(map(sum_of_squares, work))

    variants = [Variant.of("serial", serial)]

    for label, executor_cls in (("threads", ThreadPoolExecutor), ("processes", ProcessPoolExecutor)):
        if include_pool_setup:

            def fresh_pool(executor_cls=executor_cls) -> int:
                with executor_cls(max_workers=workers) as pool:
                    return run_on(pool, work)

            variants.append(Variant.of(label, fresh_pool))
        else:
            variants.append(
                Variant.scoped(
                    label,
                    lambda executor_cls=executor_cls: executor_cls(max_workers=workers),
                    lambda pool: run_on(pool, work),
                )
            )

    yield variants
