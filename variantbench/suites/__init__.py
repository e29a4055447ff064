"""Bundled benchmark suites.

Each suite module exposes ``build(**params)``, a context manager yielding the
suite's variants. Variants in a suite compute the same result so they can be
checked with ``check_equivalence`` before being timed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any

from variantbench.harness.equivalence import EquivalenceReport, allclose, check_equivalence
from variantbench.harness.runner import BenchmarkHarness
from variantbench.harness.types import RunReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Suite:
    """A registered suite: how to build its variants and compare their results."""

    name: str
    description: str
    build: Callable[..., AbstractContextManager[list]]
    equal: Callable[[Any, Any], bool] = allclose


SUITES: dict[str, Suite] = {}


def register_suite(suite: Suite) -> Suite:
    if suite.name in SUITES:
        logger.warning(f"Suite '{suite.name}' already registered, overriding")
    SUITES[suite.name] = suite
    logger.debug(f"Registered suite: {suite.name}")
    return suite


def get_suite(name: str) -> Suite:
    """Look up a registered suite.

    Raises:
        ValueError: If no suite has that name
    """
    try:
        return SUITES[name]
    except KeyError:
        raise ValueError(
            f"Unknown suite: {name} (available: {', '.join(sorted(SUITES))})"
        ) from None


def _register_builtin() -> None:
    from variantbench.suites import apply, fileio, growth, parallel, vectorize

    for name, module in (
        ("growth", growth),
        ("apply", apply),
        ("vectorize", vectorize),
        ("parallel", parallel),
        ("fileio", fileio),
    ):
        summary = (module.__doc__ or name).strip().splitlines()[0]
        register_suite(Suite(name=name, description=summary, build=module.build))


_register_builtin()


def run_suite(
    name: str,
    harness: BenchmarkHarness,
    repetitions: int | None = None,
    params: dict[str, Any] | None = None,
    check: bool = False,
) -> tuple[RunReport, EquivalenceReport | None]:
    """Build a suite, optionally check its variants agree, then time them.

    Args:
        name: Registered suite name
        harness: Harness to run with
        repetitions: Per-variant repetitions (harness default if None)
        params: Keyword arguments for the suite's build()
        check: Run check_equivalence before timing

    Returns:
        (RunReport, EquivalenceReport or None)

    Raises:
        ValueError: If the suite is unknown
        InvalidConfiguration: If the run parameters are invalid
    """
    suite = get_suite(name)
    equivalence = None

    with suite.build(**(params or {})) as variants:
        if check:
            equivalence = check_equivalence(variants, equal=suite.equal)
            if not equivalence.ok:
                logger.warning(f"{name}: variants disagree: {', '.join(equivalence.mismatched)}")
        report = harness.run(variants, repetitions)

    return report, equivalence
