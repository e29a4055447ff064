"""Structured error hierarchy for variantbench."""

from __future__ import annotations


class VariantBenchError(Exception):
    """Base for all variantbench errors."""

    pass


class InvalidConfiguration(VariantBenchError, ValueError):
    """Run parameters rejected before any variant executed."""

    pass


class VariantFailure(VariantBenchError):
    """A variant's computation raised while being benchmarked.

    The original exception is kept unmodified as ``cause`` (and as
    ``__cause__``), so callers can inspect or re-raise it.
    """

    def __init__(self, label: str, repetition: int, cause: BaseException):
        self.label = label
        self.repetition = repetition
        self.cause = cause
        super().__init__(
            f"Variant '{label}' failed on repetition {repetition}: "
            f"{type(cause).__name__}: {cause}"
        )
        self.__cause__ = cause


class EquivalenceError(VariantBenchError):
    """Variants that should agree produced different results."""

    def __init__(self, reference: str, mismatched: list[str]):
        self.reference = reference
        self.mismatched = mismatched
        super().__init__(
            f"Results differ from reference '{reference}': {', '.join(mismatched)}"
        )
