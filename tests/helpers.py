"""Test helpers for building variants with observable behaviour."""

from __future__ import annotations

from variantbench.harness.types import Measurement


class CallCounter:
    """Zero-argument computation that counts how often it ran."""

    def __init__(self, result=None):
        self.calls = 0
        self.result = result

    def __call__(self):
        self.calls += 1
        return self.result


class FailOn:
    """Computation that raises from the given call number on (1-based)."""

    def __init__(self, call: int, error: Exception | None = None):
        self.call = call
        self.calls = 0
        self.error = error or RuntimeError("boom")

    def __call__(self):
        self.calls += 1
        if self.calls >= self.call:
            raise self.error


def make_measurements(label: str, durations_ns: list[int]) -> tuple[Measurement, ...]:
    """Measurements with 1-based indexes in the given order."""
    return tuple(Measurement(label, i, d) for i, d in enumerate(durations_ns, 1))
