"""Tests for the opt-in equivalence check."""

from __future__ import annotations

from contextlib import contextmanager

import numpy as np
import pandas as pd
import pytest

from tests.helpers import CallCounter
from variantbench.errors import EquivalenceError, InvalidConfiguration
from variantbench.harness import Variant, check_equivalence
from variantbench.harness.equivalence import allclose, frames_equal


def test_matching_variants():
    """Test variants producing equal results pass."""
    report = check_equivalence(
        {"loop": lambda: [i * 2 for i in range(5)], "map": lambda: list(map(lambda i: i * 2, range(5)))}
    )

    assert report.ok
    assert report.reference == "loop"
    assert report.matches == {"loop": True, "map": True}
    report.assert_all()


def test_mismatch_is_reported():
    """Test a disagreeing variant is listed and assert_all raises."""
    report = check_equivalence({"a": lambda: 1, "b": lambda: 1, "c": lambda: 2})

    assert not report.ok
    assert report.mismatched == ["c"]
    with pytest.raises(EquivalenceError):
        report.assert_all()


def test_raising_variant_recorded_as_error():
    def bad():
        raise ValueError("nope")

    report = check_equivalence({"a": lambda: 1, "bad": bad})

    assert not report.ok
    assert isinstance(report.errors["bad"], ValueError)
    assert "bad" in report.mismatched


def test_each_variant_runs_once():
    first = CallCounter(result=3)
    second = CallCounter(result=3)

    check_equivalence([("first", first), ("second", second)])

    assert first.calls == 1
    assert second.calls == 1


def test_explicit_reference_and_comparator():
    """Test choosing the reference and a numeric comparator."""
    report = check_equivalence(
        {"list": lambda: [0.1 + 0.2, 1.0], "array": lambda: np.array([0.3, 1.0])},
        equal=allclose,
        reference="array",
    )

    assert report.reference == "array"
    assert report.ok


def test_unknown_reference():
    with pytest.raises(InvalidConfiguration):
        check_equivalence({"a": lambda: 1}, reference="missing")


def test_scoped_resource_is_used():
    """Test resource-backed variants receive their handle."""

    @contextmanager
    def resource():
        yield 10

    report = check_equivalence(
        [Variant.of("plain", lambda: 20), Variant.scoped("scoped", resource, lambda h: h * 2)]
    )

    assert report.ok


def test_frames_equal_ignores_index():
    left = pd.DataFrame({"a": [1, 2]}, index=[5, 6])
    right = pd.DataFrame({"a": [1.0, 2.0]})

    assert frames_equal(left, right)
    assert not frames_equal(left, pd.DataFrame({"a": [1, 3]}))


def test_duplicate_labels_rejected():
    """Test the same labels run() rejects are rejected before anything executes."""
    counter = CallCounter(result=1)

    with pytest.raises(InvalidConfiguration):
        check_equivalence([("a", counter), ("a", lambda: 2)])

    assert counter.calls == 0


def test_empty_variants_rejected():
    with pytest.raises(InvalidConfiguration):
        check_equivalence([])


def test_raising_reference_recorded_as_error():
    """Test a failing reference yields a failed report instead of propagating."""

    def broken():
        raise RuntimeError("reference broke")

    other = CallCounter(result=1)
    report = check_equivalence([("ref", broken), ("other", other)])

    assert not report.ok
    assert report.matches == {}
    assert isinstance(report.errors["ref"], RuntimeError)
    assert report.mismatched == ["ref"]
    assert other.calls == 0
    with pytest.raises(EquivalenceError):
        report.assert_all()
