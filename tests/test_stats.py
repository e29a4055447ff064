"""Tests for summary statistics helpers."""

import pytest

from variantbench.harness import stats


def test_mean_and_median():
    """Test basic central tendency."""
    assert stats.mean([1, 2, 3, 4]) == 2.5
    assert stats.median([5, 1, 3]) == 3
    assert stats.median([4, 1, 3, 2]) == 2.5


def test_percentile_interpolates_linearly():
    """Test percentile matches numpy's default linear method."""
    values = [10, 20, 30, 40, 50]
    assert stats.percentile(values, 0) == 10
    assert stats.percentile(values, 100) == 50
    assert stats.percentile(values, 50) == 30
    assert stats.percentile(values, 95) == pytest.approx(48.0)
    assert stats.percentile(values, 10) == pytest.approx(14.0)


def test_percentile_single_value():
    """Test a one-element sample returns that element for any percentile."""
    assert stats.percentile([7], 1) == 7
    assert stats.percentile([7], 99) == 7


def test_percentile_does_not_mutate_input():
    """Test percentile sorts a copy."""
    values = [3, 1, 2]
    stats.percentile(values, 50)
    assert values == [3, 1, 2]


def test_empty_and_out_of_range_inputs_raise():
    """Test invalid inputs are rejected."""
    with pytest.raises(ValueError):
        stats.mean([])
    with pytest.raises(ValueError):
        stats.percentile([], 50)
    with pytest.raises(ValueError):
        stats.percentile([1, 2], 101)


def test_stdev():
    """Test sample standard deviation."""
    assert stats.stdev([5]) == 0.0
    assert stats.stdev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.13809, rel=1e-4)
