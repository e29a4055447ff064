"""Shared test fixtures for the variantbench test suite."""

from __future__ import annotations

import pytest

from tests.helpers import CallCounter
from variantbench.config import HarnessConfig
from variantbench.harness.runner import BenchmarkHarness


@pytest.fixture
def config() -> HarnessConfig:
    """Small, explicit defaults independent of the environment."""
    return HarnessConfig(repetitions=3, percentile=95.0, warmup=0)


@pytest.fixture
def harness(config: HarnessConfig) -> BenchmarkHarness:
    """A harness using the test config."""
    return BenchmarkHarness(config)


@pytest.fixture
def counter() -> CallCounter:
    """A fresh call counter returning 1."""
    return CallCounter(result=1)
