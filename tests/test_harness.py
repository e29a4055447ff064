"""Tests for the benchmark harness run loop."""

from __future__ import annotations

import time
from contextlib import contextmanager, suppress

import pytest

from tests.helpers import CallCounter, FailOn
from variantbench.config import HarnessConfig
from variantbench.errors import InvalidConfiguration, VariantFailure
from variantbench.harness import BenchmarkHarness, Failed, Summary, Variant, run


class TestRunContract:
    """Result shape and repetition counts."""

    def test_one_entry_per_label(self, harness):
        """Test that run returns exactly one entry per requested label, in order."""
        report = harness.run(
            [("a", lambda: 1), ("b", lambda: 2), ("c", lambda: 3)], repetitions=2
        )

        assert list(report) == ["a", "b", "c"]
        assert len(report) == 3

    def test_each_variant_runs_exactly_repetitions_times(self, harness):
        """Test that every variant executes the configured number of repetitions."""
        first = CallCounter()
        second = CallCounter()

        report = harness.run([("first", first), ("second", second)], repetitions=7)

        assert first.calls == 7
        assert second.calls == 7
        assert report["first"].count == 7
        assert len(report.measurements["second"]) == 7

    def test_measurements_recorded_in_execution_order(self, harness):
        """Test measurement indexes are 1..N in execution order."""
        report = harness.run({"only": lambda: None}, repetitions=5)

        indexes = [m.index for m in report.measurements["only"]]
        assert indexes == [1, 2, 3, 4, 5]
        assert all(m.label == "only" for m in report.measurements["only"])
        assert all(m.duration_ns >= 0 for m in report.measurements["only"])

    def test_accepts_variant_objects_pairs_and_mappings(self, harness):
        """Test that all supported variant input forms are accepted."""
        by_objects = harness.run([Variant.of("x", lambda: 1)], repetitions=1)
        by_pairs = harness.run([("x", lambda: 1)], repetitions=1)
        by_mapping = harness.run({"x": lambda: 1}, repetitions=1)

        for report in (by_objects, by_pairs, by_mapping):
            assert isinstance(report["x"], Summary)

    def test_return_values_are_not_inspected(self, harness):
        """Test that variants returning different things are all summarized."""
        report = harness.run(
            {"none": lambda: None, "frame": lambda: object(), "int": lambda: 42},
            repetitions=2,
        )

        assert all(isinstance(outcome, Summary) for outcome in report.values())

    def test_repeated_runs_have_same_counts(self, harness):
        """Test that running twice yields summaries with the same count."""
        variants = [("sum", lambda: sum(range(100))), ("len", lambda: len("abc"))]

        first = harness.run(variants, repetitions=4)
        second = harness.run(variants, repetitions=4)

        for label in ("sum", "len"):
            assert first[label].count == second[label].count == 4

    def test_defaults_come_from_config(self):
        """Test that omitted parameters use HarnessConfig values."""
        harness = BenchmarkHarness(HarnessConfig(repetitions=6, percentile=50.0))

        report = harness.run({"a": lambda: None})

        assert report.repetitions == 6
        assert report["a"].count == 6
        assert report["a"].percentile == 50.0

    def test_module_level_run(self, config):
        """Test the one-off run() helper."""
        report = run({"a": lambda: None}, 2, config=config)
        assert report["a"].count == 2


class TestTimingScenarios:
    """Duration ordering checks with real sleeps."""

    def test_slower_variant_has_higher_mean(self, harness):
        """Test that sleeping 10ms measures slower than sleeping 1ms."""
        report = harness.run(
            {"a": lambda: time.sleep(0.010), "b": lambda: time.sleep(0.001)},
            repetitions=5,
        )

        assert report["a"].count == 5
        assert report["b"].count == 5
        assert report["a"].mean_ns >= report["b"].mean_ns
        assert report["a"].min_ns >= 10_000_000
        assert report.fastest() == "b"


class TestFailures:
    """Failure isolation and reporting."""

    def test_failing_variant_does_not_stop_others(self, harness):
        """Test that 'bad' is marked failed while 'ok' is summarized."""

        def bad():
            raise ValueError("broken variant")

        report = harness.run({"ok": lambda: 1, "bad": bad}, repetitions=3)

        assert isinstance(report["ok"], Summary)
        assert report["ok"].count == 3
        assert isinstance(report["bad"], Failed)
        assert not isinstance(report["bad"], Summary)
        assert not report.ok

    def test_variants_after_failure_still_run(self, harness):
        """Test that a failure early in the list does not skip later variants."""
        later = CallCounter()

        def bad():
            raise RuntimeError("first one breaks")

        report = harness.run([("bad", bad), ("later", later)], repetitions=3)

        assert later.calls == 3
        assert isinstance(report["later"], Summary)

    def test_failure_aborts_remaining_repetitions(self, harness):
        """Test that a variant stops at the repetition that raised."""
        flaky = FailOn(call=3)

        report = harness.run({"flaky": flaky}, repetitions=10)

        outcome = report["flaky"]
        assert isinstance(outcome, Failed)
        assert flaky.calls == 3
        assert len(outcome.measurements) == 2
        assert len(report.measurements["flaky"]) == 2
        assert outcome.error.repetition == 3

    def test_original_exception_is_kept_unmodified(self, harness):
        """Test the caller's exception is attached as the cause."""
        error = KeyError("missing column")

        def bad():
            raise error

        report = harness.run({"bad": bad}, repetitions=2)

        outcome = report["bad"]
        assert outcome.cause is error
        assert isinstance(outcome.error, VariantFailure)
        assert outcome.error.__cause__ is error
        assert outcome.error.label == "bad"

    def test_failed_variants_listed_separately(self, harness):
        """Test succeeded/failed views partition the report."""

        def bad():
            raise RuntimeError()

        report = harness.run({"ok": lambda: None, "bad": bad}, repetitions=1)

        assert set(report.succeeded) == {"ok"}
        assert set(report.failed) == {"bad"}

    def test_keyboard_interrupt_propagates(self, harness):
        """Test that interrupts are not captured as variant failures."""

        def interrupted():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            harness.run({"stop": interrupted}, repetitions=1)


class TestInvalidConfiguration:
    """Parameters rejected before anything runs."""

    def test_empty_variant_list(self, harness):
        """Test that no variants is an error."""
        with pytest.raises(InvalidConfiguration):
            harness.run([], repetitions=3)

    @pytest.mark.parametrize("repetitions", [0, -1, 1.5, True])
    def test_bad_repetitions(self, harness, counter, repetitions):
        """Test that zero, negative or non-integer repetitions fail without running."""
        with pytest.raises(InvalidConfiguration):
            harness.run({"a": counter}, repetitions=repetitions)
        assert counter.calls == 0

    def test_duplicate_labels(self, harness, counter):
        """Test that duplicate labels fail before any variant executes."""
        other = CallCounter()

        with pytest.raises(InvalidConfiguration, match="Duplicate"):
            harness.run([("same", counter), ("same", other)], repetitions=3)

        assert counter.calls == 0
        assert other.calls == 0

    def test_duplicate_detected_even_after_valid_variants(self, harness, counter):
        """Test that validation covers the whole list before executing any of it."""
        with pytest.raises(InvalidConfiguration):
            harness.run([("a", counter), ("b", lambda: 1), ("a", lambda: 2)], repetitions=1)
        assert counter.calls == 0

    @pytest.mark.parametrize("percentile", [0, -5, 100.5, "95"])
    def test_bad_percentile(self, harness, counter, percentile):
        """Test that percentiles outside (0, 100] are rejected."""
        with pytest.raises(InvalidConfiguration):
            harness.run({"a": counter}, repetitions=1, percentile=percentile)
        assert counter.calls == 0

    def test_negative_warmup(self, harness, counter):
        with pytest.raises(InvalidConfiguration):
            harness.run({"a": counter}, repetitions=1, warmup=-1)
        assert counter.calls == 0

    def test_non_callable_and_blank_labels(self, harness):
        """Test malformed variants are rejected."""
        with pytest.raises(InvalidConfiguration):
            harness.run([("a", 42)], repetitions=1)
        with pytest.raises(InvalidConfiguration):
            harness.run([("", lambda: 1)], repetitions=1)
        with pytest.raises(InvalidConfiguration):
            harness.run(["not a pair"], repetitions=1)

    def test_is_a_value_error(self, harness):
        """Test InvalidConfiguration can be caught as ValueError."""
        with pytest.raises(ValueError):
            harness.run([], repetitions=1)


class TestWarmupAndResources:
    """Untimed phases around a variant's repetitions."""

    def test_warmup_runs_are_not_measured(self, harness):
        """Test that warm-up executions are extra and not recorded."""
        counter = CallCounter()

        report = harness.run({"a": counter}, repetitions=3, warmup=2)

        assert counter.calls == 5
        assert report["a"].count == 3

    def test_resource_acquired_once_and_released(self, harness):
        """Test that a scoped resource wraps exactly one variant's repetitions."""
        events = []

        @contextmanager
        def pool():
            events.append("open")
            yield "handle"
            events.append("close")

        seen = []
        report = harness.run(
            [
                Variant.scoped("pooled", pool, lambda handle: seen.append(handle)),
                Variant.of("plain", lambda: events.append("plain")),
            ],
            repetitions=3,
        )

        assert isinstance(report["pooled"], Summary)
        assert seen == ["handle"] * 3
        assert events == ["open", "close", "plain", "plain", "plain"]

    def test_resource_released_when_variant_fails(self, harness):
        """Test that the resource is closed even if a repetition raises."""
        events = []

        @contextmanager
        def pool():
            events.append("open")
            try:
                yield None
            finally:
                events.append("close")

        def bad(_handle):
            raise RuntimeError("inside pool")

        report = harness.run([Variant.scoped("pooled", pool, bad)], repetitions=3)

        assert isinstance(report["pooled"], Failed)
        assert events == ["open", "close"]

    def test_resource_setup_failure_is_variant_failure(self, harness):
        """Test that a resource that cannot be acquired fails only its variant."""

        def broken_pool():
            raise OSError("no workers")

        report = harness.run(
            [Variant.scoped("pooled", broken_pool, lambda h: None), ("plain", lambda: None)],
            repetitions=2,
        )

        assert isinstance(report["pooled"], Failed)
        assert report["pooled"].error.repetition == 0
        assert report["pooled"].measurements == ()
        assert isinstance(report["plain"], Summary)

    def test_resource_setup_not_timed(self, harness):
        """Test that slow resource acquisition is excluded from measurements."""

        @contextmanager
        def slow_pool():
            time.sleep(0.05)
            yield None

        report = harness.run([Variant.scoped("pooled", slow_pool, lambda h: None)], repetitions=2)

        assert report["pooled"].max_ns < 50_000_000

    @pytest.mark.parametrize("fail_on", [1, 2])
    def test_suppressing_resource_does_not_hide_failure(self, harness, fail_on):
        """Test that a resource swallowing the error still yields a Failed marker."""
        failing = FailOn(fail_on)

        report = harness.run(
            [
                Variant.scoped("pooled", lambda: suppress(RuntimeError), lambda h: failing()),
                ("plain", lambda: None),
            ],
            repetitions=5,
        )

        outcome = report["pooled"]
        assert isinstance(outcome, Failed)
        assert outcome.error.repetition == fail_on
        assert outcome.cause is failing.error
        assert len(outcome.measurements) == fail_on - 1
        assert failing.calls == fail_on
        assert isinstance(report["plain"], Summary)

    def test_resource_teardown_failure_is_variant_failure(self, harness):
        """Test that an error raised while releasing the resource fails the variant."""

        @contextmanager
        def leaky_pool():
            yield None
            raise OSError("cannot shut down")

        report = harness.run([Variant.scoped("pooled", leaky_pool, lambda h: None)], repetitions=2)

        outcome = report["pooled"]
        assert isinstance(outcome, Failed)
        assert outcome.error.repetition == 0
        assert isinstance(outcome.cause, OSError)
        assert len(outcome.measurements) == 2
