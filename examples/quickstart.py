"""variantbench Quickstart: your first comparison

Times three ways of building the same list and prints a summary table, then
shows what a broken variant looks like in the report.

Run with:
    python examples/quickstart.py
"""

from variantbench import BenchmarkHarness, HarnessConfig, check_equivalence
from variantbench.harness.report import ReportGenerator

N = 50_000


def grow():
    out = []
    for i in range(N):
        out.append(i * i)
    return out


def preallocate():
    out = [0] * N
    for i in range(N):
        out[i] = i * i
    return out


def comprehension():
    return [i * i for i in range(N)]


def broken():
    return [i * i for i in range(N)][N]  # IndexError


def main():
    variants = [("grow", grow), ("preallocate", preallocate), ("comprehension", comprehension)]

    # Timing never checks results; do it once up front
    check_equivalence(variants).assert_all()

    harness = BenchmarkHarness(HarnessConfig(repetitions=20, percentile=90))
    report = harness.run(variants + [("broken", broken)])

    print(ReportGenerator().to_text(report, title=f"Squares of 0..{N - 1}"))
    print()
    print(f"Fastest: {report.fastest()}")

    # Raw measurements keep execution order, so warm-up effects are visible
    first, *rest = report.measurements["grow"]
    print(f"grow: first run {first.duration_ms:.3f}ms, "
          f"later runs {min(m.duration_ms for m in rest):.3f}ms at best")

    for label, failure in report.failed.items():
        print(f"{label} failed: {failure.cause!r}")


if __name__ == "__main__":
    main()
