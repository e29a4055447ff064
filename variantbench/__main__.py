"""CLI for running bundled benchmark suites and YAML plans.

Usage:
    python -m variantbench list
    python -m variantbench run growth apply --repetitions 20 --format markdown --output out/
    python -m variantbench plan plans/techniques.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from variantbench.config import REPORT_FORMATS, HarnessConfig
from variantbench.errors import InvalidConfiguration
from variantbench.harness.plan import BenchmarkPlan
from variantbench.harness.report import ReportGenerator
from variantbench.harness.runner import BenchmarkHarness
from variantbench.suites import SUITES, get_suite, run_suite

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

FORMATS = list(REPORT_FORMATS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="variantbench",
        description="Benchmark alternative implementations of the same computation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("list", help="List bundled suites")

    run_parser = subparsers.add_parser("run", help="Run one or more bundled suites")
    run_parser.add_argument("suites", nargs="+", help="Suite names (see 'list')")
    run_parser.add_argument("--repetitions", "-n", type=int, help="Timed runs per variant")
    run_parser.add_argument("--percentile", type=float, help="Percentile to report (0-100]")
    run_parser.add_argument("--warmup", type=int, help="Untimed runs per variant before timing")
    run_parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=FORMATS,
        help="Report file format; repeat for several (default: text table on stdout)",
    )
    run_parser.add_argument(
        "--output",
        type=str,
        help="Directory for report files (default: VARIANTBENCH_OUTPUT_DIR)",
    )
    run_parser.add_argument(
        "--check-equivalence",
        action="store_true",
        help="Run each variant once and compare results before timing",
    )

    plan_parser = subparsers.add_parser("plan", help="Run a YAML benchmark plan")
    plan_parser.add_argument("yaml_path", help="Path to plan YAML")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = HarnessConfig()
    except ValidationError as err:
        print(f"Invalid VARIANTBENCH_* settings: {err}", file=sys.stderr)
        return EXIT_INVALID

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            return list_suites()
        elif args.command == "run":
            return run_suites(args, config)
        elif args.command == "plan":
            return run_plan(args, config)
    except InvalidConfiguration as err:
        print(f"Invalid configuration: {err}", file=sys.stderr)
        return EXIT_INVALID
    except (ValueError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return EXIT_INVALID

    parser.print_help()
    return EXIT_FAILED


def list_suites() -> int:
    print(f"Found {len(SUITES)} suite(s):\n")
    for name, suite in SUITES.items():
        print(f"  {name:<12} {suite.description}")
    return EXIT_OK


def run_suites(args: argparse.Namespace, config: HarnessConfig) -> int:
    """Run the named suites and print or write their reports."""
    overrides = {
        key: value
        for key, value in (
            ("repetitions", args.repetitions),
            ("percentile", args.percentile),
            ("warmup", args.warmup),
        )
        if value is not None
    }
    try:
        config = HarnessConfig(**{**config.model_dump(), **overrides})
    except ValidationError as err:
        raise InvalidConfiguration(str(err)) from err

    harness = BenchmarkHarness(config)
    generator = ReportGenerator()
    formats = args.formats or config.formats
    write_files = bool(args.output or args.formats)
    output_dir = args.output or config.output_dir
    exit_code = EXIT_OK

    for name in args.suites:
        report, equivalence = run_suite(name, harness, check=args.check_equivalence)

        if write_files:
            for path in generator.write(report, output_dir, name, formats):
                print(f"[OK] Wrote {path}")
        else:
            print(generator.to_text(report, title=name))
            print()

        if not report.ok:
            exit_code = EXIT_FAILED
        if equivalence is not None and not equivalence.ok:
            print(f"[WARN] {name}: results differ from '{equivalence.reference}': "
                  f"{', '.join(equivalence.mismatched)}")
            exit_code = EXIT_FAILED

    return exit_code


def run_plan(args: argparse.Namespace, config: HarnessConfig) -> int:
    """Run every suite in a YAML plan and write reports in the plan's formats."""
    plan = BenchmarkPlan.from_yaml(args.yaml_path)
    for entry in plan.suites:
        get_suite(entry.name)
    try:
        config = HarnessConfig(
            **{
                **config.model_dump(),
                "repetitions": plan.repetitions,
                "percentile": plan.percentile,
                "warmup": plan.warmup,
            }
        )
    except ValidationError as err:
        raise InvalidConfiguration(str(err)) from err

    harness = BenchmarkHarness(config)
    generator = ReportGenerator()
    exit_code = EXIT_OK

    print(f"\n{'=' * 70}")
    print(f"Plan: {plan.name}")
    if plan.description:
        print(plan.description)
    print(f"Suites: {len(plan.suites)}")
    print(f"{'=' * 70}\n")

    for i, entry in enumerate(plan.suites, 1):
        print(f"[{i}/{len(plan.suites)}] Running suite: {entry.name}")
        report, equivalence = run_suite(
            entry.name,
            harness,
            repetitions=entry.repetitions,
            params=entry.params,
            check=entry.check_equivalence,
        )
        print(generator.to_text(report))
        for path in generator.write(report, plan.output_dir, entry.name, plan.formats):
            print(f"  {path}")

        if not report.ok or (equivalence is not None and not equivalence.ok):
            exit_code = EXIT_FAILED

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
