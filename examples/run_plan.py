"""Run the bundled technique plan and write markdown and JSON reports.

Run with:
    python examples/run_plan.py
"""

from variantbench.__main__ import main

if __name__ == "__main__":
    raise SystemExit(main(["plan", "plans/techniques.yaml"]))
