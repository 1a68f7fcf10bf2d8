"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from retirement_sim.charts import plot_comparison
from retirement_sim.config import build_assumptions, parse_args
from retirement_sim.series import CHART_MODES
from retirement_sim.summary import run_simulation


def _add_chart_args(parser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--mode", type=str, default=None, choices=CHART_MODES,
        help="chart to generate (default: all modes)",
    )
    parser.add_argument(
        "--log-scale", action="store_true",
        help="logarithmic Y axis",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="output filename suffix (e.g. 30 → wealth-30.png)",
    )


def main():
    r, args = parse_args("Retirement projection charts", _add_chart_args)
    try:
        assumptions = build_assumptions(r)
    except ValueError as e:
        print(f"\n{e}\n", file=sys.stderr)
        raise SystemExit(2)

    print(f"Projection ({assumptions.current_age} → {assumptions.retirement_age})...", file=sys.stderr)
    result = run_simulation(assumptions)
    for code in result.validation_errors:
        print(f"  warning: {code}", file=sys.stderr)

    modes = [args.mode] if args.mode else list(CHART_MODES)
    for mode in modes:
        path = plot_comparison(
            result, args.output, mode=mode, log_scale=args.log_scale, name=args.name,
        )
        print(f"  → {path}", file=sys.stderr)

    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
