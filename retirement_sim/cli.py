"""CLI entry point for a single projection (3 strategy comparison)."""

import argparse
import sys
from pathlib import Path

from retirement_sim.config import build_assumptions, parse_args
from retirement_sim.export import bankruptcy_labels, build_export_payload, render_report
from retirement_sim.params import Assumptions
from retirement_sim.scenarios import run_scenarios, scenario_label
from retirement_sim.strategies import STRATEGY_KEYS
from retirement_sim.summary import SimulationResult, run_simulation


def _add_cli_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--report", type=Path, default=None,
        help="write a Markdown report to this path",
    )
    parser.add_argument(
        "--all-scenarios", action="store_true",
        help="print final wealth for every scenario",
    )


def _print_header(a: Assumptions, result: SimulationResult, label: str):
    print("=" * 80)
    if a.is_perpetual:
        horizon = "perpetual withdrawals"
    else:
        horizon = f"until age {a.horizon.end_age}"
    print(f"Retirement projection ({a.current_age} → {a.retirement_age}, {horizon})")
    print(f"  Scenario: {label} / real rate {result.real_annual_rate * 100:.2f}% p.a.")
    print(f"  Savings: {a.current_savings:,.2f} / monthly contribution: {a.monthly_contribution:,.2f}"
          f" / desired income: {a.desired_monthly_income:,.2f}")
    print(f"  Withdrawal rate: {a.withdrawal_rate:.1%} / income indexation: {a.indexation.value}")
    print("=" * 80)
    print()


def _print_errors(result: SimulationResult):
    if result.is_valid:
        return
    print("⚠ Invalid assumptions (figures below are not authoritative):")
    for code in result.validation_errors:
        print(f"    - {code}")
    print()


def _print_summary(result: SimulationResult):
    print("【Results】")
    print(f"  Contribution phase:     {result.contribution_years} years")
    print(f"  Enjoyment phase:        {result.enjoyment_years}"
          + (" years" if isinstance(result.enjoyment_years, int) else ""))
    print(f"  Total invested:         {result.total_invested:>16,.2f}")
    print(f"  Final wealth:           {result.final_wealth:>16,.2f}")
    print(f"  Monthly passive income: {result.monthly_passive_income:>16,.2f}")
    print(f"  Capital needed (retire):{result.capital_needed_at_retirement:>16,.2f}")
    print(f"  Capital needed today:   {result.wealth_needed_today:>16,.2f}")
    print(f"  Desired income (retire):{result.adjusted_desired_income:>16,.2f} (nominal)")
    print(f"  Income gap:             {result.income_gap:>16,.2f}")
    print(f"  Suggested contribution: {result.suggested_contribution:>16,.2f}")
    snapshot = result.bankruptcy
    if snapshot is not None:
        print(f"  ⚠ Capital exhausted at age {snapshot.age} ({snapshot.year}):"
              f" balance {snapshot.balance:,.2f} < required {snapshot.required:,.2f}")


def _print_comparison(result: SimulationResult):
    names = [result.outcomes[key].name for key in STRATEGY_KEYS]
    header = f"{'Metric':<24} " + " ".join(f"{n:>18}" for n in names)
    print("\n【Strategy comparison】")
    print("-" * 84)
    print(header)
    print("-" * 84)
    for label, attr in [
        ("Monthly contribution", "monthly_contribution"),
        ("Total contributed", "total_contributed"),
        ("Wealth at retirement", "final_wealth"),
        ("Monthly income", "monthly_income"),
        ("Legacy wealth", "legacy_wealth"),
    ]:
        cells = " ".join(f"{getattr(result.outcomes[key], attr):>18,.2f}" for key in STRATEGY_KEYS)
        print(f"{label:<24} {cells}")
    labels = bankruptcy_labels(result)
    cells = " ".join(f"{labels[key]:>18}" for key in STRATEGY_KEYS)
    print(f"{'Capital lasts until':<24} {cells}")
    print("-" * 84)


def _print_yearly_log(result: SimulationResult):
    rows = result.rows
    print("\n【Yearly log (every 5 years) - Bitcoin】")
    print("-" * 84)
    print(f"{'Year':<6} {'Age':<5} {'Phase':<13} {'Contribution':>14} {'Yield':>14} {'Withdrawal':>14} {'Balance':>16}")
    print("-" * 84)
    for i, row in enumerate(rows):
        if i % 5 == 0 or i == len(rows) - 1 or row.is_first_retirement_year or row.is_bankruptcy:
            marker = ""
            if row.is_bankruptcy:
                marker = " ✗"
            elif row.is_boiling_point:
                marker = " ▼"
            print(
                f"{row.year:<6} {row.age:<5} {row.phase:<13} "
                f"{row.contribution:>14,.2f} {row.yield_earned:>14,.2f} "
                f"{row.withdrawal:>14,.2f} {row.balance:>16,.2f}{marker}"
            )
    print("-" * 84)
    print("  ▼ withdrawal exceeds yield / ✗ capital exhausted")


def _print_scenarios(a: Assumptions):
    print("\n【Scenarios】")
    for name, r in run_scenarios(a).items():
        print(f"  {scenario_label(name):<26} final wealth {r.final_wealth:>16,.2f}"
              f" / income {r.monthly_passive_income:>12,.2f}")


def main():
    """Execute a projection and print the comparison"""
    r, args = parse_args("Retirement wealth projection", _add_cli_args)
    try:
        assumptions = build_assumptions(r)
    except ValueError as e:
        print(f"\n{e}\n", file=sys.stderr)
        raise SystemExit(2)

    label = (
        f"{r['scenario'].capitalize()} "
        f"({assumptions.growth_rate:.0%} / {assumptions.inflation_rate:.0%})"
    )
    result = run_simulation(assumptions)

    _print_header(assumptions, result, label)
    _print_errors(result)
    _print_summary(result)
    _print_comparison(result)
    _print_yearly_log(result)
    if args.all_scenarios:
        _print_scenarios(assumptions)

    if args.report is not None:
        md = render_report(build_export_payload(assumptions, result, label))
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(md, encoding="utf-8")
        print(f"  → {args.report}", file=sys.stderr)


if __name__ == "__main__":
    main()
