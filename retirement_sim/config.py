"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from datetime import date
from pathlib import Path
from typing import Callable

from retirement_sim.params import (
    DEFAULT_WITHDRAWAL_RATE,
    PERPETUAL,
    Assumptions,
    FixedHorizon,
    Horizon,
    IncomeIndexation,
    Perpetual,
    PrivatePensionAssumptions,
    PublicPensionAssumptions,
    age_from_birth_date,
)
from retirement_sim.scenarios import DEFAULT_SCENARIO, SCENARIOS, apply_scenario

DEFAULT_CONFIG_PATH = Path("config.toml")

# None = not set (falls back to the scenario, the main contribution, or this year)
DEFAULTS = {
    "current_age": 30,
    "birth_date": "",
    "current_year": None,
    "retirement_age": 65,
    "life_expectancy": "90",
    "savings": 0.0,
    "contribution": 1000.0,
    "desired_income": 5000.0,
    "scenario": DEFAULT_SCENARIO,
    "growth_rate": None,
    "inflation": None,
    "withdrawal_rate": DEFAULT_WITHDRAWAL_RATE,
    "indexation": IncomeIndexation.ADJUSTED.value,
    "pension_contribution": None,
    "pension_balance": None,
    "pension_growth_rate": 0.10,
    "pension_lifetime": False,
    "public_contribution": None,
    "public_average_income": None,
    "public_contribution_rate": 0.11,
    "public_prior_years": 0,
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Normalize life_expectancy: TOML int / "perpetual" → CLI-compatible string
    if "life_expectancy" in raw:
        raw["life_expectancy"] = str(raw["life_expectancy"]).strip().lower()
    # TOML dates are parsed natively; keep the ISO string form used by the CLI
    if isinstance(raw.get("birth_date"), date):
        raw["birth_date"] = raw["birth_date"].isoformat()
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file path (default: config.toml)")
    parser.add_argument("--current-age", type=int, default=None, help=f"current age (default: {d['current_age']})")
    parser.add_argument("--birth-date", type=str, default=None, help="birth date YYYY-MM-DD (overrides --current-age)")
    parser.add_argument("--current-year", type=int, default=None, help="calendar year of the simulation start (default: this year)")
    parser.add_argument("--retirement-age", type=int, default=None, help=f"retirement age (default: {d['retirement_age']})")
    parser.add_argument("--life-expectancy", type=str, default=None, help=f"age withdrawals end, or 'perpetual' (default: {d['life_expectancy']})")
    parser.add_argument("--savings", type=float, default=None, help=f"current savings (default: {d['savings']:.0f})")
    parser.add_argument("--contribution", type=float, default=None, help=f"monthly contribution (default: {d['contribution']:.0f})")
    parser.add_argument("--desired-income", type=float, default=None, help=f"desired monthly income in today's money (default: {d['desired_income']:.0f})")
    parser.add_argument("--scenario", type=str, default=None, choices=list(SCENARIOS), help=f"growth scenario (default: {d['scenario']})")
    parser.add_argument("--growth-rate", type=float, default=None, help="nominal annual growth, e.g. 0.12 (overrides the scenario)")
    parser.add_argument("--inflation", type=float, default=None, help="annual inflation, e.g. 0.04 (overrides the scenario)")
    parser.add_argument("--withdrawal-rate", type=float, default=None, help=f"annual withdrawal rate (default: {d['withdrawal_rate']})")
    parser.add_argument("--indexation", type=str, default=None, choices=[i.value for i in IncomeIndexation], help=f"retirement income after year one (default: {d['indexation']})")
    parser.add_argument("--pension-contribution", type=float, default=None, help="private pension monthly contribution (default: same as --contribution)")
    parser.add_argument("--pension-balance", type=float, default=None, help="private pension current balance (default: same as --savings)")
    parser.add_argument("--pension-growth-rate", type=float, default=None, help=f"private pension nominal annual growth (default: {d['pension_growth_rate']})")
    parser.add_argument("--pension-lifetime", action="store_true", default=None, help="private pension pays a lifetime income (perpetual withdrawals)")
    parser.add_argument("--public-contribution", type=float, default=None, help="public pension monthly contribution (default: same as --contribution)")
    parser.add_argument("--public-average-income", type=float, default=None, help="average monthly income for the public pension benefit (default: implied by the contribution)")
    parser.add_argument("--public-contribution-rate", type=float, default=None, help=f"public pension contribution as share of salary (default: {d['public_contribution_rate']})")
    parser.add_argument("--public-prior-years", type=int, default=None, help=f"years already contributed to the public pension (default: {d['public_prior_years']})")
    return parser


def parse_life_expectancy(s: str | int) -> Horizon:
    """Parse "85" → FixedHorizon(85), "perpetual" → Perpetual()."""
    s = str(s).strip().lower()
    if s == PERPETUAL:
        return Perpetual()
    try:
        return FixedHorizon(end_age=int(s))
    except ValueError:
        raise ValueError(f"life expectancy must be an age or '{PERPETUAL}': {s!r}") from None


def build_assumptions(r: dict, today: date | None = None) -> Assumptions:
    """Build Assumptions from resolved config dict."""
    if today is None:
        today = date.today()
    current_age = r["current_age"]
    if r["birth_date"]:
        current_age = age_from_birth_date(r["birth_date"], today)
    current_year = r["current_year"] if r["current_year"] is not None else today.year

    assumptions = Assumptions(
        current_age=current_age,
        current_year=current_year,
        retirement_age=r["retirement_age"],
        horizon=parse_life_expectancy(r["life_expectancy"]),
        current_savings=r["savings"],
        monthly_contribution=r["contribution"],
        desired_monthly_income=r["desired_income"],
        withdrawal_rate=r["withdrawal_rate"],
        indexation=IncomeIndexation(r["indexation"]),
        pension=PrivatePensionAssumptions(
            monthly_contribution=r["pension_contribution"],
            current_balance=r["pension_balance"],
            growth_rate=r["pension_growth_rate"],
            lifetime=bool(r["pension_lifetime"]),
        ),
        public_pension=PublicPensionAssumptions(
            monthly_contribution=r["public_contribution"],
            average_monthly_income=r["public_average_income"],
            contribution_rate=r["public_contribution_rate"],
            prior_contribution_years=r["public_prior_years"],
        ),
    )
    assumptions = apply_scenario(assumptions, r["scenario"])
    overrides = {}
    if r["growth_rate"] is not None:
        overrides["growth_rate"] = r["growth_rate"]
    if r["inflation"] is not None:
        overrides["inflation_rate"] = r["inflation"]
    return dataclasses.replace(assumptions, **overrides)


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace).
    namespace: raw argparse.Namespace (for extra CLI args added via add_args_fn).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    r = resolve(args, config)
    return r, args
