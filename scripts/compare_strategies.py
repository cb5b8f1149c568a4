"""Compare snowball vs avalanche across a range of extra monthly budgets.

Usage:
    python scripts/compare_strategies.py                         # 0..max in 11 steps
    python scripts/compare_strategies.py --max-extra 1000000 --steps 21
    python scripts/compare_strategies.py --output results
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pandas as pd

from src.engine.financial_model import Strategy
from src.evaluation.comparison import budget_grid, compare_strategies, sweep_extra_budget
from src.utils.config import load_plan_config


def run_sweep(config, max_extra: float, steps: int) -> pd.DataFrame:
    """Sweep every strategy over the same budget grid."""
    budgets = budget_grid(max_extra, steps)
    frames = [
        sweep_extra_budget(config.debts, strategy, budgets, config.start_date)
        for strategy in Strategy
    ]
    return pd.concat(frames, ignore_index=True)


def print_summary(df: pd.DataFrame) -> None:
    """Print months / interest per budget, strategies side by side."""
    table = df.pivot_table(
        index="extra_budget",
        columns="strategy",
        values=["total_months", "total_interest"],
    )
    print("\n" + "=" * 90)
    print("  STRATEGY COMPARISON — months and interest by extra budget")
    print("=" * 90)
    print(table.to_string(float_format=lambda v: f"{v:,.0f}"))
    print()


def sanity_checks(df: pd.DataFrame) -> None:
    """Avalanche should never cost more interest than snowball on the same budget."""
    print("Sanity checks:")
    wide = df.pivot_table(index="extra_budget", columns="strategy", values="total_interest")
    worse = wide[wide["avalanche"] > wide["snowball"] + 0.01]
    if worse.empty:
        print("  [PASS] Avalanche interest <= Snowball interest at every budget")
    else:
        print(f"  [NOTE] Avalanche costs more at {len(worse)} budget(s): {list(worse.index)}")
    print()


def main():
    parser = argparse.ArgumentParser(description="Compare payoff strategies")
    parser.add_argument("--config", type=str, default="configs/plans/default.yaml")
    parser.add_argument("--max-extra", type=float, default=None, help="Largest extra budget (default: total minimums)")
    parser.add_argument("--steps", type=int, default=11)
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    config = load_plan_config(args.config)
    if not config.debts:
        print("No debts in config.")
        sys.exit(1)

    print(compare_strategies(config.debts, config.extra_monthly_budget, config.start_date).to_string(index=False))

    max_extra = args.max_extra if args.max_extra is not None else config.total_minimum_payment
    t0 = time.time()
    df = run_sweep(config, max_extra, args.steps)
    print(f"\nSimulated {len(df)} plans in {time.time() - t0:.2f}s")

    out_path = Path(args.output)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / "strategy_sweep.csv"
    df.to_csv(csv_path, index=False)
    print(f"Sweep results saved to {csv_path}")

    print_summary(df)
    sanity_checks(df)


if __name__ == "__main__":
    main()
