"""Run a payoff plan and print the schedule summary.

Usage:
    python scripts/run_plan.py                                   # configs/plans/default.yaml
    python scripts/run_plan.py --config configs/plans/default.yaml --strategy snowball
    python scripts/run_plan.py --records data/debts.example.json --extra 200000
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.engine.financial_model import Strategy
from src.engine.simulator import DebtValidationError, SimulationResult, simulate_payoff
from src.evaluation.comparison import schedule_frame
from src.evaluation.metrics import assess_debt_load, compute_weighted_avg_rate
from src.utils.config import PlanConfig, load_debt_records, load_plan_config


def print_plan(config: PlanConfig) -> tuple[int, SimulationResult | None]:
    """Simulate the plan and print the summary.

    Returns:
        (exit code, result), where result is None if nothing was simulated.
    """
    if not config.debts:
        print("No debts to plan. Add debts to the config or snapshot first.")
        return 0, None

    try:
        result = simulate_payoff(config.to_request())
    except DebtValidationError as exc:
        print(f"Error: {exc.message}")
        return 2, None

    print("\n" + "=" * 72)
    print(f"  PAYOFF PLAN — {result.strategy.value.title()}")
    print("=" * 72)
    print(f"  Total debt:           {result.total_debt:,.2f}")
    print(f"  Weighted avg rate:    {compute_weighted_avg_rate(config.debts):.2f}%")
    print(f"  Monthly budget:       {result.monthly_budget:,.2f}")
    print(f"  Months to payoff:     {result.total_months}")
    if result.payoff_month_label:
        print(f"  Payoff date:          {result.payoff_month_label}")
    print(f"  Total interest:       {result.total_interest_paid:,.2f}")
    print(f"  Interest saved (est): {result.interest_saved_estimate:,.2f}")

    print("\n  Payoff order:")
    for rank, debt in enumerate(result.ordered_debts, start=1):
        when = f"month {debt.payoff_month}" if debt.paid_off else "not paid off"
        print(
            f"    {rank}. {debt.name:<24} {debt.account.balance:>16,.2f}  "
            f"{debt.account.annual_rate_percent:>5.1f}%  → {when}"
        )

    if result.truncated:
        print(
            f"\n  ⚠️ This plan does not pay off all debts within {result.total_months} months. "
            f"Consider a larger extra payment."
        )

    if config.monthly_income:
        assessment = assess_debt_load(config.debts, config.monthly_income)
        print(
            f"\n  Debt-to-income: {assessment.debt_to_income_ratio:.0f}% "
            f"({assessment.risk_level.value} risk)"
        )
    print()
    return 0, result


def main():
    parser = argparse.ArgumentParser(description="Simulate a debt payoff plan")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/plans/default.yaml",
        help="Path to plan YAML",
    )
    parser.add_argument("--records", type=str, default=None, help="JSON debt snapshot (overrides config debts)")
    parser.add_argument("--strategy", type=str, default=None, choices=["snowball", "avalanche"])
    parser.add_argument("--extra", type=float, default=None, help="Extra monthly budget")
    parser.add_argument("--schedule-csv", type=str, default=None, help="Write the full monthly schedule here")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_plan_config(args.config)
    if args.records:
        config.debts = load_debt_records(args.records)
    if args.strategy:
        config.strategy = Strategy.parse(args.strategy)
    if args.extra is not None:
        config.extra_monthly_budget = args.extra
    if config.start_date is None:
        config.start_date = date.today()

    code, result = print_plan(config)

    if result is not None and args.schedule_csv:
        df = schedule_frame(result)
        out = Path(args.schedule_csv)
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
        print(f"Schedule saved to {out}")

    sys.exit(code)


if __name__ == "__main__":
    main()
