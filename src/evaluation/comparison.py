"""Strategy comparison, what-if budget sweeps, and DataFrame export.

Every helper here re-runs the pure simulator; nothing is cached between
calls, so budgets and strategies can be varied freely.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

import numpy as np
import pandas as pd

from src.engine.financial_model import DebtAccount, Strategy
from src.engine.simulator import SimulationRequest, SimulationResult, simulate_payoff
from src.strategies import ALL_STRATEGIES


def summarize_result(result: SimulationResult) -> dict:
    """Flatten the headline numbers of a result into one row."""
    return {
        "strategy": result.strategy.value,
        "monthly_budget": round(result.monthly_budget, 2),
        "total_months": result.total_months,
        "total_interest": round(result.total_interest_paid, 2),
        "interest_saved": round(result.interest_saved_estimate, 2),
        "all_paid": result.all_paid,
        "truncated": result.truncated,
        "payoff_date": result.payoff_month_label,
    }


def compare_strategies(
    debts: list[DebtAccount],
    extra_monthly_budget: float = 0.0,
    start_date: date | None = None,
) -> pd.DataFrame:
    """Simulate every strategy on the same debts.

    Returns:
        DataFrame with one row per strategy.
    """
    rows = [
        summarize_result(StrategyClass().run(debts, extra_monthly_budget, start_date))
        for StrategyClass in ALL_STRATEGIES
    ]
    return pd.DataFrame(rows)


def budget_grid(max_extra: float, steps: int = 11) -> np.ndarray:
    """Evenly spaced extra budgets from 0 to `max_extra` inclusive."""
    if steps < 2:
        return np.array([0.0])
    return np.linspace(0.0, max_extra, steps)


def sweep_extra_budget(
    debts: list[DebtAccount],
    strategy: Strategy | str,
    budgets: Sequence[float] | np.ndarray,
    start_date: date | None = None,
) -> pd.DataFrame:
    """Re-run one strategy across a range of extra monthly budgets.

    Returns:
        DataFrame with one row per budget, including an `extra_budget` column.
    """
    rows = []
    for extra in np.asarray(budgets, dtype=np.float64):
        result = simulate_payoff(SimulationRequest(
            debts=debts,
            strategy=strategy,
            extra_monthly_budget=float(extra),
            start_date=start_date,
        ))
        row = {"extra_budget": float(extra)}
        row.update(summarize_result(result))
        rows.append(row)
    return pd.DataFrame(rows)


def schedule_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per (month, debt) with interest, payments and remaining balance."""
    names = {d.id: d.name for d in result.ordered_debts}
    rows = [
        {
            "month": record.month,
            "debt_id": p.debt_id,
            "name": names.get(p.debt_id, ""),
            "interest": p.interest,
            "minimum_paid": p.minimum_paid,
            "surplus_paid": p.surplus_paid,
            "remaining": p.remaining,
        }
        for record in result.schedule
        for p in record.payments
    ]
    columns = ["month", "debt_id", "name", "interest", "minimum_paid", "surplus_paid", "remaining"]
    return pd.DataFrame(rows, columns=columns)


def timeline_frame(result: SimulationResult) -> pd.DataFrame:
    """Sampled total remaining balance, for charting."""
    return pd.DataFrame(
        [(s.month, s.total_remaining) for s in result.timeline],
        columns=["month", "total_remaining"],
    )
