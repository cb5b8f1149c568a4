"""Month-by-month debt payoff simulator.

Given a set of debts, a strategy, and an optional extra monthly budget, the
simulator orders the debts, then repeats for each month:

1. Accrue interest on every unpaid debt and pay its minimum.
2. Send whatever is left of the monthly budget to the first unpaid debt
   in strategy order (one debt per month).
3. Record the month's payments and, per the sampling policy, a point on
   the total-balance timeline.

The loop ends when every debt is paid off or after MAX_MONTHS, whichever
comes first. Inputs are never mutated; all working state is per call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from src.engine.financial_model import (
    DebtAccount,
    Strategy,
    WorkingDebtState,
    accrue_interest,
    apply_payment,
    compute_baseline_interest,
    compute_total_balance,
)
from src.strategies import get_strategy

logger = logging.getLogger(__name__)

MAX_MONTHS = 360           # 30-year safety cap
DENSE_SAMPLE_MONTHS = 12   # Timeline records every month up to here
SPARSE_SAMPLE_EVERY = 3    # ...then every 3rd month


class DebtValidationError(ValueError):
    """Raised when a request contains values the simulation cannot model."""

    def __init__(self, message: str, debt_id: str | None = None, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.debt_id = debt_id
        self.field = field


@dataclass
class SimulationRequest:
    debts: list[DebtAccount]
    strategy: Strategy = Strategy.AVALANCHE
    extra_monthly_budget: float = 0.0
    start_date: date | None = None  # Injected "today" for the payoff date

    def __post_init__(self):
        self.debts = list(self.debts)
        self.strategy = Strategy.parse(self.strategy)
        if self.extra_monthly_budget is None:
            self.extra_monthly_budget = 0.0


@dataclass
class DebtPayment:
    """What happened to one debt in one month."""

    debt_id: str
    interest: float = 0.0
    minimum_paid: float = 0.0
    surplus_paid: float = 0.0
    remaining: float = 0.0

    @property
    def total_paid(self) -> float:
        return self.minimum_paid + self.surplus_paid


@dataclass
class MonthRecord:
    month: int
    available_budget: float                # Budget at the start of the month
    payments: list[DebtPayment] = field(default_factory=list)
    unallocated: float = 0.0               # Budget left after both passes

    @property
    def total_interest(self) -> float:
        return sum(p.interest for p in self.payments)

    @property
    def total_paid(self) -> float:
        return sum(p.total_paid for p in self.payments)

    @property
    def surplus_recipients(self) -> list[str]:
        return [p.debt_id for p in self.payments if p.surplus_paid > 0]


@dataclass(frozen=True)
class TimelineSample:
    month: int
    total_remaining: float


@dataclass
class SimulationResult:
    strategy: Strategy
    ordered_debts: list[WorkingDebtState]
    total_months: int
    timeline: list[TimelineSample]
    total_interest_paid: float
    baseline_interest: float
    interest_saved_estimate: float
    schedule: list[MonthRecord]
    monthly_budget: float
    total_debt: float
    truncated: bool = False
    payoff_date: date | None = None

    @property
    def unpaid_debts(self) -> list[WorkingDebtState]:
        return [d for d in self.ordered_debts if not d.paid_off]

    @property
    def all_paid(self) -> bool:
        return not self.unpaid_debts

    @property
    def payoff_month_label(self) -> str | None:
        """Projected payoff date as 'YYYY-MM', if a start date was given."""
        if self.payoff_date is None:
            return None
        return self.payoff_date.strftime("%Y-%m")


def _is_non_negative_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def validate_request(request: SimulationRequest) -> None:
    """Reject negative or non-finite amounts before any simulation work.

    Raises:
        DebtValidationError: naming the offending debt and field.
    """
    extra = request.extra_monthly_budget
    if not _is_non_negative_number(extra):
        raise DebtValidationError(
            f"extra_monthly_budget must be a non-negative number, got {extra!r}",
            field="extra_monthly_budget",
        )

    seen: set[str] = set()
    for debt in request.debts:
        if debt.id in seen:
            raise DebtValidationError(f"Duplicate debt id {debt.id!r}", debt_id=debt.id, field="id")
        seen.add(debt.id)

        for name in ("balance", "annual_rate_percent", "minimum_payment"):
            value = getattr(debt, name)
            if not _is_non_negative_number(value):
                raise DebtValidationError(
                    f"Debt {debt.id!r}: {name} must be a non-negative number, got {value!r}",
                    debt_id=debt.id,
                    field=name,
                )


def should_sample(month: int) -> bool:
    """Timeline policy: every month for the first year, then quarterly."""
    return month <= DENSE_SAMPLE_MONTHS or month % SPARSE_SAMPLE_EVERY == 0


def projected_payoff_date(start: date, months: int) -> date:
    """Calendar date `months` months after `start` (day clamped to month end)."""
    return (pd.Timestamp(start) + pd.DateOffset(months=months)).date()


def step_month(
    debts: list[WorkingDebtState],
    monthly_budget: float,
    month: int,
) -> MonthRecord:
    """Advance every debt by one month.

    Interest is accrued before the minimum payment. Leftover budget then
    goes to the first unpaid debt in `debts` order only.

    Args:
        debts: Working states in strategy order (mutated).
        monthly_budget: Sum of all minimum payments plus the extra budget.
        month: 1-indexed month number.

    Returns:
        The month's payment record.
    """
    record = MonthRecord(month=month, available_budget=monthly_budget)
    available = monthly_budget

    payments = [DebtPayment(debt_id=d.id) for d in debts]

    # Pass 1: interest + minimums
    for debt, entry in zip(debts, payments):
        if debt.paid_off:
            continue
        entry.interest = accrue_interest(debt)
        entry.minimum_paid = apply_payment(debt, debt.account.minimum_payment, month)
        available -= entry.minimum_paid

    # Pass 2: surplus to the top-priority unpaid debt
    if available > 0:
        for debt, entry in zip(debts, payments):
            if debt.paid_off:
                continue
            entry.surplus_paid = apply_payment(debt, available, month)
            available -= entry.surplus_paid
            break

    for debt, entry in zip(debts, payments):
        entry.remaining = debt.balance

    record.payments = payments
    record.unallocated = available
    return record


def simulate_payoff(request: SimulationRequest) -> SimulationResult:
    """Run the payoff simulation described by `request`.

    Raises:
        DebtValidationError: if any amount is negative or not finite.

    Returns:
        A SimulationResult. With no debts every total is zero. If the cap
        is reached with debts outstanding, `truncated` is set.
    """
    validate_request(request)

    ordered = get_strategy(request.strategy).order(request.debts)
    states = [WorkingDebtState.from_account(d) for d in ordered]

    monthly_budget = sum(d.minimum_payment for d in ordered) + request.extra_monthly_budget
    total_debt = compute_total_balance(states)
    baseline_interest = compute_baseline_interest(ordered)

    logger.debug(
        "Simulating %d debts, strategy=%s, monthly_budget=%.2f",
        len(states), request.strategy.value, monthly_budget,
    )

    month = 0
    total_interest = 0.0
    schedule: list[MonthRecord] = []
    timeline: list[TimelineSample] = []

    while states and month < MAX_MONTHS and not all(d.paid_off for d in states):
        month += 1
        record = step_month(states, monthly_budget, month)
        total_interest += record.total_interest
        schedule.append(record)

        if should_sample(month):
            timeline.append(TimelineSample(month, compute_total_balance(states)))

    if month > 0 and timeline[-1].month != month:
        timeline.append(TimelineSample(month, compute_total_balance(states)))

    truncated = any(not d.paid_off for d in states)
    if truncated:
        logger.warning(
            "Payoff plan not finished within %d months: %d of %d debts outstanding (%.2f remaining)",
            MAX_MONTHS,
            sum(not d.paid_off for d in states),
            len(states),
            compute_total_balance(states),
        )

    payoff_date = None
    if request.start_date is not None:
        payoff_date = projected_payoff_date(request.start_date, month)

    logger.debug("Simulation finished after %d months, interest=%.2f", month, total_interest)

    return SimulationResult(
        strategy=request.strategy,
        ordered_debts=states,
        total_months=month,
        timeline=timeline,
        total_interest_paid=total_interest,
        baseline_interest=baseline_interest,
        interest_saved_estimate=max(0.0, baseline_interest - total_interest),
        schedule=schedule,
        monthly_budget=monthly_budget,
        total_debt=total_debt,
        truncated=truncated,
        payoff_date=payoff_date,
    )
