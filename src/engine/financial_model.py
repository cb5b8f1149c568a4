"""Financial model for debt payoff simulation.

Implements the per-debt monthly math:
- Annual rate (percent) → monthly periodic rate conversion
- Interest accrual on the outstanding balance
- Payment application with the sub-cent payoff floor
- The "interest saved" baseline heuristic
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

PAYOFF_EPSILON = 0.01  # Balances at or below this are treated as paid off


class Strategy(str, Enum):
    """Order in which surplus budget is directed at debts."""

    SNOWBALL = "snowball"    # Smallest balance first
    AVALANCHE = "avalanche"  # Highest interest rate first

    @classmethod
    def parse(cls, value: str | Strategy) -> Strategy:
        """Accept an enum member or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy {value!r}; expected one of: {valid}") from None


class DebtKind(str, Enum):
    LOAN = "loan"
    CREDIT_CARD = "credit_card"
    MORTGAGE = "mortgage"
    PERSONAL = "personal"


@dataclass(frozen=True)
class DebtAccount:
    """A debt as stored by the user. Never mutated by the simulator."""

    id: str
    name: str
    balance: float                # Current outstanding amount
    annual_rate_percent: float    # Nominal annual rate, e.g. 15.0 for 15%
    minimum_payment: float        # Fixed monthly payment due
    lender: str = ""
    principal: float = 0.0        # Original amount, informational only
    kind: DebtKind = DebtKind.LOAN

    @property
    def monthly_rate(self) -> float:
        """Rate ÷ 100 ÷ 12, the simple periodic rate."""
        return self.annual_rate_percent / 100.0 / 12.0


@dataclass
class WorkingDebtState:
    """Mutable per-run copy of a debt's balance and payoff status."""

    account: DebtAccount
    balance: float
    paid_off: bool = False
    payoff_month: int = 0
    interest_paid: float = 0.0

    @classmethod
    def from_account(cls, account: DebtAccount) -> WorkingDebtState:
        return cls(account=account, balance=float(account.balance))

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def name(self) -> str:
        return self.account.name


def accrue_interest(debt: WorkingDebtState) -> float:
    """Add one month of interest to the balance.

    Formula: I_t = B_t × (rate / 100 / 12)

    Returns:
        Interest amount (≥ 0). Zero if the debt is paid off.
    """
    if debt.paid_off:
        return 0.0
    interest = debt.account.monthly_rate * debt.balance
    debt.balance += interest
    debt.interest_paid += interest
    return interest


def apply_payment(debt: WorkingDebtState, amount: float, month: int) -> float:
    """Pay up to `amount` toward the debt and settle it if the floor is reached.

    The payment is capped at the outstanding balance so the balance never
    goes negative.

    Args:
        debt: Working state (mutated: balance, paid_off, payoff_month).
        amount: Money available for this debt.
        month: Current 1-indexed month, recorded on payoff.

    Returns:
        The amount actually applied.
    """
    if debt.paid_off:
        return 0.0
    payment = max(0.0, min(amount, debt.balance))
    debt.balance -= payment
    settle_if_paid(debt, month)
    return payment


def settle_if_paid(debt: WorkingDebtState, month: int) -> bool:
    """Snap a sub-cent balance to zero and mark the debt paid off."""
    if not debt.paid_off and debt.balance <= PAYOFF_EPSILON:
        debt.balance = 0.0
        debt.paid_off = True
        debt.payoff_month = month
    return debt.paid_off


def estimate_minimum_only_months(account: DebtAccount) -> int:
    """Months to clear the balance at minimum pace, ignoring interest."""
    if account.minimum_payment <= 0 or account.balance <= 0:
        return 0
    return math.ceil(account.balance / account.minimum_payment)


def compute_baseline_interest(debts: list[DebtAccount]) -> float:
    """Rough interest a minimum-payments-only plan would cost.

    Per debt: monthly_rate × balance × months_at_minimum × 0.5, where 0.5
    approximates the average balance over the period as half the start.
    Compounding is deliberately ignored; this only feeds the headline
    "interest saved" figure.
    """
    return sum(
        d.monthly_rate * d.balance * estimate_minimum_only_months(d) * 0.5
        for d in debts
    )


def compute_total_balance(debts: list[WorkingDebtState]) -> float:
    return sum(d.balance for d in debts)
