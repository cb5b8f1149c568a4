"""Debt-load metrics for assessing a portfolio or a prospective loan.

Provides a debt-to-income ratio with a four-band risk scale, rule-based
recommendations for a prospective loan, plus a few portfolio summaries
used alongside payoff plans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from src.engine.financial_model import DebtAccount

# Risk band upper bounds on the debt-to-income ratio (percent)
LOW_RISK_MAX = 20.0
MEDIUM_RISK_MAX = 35.0
HIGH_RISK_MAX = 50.0

AFFORDABLE_DTI_MAX = MEDIUM_RISK_MAX  # Above this a new loan is not recommended

# Questionnaire answer codes (and their English option labels)
RISKY_ANSWERS = frozenset({
    "dont_know", "i don't know",
    "no_plan", "no plan",
    "pay_off_other_debt", "pay off other debt",
})
OPTIONAL_PURCHASE_ANSWERS = frozenset({"optional_purchase", "optional purchase"})


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Recommendation(str, Enum):
    """Advice codes; display text is the caller's concern."""

    RECONSIDER_LOAN = "reconsider_loan"                # Risky questionnaire answers
    HIGH_DEBT_LOAD = "high_debt_load"                  # DTI above the affordable limit
    AVOID_OPTIONAL_PURCHASE_LOAN = "avoid_optional_purchase_loan"
    LOOKS_GOOD = "looks_good"


@dataclass(frozen=True)
class DebtAssessment:
    monthly_income: float
    total_debt: float
    total_monthly_payments: float
    new_loan_amount: float
    new_loan_monthly_payment: float
    debt_to_income_ratio: float
    risk_level: RiskLevel
    can_afford: bool
    monthly_expenses: float = 0.0
    recommendations: list[Recommendation] = field(default_factory=list)


def compute_debt_to_income_ratio(
    monthly_payments: float,
    monthly_income: float,
    new_monthly_payment: float = 0.0,
) -> float:
    """Monthly debt service as a percentage of monthly income.

    A non-positive income is replaced by 1 so the ratio stays finite and
    lands in the critical band for any real payment.

    Returns:
        Ratio in percent (e.g., 25.0 for 25%).
    """
    income = monthly_income if monthly_income > 0 else 1.0
    return (monthly_payments + new_monthly_payment) / income * 100.0


def classify_risk(debt_to_income_ratio: float) -> RiskLevel:
    """Map a DTI percentage to a risk band.

    Bands: < 20 low, < 35 medium, < 50 high, otherwise critical.
    """
    if debt_to_income_ratio < LOW_RISK_MAX:
        return RiskLevel.LOW
    if debt_to_income_ratio < MEDIUM_RISK_MAX:
        return RiskLevel.MEDIUM
    if debt_to_income_ratio < HIGH_RISK_MAX:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def _normalize_answers(answers: Sequence[str]) -> set[str]:
    return {str(a).strip().lower() for a in answers}


def build_recommendations(
    debt_to_income_ratio: float,
    answers: Sequence[str] = (),
) -> list[Recommendation]:
    """Apply the assessment rules in order.

    - any risky answer ("don't know", "no plan", "pay off other debt")
    - DTI above AFFORDABLE_DTI_MAX
    - an "optional purchase" answer
    Falls back to LOOKS_GOOD when no rule fires.
    """
    given = _normalize_answers(answers)
    recs = []
    if given & RISKY_ANSWERS:
        recs.append(Recommendation.RECONSIDER_LOAN)
    if debt_to_income_ratio > AFFORDABLE_DTI_MAX:
        recs.append(Recommendation.HIGH_DEBT_LOAD)
    if given & OPTIONAL_PURCHASE_ANSWERS:
        recs.append(Recommendation.AVOID_OPTIONAL_PURCHASE_LOAN)
    if not recs:
        recs.append(Recommendation.LOOKS_GOOD)
    return recs


def assess_debt_load(
    debts: list[DebtAccount],
    monthly_income: float,
    new_loan_monthly_payment: float = 0.0,
    new_loan_amount: float = 0.0,
    answers: Sequence[str] = (),
    monthly_expenses: float = 0.0,
) -> DebtAssessment:
    """Assess existing debts, optionally with a prospective new loan.

    Args:
        debts: Existing debts.
        monthly_income: Net monthly income.
        new_loan_monthly_payment: Payment the new loan would add.
        new_loan_amount: Size of the new loan (informational).
        answers: Questionnaire answer codes about the new loan.
        monthly_expenses: Monthly living expenses (informational).

    Returns:
        DebtAssessment with DTI, risk band, affordability and recommendations.
    """
    total_payments = sum(d.minimum_payment for d in debts)
    dti = compute_debt_to_income_ratio(total_payments, monthly_income, new_loan_monthly_payment)
    return DebtAssessment(
        monthly_income=monthly_income,
        total_debt=sum(d.balance for d in debts),
        total_monthly_payments=total_payments,
        new_loan_amount=new_loan_amount,
        new_loan_monthly_payment=new_loan_monthly_payment,
        debt_to_income_ratio=dti,
        risk_level=classify_risk(dti),
        can_afford=dti <= AFFORDABLE_DTI_MAX,
        monthly_expenses=monthly_expenses,
        recommendations=build_recommendations(dti, answers),
    )


def compute_weighted_avg_rate(debts: list[DebtAccount]) -> float:
    """Balance-weighted average annual rate (percent) across debts.

    Returns 0 if total balance is 0.
    """
    total_balance = sum(d.balance for d in debts)
    if total_balance <= 0:
        return 0.0
    return sum(d.annual_rate_percent * d.balance for d in debts) / total_balance
