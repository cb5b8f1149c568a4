"""Avalanche strategy: surplus to the highest interest rate first."""

from __future__ import annotations

from src.engine.financial_model import DebtAccount, Strategy
from src.strategies.base_strategy import PayoffStrategy


class AvalancheStrategy(PayoffStrategy):
    """Debt avalanche: order debts by annual rate, highest first.

    Minimizes total interest among single-target strategies.
    """

    strategy = Strategy.AVALANCHE
    descending = True

    @property
    def name(self) -> str:
        return "Avalanche"

    def sort_key(self, debt: DebtAccount) -> float:
        return debt.annual_rate_percent
