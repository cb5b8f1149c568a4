"""Abstract base class for debt ordering strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from src.engine.financial_model import DebtAccount, Strategy


class PayoffStrategy(ABC):
    """Interface for scripted payoff orderings.

    Subclasses define which debt attribute ranks the debts and in which
    direction. The simulator pays minimums on every debt and sends the
    surplus to the first unpaid debt in this order.
    """

    #: Enum value this strategy implements.
    strategy: Strategy

    #: Sort largest-first when True.
    descending: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def sort_key(self, debt: DebtAccount) -> float:
        """Ranking value for a debt."""
        ...

    def order(self, debts: list[DebtAccount]) -> list[DebtAccount]:
        """Return a new list of debts in payoff priority order.

        The sort is stable, so debts with equal keys keep their input order.
        """
        return sorted(debts, key=self.sort_key, reverse=self.descending)

    def run(
        self,
        debts: list[DebtAccount],
        extra_monthly_budget: float = 0.0,
        start_date: date | None = None,
    ) -> Any:
        """Simulate a full payoff plan using this strategy.

        Returns:
            SimulationResult for the plan.
        """
        from src.engine.simulator import SimulationRequest, simulate_payoff

        request = SimulationRequest(
            debts=debts,
            strategy=self.strategy,
            extra_monthly_budget=extra_monthly_budget,
            start_date=start_date,
        )
        return simulate_payoff(request)
