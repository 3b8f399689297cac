"""Port for reading planning records."""

from decimal import Decimal
from typing import Protocol

from liqplan.domain.models import (
    Employee,
    FixedCost,
    Override,
    ProjectionIssue,
    Simulation,
    Transaction,
)


class PlanningRepositoryPort(Protocol):
    """Read access to the records a projection is built from.

    Every ``fetch_*`` method returns the parsed records together with one
    ``ProjectionIssue`` per stored row that could not be parsed.
    """

    def fetch_transactions(
        self,
    ) -> tuple[list[Transaction], list[ProjectionIssue]]:
        """Return booked transactions (Buchungen)."""

    def fetch_fixed_costs(
        self,
    ) -> tuple[list[FixedCost], list[ProjectionIssue]]:
        """Return recurring fixed costs (Fixkosten)."""

    def fetch_overrides(
        self,
    ) -> tuple[list[Override], list[ProjectionIssue]]:
        """Return per-occurrence fixed cost overrides."""

    def fetch_simulations(
        self,
    ) -> tuple[list[Simulation], list[ProjectionIssue]]:
        """Return what-if simulations."""

    def fetch_employees(
        self,
    ) -> tuple[list[Employee], list[ProjectionIssue]]:
        """Return employees with their salary periods."""

    def fetch_current_balance(self) -> Decimal:
        """Return the current account balance, zero when none is stored."""


__all__ = ["PlanningRepositoryPort"]
