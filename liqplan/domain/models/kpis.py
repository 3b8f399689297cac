"""Domain models for dashboard aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from liqplan.domain.models.records import Direction


@dataclass(frozen=True)
class OpenAmounts:
    """Count and total of unsettled transactions in one direction."""

    direction: Direction
    count: int
    total: Decimal


@dataclass(frozen=True)
class MonthlyCashflow:
    """Inflow and outflow totals for one calendar month."""

    month: date
    inflow: Decimal
    outflow: Decimal

    @property
    def net(self) -> Decimal:
        """Return inflow minus outflow."""
        return self.inflow - self.outflow


@dataclass(frozen=True)
class Alert:
    """Dashboard alert with a severity level (``error`` or ``warning``)."""

    level: str
    message: str


@dataclass(frozen=True)
class RevenueProgress:
    """Progress of booked revenue against a yearly target."""

    target: Decimal
    achieved: Decimal
    remaining: Decimal
    progress: Decimal


__all__ = ["OpenAmounts", "MonthlyCashflow", "Alert", "RevenueProgress"]
