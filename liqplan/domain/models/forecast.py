"""Domain models returned by the forecast and KPI use cases."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from liqplan.domain.models.kpis import (
    Alert,
    MonthlyCashflow,
    OpenAmounts,
    RevenueProgress,
)
from liqplan.domain.models.ledger import LedgerEntry, ProjectionIssue


@dataclass(frozen=True)
class CashflowForecastView:
    """Projected ledger for a forecast window.

    Attributes:
        window_start: First day of the forecast (inclusive).
        window_end: Last day of the forecast (inclusive).
        starting_balance: Balance before the first entry.
        closing_balance: Running balance after the last entry.
        entries: Sorted ledger entries with running balances.
        monthly: Inflow and outflow per calendar month.
        issues: Records skipped while loading or projecting.
    """

    window_start: date
    window_end: date
    starting_balance: Decimal
    closing_balance: Decimal
    entries: list[LedgerEntry]
    monthly: list[MonthlyCashflow] = field(default_factory=list)
    issues: list[ProjectionIssue] = field(default_factory=list)


@dataclass(frozen=True)
class LiquidityKpis:
    """Dashboard figures for one reference date."""

    as_of: date
    current_balance: Decimal
    net_next_30_days: Decimal
    runway_months: Decimal
    runway_status: str
    end_of_month_forecast: Decimal
    open_incoming: OpenAmounts
    open_outgoing: OpenAmounts
    monthly_fixed_costs: Decimal
    first_negative_date: date | None
    upcoming_payments: list[LedgerEntry] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)
    revenue: RevenueProgress | None = None
    issues: list[ProjectionIssue] = field(default_factory=list)
    overdue_incoming: OpenAmounts | None = None
    monthly_payroll: Decimal = Decimal("0")


__all__ = ["CashflowForecastView", "LiquidityKpis"]
