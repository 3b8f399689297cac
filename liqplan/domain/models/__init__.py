"""Domain models package."""

from .forecast import CashflowForecastView, LiquidityKpis
from .kpis import Alert, MonthlyCashflow, OpenAmounts, RevenueProgress
from .ledger import (
    LedgerEntry,
    Projection,
    ProjectionIssue,
    ProjectionOptions,
)
from .records import (
    Direction,
    Employee,
    FixedCost,
    Override,
    Rhythm,
    SalaryPeriod,
    Simulation,
    SourceKind,
    Transaction,
)

__all__ = [
    "CashflowForecastView",
    "LiquidityKpis",
    "Alert",
    "MonthlyCashflow",
    "OpenAmounts",
    "RevenueProgress",
    "LedgerEntry",
    "Projection",
    "ProjectionIssue",
    "ProjectionOptions",
    "Direction",
    "Employee",
    "FixedCost",
    "Override",
    "Rhythm",
    "SalaryPeriod",
    "Simulation",
    "SourceKind",
    "Transaction",
]
