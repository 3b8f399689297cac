"""Domain package for liquidity planning rules and core models."""

from .constants import (
    FIXED_COST_CATEGORY,
    PAYROLL_CATEGORY,
    SIMULATION_CATEGORY,
    UNLIMITED_RUNWAY,
)
from .errors import LiqPlanError, RecordValidationError, RecurrenceError
from .models import (
    Direction,
    Employee,
    FixedCost,
    LedgerEntry,
    Override,
    Projection,
    ProjectionIssue,
    ProjectionOptions,
    Rhythm,
    SalaryPeriod,
    Simulation,
    SourceKind,
    Transaction,
)
from .services import (
    add_interval,
    build_ledger,
    build_projection,
    end_of_month_forecast,
    expand_occurrences,
    net,
    open_amounts,
    parse_localized_date,
    runway_months,
    shift_off_weekend,
)

__all__ = [
    "FIXED_COST_CATEGORY",
    "PAYROLL_CATEGORY",
    "SIMULATION_CATEGORY",
    "UNLIMITED_RUNWAY",
    "LiqPlanError",
    "RecordValidationError",
    "RecurrenceError",
    "Direction",
    "Employee",
    "FixedCost",
    "LedgerEntry",
    "Override",
    "Projection",
    "ProjectionIssue",
    "ProjectionOptions",
    "Rhythm",
    "SalaryPeriod",
    "Simulation",
    "SourceKind",
    "Transaction",
    "add_interval",
    "build_ledger",
    "build_projection",
    "end_of_month_forecast",
    "expand_occurrences",
    "net",
    "open_amounts",
    "parse_localized_date",
    "runway_months",
    "shift_off_weekend",
]
