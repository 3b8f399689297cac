"""Domain services package."""

from .calendar import (
    add_interval,
    add_months,
    end_of_month,
    format_swiss_date,
    parse_localized_date,
    shift_off_weekend,
    start_of_month,
)
from .ledger import (
    apply_running_balance,
    build_ledger,
    build_projection,
    projected_collection_date,
)
from .queries import (
    build_alerts,
    classify_runway,
    end_of_month_forecast,
    first_negative_date,
    monthly_cashflow,
    net,
    open_amounts,
    revenue_progress,
    runway_months,
    trailing_burn,
    upcoming_payments,
)
from .records import (
    group_overrides,
    parse_employee,
    parse_fixed_cost,
    parse_override,
    parse_rows,
    parse_simulation,
    parse_transaction,
)
from .recurrence import (
    expand_occurrences,
    expand_payroll,
    expand_simulation,
    index_overrides,
    iter_occurrence_dates,
    monthly_equivalent,
    monthly_fixed_costs,
    next_due_date,
)

__all__ = [
    "add_interval",
    "add_months",
    "end_of_month",
    "format_swiss_date",
    "parse_localized_date",
    "shift_off_weekend",
    "start_of_month",
    "apply_running_balance",
    "build_ledger",
    "build_projection",
    "projected_collection_date",
    "build_alerts",
    "classify_runway",
    "end_of_month_forecast",
    "first_negative_date",
    "monthly_cashflow",
    "net",
    "open_amounts",
    "revenue_progress",
    "runway_months",
    "trailing_burn",
    "upcoming_payments",
    "group_overrides",
    "parse_employee",
    "parse_fixed_cost",
    "parse_override",
    "parse_rows",
    "parse_simulation",
    "parse_transaction",
    "expand_occurrences",
    "expand_payroll",
    "expand_simulation",
    "index_overrides",
    "iter_occurrence_dates",
    "monthly_equivalent",
    "monthly_fixed_costs",
    "next_due_date",
]
