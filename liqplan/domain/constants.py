"""Domain constants for liquidity planning."""

from decimal import Decimal

FIXED_COST_CATEGORY = "Fixkosten"
PAYROLL_CATEGORY = "Lohn"
SIMULATION_CATEGORY = "Simulation"
DEFAULT_CATEGORY = "Standard"

PAYROLL_DAY = 25
BURN_WINDOW_MONTHS = 3
RUNWAY_ALERT_MONTHS = Decimal("2")

# Explicit "no burn" marker; compares greater than any finite runway.
UNLIMITED_RUNWAY = Decimal("Infinity")

PAID_INVOICE_STATUSES = ("paid", "bezahlt", "settled")


__all__ = [
    "FIXED_COST_CATEGORY",
    "PAYROLL_CATEGORY",
    "SIMULATION_CATEGORY",
    "DEFAULT_CATEGORY",
    "PAYROLL_DAY",
    "BURN_WINDOW_MONTHS",
    "RUNWAY_ALERT_MONTHS",
    "UNLIMITED_RUNWAY",
    "PAID_INVOICE_STATUSES",
]
