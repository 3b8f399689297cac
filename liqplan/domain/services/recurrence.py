"""Expansion of recurring records into dated ledger entries.

Cadence is always computed from the un-shifted candidate dates: weekend
shifts and overrides change a single emitted entry, never the schedule.
"""

from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal

from liqplan.domain.constants import (
    FIXED_COST_CATEGORY,
    PAYROLL_CATEGORY,
    PAYROLL_DAY,
    SIMULATION_CATEGORY,
)
from liqplan.domain.errors import RecordValidationError, RecurrenceError
from liqplan.domain.models import (
    Direction,
    Employee,
    FixedCost,
    LedgerEntry,
    Override,
    Rhythm,
    Simulation,
    SourceKind,
)
from liqplan.domain.services.calendar import (
    add_interval,
    add_months,
    shift_off_weekend,
    start_of_month,
)

ZERO = Decimal("0")


def iter_occurrence_dates(
    start: date,
    rhythm: Rhythm,
    until: date,
) -> Iterator[date]:
    """Yield un-shifted occurrence dates from start through until.

    Args:
        start: First occurrence, anchoring the cadence.
        rhythm: Recurrence cadence.
        until: Inclusive upper bound.

    Yields:
        date: Candidate occurrence dates in ascending order.

    Raises:
        RecurrenceError: If a step does not move the date forward.
    """
    candidate = start
    while candidate <= until:
        yield candidate
        following = add_interval(candidate, rhythm)
        if following <= candidate:
            raise RecurrenceError(
                f"Rhythm {rhythm!r} does not advance from {candidate}"
            )
        candidate = following


def index_overrides(
    overrides: Iterable[Override],
) -> dict[tuple[str, date], Override]:
    """Index overrides by ``(fixed_cost_id, original_date)``.

    Raises:
        RecordValidationError: If two overrides target the same occurrence.
    """
    indexed: dict[tuple[str, date], Override] = {}
    for override in overrides:
        if override.key in indexed:
            raise RecordValidationError(
                f"Duplicate override for fixed cost {override.fixed_cost_id} "
                f"on {override.original_date}"
            )
        indexed[override.key] = override
    return indexed


def expand_occurrences(
    fixed_cost: FixedCost,
    window_start: date,
    window_end: date,
    overrides: Iterable[Override] = (),
) -> list[LedgerEntry]:
    """Expand a fixed cost into outgoing ledger entries inside a window.

    Iteration always starts at ``fixed_cost.start_date``. Candidates are
    compared to the window and the end date before any shift; both bounds
    are inclusive. The emitted date can therefore lie outside the window: a
    weekend occurrence on ``window_start`` is paid on the Friday before it,
    and an override's ``new_date`` is used as given. Running balances are
    left at zero for the ledger builder.

    Args:
        fixed_cost: Recurring cost definition.
        window_start: First day of the projection window.
        window_end: Last day of the projection window.
        overrides: Overrides for this fixed cost; others are ignored.

    Returns:
        list[LedgerEntry]: Entries in cadence order.
    """
    lookup = index_overrides(
        override
        for override in overrides
        if override.fixed_cost_id == fixed_cost.id
    )
    until = window_end
    if fixed_cost.end_date is not None and fixed_cost.end_date < until:
        until = fixed_cost.end_date
    category = fixed_cost.category or FIXED_COST_CATEGORY

    entries: list[LedgerEntry] = []
    for candidate in iter_occurrence_dates(
        fixed_cost.start_date,
        fixed_cost.rhythm,
        until,
    ):
        if candidate < window_start:
            continue
        override = lookup.get((fixed_cost.id, candidate))
        effective_date = shift_off_weekend(candidate)
        amount = fixed_cost.amount
        if override is not None:
            if override.skipped:
                continue
            if override.new_date is not None:
                effective_date = override.new_date
            if override.new_amount is not None:
                amount = override.new_amount
        entries.append(
            LedgerEntry(
                date=effective_date,
                amount=-abs(amount),
                details=fixed_cost.name,
                category=category,
                running_balance=ZERO,
                source_kind=SourceKind.FIXED_COST,
                source_id=fixed_cost.id,
                original_date=candidate,
            )
        )
    return entries


def expand_simulation(
    simulation: Simulation,
    window_start: date,
    window_end: date,
) -> list[LedgerEntry]:
    """Expand a simulation into ledger entries inside a window.

    One-off simulations yield at most one entry. Recurring simulations step
    from their own date with the fixed-cost calendar rules but without
    weekend shifting.
    """
    details = simulation.name
    if simulation.details:
        details = f"{simulation.name}: {simulation.details}"
    signed = Direction.parse(simulation.direction).sign(simulation.amount)

    if not simulation.recurring or simulation.interval is None:
        dates = [simulation.date]
        if not window_start <= simulation.date <= window_end:
            dates = []
    else:
        until = window_end
        if simulation.end_date is not None and simulation.end_date < until:
            until = simulation.end_date
        dates = [
            candidate
            for candidate in iter_occurrence_dates(
                simulation.date,
                simulation.interval,
                until,
            )
            if candidate >= window_start
        ]

    return [
        LedgerEntry(
            date=candidate,
            amount=signed,
            details=details,
            category=SIMULATION_CATEGORY,
            running_balance=ZERO,
            source_kind=SourceKind.SIMULATION,
            source_id=simulation.id,
        )
        for candidate in dates
    ]


def expand_payroll(
    employees: Iterable[Employee],
    window_start: date,
    window_end: date,
) -> list[LedgerEntry]:
    """Generate monthly salary payments on the 25th inside a window.

    Each employee is paid once per month with the salary period valid on the
    payment date; months without a valid period produce nothing.
    """
    staff = list(employees)
    entries: list[LedgerEntry] = []
    month = start_of_month(window_start)
    while month <= window_end:
        payment_date = month.replace(day=PAYROLL_DAY)
        if window_start <= payment_date <= window_end:
            for employee in staff:
                salary = employee.salary_on(payment_date)
                if salary is None:
                    continue
                entries.append(
                    LedgerEntry(
                        date=payment_date,
                        amount=-abs(salary.amount),
                        details=f"Lohn: {employee.name}",
                        category=PAYROLL_CATEGORY,
                        running_balance=ZERO,
                        source_kind=SourceKind.PAYROLL,
                        source_id=employee.id,
                    )
                )
        month = add_months(month, 1)
    return entries


def next_due_date(fixed_cost: FixedCost, as_of: date) -> date | None:
    """Return the first un-shifted occurrence on or after as_of.

    Returns:
        date | None: Next occurrence, or None once the cost has ended.
    """
    until = fixed_cost.end_date or date.max
    candidate = fixed_cost.start_date
    while candidate < as_of:
        following = add_interval(candidate, fixed_cost.rhythm)
        if following <= candidate:
            raise RecurrenceError(
                f"Rhythm {fixed_cost.rhythm!r} does not advance from {candidate}"
            )
        candidate = following
    if candidate > until:
        return None
    return candidate


def monthly_equivalent(fixed_cost: FixedCost) -> Decimal:
    """Return the cost spread evenly over the months of its rhythm."""
    return abs(fixed_cost.amount) / Decimal(fixed_cost.rhythm.months)


def monthly_fixed_costs(
    fixed_costs: Iterable[FixedCost],
    as_of: date,
) -> Decimal:
    """Sum the monthly equivalents of the costs still active after as_of."""
    return sum(
        (
            monthly_equivalent(fixed_cost)
            for fixed_cost in fixed_costs
            if fixed_cost.is_active(as_of)
        ),
        ZERO,
    )


def monthly_payroll(employees: Iterable[Employee], as_of: date) -> Decimal:
    """Sum the gross salaries valid on as_of, i.e. one month of payroll."""
    total = ZERO
    for employee in employees:
        salary = employee.salary_on(as_of)
        if salary is not None:
            total += abs(salary.amount)
    return total


__all__ = [
    "iter_occurrence_dates",
    "index_overrides",
    "expand_occurrences",
    "expand_simulation",
    "expand_payroll",
    "next_due_date",
    "monthly_equivalent",
    "monthly_fixed_costs",
    "monthly_payroll",
]
