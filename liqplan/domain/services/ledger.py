"""Ledger builder merging all cashflow sources into one projection."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from liqplan.domain.constants import DEFAULT_CATEGORY
from liqplan.domain.errors import RecordValidationError, RecurrenceError
from liqplan.domain.models import (
    Direction,
    Employee,
    FixedCost,
    LedgerEntry,
    Override,
    Projection,
    ProjectionIssue,
    ProjectionOptions,
    Rhythm,
    Simulation,
    SourceKind,
    Transaction,
)
from liqplan.domain.services.calendar import add_interval, shift_off_weekend
from liqplan.domain.services.recurrence import (
    ZERO,
    expand_occurrences,
    expand_payroll,
    expand_simulation,
)
from liqplan.utils.decimal_utils import coerce_decimal, parse_amount

_RECORD_ERRORS = (
    RecordValidationError,
    RecurrenceError,
    InvalidOperation,
    TypeError,
    ValueError,
    OverflowError,
)


def build_ledger(
    transactions: Iterable[Transaction],
    fixed_costs: Iterable[FixedCost],
    overrides_by_fixed_cost_id: Mapping[str, Sequence[Override]],
    simulations: Iterable[Simulation],
    starting_balance: Decimal,
    window_start: date,
    window_end: date,
    options: ProjectionOptions | None = None,
    *,
    employees: Iterable[Employee] = (),
    logger=None,
) -> list[LedgerEntry]:
    """Build the chronologically sorted ledger for a projection window.

    Args:
        transactions: Persisted one-off transactions.
        fixed_costs: Recurring fixed costs.
        overrides_by_fixed_cost_id: Overrides grouped by fixed cost id.
        simulations: Simulations, used when options include them.
        starting_balance: Balance before the first entry.
        window_start: First day of the window, inclusive.
        window_end: Last day of the window, inclusive.
        options: Projection switches; defaults to ``ProjectionOptions()``.
        employees: Employees whose salaries are paid in the window.
        logger: Optional logger receiving one warning per skipped record.

    Returns:
        list[LedgerEntry]: Entries with running balances.
    """
    projection = build_projection(
        transactions,
        fixed_costs,
        overrides_by_fixed_cost_id,
        simulations,
        starting_balance,
        window_start,
        window_end,
        options,
        employees=employees,
    )
    if logger is not None:
        for issue in projection.issues:
            logger.warning(
                f"Skipped {issue.source_kind.value} {issue.source_id}: "
                f"{issue.reason}"
            )
    return projection.entries


def build_projection(
    transactions: Iterable[Transaction],
    fixed_costs: Iterable[FixedCost],
    overrides_by_fixed_cost_id: Mapping[str, Sequence[Override]],
    simulations: Iterable[Simulation],
    starting_balance: Decimal,
    window_start: date,
    window_end: date,
    options: ProjectionOptions | None = None,
    *,
    employees: Iterable[Employee] = (),
) -> Projection:
    """Build the ledger and report the records that had to be skipped.

    Same inputs as :func:`build_ledger`. Malformed records never abort the
    projection; each one becomes a :class:`ProjectionIssue`.
    """
    resolved = options or ProjectionOptions()
    collected: list[LedgerEntry] = []
    issues: list[ProjectionIssue] = []

    for transaction in transactions:
        try:
            entry = _transaction_entry(transaction, resolved)
        except _RECORD_ERRORS as exc:
            issues.append(_issue(SourceKind.TRANSACTION, transaction, exc))
            continue
        if entry is not None and window_start <= entry.date <= window_end:
            collected.append(entry)

    for fixed_cost in fixed_costs:
        overrides = overrides_by_fixed_cost_id.get(fixed_cost.id, ())
        try:
            cleaned, cleaned_overrides = _clean_fixed_cost(
                fixed_cost,
                overrides,
            )
            collected.extend(
                expand_occurrences(
                    cleaned,
                    window_start,
                    window_end,
                    cleaned_overrides,
                )
            )
        except _RECORD_ERRORS as exc:
            issues.append(_issue(SourceKind.FIXED_COST, fixed_cost, exc))

    for employee in employees:
        try:
            collected.extend(
                expand_payroll(
                    [_clean_employee(employee)],
                    window_start,
                    window_end,
                )
            )
        except _RECORD_ERRORS as exc:
            issues.append(_issue(SourceKind.PAYROLL, employee, exc))

    if resolved.include_simulations:
        for simulation in simulations:
            if not simulation.active:
                continue
            try:
                collected.extend(
                    expand_simulation(
                        _clean_simulation(simulation),
                        window_start,
                        window_end,
                    )
                )
            except _RECORD_ERRORS as exc:
                issues.append(_issue(SourceKind.SIMULATION, simulation, exc))

    return Projection(
        entries=apply_running_balance(collected, starting_balance),
        issues=issues,
    )


def apply_running_balance(
    entries: Iterable[LedgerEntry],
    starting_balance: Decimal,
) -> list[LedgerEntry]:
    """Sort entries and annotate each with the balance after it.

    Ordering is by date, then source kind (transaction, fixed cost, payroll,
    simulation), then input order.
    """
    ordered = sorted(
        enumerate(entries),
        key=lambda item: (item[1].date, item[1].source_kind.rank, item[0]),
    )
    running = coerce_decimal(starting_balance)
    annotated: list[LedgerEntry] = []
    for _, entry in ordered:
        running += entry.amount
        annotated.append(entry.with_balance(running))
    return annotated


def projected_collection_date(original: date, as_of: date) -> date:
    """Return the date an overdue invoice is expected to be collected.

    Steps monthly from the booked date (clamping like fixed costs) to the
    first step on or after as_of, shifted off weekends; if the shift lands
    before as_of the following step is used.
    """
    candidate = original
    while True:
        candidate = add_interval(candidate, Rhythm.MONTHLY)
        if candidate < as_of:
            continue
        shifted = shift_off_weekend(candidate)
        if shifted >= as_of:
            return shifted


def _transaction_entry(
    transaction: Transaction,
    options: ProjectionOptions,
) -> LedgerEntry | None:
    if transaction.is_simulation and not options.include_simulations:
        return None
    booked = _require_date(transaction.date, "date")
    amount = _require_amount(transaction.amount, "amount")
    direction = Direction.parse(transaction.direction)

    effective = booked
    original = None
    if _is_overdue(transaction, direction, booked, options):
        effective = projected_collection_date(booked, options.as_of)
        original = booked

    return LedgerEntry(
        date=effective,
        amount=direction.sign(amount),
        details=transaction.details,
        category=transaction.category or DEFAULT_CATEGORY,
        running_balance=ZERO,
        source_kind=SourceKind.TRANSACTION,
        source_id=transaction.id,
        original_date=original,
    )


def _is_overdue(
    transaction: Transaction,
    direction: Direction,
    booked: date,
    options: ProjectionOptions,
) -> bool:
    return (
        options.shift_overdue_invoices
        and options.as_of is not None
        and direction is Direction.INCOMING
        and not transaction.settled
        and booked < options.as_of
    )


def _clean_fixed_cost(
    fixed_cost: FixedCost,
    overrides: Sequence[Override],
) -> tuple[FixedCost, list[Override]]:
    _require_date(fixed_cost.start_date, "start_date")
    _require_optional_date(fixed_cost.end_date, "end_date")
    cleaned = replace(
        fixed_cost,
        amount=_require_amount(fixed_cost.amount, "amount"),
        rhythm=Rhythm.parse(fixed_cost.rhythm),
    )
    cleaned_overrides = []
    for override in overrides:
        _require_date(override.original_date, "override original_date")
        _require_optional_date(override.new_date, "override new_date")
        if override.new_amount is not None:
            override = replace(
                override,
                new_amount=_require_amount(
                    override.new_amount,
                    "override new_amount",
                ),
            )
        cleaned_overrides.append(override)
    return cleaned, cleaned_overrides


def _clean_simulation(simulation: Simulation) -> Simulation:
    _require_date(simulation.date, "date")
    _require_optional_date(simulation.end_date, "end_date")
    interval = simulation.interval
    if simulation.recurring and interval is not None:
        interval = Rhythm.parse(interval)
    return replace(
        simulation,
        amount=_require_amount(simulation.amount, "amount"),
        direction=Direction.parse(simulation.direction),
        interval=interval,
    )


def _clean_employee(employee: Employee) -> Employee:
    salaries = []
    for salary in employee.salaries:
        _require_date(salary.start_date, "salary start")
        _require_optional_date(salary.end_date, "salary end")
        salaries.append(
            replace(
                salary,
                amount=_require_amount(salary.amount, "salary amount"),
            )
        )
    return replace(employee, salaries=tuple(salaries))


def _require_date(value, field_name: str) -> date:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise RecordValidationError(f"Invalid {field_name}: {value!r}")
    return value


def _require_optional_date(value, field_name: str) -> date | None:
    if value is None:
        return None
    return _require_date(value, field_name)


def _require_amount(value, field_name: str) -> Decimal:
    amount = None
    if isinstance(value, (int, float, Decimal)):
        amount = parse_amount(value)
    if amount is None:
        raise RecordValidationError(f"Invalid {field_name}: {value!r}")
    return amount


def _issue(kind: SourceKind, record, exc: Exception) -> ProjectionIssue:
    return ProjectionIssue(
        source_kind=kind,
        source_id=str(getattr(record, "id", "?")),
        reason=str(exc),
    )


__all__ = [
    "build_ledger",
    "build_projection",
    "apply_running_balance",
    "projected_collection_date",
]
