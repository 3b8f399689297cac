"""Dashboard aggregates derived from a projected ledger."""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from decimal import Decimal

from liqplan.domain.constants import (
    BURN_WINDOW_MONTHS,
    RUNWAY_ALERT_MONTHS,
    UNLIMITED_RUNWAY,
)
from liqplan.domain.errors import RecordValidationError
from liqplan.domain.models import (
    Alert,
    Direction,
    LedgerEntry,
    MonthlyCashflow,
    OpenAmounts,
    RevenueProgress,
    Transaction,
)
from liqplan.domain.services.calendar import (
    add_months,
    end_of_month,
    format_swiss_date,
    month_key,
    start_of_month,
)
from liqplan.utils.decimal_utils import coerce_decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_RUNWAY_LABELS = (
    (Decimal("1"), "Kritisch"),
    (Decimal("3"), "Knapp"),
    (Decimal("6"), "Ausreichend"),
    (Decimal("12"), "Gut"),
)


def net(ledger: Iterable[LedgerEntry], start: date, end: date) -> Decimal:
    """Sum signed amounts of entries dated within [start, end]."""
    return sum(
        (entry.amount for entry in ledger if start <= entry.date <= end),
        ZERO,
    )


def trailing_burn(ledger: Iterable[LedgerEntry], as_of: date) -> Decimal:
    """Average monthly outflow over the full months before as_of's month.

    Args:
        ledger: Ledger entries, typically including past transactions.
        as_of: Reference date; its own month is excluded.

    Returns:
        Decimal: Absolute outflow total divided by the window length.
    """
    window_end = start_of_month(as_of) - timedelta(days=1)
    window_start = add_months(start_of_month(as_of), -BURN_WINDOW_MONTHS)
    outflow = sum(
        (
            -entry.amount
            for entry in ledger
            if entry.amount < 0 and window_start <= entry.date <= window_end
        ),
        ZERO,
    )
    return outflow / Decimal(BURN_WINDOW_MONTHS)


def runway_months(
    current_balance: Decimal,
    ledger: Iterable[LedgerEntry],
    as_of: date,
) -> Decimal:
    """Return months of runway at the trailing three-month burn rate.

    Returns ``UNLIMITED_RUNWAY`` when there was no outflow, and zero when the
    balance is already exhausted.
    """
    burn = trailing_burn(ledger, as_of)
    if burn == 0:
        return UNLIMITED_RUNWAY
    balance = coerce_decimal(current_balance)
    if balance <= 0:
        return ZERO
    return balance / burn


def end_of_month_forecast(
    ledger: Sequence[LedgerEntry],
    as_of: date,
    current_balance: Decimal,
) -> Decimal:
    """Return the projected balance at the end of as_of's month."""
    cutoff = end_of_month(as_of)
    forecast = coerce_decimal(current_balance)
    for entry in ledger:
        if entry.date > cutoff:
            break
        forecast = entry.running_balance
    return forecast


def open_amounts(
    transactions: Iterable[Transaction],
    direction: Direction,
) -> OpenAmounts:
    """Count and sum unsettled, non-simulated transactions of a direction."""
    wanted = Direction.parse(direction)
    count = 0
    total = ZERO
    for transaction in transactions:
        if _direction_of(transaction) is not wanted:
            continue
        if transaction.settled or transaction.is_simulation:
            continue
        count += 1
        total += abs(coerce_decimal(transaction.amount))
    return OpenAmounts(direction=wanted, count=count, total=total)


def overdue_invoices(
    transactions: Iterable[Transaction],
    as_of: date,
) -> OpenAmounts:
    """Count and sum unpaid customer invoices dated before as_of."""
    return open_amounts(
        (
            transaction
            for transaction in transactions
            if transaction.is_invoice and transaction.date < as_of
        ),
        Direction.INCOMING,
    )


def first_negative_date(ledger: Iterable[LedgerEntry]) -> date | None:
    """Return the first date on which the running balance drops below zero."""
    for entry in ledger:
        if entry.running_balance < 0:
            return entry.date
    return None


def monthly_cashflow(ledger: Iterable[LedgerEntry]) -> list[MonthlyCashflow]:
    """Group ledger entries by calendar month, in ascending month order."""
    inflows: dict[date, Decimal] = {}
    outflows: dict[date, Decimal] = {}
    for entry in ledger:
        month = month_key(entry.date)
        inflows.setdefault(month, ZERO)
        outflows.setdefault(month, ZERO)
        if entry.amount >= 0:
            inflows[month] += entry.amount
        else:
            outflows[month] += -entry.amount
    return [
        MonthlyCashflow(
            month=month,
            inflow=inflows[month],
            outflow=outflows[month],
        )
        for month in sorted(inflows)
    ]


def upcoming_payments(
    ledger: Iterable[LedgerEntry],
    as_of: date,
    days: int = 30,
) -> list[LedgerEntry]:
    """Return outgoing entries due within the next ``days`` days."""
    horizon = as_of + timedelta(days=days)
    return [
        entry
        for entry in ledger
        if entry.amount < 0 and as_of <= entry.date <= horizon
    ]


def classify_runway(months: Decimal) -> str:
    """Return the dashboard label for a runway length."""
    for threshold, label in _RUNWAY_LABELS:
        if months <= threshold:
            return label
    return "Sehr gut"


def build_alerts(
    ledger: Iterable[LedgerEntry],
    runway: Decimal,
) -> list[Alert]:
    """Return liquidity alerts: projected shortfall and short runway."""
    alerts: list[Alert] = []
    shortfall = first_negative_date(ledger)
    if shortfall is not None:
        alerts.append(
            Alert(
                level="error",
                message=f"Unterdeckung ab {format_swiss_date(shortfall)}",
            )
        )
    if runway.is_finite() and runway < RUNWAY_ALERT_MONTHS:
        alerts.append(
            Alert(
                level="warning",
                message=(
                    f"Runway unter {RUNWAY_ALERT_MONTHS} Monaten "
                    f"({runway:.1f} Monate)"
                ),
            )
        )
    return alerts


def revenue_progress(
    transactions: Iterable[Transaction],
    year: int,
    target: Decimal,
) -> RevenueProgress:
    """Compare booked incoming revenue of a year with its target."""
    achieved = sum(
        (
            abs(coerce_decimal(transaction.amount))
            for transaction in transactions
            if _direction_of(transaction) is Direction.INCOMING
            and not transaction.is_simulation
            and transaction.date.year == year
        ),
        ZERO,
    )
    target_amount = coerce_decimal(target)
    if target_amount <= 0:
        return RevenueProgress(
            target=ZERO,
            achieved=achieved,
            remaining=ZERO,
            progress=ZERO,
        )
    progress = min(HUNDRED, achieved / target_amount * HUNDRED)
    return RevenueProgress(
        target=target_amount,
        achieved=achieved,
        remaining=max(ZERO, target_amount - achieved),
        progress=progress,
    )


def _direction_of(transaction: Transaction) -> Direction | None:
    try:
        return Direction.parse(transaction.direction)
    except RecordValidationError:
        return None


__all__ = [
    "net",
    "trailing_burn",
    "runway_months",
    "end_of_month_forecast",
    "open_amounts",
    "overdue_invoices",
    "first_negative_date",
    "monthly_cashflow",
    "upcoming_payments",
    "classify_runway",
    "build_alerts",
    "revenue_progress",
]
