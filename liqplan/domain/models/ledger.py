"""Domain models for projected ledgers."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from liqplan.domain.models.records import SourceKind


@dataclass(frozen=True)
class LedgerEntry:
    """Dated, signed cashflow with the balance after it was applied.

    Attributes:
        date: Effective (projected) date of the cashflow.
        amount: Signed amount, positive for inflows.
        details: Human readable description.
        category: Category tag (``Fixkosten``, ``Lohn``, ...).
        running_balance: Balance after this entry.
        source_kind: Record type the entry was generated from.
        source_id: Identifier of the source record.
        original_date: Scheduled or booked date when it differs from ``date``.
    """

    date: date
    amount: Decimal
    details: str
    category: str
    running_balance: Decimal
    source_kind: SourceKind
    source_id: str
    original_date: date | None = None

    def with_balance(self, running_balance: Decimal) -> "LedgerEntry":
        return replace(self, running_balance=running_balance)


@dataclass(frozen=True)
class ProjectionIssue:
    """Input record skipped while projecting."""

    source_kind: SourceKind
    source_id: str
    reason: str


@dataclass(frozen=True)
class Projection:
    """Ledger entries together with the records that were skipped."""

    entries: list[LedgerEntry]
    issues: list[ProjectionIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectionOptions:
    """Switches for a projection run.

    Attributes:
        include_simulations: Include simulations and simulated transactions.
        as_of: Reference "today"; required for past-due invoice handling.
        shift_overdue_invoices: Move unpaid past-due incoming invoices forward.
    """

    include_simulations: bool = True
    as_of: date | None = None
    shift_overdue_invoices: bool = True


__all__ = [
    "LedgerEntry",
    "ProjectionIssue",
    "Projection",
    "ProjectionOptions",
]
