"""Domain models for planning input records.

Field names follow the core vocabulary; the persisted Supabase column names
(``betrag``, ``rhythmus``, ``enddatum`` ...) are translated by
``liqplan.domain.services.records`` before records reach the projection.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from liqplan.domain.errors import RecordValidationError


class Rhythm(str, Enum):
    """Recurrence cadence of a fixed cost or recurring simulation."""

    MONTHLY = "monatlich"
    QUARTERLY = "quartalsweise"
    SEMIANNUAL = "halbjährlich"
    ANNUAL = "jährlich"

    @property
    def months(self) -> int:
        """Return the number of calendar months between occurrences."""
        return _RHYTHM_MONTHS[self]

    @classmethod
    def parse(cls, value) -> "Rhythm":
        """Return the rhythm for a persisted or interval spelling.

        Args:
            value: Rhythm value such as ``"monatlich"`` or ``"monthly"``.

        Returns:
            Rhythm: Matching rhythm.

        Raises:
            RecordValidationError: If the value is not a known rhythm.
        """
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        if key in _RHYTHM_ALIASES:
            return _RHYTHM_ALIASES[key]
        raise RecordValidationError(f"Unknown rhythm: {value!r}")


_RHYTHM_MONTHS = {
    Rhythm.MONTHLY: 1,
    Rhythm.QUARTERLY: 3,
    Rhythm.SEMIANNUAL: 6,
    Rhythm.ANNUAL: 12,
}

_RHYTHM_ALIASES = {
    "monatlich": Rhythm.MONTHLY,
    "monthly": Rhythm.MONTHLY,
    "quartalsweise": Rhythm.QUARTERLY,
    "quarterly": Rhythm.QUARTERLY,
    "halbjährlich": Rhythm.SEMIANNUAL,
    "halbjaehrlich": Rhythm.SEMIANNUAL,
    "semiannual": Rhythm.SEMIANNUAL,
    "halfyearly": Rhythm.SEMIANNUAL,
    "jährlich": Rhythm.ANNUAL,
    "jaehrlich": Rhythm.ANNUAL,
    "yearly": Rhythm.ANNUAL,
    "annual": Rhythm.ANNUAL,
}


class Direction(str, Enum):
    """Direction of a cashflow."""

    INCOMING = "Incoming"
    OUTGOING = "Outgoing"

    def sign(self, amount: Decimal) -> Decimal:
        """Return the signed amount: positive inflow, negative outflow."""
        magnitude = abs(amount)
        return magnitude if self is Direction.INCOMING else -magnitude

    @classmethod
    def parse(cls, value) -> "Direction":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        if key in ("incoming", "in", "eingang"):
            return cls.INCOMING
        if key in ("outgoing", "out", "ausgang"):
            return cls.OUTGOING
        raise RecordValidationError(f"Unknown direction: {value!r}")


class SourceKind(str, Enum):
    """Origin of a ledger entry."""

    TRANSACTION = "transaction"
    FIXED_COST = "fixed_cost"
    PAYROLL = "payroll"
    SIMULATION = "simulation"

    @property
    def rank(self) -> int:
        """Return the tiebreak rank used when entries share a date."""
        return _SOURCE_KIND_RANK[self]


_SOURCE_KIND_RANK = {
    SourceKind.TRANSACTION: 0,
    SourceKind.FIXED_COST: 1,
    SourceKind.PAYROLL: 2,
    SourceKind.SIMULATION: 3,
}


@dataclass(frozen=True)
class FixedCost:
    """Recurring fixed cost (Fixkosten).

    Attributes:
        id: Record identifier.
        name: Display name used as ledger details.
        amount: Unsigned amount per occurrence.
        rhythm: Recurrence cadence.
        start_date: First occurrence; anchors the cadence.
        end_date: Last day on which occurrences may fall, inclusive.
        category: Optional category; defaults to ``Fixkosten`` in the ledger.
    """

    id: str
    name: str
    amount: Decimal
    rhythm: Rhythm
    start_date: date
    end_date: date | None = None
    category: str | None = None

    def is_active(self, as_of: date) -> bool:
        """Return True when the cost still generates occurrences after as_of."""
        return self.end_date is None or self.end_date > as_of


@dataclass(frozen=True)
class Override:
    """Per-occurrence exception for a fixed cost."""

    id: str
    fixed_cost_id: str
    original_date: date
    new_date: date | None = None
    new_amount: Decimal | None = None
    skipped: bool = False
    notes: str | None = None

    @property
    def key(self) -> tuple[str, date]:
        return (self.fixed_cost_id, self.original_date)


@dataclass(frozen=True)
class Transaction:
    """One-off cashflow event (Buchung)."""

    id: str
    date: date
    amount: Decimal
    direction: Direction
    details: str = ""
    category: str | None = None
    is_simulation: bool = False
    is_invoice: bool = False
    settled: bool = False
    modified: bool = False

    @property
    def signed_amount(self) -> Decimal:
        return self.direction.sign(self.amount)


@dataclass(frozen=True)
class Simulation:
    """Hypothetical cashflow that can be toggled in projections."""

    id: str
    name: str
    amount: Decimal
    direction: Direction
    date: date
    recurring: bool = False
    interval: Rhythm | None = None
    end_date: date | None = None
    details: str = ""
    active: bool = True


@dataclass(frozen=True)
class SalaryPeriod:
    """Gross salary valid between two dates."""

    id: str
    start_date: date
    amount: Decimal
    end_date: date | None = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day and (
            self.end_date is None or self.end_date >= day
        )


@dataclass(frozen=True)
class Employee:
    """Employee (Mitarbeiter) with salary history."""

    id: str
    name: str
    salaries: tuple[SalaryPeriod, ...] = field(default_factory=tuple)

    def salary_on(self, day: date) -> SalaryPeriod | None:
        """Return the most recently started salary period covering day."""
        candidates = [period for period in self.salaries if period.covers(day)]
        if not candidates:
            return None
        return max(candidates, key=lambda period: period.start_date)


__all__ = [
    "Rhythm",
    "Direction",
    "SourceKind",
    "FixedCost",
    "Override",
    "Transaction",
    "Simulation",
    "SalaryPeriod",
    "Employee",
]
