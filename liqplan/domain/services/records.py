"""Translation of persisted row mappings into domain records.

Rows use the Supabase column names of the planning tables. Every parser
raises ``RecordValidationError`` on malformed input so callers can skip the
single row and keep the rest.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

from liqplan.domain.constants import PAID_INVOICE_STATUSES
from liqplan.domain.errors import RecordValidationError
from liqplan.domain.models import (
    Direction,
    Employee,
    FixedCost,
    Override,
    ProjectionIssue,
    Rhythm,
    SalaryPeriod,
    Simulation,
    SourceKind,
    Transaction,
)
from liqplan.domain.services.calendar import parse_localized_date
from liqplan.utils.decimal_utils import parse_amount

RecordT = TypeVar("RecordT")


def parse_fixed_cost(row: Mapping[str, Any]) -> FixedCost:
    """Build a FixedCost from a ``fixkosten`` row."""
    return FixedCost(
        id=_require_text(row, "id"),
        name=str(row.get("name") or ""),
        amount=_require_amount(row, "betrag", "amount"),
        rhythm=Rhythm.parse(_first(row, "rhythmus", "rhythm")),
        start_date=_require_date(row, "start", "start_date"),
        end_date=_optional_date(row, "enddatum", "end_date"),
        category=_optional_text(row, "kategorie", "category"),
    )


def parse_override(row: Mapping[str, Any]) -> Override:
    """Build an Override from a ``fixkosten_overrides`` row."""
    return Override(
        id=_require_text(row, "id"),
        fixed_cost_id=_require_text(row, "fixkosten_id", "fixed_cost_id"),
        original_date=_require_date(row, "original_date"),
        new_date=_optional_date(row, "new_date"),
        new_amount=_optional_amount(row, "new_amount"),
        skipped=bool(_first(row, "is_skipped", "skipped")),
        notes=_optional_text(row, "notes"),
    )


def parse_transaction(row: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a ``buchungen`` row.

    Amounts are stored as magnitudes; a negative stored amount is read as
    its absolute value with the row's direction deciding the sign.
    """
    is_invoice = bool(row.get("is_invoice"))
    return Transaction(
        id=_require_text(row, "id"),
        date=_require_date(row, "date"),
        amount=abs(_require_amount(row, "amount")),
        direction=Direction.parse(row.get("direction")),
        details=str(row.get("details") or ""),
        category=_optional_text(row, "kategorie", "category"),
        is_simulation=bool(row.get("is_simulation")),
        is_invoice=is_invoice,
        settled=_is_settled(row, is_invoice),
        modified=bool(row.get("modified")),
    )


def parse_simulation(row: Mapping[str, Any]) -> Simulation:
    """Build a Simulation from a ``simulationen`` row."""
    recurring = bool(row.get("recurring"))
    interval = None
    if recurring:
        interval = Rhythm.parse(_first(row, "interval", "rhythmus"))
    active = row.get("active")
    return Simulation(
        id=_require_text(row, "id"),
        name=str(row.get("name") or ""),
        amount=abs(_require_amount(row, "amount")),
        direction=Direction.parse(row.get("direction")),
        date=_require_date(row, "date"),
        recurring=recurring,
        interval=interval,
        end_date=_optional_date(row, "end_date"),
        details=str(row.get("details") or ""),
        active=True if active is None else bool(active),
    )


def parse_employee(
    row: Mapping[str, Any],
    salary_rows: Iterable[Mapping[str, Any]] = (),
) -> Employee:
    """Build an Employee from a ``mitarbeiter`` row and its ``lohndaten``."""
    salaries = tuple(
        SalaryPeriod(
            id=_require_text(salary, "id"),
            start_date=_require_date(salary, "Start", "start"),
            end_date=_optional_date(salary, "Ende", "ende", "end"),
            amount=abs(_require_amount(salary, "Betrag", "betrag")),
        )
        for salary in salary_rows
    )
    return Employee(
        id=_require_text(row, "id"),
        name=str(_first(row, "Name", "name") or ""),
        salaries=salaries,
    )


def parse_rows(
    rows: Iterable[Mapping[str, Any]],
    parser: Callable[[Mapping[str, Any]], RecordT],
    kind: SourceKind,
) -> tuple[list[RecordT], list[ProjectionIssue]]:
    """Parse rows, collecting one issue per row that fails validation.

    Args:
        rows: Raw row mappings.
        parser: One of the ``parse_*`` functions of this module.
        kind: Source kind reported for failing rows.

    Returns:
        tuple[list, list[ProjectionIssue]]: Parsed records and issues.
    """
    records: list[RecordT] = []
    issues: list[ProjectionIssue] = []
    for row in rows:
        try:
            records.append(parser(row))
        except RecordValidationError as exc:
            issues.append(
                ProjectionIssue(
                    source_kind=kind,
                    source_id=str(row.get("id") or "?"),
                    reason=str(exc),
                )
            )
    return records, issues


def group_overrides(
    overrides: Iterable[Override],
) -> dict[str, list[Override]]:
    """Group overrides by fixed cost id, ordered by original date."""
    grouped: dict[str, list[Override]] = {}
    for override in overrides:
        grouped.setdefault(override.fixed_cost_id, []).append(override)
    for items in grouped.values():
        items.sort(key=lambda override: override.original_date)
    return grouped


def _is_settled(row: Mapping[str, Any], is_invoice: bool) -> bool:
    if row.get("paid_at"):
        return True
    status = row.get("invoice_status")
    if status:
        return str(status).strip().lower() in PAID_INVOICE_STATUSES
    return not is_invoice


def _first(row: Mapping[str, Any], *keys: str):
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _require_text(row: Mapping[str, Any], *keys: str) -> str:
    value = _first(row, *keys)
    if value is None:
        raise RecordValidationError(f"Missing {keys[0]}")
    return str(value)


def _optional_text(row: Mapping[str, Any], *keys: str) -> str | None:
    value = _first(row, *keys)
    if value is None:
        return None
    return str(value).strip() or None


def _require_date(row: Mapping[str, Any], *keys: str) -> date:
    raw = _first(row, *keys)
    parsed = parse_localized_date(raw)
    if parsed is None:
        raise RecordValidationError(f"Invalid {keys[0]}: {raw!r}")
    return parsed


def _optional_date(row: Mapping[str, Any], *keys: str) -> date | None:
    if _first(row, *keys) is None:
        return None
    return _require_date(row, *keys)


def _require_amount(row: Mapping[str, Any], *keys: str) -> Decimal:
    raw = _first(row, *keys)
    amount = parse_amount(raw)
    if amount is None:
        raise RecordValidationError(f"Invalid {keys[0]}: {raw!r}")
    return amount


def _optional_amount(row: Mapping[str, Any], *keys: str) -> Decimal | None:
    if _first(row, *keys) is None:
        return None
    return _require_amount(row, *keys)


__all__ = [
    "parse_fixed_cost",
    "parse_override",
    "parse_transaction",
    "parse_simulation",
    "parse_employee",
    "parse_rows",
    "group_overrides",
]
