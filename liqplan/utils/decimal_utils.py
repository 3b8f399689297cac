"""Helpers for Decimal normalization."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_MARKERS = re.compile(r"CHF|SFr\.?|Fr\.|₣", re.IGNORECASE)
_NON_NUMERIC = re.compile(r"[^\d.,\-]")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_amount(value) -> Decimal | None:
    """Parse a monetary amount from a number or a Swiss formatted string.

    Accepts values such as ``1234.5``, ``"CHF 1'234.50"``, ``"1234,50"`` or
    ``"1,234.50"``. A comma is read as decimal separator unless a dot is
    present as well, in which case commas are thousands separators.

    Args:
        value: Raw amount from a database row or an import.

    Returns:
        Decimal | None: Parsed finite amount, or None when unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            amount = coerce_decimal(value)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    cleaned = _CURRENCY_MARKERS.sub("", str(value))
    cleaned = _NON_NUMERIC.sub("", cleaned.replace("'", ""))
    if "," in cleaned:
        if "." in cleaned:
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")
    if not cleaned or cleaned in {"-", "."}:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


__all__ = ["coerce_decimal", "parse_amount"]
