"""Tests for Decimal helpers."""

from decimal import Decimal

import pytest

from liqplan.utils.decimal_utils import coerce_decimal, parse_amount


def test_coerce_decimal() -> None:
    """None becomes zero and floats go through their string form."""
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(0.1) == Decimal("0.1")
    value = Decimal("1.23")
    assert coerce_decimal(value) is value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (1234, Decimal("1234")),
        (Decimal("12.5"), Decimal("12.5")),
        ("CHF 1'234.50", Decimal("1234.50")),
        ("1234,50", Decimal("1234.50")),
        ("1,234.50", Decimal("1234.50")),
        (" Fr. 99 ", Decimal("99")),
        ("SFr. -80", Decimal("-80")),
    ],
)
def test_parse_amount_accepts_swiss_formats(raw, expected) -> None:
    """Currency markers and apostrophes are stripped."""
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, True, "", "CHF", "-", "abc", float("inf"), "NaN"],
)
def test_parse_amount_rejects_unparseable_values(raw) -> None:
    """Unparseable and non-finite values give None."""
    assert parse_amount(raw) is None
