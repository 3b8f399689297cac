"""Calendar arithmetic on immutable ``datetime.date`` values."""

import calendar
import re
from datetime import date, datetime, timedelta

from liqplan.domain.models.records import Rhythm

_SHORT_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.?$")
_TWO_DIGIT_YEAR = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{2})$")

_DATE_FORMATS = (
    "%d.%m.%Y",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y.%m.%d",
)


def add_months(day: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month.

    Args:
        day: Base date.
        months: Number of months to add (may be negative).

    Returns:
        date: Shifted date; Jan 31 + 1 month is Feb 28 (29 in leap years).
    """
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def add_interval(day: date, rhythm: Rhythm) -> date:
    """Return the next occurrence one rhythm step after ``day``.

    The clamp is applied to ``day`` itself, so iterating from a clamped
    result keeps the shorter day: May 31, Jun 30, Jul 30, Aug 30.

    Args:
        day: Current occurrence.
        rhythm: Recurrence cadence.

    Returns:
        date: Following occurrence.
    """
    return add_months(day, Rhythm.parse(rhythm).months)


def shift_off_weekend(day: date) -> date:
    """Move Saturdays and Sundays back to the preceding Friday."""
    weekday = day.weekday()
    if weekday == 5:
        return day - timedelta(days=1)
    if weekday == 6:
        return day - timedelta(days=2)
    return day


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def month_key(day: date) -> date:
    """Return the first day of the month, used to group by month."""
    return start_of_month(day)


def format_swiss_date(day: date | None) -> str:
    """Format a date as ``dd.mm.yyyy``; None formats as an empty string."""
    if day is None:
        return ""
    return day.strftime("%d.%m.%Y")


def parse_localized_date(text, today: date | None = None) -> date | None:
    """Parse Swiss and ISO date text with a best-effort fallback chain.

    Supported inputs include ``31.12.2024``, ``31.12.24``, ``14.05.``,
    ``Di, 20.05.``, ``2024-12-31``, ``2024-12-31T08:00:00``, ``12/31/2024``
    and the words ``heute``/``morgen``. Dates without a year take the year
    of ``today``.

    Args:
        text: Raw date text, or a date/datetime passed through unchanged.
        today: Reference date for missing years and relative words.

    Returns:
        date | None: Parsed date, or None when no format matches.
    """
    if isinstance(text, datetime):
        return text.date()
    if isinstance(text, date):
        return text
    if not isinstance(text, str) or not text.strip():
        return None
    reference = today or date.today()
    cleaned = text.strip()

    if "," in cleaned:
        prefix, _, remainder = cleaned.partition(",")
        remainder = remainder.strip()
        if _SHORT_DATE.match(remainder) or _TWO_DIGIT_YEAR.match(remainder):
            cleaned = remainder
        elif remainder:
            for fmt in _DATE_FORMATS:
                if _strptime(remainder, fmt) is not None:
                    cleaned = remainder
                    break

    short = _SHORT_DATE.match(cleaned)
    if short:
        cleaned = f"{short.group(1)}.{short.group(2)}.{reference.year}"

    two_digit = _TWO_DIGIT_YEAR.match(cleaned)
    if two_digit:
        day, month, short_year = two_digit.groups()
        century = "20" if int(short_year) < 50 else "19"
        cleaned = f"{day}.{month}.{century}{short_year}"

    for fmt in _DATE_FORMATS:
        parsed = _strptime(cleaned, fmt)
        if parsed is not None:
            return parsed

    try:
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    lowered = cleaned.lower()
    if "morgen" in lowered:
        return reference + timedelta(days=1)
    if "heute" in lowered:
        return reference
    return None


def _strptime(text: str, fmt: str) -> date | None:
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        return None


__all__ = [
    "add_months",
    "add_interval",
    "shift_off_weekend",
    "start_of_month",
    "end_of_month",
    "month_key",
    "format_swiss_date",
    "parse_localized_date",
]
