"""Forgiving parsers for form input plus weekday and money helpers.

Form fields arrive as free text. Currency and hours are coerced rather than
validated: anything unparseable becomes zero. Weekday names and pay
frequencies are configuration, so unknown values raise PayConfigError.
"""

import logging
import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


class PayConfigError(ValueError):
    """Raised when pay parameters cannot produce a valid schedule."""
    pass


def parse_currency(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Parse a currency-like value, coercing garbage to zero.

    Strips every character except digits, '.' and '-'.

    Examples:
        parse_currency("$1,234.56abc")  # Decimal("1234.56")
        parse_currency("")              # Decimal("0")
    """
    # bool is an int subclass; YAML 'yes' arrives as True
    if value is None or isinstance(value, bool):
        return Decimal("0")

    if isinstance(value, (Decimal, int, float)):
        text = str(value)
    else:
        text = _NON_NUMERIC.sub("", str(value))
        if text in ("", ".", "-"):
            return Decimal("0")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return Decimal("0")
    # NaN and infinities
    return amount if amount.is_finite() else Decimal("0")


def parse_hours_list(text: Optional[str]) -> List[Optional[Decimal]]:
    """Parse a comma-separated hours field ("80, 76.5, ,80").

    Blank entries become None so the scheduler applies the frequency
    default; anything else goes through parse_currency.
    """
    if not text or not str(text).strip():
        return []
    entries = []
    for raw in str(text).split(","):
        raw = raw.strip()
        entries.append(parse_currency(raw) if raw else None)
    return entries


def parse_weekday(name: str) -> int:
    """Convert a weekday name to a Python weekday index (Monday=0).

    Accepts full names and three-letter abbreviations, any case.

    Raises:
        PayConfigError: If the name is not a weekday
    """
    key = str(name or "").strip().lower()
    if key in WEEKDAYS:
        return WEEKDAYS[key]
    for full_name, index in WEEKDAYS.items():
        if len(key) == 3 and full_name.startswith(key):
            return index
    valid = ", ".join(n.title() for n in WEEKDAYS)
    raise PayConfigError(f"Unknown weekday '{name}'. Valid days: {valid}")


def weekday_name(index: int) -> str:
    """Title-case weekday name for a Python weekday index."""
    for full_name, i in WEEKDAYS.items():
        if i == index:
            return full_name.title()
    raise PayConfigError(f"Weekday index out of range: {index}")


def next_occurrence_of_weekday(start: date, weekday: str) -> date:
    """Return the first date on or after start that falls on weekday.

    The search is inclusive: if start already falls on the weekday it is
    returned unchanged.
    """
    target = parse_weekday(weekday)
    return start + timedelta(days=(target - start.weekday()) % 7)


def parse_date(value: Union[str, date, datetime]) -> date:
    """Parse a date string in YYYY-MM-DD format."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()


def safe_parse_date(value) -> date:
    """Parse a date, falling back to today when parsing fails.

    Only meant for the hire-date field, where a blank form value should
    still produce a schedule.
    """
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        fallback = date.today()
        logger.warning(f"Unparseable date {value!r}, using {fallback.isoformat()}")
        return fallback


def quantize_cents(amount: Decimal) -> Decimal:
    """Round to cents (half up) for presentation."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Optional[Decimal]) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${quantize_cents(amount):,.2f}"
