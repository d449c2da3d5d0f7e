"""Pay period scheduling.

Periods start on the hire date and run back to back with no gaps: each
period is 7 (weekly) or 14 (biweekly) calendar days. Pay lags the period
by a week: the pay date is the first configured payday on or after
period end + 7 days.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from .parsing import PayConfigError, next_occurrence_of_weekday, parse_weekday
from .schemas import PayPeriod

logger = logging.getLogger(__name__)

PERIOD_DAYS = {
    "weekly": 7,
    "biweekly": 14,
}

# Full-time hours per period
DEFAULT_HOURS = {
    "weekly": Decimal("40"),
    "biweekly": Decimal("80"),
}

PAY_LAG = timedelta(days=7)


def period_length_days(frequency: str) -> int:
    """Get number of days in a pay period for a frequency."""
    if frequency not in PERIOD_DAYS:
        valid = ", ".join(PERIOD_DAYS)
        raise PayConfigError(f"Unsupported pay frequency '{frequency}'. Valid: {valid}")
    return PERIOD_DAYS[frequency]


def default_hours(frequency: str) -> Decimal:
    """Full-time regular hours for one period of the given frequency."""
    period_length_days(frequency)
    return DEFAULT_HOURS[frequency]


def pay_date_for(end_date: date, pay_day: str) -> date:
    """Pay date for a period ending on end_date: never before end + 7 days."""
    return next_occurrence_of_weekday(end_date + PAY_LAG, pay_day)


def schedule_periods(
    hire_date: date,
    frequency: str,
    pay_day: str,
    num_stubs: int,
) -> List[PayPeriod]:
    """Generate contiguous pay periods starting on the hire date.

    Args:
        hire_date: First day of the first period
        frequency: 'weekly' or 'biweekly'
        pay_day: Weekday name pay is issued on (e.g., 'Friday')
        num_stubs: Number of periods to generate (must be positive)

    Returns:
        List of num_stubs PayPeriods in chronological order

    Raises:
        PayConfigError: For a non-positive count, unknown frequency or
            unknown weekday. Raised before any period is produced.
    """
    if num_stubs is None or int(num_stubs) <= 0:
        raise PayConfigError(f"Number of stubs must be at least 1, got {num_stubs}")
    length = period_length_days(frequency)
    parse_weekday(pay_day)

    periods = []
    cursor = hire_date
    for ordinal in range(1, int(num_stubs) + 1):
        end = cursor + timedelta(days=length - 1)
        period = PayPeriod(
            ordinal=ordinal,
            start_date=cursor,
            end_date=end,
            pay_date=pay_date_for(end, pay_day),
        )
        logger.debug(
            f"period {ordinal}: {period.start_date} - {period.end_date}, pays {period.pay_date}"
        )
        periods.append(period)
        cursor = end + timedelta(days=1)

    return periods


def resolve_hours(
    hours: Sequence[Optional[Decimal]],
    overtime_hours: Sequence[Optional[Decimal]],
    num_stubs: int,
    frequency: str,
) -> List[Tuple[Decimal, Decimal]]:
    """Pair up regular and overtime hours for each period.

    Entries beyond the supplied lists, or given as None, fall back to the
    frequency's full-time hours and zero overtime. Extra entries past
    num_stubs are ignored.

    Returns:
        List of (hours, overtime_hours), one per period
    """
    fallback = default_hours(frequency)
    resolved = []
    defaulted = 0

    for i in range(num_stubs):
        regular = hours[i] if i < len(hours) else None
        overtime = overtime_hours[i] if i < len(overtime_hours) else None
        if regular is None:
            regular = fallback
            defaulted += 1
        resolved.append((Decimal(regular), Decimal(overtime) if overtime is not None else Decimal("0")))

    if defaulted:
        logger.debug(f"{defaulted} of {num_stubs} period(s) use default {fallback} hours")

    return resolved
