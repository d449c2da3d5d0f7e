"""Tests for pay period scheduling."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from payschedule.sdk.parsing import PayConfigError
from payschedule.sdk.schedule import (
    default_hours,
    pay_date_for,
    period_length_days,
    resolve_hours,
    schedule_periods,
)


HIRE_DATE = date(2025, 1, 6)  # Monday


class TestSchedulePeriods:
    """Period boundaries and pay dates."""

    def test_biweekly_first_period(self):
        periods = schedule_periods(HIRE_DATE, "biweekly", "Friday", 1)

        assert len(periods) == 1
        first = periods[0]
        assert first.ordinal == 1
        assert first.start_date == date(2025, 1, 6)
        assert first.end_date == date(2025, 1, 19)
        assert first.pay_date == date(2025, 1, 31)

    def test_biweekly_second_period(self):
        periods = schedule_periods(HIRE_DATE, "biweekly", "Friday", 2)

        second = periods[1]
        assert second.start_date == date(2025, 1, 20)
        assert second.end_date == date(2025, 2, 2)
        assert second.pay_date == date(2025, 2, 14)

    def test_weekly_periods(self):
        periods = schedule_periods(HIRE_DATE, "weekly", "Friday", 2)

        assert periods[0].end_date == date(2025, 1, 12)
        assert periods[0].pay_date == date(2025, 1, 24)
        assert periods[1].start_date == date(2025, 1, 13)

    def test_periods_are_contiguous(self):
        periods = schedule_periods(HIRE_DATE, "biweekly", "Friday", 6)

        for prev, cur in zip(periods, periods[1:]):
            assert cur.start_date == prev.end_date + timedelta(days=1)
            assert cur.ordinal == prev.ordinal + 1

    @pytest.mark.parametrize("frequency,days", [("weekly", 7), ("biweekly", 14)])
    def test_period_length(self, frequency, days):
        for period in schedule_periods(HIRE_DATE, frequency, "Friday", 4):
            assert period.length_days == days

    @pytest.mark.parametrize("pay_day", ["Monday", "Wednesday", "Friday", "Sunday"])
    def test_pay_date_falls_on_pay_day_at_least_a_week_after_end(self, pay_day):
        for period in schedule_periods(HIRE_DATE, "biweekly", pay_day, 5):
            assert period.pay_date.strftime("%A") == pay_day
            lag = (period.pay_date - period.end_date).days
            assert 7 <= lag <= 13

    def test_pay_date_search_is_inclusive(self):
        """End + 7 days already on the pay day is the pay date."""
        # Period ends Sunday 2025-01-19; +7 is Sunday 2025-01-26
        periods = schedule_periods(HIRE_DATE, "biweekly", "Sunday", 1)
        assert periods[0].pay_date == date(2025, 1, 26)

    def test_hire_date_mid_week(self):
        periods = schedule_periods(date(2025, 1, 8), "weekly", "Friday", 1)
        assert periods[0].end_date == date(2025, 1, 14)
        assert periods[0].pay_date == date(2025, 1, 24)

    def test_count_matches(self):
        assert len(schedule_periods(HIRE_DATE, "weekly", "Friday", 26)) == 26

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_raises(self, count):
        with pytest.raises(PayConfigError, match="at least 1"):
            schedule_periods(HIRE_DATE, "biweekly", "Friday", count)

    def test_unknown_frequency_raises(self):
        with pytest.raises(PayConfigError, match="Unsupported pay frequency"):
            schedule_periods(HIRE_DATE, "monthly", "Friday", 2)

    def test_unknown_weekday_raises(self):
        with pytest.raises(PayConfigError, match="Unknown weekday"):
            schedule_periods(HIRE_DATE, "biweekly", "Payday", 2)


class TestHelpers:
    """Frequency lookups and pay date helper."""

    def test_period_length_days(self):
        assert period_length_days("weekly") == 7
        assert period_length_days("biweekly") == 14

    def test_default_hours(self):
        assert default_hours("weekly") == Decimal("40")
        assert default_hours("biweekly") == Decimal("80")

    def test_default_hours_unknown_frequency(self):
        with pytest.raises(PayConfigError):
            default_hours("semimonthly")

    def test_pay_date_for(self):
        assert pay_date_for(date(2025, 1, 19), "Friday") == date(2025, 1, 31)


class TestResolveHours:
    """Per-period hours with defaults."""

    def test_missing_entries_default(self):
        resolved = resolve_hours([Decimal("72")], [], 3, "biweekly")

        assert resolved == [
            (Decimal("72"), Decimal("0")),
            (Decimal("80"), Decimal("0")),
            (Decimal("80"), Decimal("0")),
        ]

    def test_none_entry_defaults(self):
        resolved = resolve_hours([None, Decimal("30")], [Decimal("2")], 2, "weekly")

        assert resolved == [(Decimal("40"), Decimal("2")), (Decimal("30"), Decimal("0"))]

    def test_explicit_zero_is_kept(self):
        resolved = resolve_hours([Decimal("0")], [], 1, "biweekly")
        assert resolved == [(Decimal("0"), Decimal("0"))]

    def test_extra_entries_ignored(self):
        resolved = resolve_hours([Decimal("1"), Decimal("2"), Decimal("3")], [], 2, "weekly")
        assert len(resolved) == 2
