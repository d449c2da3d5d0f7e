"""Tests for per-period gross and tax calculations."""

import pytest
from datetime import date
from decimal import Decimal

from payschedule.sdk.calculator import OVERTIME_MULTIPLIER, calc_gross, compute_period
from payschedule.sdk.parsing import quantize_cents
from payschedule.sdk.schemas import PayPeriod, PeriodResult, TaxJurisdiction
from payschedule.sdk.tax_tables import default_tax_tables


# === FIXTURES ===


@pytest.fixture
def period():
    return PayPeriod(
        ordinal=1,
        start_date=date(2025, 1, 6),
        end_date=date(2025, 1, 19),
        pay_date=date(2025, 1, 31),
    )


@pytest.fixture
def kentucky():
    return default_tax_tables().resolve(None, "KY")


@pytest.fixture
def louisville():
    return default_tax_tables().resolve("Louisville", "KY")


def cents(value: Decimal) -> Decimal:
    return quantize_cents(value)


# === GROSS ===


def test_calc_gross_regular_only():
    pay = calc_gross(Decimal("20"), Decimal("80"), Decimal("0"))

    assert pay["regular_gross"] == Decimal("1600")
    assert pay["overtime_gross"] == Decimal("0")
    assert pay["gross"] == Decimal("1600")


def test_calc_gross_with_overtime():
    pay = calc_gross(Decimal("20"), Decimal("80"), Decimal("4"))

    assert pay["overtime_rate"] == Decimal("30")
    assert pay["overtime_gross"] == Decimal("120")
    assert pay["gross"] == Decimal("1720")


def test_overtime_multiplier():
    assert OVERTIME_MULTIPLIER == Decimal("1.5")


# === FULL PERIOD ===


def test_kentucky_full_time_period(period, kentucky):
    """$20/hr, 80 hours, KY with no city."""
    result = compute_period(period, Decimal("80"), Decimal("0"), Decimal("20"), kentucky)

    assert result.gross == Decimal("1600")
    assert cents(result.employee_taxes.social_security) == Decimal("99.20")
    assert cents(result.employee_taxes.medicare) == Decimal("23.20")
    assert cents(result.employee_taxes.state) == Decimal("72.00")
    assert result.employee_taxes.local == Decimal("0")
    assert cents(result.total_employee_tax) == Decimal("194.40")
    assert cents(result.net) == Decimal("1405.60")
    assert result.employee_taxes.state_label == "KY Withholding Tax"
    assert result.employee_taxes.local_label == "Local Tax (none)"


def test_local_tax_withheld(period, louisville):
    result = compute_period(period, Decimal("80"), Decimal("0"), Decimal("20"), louisville)

    assert cents(result.employee_taxes.local) == Decimal("35.20")
    assert result.employee_taxes.local_label == "Louisville Metro Occupational Tax"
    assert cents(result.net) == Decimal("1370.40")


def test_local_tax_suppressed(period, louisville):
    result = compute_period(
        period, Decimal("80"), Decimal("0"), Decimal("20"), louisville, include_local_tax=False
    )

    assert result.employee_taxes.local == Decimal("0")
    assert result.employee_taxes.local_label == "Local Tax (none)"
    assert cents(result.net) == Decimal("1405.60")


def test_employer_taxes_do_not_reduce_net(period, kentucky):
    result = compute_period(period, Decimal("80"), Decimal("0"), Decimal("20"), kentucky)

    er = result.employer_taxes
    assert cents(er.social_security) == Decimal("99.20")
    assert cents(er.medicare) == Decimal("23.20")
    assert cents(er.futa) == Decimal("9.60")
    assert cents(er.state_unemployment) == Decimal("16.00")
    assert er.state_unemployment_label == "KY Unemployment Tax"
    assert result.net == result.gross - result.employee_taxes.total


def test_unknown_state_has_no_state_tax(period):
    jurisdiction = TaxJurisdiction()
    result = compute_period(period, Decimal("80"), Decimal("0"), Decimal("20"), jurisdiction)

    assert result.employee_taxes.state == Decimal("0")
    assert result.employee_taxes.state_label == "State Withholding Tax"


def test_overtime_period(period, kentucky):
    result = compute_period(period, Decimal("80"), Decimal("4"), Decimal("20"), kentucky)

    assert result.overtime_rate == Decimal("30")
    assert result.total_hours == Decimal("84")
    assert result.gross == Decimal("1720")


def test_zero_hours(period, kentucky):
    result = compute_period(period, Decimal("0"), Decimal("0"), Decimal("20"), kentucky)

    assert result.gross == Decimal("0")
    assert result.net == Decimal("0")


def test_full_precision_is_kept(period, kentucky):
    """Amounts are not rounded before presentation."""
    result = compute_period(period, Decimal("1"), Decimal("0"), Decimal("10.01"), kentucky)

    assert result.employee_taxes.social_security == Decimal("10.01") * Decimal("0.062")


# === COHERENCE ===


def test_incoherent_result_rejected(period, kentucky):
    result = compute_period(period, Decimal("80"), Decimal("0"), Decimal("20"), kentucky)
    data = result.model_dump()
    data["net"] = data["net"] + Decimal("1")

    with pytest.raises(ValueError, match="net"):
        PeriodResult.model_validate(data)
