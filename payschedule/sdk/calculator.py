"""Per-period gross pay and tax calculations.

All taxes are flat percentages of gross pay. Employee-side taxes
(Social Security, Medicare, state, local) reduce net pay; employer-side
taxes (Social Security, Medicare, FUTA, state unemployment) are reported
but never deducted.

Amounts are kept at full Decimal precision. Rounding to cents is a
presentation concern, so YTD sums do not accumulate rounding error.
"""

from decimal import Decimal
from typing import Optional

from .schemas import EmployeeTaxes, EmployerTaxes, PayPeriod, PeriodResult, TaxJurisdiction
from .tax_tables import TaxTables, default_tax_tables

OVERTIME_MULTIPLIER = Decimal("1.5")


def calc_gross(rate: Decimal, hours: Decimal, overtime_hours: Decimal) -> dict:
    """Calculate regular, overtime and total gross pay.

    Returns:
        Dict with overtime_rate, regular_gross, overtime_gross, gross
    """
    overtime_rate = rate * OVERTIME_MULTIPLIER
    regular_gross = rate * hours
    overtime_gross = overtime_rate * overtime_hours
    return {
        "overtime_rate": overtime_rate,
        "regular_gross": regular_gross,
        "overtime_gross": overtime_gross,
        "gross": regular_gross + overtime_gross,
    }


def calc_employee_taxes(
    gross: Decimal,
    jurisdiction: TaxJurisdiction,
    include_local_tax: bool,
    tables: TaxTables,
) -> EmployeeTaxes:
    """Calculate taxes withheld from the employee."""
    state_label = f"{jurisdiction.state} Withholding Tax" if jurisdiction.state else "State Withholding Tax"
    withhold_local = include_local_tax and jurisdiction.has_local_tax

    return EmployeeTaxes(
        social_security=gross * tables.federal.social_security,
        medicare=gross * tables.federal.medicare,
        state=gross * jurisdiction.state_rate,
        local=gross * jurisdiction.local_rate if withhold_local else Decimal("0"),
        state_label=state_label,
        local_label=jurisdiction.local_name if withhold_local else "Local Tax (none)",
    )


def calc_employer_taxes(
    gross: Decimal,
    jurisdiction: TaxJurisdiction,
    tables: TaxTables,
) -> EmployerTaxes:
    """Calculate employer-side payroll taxes (informational)."""
    rates = tables.employer
    label = f"{jurisdiction.state} Unemployment Tax" if jurisdiction.state else "State Unemployment Tax"

    return EmployerTaxes(
        social_security=gross * rates.social_security,
        medicare=gross * rates.medicare,
        futa=gross * rates.futa,
        state_unemployment=gross * rates.state_unemployment,
        state_unemployment_label=label,
    )


def compute_period(
    period: PayPeriod,
    hours: Decimal,
    overtime_hours: Decimal,
    rate: Decimal,
    jurisdiction: TaxJurisdiction,
    include_local_tax: bool = True,
    tables: Optional[TaxTables] = None,
) -> PeriodResult:
    """Compute gross, taxes and net pay for a single period.

    Args:
        period: The scheduled period
        hours: Regular hours worked
        overtime_hours: Overtime hours worked (paid at 1.5x)
        rate: Hourly rate
        jurisdiction: Resolved state/local rates for the employee
        include_local_tax: Withhold local tax when the jurisdiction has one
        tables: Tax tables supplying FICA and employer rates
            (packaged defaults if not specified)

    Returns:
        PeriodResult (validated: gross = regular + overtime,
        net = gross - employee taxes)
    """
    if tables is None:
        tables = default_tax_tables()

    hours = Decimal(hours)
    overtime_hours = Decimal(overtime_hours)
    rate = Decimal(rate)

    pay = calc_gross(rate, hours, overtime_hours)
    gross = pay["gross"]

    employee_taxes = calc_employee_taxes(gross, jurisdiction, include_local_tax, tables)
    employer_taxes = calc_employer_taxes(gross, jurisdiction, tables)
    total_employee_tax = employee_taxes.total

    return PeriodResult(
        period=period,
        rate=rate,
        overtime_rate=pay["overtime_rate"],
        hours=hours,
        overtime_hours=overtime_hours,
        total_hours=hours + overtime_hours,
        regular_gross=pay["regular_gross"],
        overtime_gross=pay["overtime_gross"],
        gross=gross,
        employee_taxes=employee_taxes,
        employer_taxes=employer_taxes,
        total_employee_tax=total_employee_tax,
        net=gross - total_employee_tax,
    )
