"""Pay stub generation pipeline.

Two phases:
1. Schedule every period and compute its PeriodResult.
2. For each period, aggregate YTD over the completed result list.

The result is one self-consistent PayStub per period, ready for a
renderer. Nothing here performs I/O.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from .calculator import compute_period
from .schedule import resolve_hours, schedule_periods
from .schemas import PayParameters, PayPreview, PayStub, PeriodResult, PreviewRow, TaxJurisdiction
from .tax_tables import TaxTables, default_tax_tables
from .ytd import ytd_snapshots

logger = logging.getLogger(__name__)


def resolve_jurisdiction(params: PayParameters, tables: TaxTables) -> TaxJurisdiction:
    """Resolve state and local rates for the employee's city and state."""
    return tables.resolve(params.city, params.state)


def compute_results(params: PayParameters, tables: Optional[TaxTables] = None) -> List[PeriodResult]:
    """Schedule all periods and compute each one (phase 1).

    Raises:
        PayConfigError: If the parameters cannot produce a schedule
    """
    if tables is None:
        tables = default_tax_tables()

    periods = schedule_periods(
        params.hire_date,
        params.pay_frequency,
        params.pay_day,
        params.num_stubs,
    )
    hours = resolve_hours(
        params.hours,
        params.overtime_hours,
        params.num_stubs,
        params.pay_frequency,
    )
    jurisdiction = resolve_jurisdiction(params, tables)
    if params.include_local_tax and not jurisdiction.has_local_tax and params.city.strip():
        logger.debug(f"No local tax entry for '{params.city}, {jurisdiction.state}'")

    return [
        compute_period(
            period,
            regular,
            overtime,
            params.rate,
            jurisdiction,
            include_local_tax=params.include_local_tax,
            tables=tables,
        )
        for period, (regular, overtime) in zip(periods, hours)
    ]


def generate_paystubs(params: PayParameters, tables: Optional[TaxTables] = None) -> List[PayStub]:
    """Generate one stub per period, each with its own YTD snapshot.

    Args:
        params: Validated pay parameters
        tables: Tax tables (packaged defaults if not specified)

    Returns:
        List of PayStub in pay date order

    Raises:
        PayConfigError: If the parameters cannot produce a schedule
    """
    results = compute_results(params, tables)
    snapshots = ytd_snapshots(results)

    stubs = []
    for result, ytd in zip(results, snapshots):
        logger.debug(
            f"stub {result.period.ordinal}: pay {result.pay_date}, gross {result.gross}, "
            f"ytd gross {ytd.gross} over {ytd.periods} period(s)"
        )
        stubs.append(PayStub(
            employee=params.employee,
            employer=params.employer,
            hire_date=params.hire_date,
            pay_frequency=params.pay_frequency,
            pay_day=params.pay_day,
            current=result,
            ytd=ytd,
        ))

    logger.info(f"Generated {len(stubs)} stub(s) for {params.employee.name or 'employee'}")
    return stubs


def build_preview(params: PayParameters, tables: Optional[TaxTables] = None) -> PayPreview:
    """Summarize a run: totals across all periods plus the schedule.

    Pay dates follow the same one-week lag as generated stubs.
    """
    if tables is None:
        tables = default_tax_tables()

    results = compute_results(params, tables)
    jurisdiction = resolve_jurisdiction(params, tables)

    def total(getter) -> Decimal:
        return sum((getter(r) for r in results), Decimal("0"))

    total_gross = total(lambda r: r.gross)
    total_taxes = total(lambda r: r.total_employee_tax)
    withhold_local = params.include_local_tax and jurisdiction.has_local_tax

    return PayPreview(
        schedule=[
            PreviewRow(period=r.period, hours=r.hours, overtime_hours=r.overtime_hours)
            for r in results
        ],
        total_gross=total_gross,
        social_security=total(lambda r: r.employee_taxes.social_security),
        medicare=total(lambda r: r.employee_taxes.medicare),
        state_tax=total(lambda r: r.employee_taxes.state),
        state_rate=jurisdiction.state_rate,
        local_tax=total(lambda r: r.employee_taxes.local),
        local_name=jurisdiction.local_name if withhold_local else None,
        total_taxes=total_taxes,
        net_pay=total_gross - total_taxes,
    )
