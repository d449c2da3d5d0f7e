"""Rich renderer for generated pay stubs.

Transforms SDK models into formatted Rich tables. Values arrive fully
resolved; rounding to cents happens here.
"""

from decimal import Decimal
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from payschedule.sdk.parsing import format_money
from payschedule.sdk.schemas import PayPeriod, PayPreview, PayStub, TaxJurisdiction


def render_stub(console: Console, stub: PayStub) -> None:
    """Render one stub: identity panel, earnings, taxes, summary."""
    _render_identity(console, stub)
    _render_earnings(console, stub)
    _render_taxes(console, stub)
    _render_summary(console, stub)


def render_stubs(console: Console, stubs: Sequence[PayStub]) -> None:
    """Render each stub in turn."""
    for i, stub in enumerate(stubs):
        if i:
            console.print()
        render_stub(console, stub)


def _render_identity(console: Console, stub: PayStub) -> None:
    """Render header panel with period, employee and employer."""
    period = stub.current.period
    emp = stub.employee
    er = stub.employer

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Pay period", f"{period.start_date} - {period.end_date}")
    table.add_row("Pay day", str(period.pay_date))
    table.add_row("Hire date", str(stub.hire_date))
    if emp.name:
        suffix = f" (...{emp.ssn_last4})" if emp.ssn_last4 else ""
        table.add_row("Employee", f"{emp.name}{suffix}")
    if emp.city or emp.state:
        table.add_row("Location", ", ".join(p for p in (emp.city, emp.state) if p))
    if er.name:
        table.add_row("Company", er.name)

    console.print(Panel(
        table,
        title=f"Stub {period.ordinal} ({stub.pay_frequency}, paid {stub.pay_day})",
        border_style="dim",
    ))


def _render_earnings(console: Console, stub: PayStub) -> None:
    """Render earnings table."""
    cur = stub.current
    ytd = stub.ytd

    table = Table(title="Gross Earnings", box=box.ROUNDED)
    table.add_column("Description", style="bold", min_width=22)
    table.add_column("Rate", justify="right")
    table.add_column("Hours", justify="right")
    table.add_column("Current", justify="right", min_width=12)
    table.add_column("YTD", justify="right", min_width=12)

    table.add_row(
        "Regular Hours",
        format_money(cur.rate),
        _hours(cur.hours),
        format_money(cur.regular_gross),
        format_money(ytd.regular_gross),
    )
    if cur.overtime_hours > 0 or ytd.overtime_hours > 0:
        table.add_row(
            "Overtime Hours (1.5x)",
            format_money(cur.overtime_rate),
            _hours(cur.overtime_hours),
            format_money(cur.overtime_gross),
            format_money(ytd.overtime_gross),
        )

    console.print(table)


def _render_taxes(console: Console, stub: PayStub) -> None:
    """Render employee and employer tax tables."""
    emp = stub.current.employee_taxes
    er = stub.current.employer_taxes
    ytd = stub.ytd

    employee_table = Table(title="Employee Taxes Withheld", box=box.ROUNDED)
    employee_table.add_column("Description", style="bold", min_width=22)
    employee_table.add_column("Current", justify="right", min_width=12)
    employee_table.add_column("YTD", justify="right", min_width=12)
    employee_table.add_row("Social Security", format_money(emp.social_security), format_money(ytd.social_security))
    employee_table.add_row("Medicare", format_money(emp.medicare), format_money(ytd.medicare))
    employee_table.add_row(emp.state_label, format_money(emp.state), format_money(ytd.state_tax))
    employee_table.add_row(emp.local_label, format_money(emp.local), format_money(ytd.local_tax))

    employer_table = Table(title="Employer Tax", box=box.ROUNDED)
    employer_table.add_column("Company Tax", style="bold", min_width=22)
    employer_table.add_column("Current", justify="right", min_width=12)
    employer_table.add_column("YTD", justify="right", min_width=12)
    employer_table.add_row("Social Security", format_money(er.social_security), format_money(ytd.employer_social_security))
    employer_table.add_row("Medicare", format_money(er.medicare), format_money(ytd.employer_medicare))
    employer_table.add_row("FUTA", format_money(er.futa), format_money(ytd.futa))
    employer_table.add_row(
        er.state_unemployment_label,
        format_money(er.state_unemployment),
        format_money(ytd.state_unemployment),
    )

    console.print(employee_table)
    console.print(employer_table)


def _render_summary(console: Console, stub: PayStub) -> None:
    """Render summary table."""
    cur = stub.current
    ytd = stub.ytd

    table = Table(title="Summary", box=box.ROUNDED)
    table.add_column("Description", style="bold", min_width=22)
    table.add_column("Current", justify="right", min_width=12)
    table.add_column("YTD", justify="right", min_width=12)

    table.add_row("Gross Earnings", format_money(cur.gross), format_money(ytd.gross))
    table.add_row("Taxes", format_money(cur.total_employee_tax), format_money(ytd.total_employee_tax))
    table.add_row(
        "[bold green]Net Pay[/bold green]",
        f"[bold green]{format_money(cur.net)}[/bold green]",
        format_money(ytd.net),
    )
    table.add_row("Hours Worked", _hours(cur.total_hours), _hours(ytd.total_hours))

    console.print(table)


def render_schedule(console: Console, periods: Sequence[PayPeriod], title: str = "Pay Schedule") -> None:
    """Render the period schedule."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Stub", justify="right")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Pay Date")

    for period in periods:
        table.add_row(
            str(period.ordinal),
            str(period.start_date),
            str(period.end_date),
            f"{period.pay_date} ({period.pay_date.strftime('%a')})",
        )

    console.print(table)


def render_preview(console: Console, preview: PayPreview) -> None:
    """Render run totals followed by the schedule with hours."""
    table = Table(title="Pay Preview", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=25)
    table.add_column("Total", justify="right", min_width=12)

    table.add_row("Total Gross Pay", format_money(preview.total_gross))
    table.add_row("Social Security", format_money(preview.social_security))
    table.add_row("Medicare", format_money(preview.medicare))
    table.add_row(f"State Tax ({_percent(preview.state_rate)})", format_money(preview.state_tax))
    if preview.local_name:
        table.add_row(preview.local_name, format_money(preview.local_tax))
    table.add_row("[red]Total Taxes[/red]", f"[red]{format_money(preview.total_taxes)}[/red]")
    table.add_row(
        "[bold green]Net Pay[/bold green]",
        f"[bold green]{format_money(preview.net_pay)}[/bold green]",
    )
    console.print(table)

    schedule = Table(title="Pay Schedule Preview", box=box.ROUNDED)
    schedule.add_column("Stub", justify="right")
    schedule.add_column("Start")
    schedule.add_column("End")
    schedule.add_column("Pay Date")
    schedule.add_column("Hours", justify="right")
    schedule.add_column("OT", justify="right")
    for row in preview.schedule:
        p = row.period
        schedule.add_row(
            str(p.ordinal), str(p.start_date), str(p.end_date), str(p.pay_date),
            _hours(row.hours), _hours(row.overtime_hours),
        )
    console.print(schedule)


def render_jurisdiction(console: Console, jurisdiction: TaxJurisdiction, city: Optional[str] = None) -> None:
    """Render resolved state and local rates."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("State", jurisdiction.state or "-")
    table.add_row("State rate", _percent(jurisdiction.state_rate))
    if jurisdiction.has_local_tax:
        table.add_row("Local tax", jurisdiction.local_name)
        table.add_row("Local rate", _percent(jurisdiction.local_rate))
    else:
        location = f"{city}, {jurisdiction.state}" if city else jurisdiction.state
        table.add_row("Local tax", f"[dim]none for {location}[/dim]")

    console.print(Panel(table, title="Tax Jurisdiction", border_style="dim"))


def _hours(value: Decimal) -> str:
    """Format hours with two decimals."""
    return f"{value:,.2f}"


def _percent(rate: Decimal) -> str:
    """Format a rate as a percentage, e.g. 0.0307 -> '3.07%'."""
    return f"{rate * 100:.2f}%"
