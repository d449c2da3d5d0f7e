"""Pay Schedule CLI - Command-line interface for pay period estimates."""

import functools
import json
import logging
import os
from pathlib import Path

import click
import yaml
from rich.console import Console

from payschedule import __version__
from payschedule.sdk import (
    ProfileNotFoundError,
    TaxTablesError,
    build_preview,
    generate_paystubs,
    get_setting,
    get_tax_tables,
    preview_to_dict,
    resolve_pay_parameters,
    schedule_periods,
    stub_to_dict,
    to_jsonable,
    write_stub_documents,
    write_stubs_csv,
)

from .profile_commands import profile as profile_group
from .renderers.stub_renderer import render_jurisdiction, render_preview, render_schedule, render_stubs
from .settings_commands import settings as settings_group

# Errors the SDK raises for bad input or config; shown without a traceback
USER_ERRORS = (ValueError, FileNotFoundError, TaxTablesError, ProfileNotFoundError, yaml.YAMLError)


@click.group()
@click.version_option(version=__version__, prog_name="pay-schedule")
def cli():
    """Pay Schedule - Pay period schedules and pay stub estimates.

    Builds a run of pay periods from a hire date, rate and frequency, and
    estimates gross pay, tax withholding, net pay and YTD totals for each.

    Parameters are resolved from (later wins):

    \b
    1. profile.yaml defaults (pay-schedule profile show)
    2. --params FILE (YAML or JSON)
    3. Individual options (--rate, --hire-date, ...)

    Rates are flat approximations, not authoritative tax tables.
    """
    pass


cli.add_command(settings_group)
cli.add_command(profile_group)


def pay_options(f):
    """Options shared by commands that need pay parameters."""
    options = [
        click.option("--params", "-p", "params_path", type=click.Path(exists=True, dir_okay=False),
                     help="YAML/JSON file with pay parameters"),
        click.option("--rate", "-r", type=str, help="Hourly rate (e.g., 20 or $20.00)"),
        click.option("--hire-date", type=str, help="Hire date, first day of period 1 (YYYY-MM-DD)"),
        click.option("--frequency", "-f", type=click.Choice(["weekly", "biweekly"]), help="Pay frequency"),
        click.option("--pay-day", type=str, help="Weekday pay is issued on (e.g., Friday)"),
        click.option("--count", "-n", type=int, help="Number of stubs to generate"),
        click.option("--hours", type=str, help="Regular hours per stub, comma separated (e.g., '80,76,80')"),
        click.option("--overtime", type=str, help="Overtime hours per stub, comma separated"),
        click.option("--name", type=str, help="Employee name"),
        click.option("--state", type=str, help="Employee state (e.g., KY)"),
        click.option("--city", type=str, help="Employee city (local tax lookup)"),
        click.option("--local-tax/--no-local-tax", default=None,
                     help="Withhold local tax when the city has an entry (default: yes)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _resolve_params(params_path, rate, hire_date, frequency, pay_day, count, hours, overtime,
                    name, state, city, local_tax):
    """Build PayParameters from CLI options, raising ClickException on bad input."""
    overrides = {
        "rate": rate,
        "hire_date": hire_date,
        "pay_frequency": frequency,
        "pay_day": pay_day,
        "num_stubs": count,
        "hours": hours,
        "overtime_hours": overtime,
        "include_local_tax": local_tax,
        "employee": {"name": name, "state": state, "city": city},
    }
    try:
        return resolve_pay_parameters(
            params_path=Path(params_path) if params_path else None,
            overrides=overrides,
        )
    except USER_ERRORS as e:
        raise click.ClickException(str(e))


def _with_params(f):
    """Resolve pay option values into a single 'params' argument."""
    @functools.wraps(f)
    def wrapper(params_path, rate, hire_date, frequency, pay_day, count, hours, overtime,
                name, state, city, local_tax, **kwargs):
        params = _resolve_params(params_path, rate, hire_date, frequency, pay_day, count,
                                 hours, overtime, name, state, city, local_tax)
        return f(params=params, **kwargs)
    return wrapper


def _load_tables():
    try:
        return get_tax_tables()
    except USER_ERRORS as e:
        raise click.ClickException(str(e))


def _output_format(output_format):
    return output_format or get_setting("default_output_format", "table")


@cli.command("schedule")
@pay_options
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default=None,
              help="Output format (default: settings default_output_format or table)")
@_with_params
def schedule_cmd(params, output_format):
    """Show the pay period schedule.

    Periods run back to back from the hire date; each is paid on the
    first pay day at least one week after the period ends.

    \b
    Examples:
      pay-schedule schedule --hire-date 2025-01-06 --count 4
      pay-schedule schedule -p params.yaml --format json
    """
    try:
        periods = schedule_periods(params.hire_date, params.pay_frequency, params.pay_day, params.num_stubs)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if _output_format(output_format) == "json":
        data = [p.model_dump(mode="json") for p in periods]
        click.echo(json.dumps(data, indent=2))
        return

    render_schedule(Console(), periods, title=f"Pay Schedule ({params.pay_frequency}, paid {params.pay_day})")


@cli.command("stubs")
@pay_options
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default=None,
              help="Output format (default: settings default_output_format or table)")
@click.option("--output-dir", "-o", type=click.Path(file_okay=False),
              help="Write one JSON document per stub to this directory")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False),
              help="Write a one-row-per-stub CSV summary")
@_with_params
def stubs_cmd(params, output_format, output_dir, csv_path):
    """Generate pay stubs with current and YTD figures.

    \b
    Examples:
      pay-schedule stubs --rate 20 --hire-date 2025-01-06 --state KY -n 2
      pay-schedule stubs -p params.yaml --hours 80,72 --overtime 0,4
      pay-schedule stubs -p params.yaml -o ./stubs --csv stubs.csv
    """
    tables = _load_tables()
    try:
        stubs = generate_paystubs(params, tables)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_dir:
        paths = write_stub_documents(stubs, Path(output_dir))
        for path in paths:
            click.echo(f"Wrote {path}", err=True)

    if csv_path:
        write_stubs_csv(stubs, Path(csv_path))
        click.echo(f"Wrote {csv_path}", err=True)

    if _output_format(output_format) == "json":
        click.echo(json.dumps([stub_to_dict(s) for s in stubs], indent=2))
        return

    render_stubs(Console(), stubs)


@cli.command("preview")
@pay_options
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@_with_params
def preview_cmd(params, output_json):
    """Show totals across all stubs and the pay schedule.

    \b
    Examples:
      pay-schedule preview --rate 20 --hire-date 2025-01-06 -n 3 --state KY
    """
    tables = _load_tables()
    try:
        preview = build_preview(params, tables)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_json:
        click.echo(json.dumps(preview_to_dict(preview), indent=2))
        return

    render_preview(Console(), preview)


@cli.command("taxes")
@click.argument("state")
@click.argument("city", required=False)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def taxes_cmd(state, city, output_json):
    """Show the tax rates that apply to STATE and optional CITY.

    Unknown states resolve to a 0% rate; unknown cities have no local tax.

    \b
    Examples:
      pay-schedule taxes KY
      pay-schedule taxes KY Louisville
    """
    tables = _load_tables()
    jurisdiction = tables.resolve(city, state)

    if output_json:
        click.echo(json.dumps(to_jsonable(jurisdiction), indent=2))
        return

    render_jurisdiction(Console(), jurisdiction, city=city)


def configure_logging():
    """Configure root logging from the LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
