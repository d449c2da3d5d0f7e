"""Settings CLI commands for Pay Schedule.

Manages settings.json - tax tables path, output preferences.
"""

import click
from pathlib import Path

from payschedule.sdk import (
    DEFAULT_SETTINGS,
    TaxTablesError,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_settings_path,
    load_tax_tables,
)

OUTPUT_FORMATS = ("table", "json")


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_tables: path to a custom tax tables YAML
    - default_output_format: table or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    path = get_settings_path()
    configured = load_settings()

    click.echo(f"Settings: {path}" + ("" if path.exists() else " (not created)"))
    if not configured:
        click.echo("No settings configured (using defaults).")
    click.echo()

    for key, default in DEFAULT_SETTINGS.items():
        if key in configured:
            click.echo(f"  {key}: {configured[key]}")
        else:
            click.echo(f"  {key}: {default or 'built-in'} (default)")
    for key in sorted(set(configured) - set(DEFAULT_SETTINGS)):
        click.echo(f"  {key}: {configured[key]} (unused)")


@settings.command("tax-tables")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom tax tables, revert to built-in")
def settings_tax_tables(path, clear):
    """Set or clear a custom tax tables file.

    PATH is a YAML file with federal, employer, states and local sections.
    The file is validated before it is saved.

    Examples:
        pay-schedule settings tax-tables ~/pay/tax_tables.yaml
        pay-schedule settings tax-tables --clear
    """
    if clear:
        current = load_settings()
        if "tax_tables" in current:
            del current["tax_tables"]
            save_settings(current)
            click.echo("Cleared tax_tables setting. Using built-in tables.")
        else:
            click.echo("tax_tables was not set.")
        return

    if not path:
        current_path = get_setting("tax_tables")
        if current_path:
            click.echo(f"Current tax_tables: {current_path}")
        else:
            click.echo("No custom tax_tables set. Using built-in tables.")
        return

    tables_path = Path(path).expanduser().resolve()

    try:
        tables = load_tax_tables(tables_path)
    except (FileNotFoundError, TaxTablesError) as e:
        raise click.ClickException(str(e))

    set_setting("tax_tables", str(tables_path))
    click.echo(f"Set tax_tables: {tables_path}")
    click.echo(f"  {len(tables.states)} state rates, {len(tables.local_keys)} local entries")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("output-format")
@click.argument("fmt", required=False, type=click.Choice(OUTPUT_FORMATS))
def settings_output_format(fmt):
    """Show or set the default output format (table or json).

    Examples:
        pay-schedule settings output-format json
    """
    if not fmt:
        click.echo(get_setting("default_output_format", "table"))
        return

    set_setting("default_output_format", fmt)
    click.echo(f"Set default_output_format: {fmt}")
