"""Profile CLI commands for Pay Schedule.

Manages default pay parameters (profile.yaml) - employee, employer, pay.
"""

import click
import yaml

from payschedule.sdk import (
    get_profile_path,
    load_profile,
    get_profile_value,
    set_profile_value,
    validate_profile_key,
    resolve_pay_parameters,
)


def _parse_value(key, value):
    """Parse a pay.* CLI value as a YAML scalar ('20' -> 20, 'true' -> True).

    Identity fields (employee.*, employer.*) and dates stay strings so
    profile.yaml round-trips as written.
    """
    if not key.startswith("pay.") or key == "pay.hire_date":
        return value
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    if parsed is None or isinstance(parsed, (dict, list)):
        return value
    if not isinstance(parsed, (str, int, float, bool)):
        return value
    return parsed


@click.group()
def profile():
    """Manage default pay parameters (profile.yaml).

    Profile sections:
    - employee: name, ssn_last4, address, city, state, zip_code
    - employer: name, address, city, state, zip_code, phone
    - pay: rate, pay_frequency, pay_day, hire_date, include_local_tax

    Values here are defaults; --params files and command options win.
    """
    pass


@profile.command("show")
def profile_show():
    """Show the profile location and contents."""
    profile_path = get_profile_path(require_exists=False)
    click.echo(f"Profile: {profile_path}")

    if not profile_path.exists():
        click.echo()
        click.echo("Profile does not exist yet. Create with:")
        click.echo("  pay-schedule profile set pay.rate 20")
        return

    data = load_profile()
    click.echo()
    click.echo("---")
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))


@profile.command("get")
@click.argument("key")
def profile_get(key):
    """Get a profile value.

    KEY is a dot-notation path like 'employee.state'
    """
    value = get_profile_value(key)
    if value is None:
        raise click.ClickException(f"Key '{key}' not found in profile")

    if isinstance(value, (dict, list)):
        raise click.ClickException(
            f"Key '{key}' is a complex value. Use 'pay-schedule profile show' to view."
        )

    click.echo(value)


@profile.command("set")
@click.argument("key")
@click.argument("value")
def profile_set(key, value):
    """Set a profile value.

    KEY is a dot-notation path like 'pay.rate'
    VALUE is the value to set

    Examples:
        pay-schedule profile set pay.rate 22.50
        pay-schedule profile set pay.pay_day Friday
        pay-schedule profile set employee.state KY
    """
    is_valid, error_msg = validate_profile_key(key)
    if not is_valid:
        raise click.ClickException(error_msg)

    parsed_value = _parse_value(key, value)

    profile_file = set_profile_value(key, parsed_value)
    click.echo(f"Set {key} = {parsed_value}")
    click.echo(f"Saved to: {profile_file}")

    # Defaults only need to be valid once a rate is present
    data = load_profile()
    if "rate" in (data.get("pay") or {}):
        try:
            resolve_pay_parameters(profile=data)
        except ValueError as e:
            click.echo()
            click.echo("Warning: profile defaults do not validate:")
            click.echo(f"  {e}")


@profile.command("path")
def profile_path_cmd():
    """Print the profile.yaml path."""
    click.echo(get_profile_path(require_exists=False))
