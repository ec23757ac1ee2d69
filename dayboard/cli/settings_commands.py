"""Settings CLI commands for DayBoard.

Manages settings.json - data directory, demo mode, default tax year.
"""

import click
from pathlib import Path

from dayboard.sdk import (
    load_settings,
    get_settings_path,
    get_data_path,
    is_demo_mode,
    set_setting,
    unset_setting,
)

KNOWN_SETTINGS = ("data_dir", "demo_mode", "tax_year", "tax_rules_dir")


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - data_dir: custom data directory path
    - demo_mode: true to use seeded demo data instead of the data file
    - tax_year: default year for tax estimates
    - tax_rules_dir: directory of <YEAR>.yaml tax tables
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective:")
    click.echo(f"  data_dir: {get_data_path()}")
    click.echo(f"  demo_mode: {is_demo_mode()}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key: str, value: str):
    """Set a setting."""
    if key == "demo_mode":
        parsed = value.lower() in ("1", "true", "yes", "on")
    elif key == "tax_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")
        parsed = int(value)
    else:
        parsed = str(Path(value).expanduser())

    set_setting(key, parsed)
    click.echo(f"Set {key} = {parsed}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key: str):
    """Remove a setting, reverting to its default."""
    unset_setting(key)
    click.echo(f"Removed {key}")
