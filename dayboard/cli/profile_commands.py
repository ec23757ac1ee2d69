"""Profile CLI commands for DayBoard.

Manages user profile data (profile.yaml) - state, pay, commute settings.
"""

import click
import yaml
from pydantic import ValidationError

from dayboard.sdk import (
    get_profile_path,
    load_profile,
    save_profile,
)
from dayboard.sdk.schemas import UserProfile

from .renderers.tax_renderer import fmt_cents


def _validate(profile_data: dict) -> UserProfile:
    try:
        return UserProfile.model_validate(profile_data)
    except ValidationError as e:
        raise click.ClickException(f"Profile validation failed: {e}")


@click.group()
def profile():
    """Manage your profile (profile.yaml).

    \b
    Keys:
      state, filing_status, pay_frequency, term_weeks,
      annual_income_cents or hourly_cents + hours_per_week (+ stipend_cents),
      city, home_addr, office_addr, in_office_days, food_cost_cents
    """
    pass


@profile.command("show")
def profile_show():
    """Show the profile and the income it implies."""
    path = get_profile_path()
    data = load_profile(require_exists=False)

    click.echo(f"Profile path: {path}")
    if not data:
        click.echo("No profile yet. Set values with: dayboard profile set KEY VALUE")
        return

    click.echo()
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())

    user_profile = _validate(data)
    click.echo()
    click.echo(f"Annual income used for estimates: {fmt_cents(user_profile.annual_income())}")


@profile.command("set")
@click.argument("key")
@click.argument("value")
def profile_set(key: str, value: str):
    """Set a profile value. VALUE is parsed as YAML (numbers stay numbers).

    \b
    Examples:
      dayboard profile set state IN
      dayboard profile set hourly_cents 2500
      dayboard profile set term_weeks 12
    """
    data = load_profile(require_exists=False)
    parsed = yaml.safe_load(value)
    data[key] = parsed if parsed is not None else ""

    _validate(data)
    path = save_profile(data)
    click.echo(f"Set {key} = {data[key]!r} in {path}")


@profile.command("unset")
@click.argument("key")
def profile_unset(key: str):
    """Remove a profile value (reverting to its default)."""
    data = load_profile(require_exists=False)
    if key not in data:
        raise click.ClickException(f"'{key}' is not set")
    del data[key]
    save_profile(data)
    click.echo(f"Removed {key}")


@profile.command("path")
def profile_path():
    """Print the profile.yaml path."""
    click.echo(get_profile_path())
