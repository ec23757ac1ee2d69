"""Daily burn and commute CLI commands for DayBoard."""

import json
from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console

from dayboard.sdk import (
    UnknownCityError,
    daily_burn,
    estimate_commute,
    get_city_cost_model,
    open_store,
)
from dayboard.sdk.schemas import CommuteEntry

from .renderers.subscription_renderer import render_burn
from .renderers.tax_renderer import fmt_cents
from .subscriptions_commands import note_demo_mode


def _parse_day(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Expected YYYY-MM-DD.")


@click.command("burn")
@click.option("--date", "day", help="Day to total (YYYY-MM-DD, default today).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def burn(day: Optional[str], output_format: str):
    """Show what today costs: subscriptions due, commutes and food."""
    store = open_store()
    profile = store.get_profile()
    food = profile.food_cost_cents if profile else 0

    result = daily_burn(store.list_subscriptions(), store.list_commutes(), food, _parse_day(day))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_burn(Console(), result)


@click.group()
def commute():
    """Estimate and log commute costs."""
    pass


@commute.command("estimate")
@click.option("--miles", type=float, required=True, help="Trip distance in miles.")
@click.option("--minutes", type=float, required=True, help="Trip duration in minutes.")
@click.option("--city", help="City cost model (default: profile city).")
@click.option("--surge", type=float, default=1.0, show_default=True, help="Surge multiplier for the high estimate.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def commute_estimate(miles: float, minutes: float, city: Optional[str], surge: float, output_format: str):
    """Estimate a ride-hail commute cost range."""
    if not city:
        profile = open_store().get_profile()
        city = profile.city if profile else ""
    if not city:
        raise click.UsageError("Provide --city or set 'city' in the profile.")

    try:
        estimate = estimate_commute(miles, minutes, get_city_cost_model(city), surge)
    except UnknownCityError as e:
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.BadParameter(str(e))

    if output_format == "json":
        click.echo(json.dumps(estimate.model_dump(), indent=2))
        return

    click.echo(
        f"{city}: {miles:.1f} mi, {minutes:.0f} min -> "
        f"{fmt_cents(estimate.est_cost_low_cents)} to {fmt_cents(estimate.est_cost_high_cents)}"
    )


@commute.command("add")
@click.argument("cost", type=float)
@click.option("--date", "day", help="Trip date (YYYY-MM-DD, default today).")
@click.option("--from", "origin", default="Home", show_default=True)
@click.option("--to", "destination", default="Office", show_default=True)
@click.option("--method", default="", help="e.g. Uber, bus.")
def commute_add(cost: float, day: Optional[str], origin: str, destination: str, method: str):
    """Log a commute trip. COST is in dollars."""
    if cost < 0:
        raise click.BadParameter("cost must not be negative")

    entry = open_store().add_commute(CommuteEntry(
        date=_parse_day(day),
        origin=origin,
        destination=destination,
        cost_cents=int(round(cost * 100)),
        method=method,
    ))
    click.echo(f"Logged {fmt_cents(entry.cost_cents)} commute on {entry.date.isoformat()}")
    note_demo_mode()


@commute.command("list")
def commute_list():
    """List logged commute trips."""
    trips = open_store().list_commutes()
    if not trips:
        click.echo("No commutes logged.")
        return
    for trip in sorted(trips, key=lambda t: t.date):
        click.echo(f"{trip.date.isoformat()}  {trip.origin} -> {trip.destination}  {fmt_cents(trip.cost_cents)}  {trip.method}")
