"""Tax CLI commands for DayBoard.

Estimates take-home pay from the bracket tables in data/tax-rules/.
"""

import json
from datetime import date
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console

from dayboard.sdk import get_setting, open_store
from dayboard.sdk.schemas import TaxProfile, UserProfile
from dayboard.sdk.taxes import (
    TaxEstimateError,
    TaxRules,
    available_years,
    compare_states,
    estimate_taxes_for_year,
    load_tax_rules,
)

from .renderers.tax_renderer import render_brackets, render_state_comparison, render_tax_estimate


def _dollars_to_cents(value: float) -> int:
    return int(round(value * 100))


def _default_year() -> tuple[int, bool]:
    """Default tax year and whether earlier tables may stand in for it."""
    configured = get_setting("tax_year")
    if configured:
        return int(configured), False
    return date.today().year, True


def _build_profile(income: Optional[float], from_profile: bool, **overrides) -> TaxProfile:
    """TaxProfile from command-line options, filling unset ones from the saved profile."""
    base = UserProfile()
    if from_profile:
        try:
            saved = open_store().get_profile()
        except ValidationError as e:
            raise click.ClickException(f"Profile is invalid: {e}")
        if saved is None:
            raise click.ClickException("No profile saved. Set one with: dayboard profile set KEY VALUE")
        base = saved
    elif income is None:
        raise click.UsageError("Provide --income or --from-profile.")

    state = overrides.get("state")
    term_weeks = overrides.get("term_weeks")
    try:
        return TaxProfile(
            annual_income_cents=_dollars_to_cents(income) if income is not None else base.annual_income(),
            state=state if state is not None else base.state,
            filing_status=overrides.get("filing_status") or base.filing_status,
            pay_frequency=overrides.get("pay_frequency") or base.pay_frequency,
            term_weeks=term_weeks if term_weeks is not None else base.term_weeks,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))


def _load_rules(year: Optional[int]) -> TaxRules:
    fallback = False
    if year is None:
        year, fallback = _default_year()
    try:
        return load_tax_rules(year, fallback=fallback)
    except TaxEstimateError as e:
        raise click.ClickException(str(e))


@click.group()
def taxes():
    """Estimate income taxes and take-home pay."""
    pass


@taxes.command("estimate")
@click.option("--income", type=float, help="Gross annual income in dollars.")
@click.option("--state", help="Two-letter state code (omit for no state tax).")
@click.option("--filing-status", help="single (married is not yet supported).")
@click.option("--pay-frequency", help="weekly, biweekly or monthly.")
@click.option("--term-weeks", type=int, help="Weeks in the pay term.")
@click.option("--year", type=int, help="Tax year (default: tax_year setting or current year).")
@click.option("--from-profile", is_flag=True, help="Fill unset options from the saved profile.")
@click.option("--strict-state", is_flag=True, help="Fail if the state has no tax table.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def taxes_estimate(income: Optional[float], state: Optional[str], filing_status: Optional[str],
                   pay_frequency: Optional[str], term_weeks: Optional[int], year: Optional[int],
                   from_profile: bool, strict_state: bool, output_format: str):
    """Estimate federal, state and FICA tax and net pay per paycheck.

    \b
    Examples:
      dayboard taxes estimate --income 52000 --state IN --term-weeks 12
      dayboard taxes estimate --from-profile --format json
      dayboard taxes estimate --from-profile --year 2023 --strict-state
    """
    profile = _build_profile(income, from_profile, state=state, filing_status=filing_status,
                             pay_frequency=pay_frequency, term_weeks=term_weeks)
    rules = _load_rules(year)

    try:
        result = estimate_taxes_for_year(profile, rules.year, rules=rules, strict_state=strict_state)
    except TaxEstimateError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = {
            "year": rules.year,
            "profile": profile.model_dump(),
            "result": result.model_dump(),
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_tax_estimate(Console(), profile, result, rules.year)


@taxes.command("brackets")
@click.argument("year", type=int)
@click.option("--state", help="Show this state's table instead of the federal one.")
def taxes_brackets(year: int, state: Optional[str]):
    """Show the bracket table for a year."""
    try:
        rules = load_tax_rules(year)
    except TaxEstimateError as e:
        raise click.ClickException(str(e))

    console = Console()
    if state:
        brackets = rules.state_brackets(state)
        if brackets is None:
            raise click.ClickException(f"No {year} tax table for state {state.upper()}")
        render_brackets(console, f"{state.upper()} {year}", brackets)
        return

    render_brackets(console, f"Federal {year}", rules.federal.brackets)
    deduction = rules.federal.standard_deduction
    console.print(f"Standard deduction: single ${deduction.single / 100:,.2f}, married ${deduction.married / 100:,.2f}")


@taxes.command("years")
def taxes_years():
    """List years with tax tables."""
    years = available_years()
    if not years:
        click.echo("No tax tables found.")
        return
    for year in years:
        try:
            states = sorted(load_tax_rules(year).states)
        except TaxEstimateError as e:
            raise click.ClickException(str(e))
        click.echo(f"{year}: federal + {len(states)} state(s) ({', '.join(states)})")


@taxes.command("compare")
@click.option("--income", type=float, help="Gross annual income in dollars.")
@click.option("--states", help="Comma-separated state codes (default: every state with a table).")
@click.option("--filing-status", help="single (married is not yet supported).")
@click.option("--pay-frequency", help="weekly, biweekly or monthly.")
@click.option("--term-weeks", type=int, help="Weeks in the pay term.")
@click.option("--year", type=int, help="Tax year (default: tax_year setting or current year).")
@click.option("--from-profile", is_flag=True, help="Fill unset options from the saved profile.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def taxes_compare(income: Optional[float], states: Optional[str], filing_status: Optional[str],
                  pay_frequency: Optional[str], term_weeks: Optional[int], year: Optional[int],
                  from_profile: bool, output_format: str):
    """Compare take-home pay for the same income across states.

    \b
    Examples:
      dayboard taxes compare --income 52000 --term-weeks 12
      dayboard taxes compare --from-profile --states CA,TX,NY,WA,IN
    """
    profile = _build_profile(income, from_profile, filing_status=filing_status,
                             pay_frequency=pay_frequency, term_weeks=term_weeks)
    rules = _load_rules(year)
    codes = states.split(",") if states else None

    try:
        comparisons = compare_states(profile, rules, codes)
    except TaxEstimateError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = {
            "year": rules.year,
            "annual_income_cents": profile.annual_income_cents,
            "states": [c.model_dump() for c in comparisons],
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_state_comparison(Console(), profile, comparisons, rules.year)
