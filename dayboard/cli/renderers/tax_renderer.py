"""Rich renderers for tax estimates and bracket tables.

Transforms SDK models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dayboard.sdk.schemas import StateTaxComparison, TaxProfile, TaxResult
from dayboard.sdk.taxes import Bracket


def render_tax_estimate(console: Console, profile: TaxProfile, result: TaxResult, year: int) -> None:
    """Render a tax estimate as a Rich table.

    Args:
        console: Rich Console instance
        profile: Inputs the estimate was computed from
        result: Estimator output
        year: Tax year of the bracket tables used
    """
    state = profile.state or "none"
    table = Table(
        title=f"Tax Estimate {year}: {profile.filing_status}, state {state}",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=24)
    table.add_column("Annual", justify="right", min_width=14)

    table.add_row("Gross Income", fmt_cents(profile.annual_income_cents))
    table.add_row("[dim]Taxable Income[/dim]", f"[dim]{fmt_cents(result.taxable_income_cents)}[/dim]")
    table.add_row("", "")
    table.add_row("[bold]TAXES[/bold]", "")
    table.add_row("  Federal", fmt_cents(result.federal_cents))
    table.add_row("  State", fmt_cents(result.state_cents))
    table.add_row("  FICA", fmt_cents(result.fica_cents))
    table.add_row("  [dim]Total Taxes[/dim]", f"[dim]{fmt_cents(result.total_tax_cents)}[/dim]")
    table.add_row("", "")
    table.add_row("[bold green]NET (annual)[/bold green]", f"[bold green]{fmt_cents(result.term_net_cents)}[/bold green]")

    console.print(table)

    console.print(Panel(
        f"{result.paychecks} {profile.pay_frequency} paycheck(s) over {profile.term_weeks} week(s): "
        f"[bold]{fmt_cents(result.per_paycheck_net_cents)}[/bold] net each",
        title="Per Paycheck",
        border_style="dim",
    ))


def render_state_comparison(console: Console, profile: TaxProfile,
                            comparisons: list[StateTaxComparison], year: int) -> None:
    """Render take-home pay per state, best first."""
    if not comparisons:
        console.print("No states to compare.")
        return

    table = Table(
        title=f"State Comparison {year}: {fmt_cents(profile.annual_income_cents)} gross",
        box=box.ROUNDED,
    )
    table.add_column("State", style="bold")
    table.add_column("State Tax", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Net (annual)", justify="right")
    table.add_column("Per Paycheck", justify="right")

    best = comparisons[0].net_annual_cents
    for c in comparisons:
        net = fmt_cents(c.net_annual_cents)
        if c.net_annual_cents == best:
            net = f"[green]{net}[/green]"
        table.add_row(
            c.state,
            fmt_cents(c.state_cents),
            f"{c.effective_rate_bps / 100:.2f}%",
            net,
            fmt_cents(c.per_paycheck_net_cents),
        )

    console.print(table)


def render_brackets(console: Console, title: str, brackets: list[Bracket]) -> None:
    """Render one bracket table."""
    if not brackets:
        console.print(f"{title}: no income tax")
        return

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Rate", justify="right")
    for bracket in brackets:
        upper = "and up" if bracket.is_top else fmt_cents(bracket.high)
        table.add_row(fmt_cents(bracket.low), upper, f"{bracket.rate_bps / 100:.2f}%")
    console.print(table)


def fmt_cents(cents: float | None) -> str:
    """Format an amount in cents as dollars."""
    if cents is None:
        return "-"
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:,.2f}"
