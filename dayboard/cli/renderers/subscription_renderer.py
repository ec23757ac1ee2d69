"""Rich renderers for subscriptions, detection results and daily burn."""

from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from dayboard.sdk.schemas import DailyBurn, RecurringSubscription, Subscription

from .tax_renderer import fmt_cents


def render_subscriptions(console: Console, subscriptions: List[Subscription]) -> None:
    if not subscriptions:
        console.print("No subscriptions.")
        return

    table = Table(title="Subscriptions", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Merchant", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Every", justify="right")
    table.add_column("Next Due")
    table.add_column("Source")

    for sub in subscriptions:
        table.add_row(
            sub.id[:8],
            sub.merchant,
            fmt_cents(sub.amount_cents),
            f"{sub.cadence_days}d",
            sub.next_due.isoformat() if sub.next_due else "-",
            sub.source if sub.is_active else f"{sub.source} (inactive)",
        )
    console.print(table)


def render_detected(console: Console, detected: List[RecurringSubscription]) -> None:
    if not detected:
        console.print("No recurring charges detected.")
        return

    table = Table(title=f"Detected Recurring Charges ({len(detected)})", box=box.ROUNDED)
    table.add_column("Merchant", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Frequency")
    table.add_column("Last Charge")
    table.add_column("Next Due")

    for sub in detected:
        table.add_row(
            sub.merchant_name,
            fmt_cents(sub.amount_cents),
            sub.frequency,
            sub.last_charge_date.isoformat(),
            sub.next_due_date.isoformat(),
        )
    console.print(table)


def render_burn(console: Console, burn: DailyBurn) -> None:
    table = Table(title=f"Daily Burn {burn.date.isoformat()}", box=box.ROUNDED)
    table.add_column("Item", min_width=24)
    table.add_column("Amount", justify="right")

    for sub in burn.subscriptions:
        table.add_row(f"Subscription: {sub.merchant}", fmt_cents(sub.amount_cents))
    for trip in burn.commutes:
        label = trip.method or "Commute"
        table.add_row(f"{label}: {trip.origin} -> {trip.destination}", fmt_cents(trip.cost_cents))
    table.add_row("Food", fmt_cents(burn.food_cents))
    table.add_row("[bold]TOTAL[/bold]", f"[bold]{fmt_cents(burn.total_cents)}[/bold]")
    console.print(table)
