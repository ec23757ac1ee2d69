"""Subscription and transaction CLI commands for DayBoard."""

import json
from datetime import datetime
from typing import Optional

import click
from rich.console import Console

from dayboard.sdk import (
    InvalidSubscriptionError,
    TransactionParseError,
    create_subscription,
    detect_recurring,
    is_demo_mode,
    load_transactions,
    open_store,
    sync_detected_subscriptions,
)

from .renderers.subscription_renderer import render_detected, render_subscriptions


def note_demo_mode() -> None:
    """Warn on stderr that a write went to the throwaway demo store."""
    if is_demo_mode():
        click.echo("Demo mode: changes are not saved.", err=True)


def _parse_date_option(value: Optional[str]):
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Expected YYYY-MM-DD.")


@click.group()
def subscriptions():
    """Track subscriptions and detect recurring charges."""
    pass


@subscriptions.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive subscriptions.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def subscriptions_list(show_all: bool, output_format: str):
    """List subscriptions, soonest due first."""
    subs = open_store().list_subscriptions(active_only=not show_all)

    if output_format == "json":
        click.echo(json.dumps([s.model_dump(mode="json") for s in subs], indent=2))
        return

    render_subscriptions(Console(), subs)


@subscriptions.command("add")
@click.argument("merchant")
@click.argument("amount", type=float)
@click.option("--cadence-days", type=int, default=30, show_default=True, help="Days between charges.")
@click.option("--next-due", help="Next charge date (YYYY-MM-DD).")
def subscriptions_add(merchant: str, amount: float, cadence_days: int, next_due: Optional[str]):
    """Add a subscription by hand. AMOUNT is in dollars.

    \b
    Examples:
      dayboard subscriptions add Spotify 9.99
      dayboard subscriptions add "Gym" 40 --cadence-days 30 --next-due 2024-07-01
    """
    try:
        sub = create_subscription(
            open_store(),
            merchant,
            int(round(amount * 100)),
            cadence_days,
            _parse_date_option(next_due),
        )
    except InvalidSubscriptionError as e:
        raise click.ClickException(str(e))

    click.echo(f"Added {sub.merchant} ({sub.id[:8]})")
    note_demo_mode()


@subscriptions.command("remove")
@click.argument("subscription_id")
def subscriptions_remove(subscription_id: str):
    """Remove a subscription by ID (full ID or the 8-character prefix from 'list')."""
    store = open_store()
    matches = [s for s in store.list_subscriptions(active_only=False) if s.id.startswith(subscription_id)]

    if not matches:
        raise click.ClickException(f"Subscription not found: {subscription_id}")
    if len(matches) > 1:
        raise click.ClickException(f"Ambiguous ID {subscription_id}: matches {len(matches)} subscriptions")

    store.remove_subscription(matches[0].id)
    click.echo(f"Removed {matches[0].merchant}")
    note_demo_mode()


@subscriptions.command("detect")
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--save", is_flag=True, help="Replace stored detected subscriptions with the results.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def subscriptions_detect(path: Optional[str], save: bool, output_format: str):
    """Detect recurring charges in transaction history.

    Reads PATH (a JSON transactions file) if given, otherwise the
    transactions imported into the store.
    """
    store = open_store()
    if path:
        try:
            transactions = load_transactions(path)
        except TransactionParseError as e:
            raise click.ClickException(str(e))
    else:
        transactions = store.list_transactions()

    detected = detect_recurring(transactions)

    if save:
        sync_detected_subscriptions(store, detected)
        note_demo_mode()

    if output_format == "json":
        click.echo(json.dumps([d.model_dump(mode="json") for d in detected], indent=2))
        return

    render_detected(Console(), detected)
    if save:
        click.echo(f"Saved {len(detected)} detected subscription(s).")


@click.group()
def transactions():
    """Import and inspect transaction history."""
    pass


@transactions.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def transactions_import(path: str):
    """Import transactions from a JSON file (duplicates by ID are skipped)."""
    try:
        loaded = load_transactions(path)
    except TransactionParseError as e:
        raise click.ClickException(str(e))

    added = open_store().add_transactions(loaded)
    click.echo(f"Imported {added} of {len(loaded)} transaction(s).")
    note_demo_mode()


@transactions.command("list")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def transactions_list(output_format: str):
    """List stored transactions, newest first."""
    txns = sorted(open_store().list_transactions(), key=lambda t: t.date, reverse=True)

    if output_format == "json":
        click.echo(json.dumps([t.model_dump(mode="json") for t in txns], indent=2))
        return

    if not txns:
        click.echo("No transactions.")
        return
    for txn in txns:
        flag = " (pending)" if txn.pending else ""
        click.echo(f"{txn.date.isoformat()}  {txn.merchant_name:<30} {txn.amount_cents / 100:>10,.2f}{flag}")
