"""Recurring charge detection.

Finds subscriptions in a window of bank transactions: charges from the
same merchant for the exact same amount, spaced at regular intervals.

Heuristic:
1. Drop pending transactions and credits (negative amounts).
2. Group by (lowercased merchant name, amount to 2 decimals).
3. Groups of fewer than MIN_CHARGES are dropped.
4. Sort each group newest first; every interval between consecutive
   charges must be within TOLERANCE_DAYS of the average interval.
5. Frequency comes from the average interval, the next due date is the
   latest charge plus the average interval.

A two-charge group has a single interval, which always equals the average,
so any two same-merchant same-amount charges are reported as recurring.
"""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from .schemas import Frequency, RecurringSubscription, Transaction

logger = logging.getLogger(__name__)


MIN_CHARGES = 2

# Max distance (days) of any interval from the group's average interval.
TOLERANCE_DAYS = 5

# Upper bound (inclusive) of the average interval for each frequency.
WEEKLY_MAX_DAYS = 8
MONTHLY_MAX_DAYS = 35
QUARTERLY_MAX_DAYS = 95

# Cadence in days used when a detected subscription is stored.
CADENCE_DAYS: Dict[str, int] = {
    "weekly": 7,
    "monthly": 30,
    "quarterly": 90,
    "yearly": 365,
}

GroupKey = Tuple[str, str]


def group_key(txn: Transaction) -> GroupKey:
    """Grouping key: lowercased merchant name and amount to 2 decimals."""
    return (txn.merchant_name.lower(), f"{txn.amount_cents:.2f}")


def is_candidate(txn: Transaction) -> bool:
    """Only settled spend can be a subscription charge."""
    return not txn.pending and txn.amount_cents >= 0


def group_transactions(transactions: Iterable[Transaction]) -> Dict[GroupKey, List[Transaction]]:
    """Group candidate transactions by merchant and exact amount.

    Groups keep the order in which their first transaction was seen.
    """
    groups: Dict[GroupKey, List[Transaction]] = {}
    for txn in transactions:
        if not is_candidate(txn):
            continue
        groups.setdefault(group_key(txn), []).append(txn)
    return groups


def newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def interval_days(transactions: Sequence[Transaction]) -> List[int]:
    """Days between consecutive charges of a newest-first sequence."""
    return [
        (transactions[i - 1].date - transactions[i].date).days
        for i in range(1, len(transactions))
    ]


def average_interval_days(transactions: Sequence[Transaction]) -> int:
    """Average days between charges over the full span, truncated.

    Expects a newest-first sequence of at least two charges.
    """
    span = (transactions[0].date - transactions[-1].date).days
    return span // (len(transactions) - 1)


def is_recurring(transactions: Sequence[Transaction]) -> bool:
    """Check whether a newest-first group is spaced at regular intervals."""
    if len(transactions) < MIN_CHARGES:
        return False

    intervals = interval_days(transactions)
    average = sum(intervals) // len(intervals)
    return all(abs(interval - average) <= TOLERANCE_DAYS for interval in intervals)


def classify_frequency(average_days: int) -> Frequency:
    """Map an average interval in days to a billing frequency."""
    if average_days <= WEEKLY_MAX_DAYS:
        return "weekly"
    if average_days <= MONTHLY_MAX_DAYS:
        return "monthly"
    if average_days <= QUARTERLY_MAX_DAYS:
        return "quarterly"
    return "yearly"


def determine_frequency(transactions: Sequence[Transaction]) -> Frequency:
    """Frequency of a newest-first group ("unknown" below two charges)."""
    if len(transactions) < MIN_CHARGES:
        return "unknown"
    return classify_frequency(average_interval_days(transactions))


def predict_next_due(transactions: Sequence[Transaction]) -> date:
    """Latest charge date plus the average interval."""
    return transactions[0].date + timedelta(days=average_interval_days(transactions))


def detect_recurring(transactions: Iterable[Transaction]) -> List[RecurringSubscription]:
    """Detect recurring subscriptions in a list of transactions.

    The input is not modified. The newest charge of each recurring group
    supplies the merchant name, amount, category and last charge date.

    Args:
        transactions: Transactions from any window long enough to hold at
            least two charges of a subscription

    Returns:
        One RecurringSubscription per recurring group, in the order the
        groups first appear in the input.
    """
    subscriptions: List[RecurringSubscription] = []

    for key, group in group_transactions(transactions).items():
        if len(group) < MIN_CHARGES:
            continue

        ordered = newest_first(group)
        if not is_recurring(ordered):
            logger.debug(f"not recurring: {key[0]} {key[1]} intervals={interval_days(ordered)}")
            continue

        latest = ordered[0]
        subscriptions.append(RecurringSubscription(
            merchant_name=latest.merchant_name,
            amount_cents=latest.amount_cents,
            frequency=determine_frequency(ordered),
            last_charge_date=latest.date,
            next_due_date=predict_next_due(ordered),
            category=list(latest.category),
        ))

    logger.debug(f"detected {len(subscriptions)} recurring subscription(s)")
    return subscriptions
