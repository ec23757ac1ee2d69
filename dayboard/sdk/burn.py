"""Daily burn: what a given day costs.

Sums active subscriptions due that day, commutes logged that day and the
profile's daily food cost.
"""

from datetime import date
from typing import Iterable

from .schemas import CommuteEntry, DailyBurn, Subscription


def daily_burn(
    subscriptions: Iterable[Subscription],
    commutes: Iterable[CommuteEntry],
    food_cost_cents: int,
    today: date,
) -> DailyBurn:
    """Compute the spend for a single day."""
    due = [s for s in subscriptions if s.is_active and s.next_due == today]
    trips = [c for c in commutes if c.date == today]

    total = sum(s.amount_cents for s in due) + sum(c.cost_cents for c in trips) + food_cost_cents

    return DailyBurn(
        date=today,
        total_cents=total,
        subscriptions=due,
        commutes=trips,
        food_cents=food_cost_cents,
    )
