"""Demo data for running DayBoard without a data file.

Seeds a store with a sample intern profile, three subscriptions (one due
today) and a commute taken today, all relative to the given date.
"""

from datetime import date, timedelta

from .schemas import CommuteEntry, Subscription, UserProfile
from .store import Store


def seed_demo_data(store: Store, today: date) -> Store:
    """Populate a store with demo data anchored at today."""
    store.save_profile(UserProfile(
        state="IN",
        filing_status="single",
        pay_frequency="biweekly",
        term_weeks=12,
        hourly_cents=2500,
        hours_per_week=40,
        start_date=today - timedelta(days=30),
        home_addr="123 Main St, Indianapolis, IN",
        office_addr="456 Company Rd, Indianapolis, IN",
        city="Indianapolis",
        in_office_days=3,
        food_cost_cents=1200,
    ))

    for merchant, amount, due_in_days, source in (
        ("Spotify", 999, 1, "manual"),
        ("Notion", 800, 6, "manual"),
        ("Netflix", 1599, 0, "detected"),
    ):
        store.add_subscription(Subscription(
            merchant=merchant,
            amount_cents=amount,
            cadence_days=30,
            next_due=today + timedelta(days=due_in_days),
            source=source,
        ))

    store.add_commute(CommuteEntry(
        date=today,
        origin="Home",
        destination="Office",
        cost_cents=1250,
        method="Uber",
    ))
    return store
