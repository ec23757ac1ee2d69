"""Tests for daily burn and the demo data it is usually shown with."""
from datetime import date, timedelta

from dayboard.sdk.burn import daily_burn
from dayboard.sdk.demo import seed_demo_data
from dayboard.sdk.schemas import CommuteEntry, Subscription
from dayboard.sdk.store import MemoryStore


TODAY = date(2024, 6, 3)


def demo_store() -> MemoryStore:
    return seed_demo_data(MemoryStore(), TODAY)


def burn_for(store: MemoryStore, day: date):
    return daily_burn(store.list_subscriptions(), store.list_commutes(), store.get_profile().food_cost_cents, day)


class TestDailyBurn:
    """What a single day costs."""

    def test_demo_today(self):
        """Netflix due today, one Uber ride and food."""
        burn = burn_for(demo_store(), TODAY)

        assert burn.total_cents == 1599 + 1250 + 1200
        assert [s.merchant for s in burn.subscriptions] == ["Netflix"]
        assert len(burn.commutes) == 1
        assert burn.food_cents == 1200
        assert burn.date == TODAY

    def test_demo_tomorrow(self):
        """Spotify is due tomorrow; no commute is logged for it."""
        burn = burn_for(demo_store(), TODAY + timedelta(days=1))

        assert burn.total_cents == 999 + 1200
        assert burn.commutes == []

    def test_quiet_day_is_food_only(self):
        burn = burn_for(demo_store(), TODAY + timedelta(days=3))
        assert burn.total_cents == 1200
        assert burn.subscriptions == []

    def test_inactive_subscription_ignored(self):
        subs = [Subscription(merchant="Old", amount_cents=500, cadence_days=30, next_due=TODAY, is_active=False)]
        assert daily_burn(subs, [], 0, TODAY).total_cents == 0

    def test_undated_subscription_ignored(self):
        subs = [Subscription(merchant="Someday", amount_cents=500, cadence_days=30)]
        assert daily_burn(subs, [], 0, TODAY).total_cents == 0

    def test_multiple_commutes(self):
        trips = [
            CommuteEntry(date=TODAY, cost_cents=1250),
            CommuteEntry(date=TODAY, cost_cents=1100),
            CommuteEntry(date=TODAY - timedelta(days=1), cost_cents=900),
        ]
        assert daily_burn([], trips, 0, TODAY).total_cents == 2350


class TestDemoData:
    def test_profile(self):
        profile = demo_store().get_profile()

        assert profile.state == "IN"
        assert profile.city == "Indianapolis"
        assert profile.annual_income() == 2500 * 40 * 52
        assert profile.start_date == TODAY - timedelta(days=30)

    def test_subscriptions_relative_to_today(self):
        subs = demo_store().list_subscriptions()

        assert [(s.merchant, s.next_due) for s in subs] == [
            ("Netflix", TODAY),
            ("Spotify", TODAY + timedelta(days=1)),
            ("Notion", TODAY + timedelta(days=6)),
        ]
        assert {s.merchant: s.source for s in subs}["Netflix"] == "detected"
