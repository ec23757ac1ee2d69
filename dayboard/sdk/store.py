"""Storage for profile, subscriptions, transactions and commutes.

Two interchangeable backends implement the Store contract:

- MemoryStore: in-process lists. Used for demo mode and as a test double.
- JsonFileStore: a single JSON document, data_dir/store.json, rewritten on
  every change, plus profile.yaml for the profile.

open_store() picks the backend: a freshly seeded MemoryStore in demo mode,
otherwise the JSON file under the data directory.

Subscription rules:
- Manual subscriptions need a merchant, a positive amount and a positive
  cadence.
- Detected subscriptions are owned by the detector: each sync replaces all
  previously detected rows and leaves manual rows alone.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from .config import get_data_path, is_demo_mode
from .config import load_profile as load_profile_file
from .config import save_profile as save_profile_file
from .recurring import CADENCE_DAYS
from .schemas import (
    CommuteEntry,
    RecurringSubscription,
    Subscription,
    Transaction,
    UserProfile,
)

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

STORE_FILENAME = "store.json"


class InvalidSubscriptionError(ValueError):
    """Raised when a subscription is missing a merchant, amount or cadence."""
    pass


def _subscription_sort_key(sub: Subscription):
    # Soonest due first, undated last
    return (sub.next_due is None, sub.next_due or date.max)


class Store(ABC):
    """Storage contract shared by the memory and file backends."""

    @abstractmethod
    def get_profile(self) -> Optional[UserProfile]:
        """Return the profile, or None if none has been saved."""

    @abstractmethod
    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace the profile."""

    @abstractmethod
    def _all_subscriptions(self) -> List[Subscription]:
        ...

    @abstractmethod
    def _replace_subscriptions(self, subscriptions: List[Subscription]) -> None:
        ...

    @abstractmethod
    def list_transactions(self) -> List[Transaction]:
        ...

    @abstractmethod
    def _replace_transactions(self, transactions: List[Transaction]) -> None:
        ...

    @abstractmethod
    def list_commutes(self) -> List[CommuteEntry]:
        ...

    @abstractmethod
    def _replace_commutes(self, commutes: List[CommuteEntry]) -> None:
        ...

    def list_subscriptions(self, active_only: bool = True) -> List[Subscription]:
        """Subscriptions sorted by next due date, undated ones last."""
        subs = self._all_subscriptions()
        if active_only:
            subs = [s for s in subs if s.is_active]
        return sorted(subs, key=_subscription_sort_key)

    def add_subscription(self, subscription: Subscription) -> Subscription:
        subs = self._all_subscriptions()
        subs.append(subscription)
        self._replace_subscriptions(subs)
        return subscription

    def remove_subscription(self, subscription_id: str) -> bool:
        """Delete a subscription by id. Returns False if it did not exist."""
        subs = self._all_subscriptions()
        kept = [s for s in subs if s.id != subscription_id]
        if len(kept) == len(subs):
            return False
        self._replace_subscriptions(kept)
        return True

    def add_transactions(self, transactions: Iterable[Transaction]) -> int:
        """Append transactions, skipping ids already stored.

        Returns:
            Number of transactions added
        """
        existing = self.list_transactions()
        seen = {t.id for t in existing}
        added = 0
        for txn in transactions:
            if txn.id in seen:
                continue
            existing.append(txn)
            seen.add(txn.id)
            added += 1
        if added:
            self._replace_transactions(existing)
        return added

    def replace_detected_subscriptions(self, fresh: List[Subscription]) -> int:
        """Swap every detected subscription for fresh ones.

        Returns:
            Number of non-detected subscriptions kept
        """
        kept = [s for s in self._all_subscriptions() if s.source != "detected"]
        self._replace_subscriptions(kept + list(fresh))
        return len(kept)

    def add_commute(self, entry: CommuteEntry) -> CommuteEntry:
        commutes = self.list_commutes()
        commutes.append(entry)
        self._replace_commutes(commutes)
        return entry


class MemoryStore(Store):
    """Store backed by in-process lists."""

    def __init__(self):
        self._profile: Optional[UserProfile] = None
        self._subscriptions: List[Subscription] = []
        self._transactions: List[Transaction] = []
        self._commutes: List[CommuteEntry] = []

    def get_profile(self) -> Optional[UserProfile]:
        return self._profile

    def save_profile(self, profile: UserProfile) -> None:
        self._profile = profile

    def _all_subscriptions(self) -> List[Subscription]:
        return list(self._subscriptions)

    def _replace_subscriptions(self, subscriptions: List[Subscription]) -> None:
        self._subscriptions = list(subscriptions)

    def list_transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def _replace_transactions(self, transactions: List[Transaction]) -> None:
        self._transactions = list(transactions)

    def list_commutes(self) -> List[CommuteEntry]:
        return list(self._commutes)

    def _replace_commutes(self, commutes: List[CommuteEntry]) -> None:
        self._commutes = list(commutes)


class JsonFileStore(Store):
    """Store backed by a single JSON document.

    Layout:
        {"subscriptions": [...], "transactions": [...], "commutes": [...]}

    The profile is not part of the document; it is profile.yaml in the
    config directory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_data_path() / STORE_FILENAME

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r") as f:
            return json.load(f)

    def _save_section(self, key: str, value) -> None:
        doc = self._load()
        doc[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(doc, f, indent=2)

    def get_profile(self) -> Optional[UserProfile]:
        raw = load_profile_file(require_exists=False)
        return UserProfile.model_validate(raw) if raw else None

    def save_profile(self, profile: UserProfile) -> None:
        save_profile_file(profile.model_dump(mode="json", exclude_none=True))

    def _all_subscriptions(self) -> List[Subscription]:
        return [Subscription.model_validate(s) for s in self._load().get("subscriptions", [])]

    def _replace_subscriptions(self, subscriptions: List[Subscription]) -> None:
        self._save_section("subscriptions", [s.model_dump(mode="json") for s in subscriptions])

    def list_transactions(self) -> List[Transaction]:
        return [Transaction.model_validate(t) for t in self._load().get("transactions", [])]

    def _replace_transactions(self, transactions: List[Transaction]) -> None:
        self._save_section("transactions", [t.model_dump(mode="json") for t in transactions])

    def list_commutes(self) -> List[CommuteEntry]:
        return [CommuteEntry.model_validate(c) for c in self._load().get("commutes", [])]

    def _replace_commutes(self, commutes: List[CommuteEntry]) -> None:
        self._save_section("commutes", [c.model_dump(mode="json") for c in commutes])


def create_subscription(
    store: Store,
    merchant: str,
    amount_cents: int,
    cadence_days: int,
    next_due: Optional[date] = None,
) -> Subscription:
    """Validate and store a manually entered subscription.

    Raises:
        InvalidSubscriptionError: empty merchant, or amount/cadence not positive
    """
    if not merchant or not merchant.strip() or amount_cents <= 0 or cadence_days <= 0:
        raise InvalidSubscriptionError("invalid subscription fields")

    subscription = Subscription(
        merchant=merchant.strip(),
        amount_cents=amount_cents,
        cadence_days=cadence_days,
        next_due=next_due,
        source="manual",
        is_active=True,
    )
    return store.add_subscription(subscription)


def detected_to_subscription(detected: RecurringSubscription) -> Subscription:
    """Convert a detector result into a storable subscription."""
    cadence = CADENCE_DAYS.get(detected.frequency)
    if cadence is None:
        cadence = max(1, (detected.next_due_date - detected.last_charge_date).days)
    return Subscription(
        merchant=detected.merchant_name,
        amount_cents=int(round(detected.amount_cents)),
        cadence_days=cadence,
        next_due=detected.next_due_date,
        source="detected",
        is_active=True,
    )


def sync_detected_subscriptions(store: Store, detected: Iterable[RecurringSubscription]) -> List[Subscription]:
    """Replace all previously detected subscriptions with a new detection run.

    Manual subscriptions are kept as they are.

    Returns:
        The newly stored detected subscriptions
    """
    fresh = [detected_to_subscription(d) for d in detected]
    kept = store.replace_detected_subscriptions(fresh)
    logger.info(f"Synced {len(fresh)} detected subscription(s); kept {kept} other(s)")
    return fresh


def open_store() -> Store:
    """Open the configured store (seeded memory store in demo mode)."""
    if is_demo_mode():
        from .demo import seed_demo_data

        store = MemoryStore()
        seed_demo_data(store, datetime.now(timezone.utc).date())
        return store
    return JsonFileStore()
