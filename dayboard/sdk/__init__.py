"""DayBoard SDK - Core functionality for tax estimates and subscription tracking."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_profile_path,
    load_profile,
    save_profile,
    ProfileNotFoundError,
    is_demo_mode,
    get_data_path,
)

from .schemas import (
    TaxProfile,
    TaxResult,
    StateTaxComparison,
    Transaction,
    RecurringSubscription,
    Subscription,
    UserProfile,
    CommuteEntry,
    CityCostModel,
    CommuteEstimate,
    DailyBurn,
)

from .taxes import (
    Bracket,
    TaxRules,
    TaxEstimateError,
    InvalidFilingStatusError,
    FilingStatusNotSupportedError,
    TaxRulesNotFoundError,
    UnknownJurisdictionError,
    estimate_taxes,
    estimate_taxes_for_year,
    load_tax_rules,
    available_years,
    compare_states,
)

from .recurring import (
    detect_recurring,
    classify_frequency,
    CADENCE_DAYS,
)

from .transactions import (
    TransactionParseError,
    load_transactions,
    parse_transactions,
)

from .store import (
    Store,
    MemoryStore,
    JsonFileStore,
    InvalidSubscriptionError,
    create_subscription,
    sync_detected_subscriptions,
    open_store,
)

from .burn import daily_burn

from .commute import (
    UnknownCityError,
    estimate_commute,
    get_city_cost_model,
    load_city_cost_models,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "ProfileNotFoundError",
    "is_demo_mode",
    "get_data_path",
    # Schemas
    "TaxProfile",
    "TaxResult",
    "StateTaxComparison",
    "Transaction",
    "RecurringSubscription",
    "Subscription",
    "UserProfile",
    "CommuteEntry",
    "CityCostModel",
    "CommuteEstimate",
    "DailyBurn",
    # Taxes
    "Bracket",
    "TaxRules",
    "TaxEstimateError",
    "InvalidFilingStatusError",
    "FilingStatusNotSupportedError",
    "TaxRulesNotFoundError",
    "UnknownJurisdictionError",
    "estimate_taxes",
    "estimate_taxes_for_year",
    "load_tax_rules",
    "available_years",
    "compare_states",
    # Recurring detection
    "detect_recurring",
    "classify_frequency",
    "CADENCE_DAYS",
    # Transactions
    "TransactionParseError",
    "load_transactions",
    "parse_transactions",
    # Storage
    "Store",
    "MemoryStore",
    "JsonFileStore",
    "InvalidSubscriptionError",
    "create_subscription",
    "sync_detected_subscriptions",
    "open_store",
    # Burn / commute
    "daily_burn",
    "UnknownCityError",
    "estimate_commute",
    "get_city_cost_model",
    "load_city_cost_models",
]
