"""taxes - Income tax estimation.

Scope:
- Progressive bracket walk over integer-cent, basis-point tables
- Federal, state and flat FICA tax for a single filer
- Net pay per paycheck over a fixed term
- Year-specific tables loaded from data/tax-rules/{year}.yaml
- Take-home pay compared across states

Constraints:
- estimate.py is pure calculation: receives tables and returns results
- Married filing is rejected (not yet supported)

Usage:
    from dayboard.sdk.taxes import estimate_taxes_for_year
    from dayboard.sdk.schemas import TaxProfile

    profile = TaxProfile(annual_income_cents=5200000, state="IN", term_weeks=12)
    result = estimate_taxes_for_year(profile, 2024)
"""

from .estimate import (
    TaxEstimateError,
    InvalidFilingStatusError,
    FilingStatusNotSupportedError,
    check_filing_status,
    taxable_income,
    bracket_segments,
    calculate_bracket_tax,
    calculate_fica,
    paychecks_in_term,
    estimate_taxes,
    FICA_RATE_BPS,
)

from .schemas import (
    Bracket,
    JurisdictionRules,
    FederalRules,
    StandardDeduction,
    TaxRules,
    check_bracket_coverage,
)

from .rules import (
    TaxRulesNotFoundError,
    TaxRulesInvalidError,
    UnknownJurisdictionError,
    get_tax_rules_dir,
    available_years,
    resolve_year,
    load_tax_rules,
    estimate_taxes_for_year,
)

from .compare import (
    effective_rate_bps,
    compare_states,
)

__all__ = [
    # Estimator
    "TaxEstimateError",
    "InvalidFilingStatusError",
    "FilingStatusNotSupportedError",
    "check_filing_status",
    "taxable_income",
    "bracket_segments",
    "calculate_bracket_tax",
    "calculate_fica",
    "paychecks_in_term",
    "estimate_taxes",
    "FICA_RATE_BPS",
    # Schemas
    "Bracket",
    "JurisdictionRules",
    "FederalRules",
    "StandardDeduction",
    "TaxRules",
    "check_bracket_coverage",
    # Rules
    "TaxRulesNotFoundError",
    "TaxRulesInvalidError",
    "UnknownJurisdictionError",
    "get_tax_rules_dir",
    "available_years",
    "resolve_year",
    "load_tax_rules",
    "estimate_taxes_for_year",
    # Comparison
    "effective_rate_bps",
    "compare_states",
]
