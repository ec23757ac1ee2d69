"""Take-home pay compared across states.

Runs the same profile through every state table of a year (or a chosen
subset) and reports the state tax, its effective rate on gross income and
the resulting net pay.
"""

import logging
from typing import Iterable, List, Optional

from ..schemas import StateTaxComparison, TaxProfile
from .estimate import BPS_DENOMINATOR, check_filing_status
from .rules import estimate_taxes_for_year
from .schemas import TaxRules

logger = logging.getLogger(__name__)


def effective_rate_bps(tax_cents: int, gross_cents: int) -> int:
    """Tax as basis points of gross income (0 for zero income)."""
    if gross_cents <= 0:
        return 0
    return tax_cents * BPS_DENOMINATOR // gross_cents


def compare_states(
    profile: TaxProfile,
    rules: TaxRules,
    states: Optional[Iterable[str]] = None,
) -> List[StateTaxComparison]:
    """Estimate the profile in each state and compare net pay.

    The profile's own state is ignored; each comparison substitutes one
    state code.

    Args:
        profile: Income, filing status and pay schedule
        rules: Tax tables for the year
        states: State codes to compare (default: every state with a table,
            alphabetically)

    Returns:
        One StateTaxComparison per state, highest net pay first. Ties keep
        the requested order.

    Raises:
        InvalidFilingStatusError, FilingStatusNotSupportedError
        UnknownJurisdictionError: a requested state has no table
    """
    check_filing_status(profile.filing_status)

    if states is None:
        codes = sorted(rules.states)
    else:
        codes = [s.upper().strip() for s in states if s.strip()]

    comparisons = []
    for code in codes:
        candidate = profile.model_copy(update={"state": code})
        result = estimate_taxes_for_year(candidate, rules.year, rules=rules, strict_state=True)
        comparisons.append(StateTaxComparison(
            state=code,
            state_cents=result.state_cents,
            effective_rate_bps=effective_rate_bps(result.state_cents, profile.annual_income_cents),
            net_annual_cents=result.term_net_cents,
            per_paycheck_net_cents=result.per_paycheck_net_cents,
        ))

    logger.debug(f"compared {len(comparisons)} state(s) for {rules.year}")
    return sorted(comparisons, key=lambda c: c.net_annual_cents, reverse=True)
