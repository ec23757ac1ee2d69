"""Progressive income tax and take-home pay estimation.

Computes federal, state and FICA tax for a single filer and projects net
pay per paycheck over a fixed term (for example a 12-week internship).

Arithmetic is integer cents and basis points. Every division truncates
toward zero; truncation, not rounding, is the defined behavior.
"""

import logging
from typing import Iterable, Optional

from ..schemas import TaxProfile, TaxResult
from .schemas import Bracket

logger = logging.getLogger(__name__)

BPS_DENOMINATOR = 10000

# Flat 7.65% on gross income. No wage base cap and no Social Security /
# Medicare split.
FICA_RATE_BPS = 765

SUPPORTED_FILING_STATUSES = ("single",)
KNOWN_FILING_STATUSES = ("single", "married")

# Weeks per paycheck for each pay frequency.
# Unlisted frequencies fall back to biweekly.
_WEEKS_PER_CHECK = {
    "weekly": 1,
    "biweekly": 2,
    "monthly": 4,
}
_DEFAULT_WEEKS_PER_CHECK = 2


class TaxEstimateError(Exception):
    """Base class for tax estimate failures."""
    pass


class InvalidFilingStatusError(TaxEstimateError, ValueError):
    """Raised for a filing status the estimator does not recognize."""

    def __init__(self, filing_status: str):
        self.filing_status = filing_status
        super().__init__(f"unsupported filing status: {filing_status}")


class FilingStatusNotSupportedError(TaxEstimateError, NotImplementedError):
    """Raised for a recognized filing status that is not implemented yet.

    Married filing jointly is not implemented; it is rejected rather than
    computed with single-filer tables.
    """

    def __init__(self, filing_status: str):
        self.filing_status = filing_status
        super().__init__("married filing jointly not yet supported")


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division that truncates toward zero (not floor)."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def check_filing_status(filing_status: str) -> None:
    """Validate a filing status before any computation.

    Raises:
        InvalidFilingStatusError: status is not single or married
        FilingStatusNotSupportedError: status is married
    """
    if filing_status not in KNOWN_FILING_STATUSES:
        raise InvalidFilingStatusError(filing_status)
    if filing_status not in SUPPORTED_FILING_STATUSES:
        raise FilingStatusNotSupportedError(filing_status)


def taxable_income(annual_income_cents: int, standard_deduction_cents: int) -> int:
    """Gross income minus the standard deduction, floored at zero."""
    return max(0, annual_income_cents - standard_deduction_cents)


def bracket_segments(taxable_cents: int, brackets: Iterable[Bracket]) -> list[tuple[Bracket, int]]:
    """Split taxable income into the amount falling inside each bracket.

    Walks brackets in ascending order of their lower bound. The top bracket
    (high == 0) uses the taxable income itself as its upper bound. The walk
    stops as soon as nothing remains to be placed.

    Returns:
        List of (bracket, segment_cents) for every bracket that was visited.
    """
    segments = []
    remaining = taxable_cents

    for bracket in sorted(brackets, key=lambda b: b.low):
        if remaining <= 0:
            break
        upper_bound = taxable_cents if bracket.is_top else bracket.high
        segment = min(remaining, upper_bound - bracket.low)
        segments.append((bracket, segment))
        remaining -= segment

    return segments


def calculate_bracket_tax(taxable_cents: int, brackets: Iterable[Bracket]) -> int:
    """Calculate progressive tax on taxable income.

    Each segment is taxed as segment * rate_bps / 10000, truncated per
    segment before summing.
    """
    tax = 0
    for bracket, segment in bracket_segments(taxable_cents, brackets):
        tax += _truncating_div(segment * bracket.rate_bps, BPS_DENOMINATOR)
    return tax


def calculate_fica(gross_cents: int) -> int:
    """FICA at 7.65% of gross (not taxable) income."""
    return _truncating_div(gross_cents * FICA_RATE_BPS, BPS_DENOMINATOR)


def paychecks_in_term(pay_frequency: str, term_weeks: int) -> int:
    """Number of paychecks in a term of term_weeks weeks.

    weekly -> term_weeks, biweekly -> term_weeks / 2, monthly -> term_weeks / 4
    (four weeks per month). Any other frequency is treated as biweekly.
    """
    weeks_per_check = _WEEKS_PER_CHECK.get(pay_frequency, _DEFAULT_WEEKS_PER_CHECK)
    return _truncating_div(term_weeks, weeks_per_check)


def estimate_taxes(
    profile: TaxProfile,
    federal_brackets: Iterable[Bracket],
    state_brackets: Optional[Iterable[Bracket]] = None,
    standard_deduction_cents: int = 0,
) -> TaxResult:
    """Estimate federal, state and FICA tax and net pay for a profile.

    Args:
        profile: Income, state, filing status and pay schedule
        federal_brackets: Federal bracket table for the year
        state_brackets: State bracket table, or None/empty for no state tax.
            State tax uses the same taxable income as federal.
        standard_deduction_cents: Deduction subtracted from gross before the
            bracket walks

    Returns:
        TaxResult with per-paycheck and annual net figures

    Raises:
        InvalidFilingStatusError: filing status is not single or married
        FilingStatusNotSupportedError: filing status is married
    """
    check_filing_status(profile.filing_status)

    income = profile.annual_income_cents
    taxable = taxable_income(income, standard_deduction_cents)

    federal = calculate_bracket_tax(taxable, federal_brackets)
    state = calculate_bracket_tax(taxable, state_brackets) if state_brackets else 0
    fica = calculate_fica(income)

    checks = paychecks_in_term(profile.pay_frequency, profile.term_weeks)
    net_annual = income - (federal + state + fica)
    per_paycheck = _truncating_div(net_annual, checks) if checks > 0 else 0

    logger.debug(
        f"estimate: income={income} taxable={taxable} federal={federal} "
        f"state={state} fica={fica} checks={checks}"
    )

    return TaxResult(
        federal_cents=federal,
        state_cents=state,
        fica_cents=fica,
        per_paycheck_net_cents=per_paycheck,
        term_net_cents=net_annual,
        taxable_income_cents=taxable,
        paychecks=checks,
    )
