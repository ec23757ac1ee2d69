"""Tax table loading and year-aware estimates.

Bracket tables live in tax-rules/<YEAR>.yaml, shipped with the package
under dayboard/data/. The tax_rules_dir setting points at a different
directory of the same shape.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import get_package_data_dir, get_setting
from ..schemas import TaxProfile, TaxResult
from .estimate import TaxEstimateError, check_filing_status, estimate_taxes
from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(TaxEstimateError, LookupError):
    """Raised when no bracket table exists for the requested year."""
    pass


class TaxRulesInvalidError(TaxEstimateError, ValueError):
    """Raised when a tax-rules file fails schema validation."""
    pass


class UnknownJurisdictionError(TaxEstimateError, LookupError):
    """Raised in strict mode when a state has no bracket table."""

    def __init__(self, state: str, year: int):
        self.state = state
        self.year = year
        super().__init__(f"no tax table for state {state} in {year}")


def get_tax_rules_dir() -> Path:
    """Get the tax-rules directory path."""
    custom = get_setting("tax_rules_dir")
    if custom:
        return Path(custom).expanduser()
    return get_package_data_dir() / "tax-rules"


def available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def resolve_year(year: int) -> int:
    """Newest year with a table that is not after the requested year.

    Raises:
        TaxRulesNotFoundError: no table exists for year or any prior year
    """
    candidates = [y for y in available_years() if y <= year]
    if not candidates:
        raise TaxRulesNotFoundError(
            f"Tax rules not found for {year} or any earlier year in {get_tax_rules_dir()}"
        )
    if candidates[0] != year:
        logger.warning(f"No tax rules for {year}; using {candidates[0]} tables")
    return candidates[0]


def load_tax_rules(year: int, fallback: bool = False) -> TaxRules:
    """Load and validate tax rules for a year from tax-rules/YYYY.yaml.

    Args:
        year: Tax year (e.g., 2024)
        fallback: If True, use the newest earlier year when the requested
            year has no file

    Raises:
        TaxRulesNotFoundError: no file for the year (and no fallback found)
        TaxRulesInvalidError: file exists but fails validation
    """
    year = int(year)
    if fallback:
        year = resolve_year(year)

    rules_file = get_tax_rules_dir() / f"{year}.yaml"
    if not rules_file.exists():
        raise TaxRulesNotFoundError(f"Tax rules file not found for year {year}: {rules_file}")

    with open(rules_file, "r") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise TaxRulesInvalidError(f"Invalid tax rules in {rules_file}: expected a mapping at the top level")

    raw.setdefault("year", year)
    try:
        return TaxRules.model_validate(raw)
    except ValidationError as e:
        raise TaxRulesInvalidError(f"Invalid tax rules in {rules_file}: {e}") from e


def estimate_taxes_for_year(
    profile: TaxProfile,
    year: int,
    rules: Optional[TaxRules] = None,
    strict_state: bool = False,
    fallback: bool = False,
) -> TaxResult:
    """Estimate taxes using the tables for a given year.

    Filing status is validated before anything is loaded. An empty state
    means no state tax. A state without a table is taxed at zero with a
    warning, the same as a state that has no income tax, unless
    strict_state is set.

    Args:
        profile: Income, state, filing status and pay schedule
        year: Tax year of the bracket tables
        rules: Pre-loaded tax rules (loads from file if not provided)
        strict_state: Raise UnknownJurisdictionError for a state with no table
        fallback: Use the newest earlier year's tables if year has none

    Raises:
        InvalidFilingStatusError, FilingStatusNotSupportedError,
        TaxRulesNotFoundError, UnknownJurisdictionError
    """
    check_filing_status(profile.filing_status)

    if rules is None:
        rules = load_tax_rules(year, fallback=fallback)

    state_brackets = None
    if profile.state:
        state_brackets = rules.state_brackets(profile.state)
        if state_brackets is None:
            if strict_state:
                raise UnknownJurisdictionError(profile.state, rules.year)
            logger.warning(f"No {rules.year} tax table for state {profile.state}; assuming no state tax")

    return estimate_taxes(
        profile,
        rules.federal.brackets,
        state_brackets,
        rules.standard_deduction(profile.filing_status),
    )
