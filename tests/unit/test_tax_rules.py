"""Tests for tax-rules loading and year-aware estimates.

Uses the bracket tables shipped in dayboard/data/tax-rules/, plus
hand-written tables in a temp directory for validation failures.
"""
import json
import logging

import pytest
from pydantic import ValidationError

from dayboard.sdk.schemas import TaxProfile
from dayboard.sdk.taxes import (
    Bracket,
    FilingStatusNotSupportedError,
    TaxRulesNotFoundError,
    UnknownJurisdictionError,
    available_years,
    estimate_taxes_for_year,
    load_tax_rules,
)
from dayboard.sdk.taxes.rules import TaxRulesInvalidError
from dayboard.sdk.taxes.schemas import JurisdictionRules, check_bracket_coverage


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("DAYBOARD_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def custom_rules_dir(tmp_path, isolated_config):
    """Temp tax-rules directory wired in through the tax_rules_dir setting."""
    rules_dir = tmp_path / "tax-rules"
    rules_dir.mkdir()
    (isolated_config / "settings.json").write_text(json.dumps({"tax_rules_dir": str(rules_dir)}))
    return rules_dir


VALID_RULES = """
year: 2030
federal:
  standard_deduction: {single: 100000, married: 200000}
  brackets:
    - {low: 0, high: 0, rate_bps: 1000}
states:
  in:
    brackets:
      - {low: 0, high: 0, rate_bps: 300}
"""

GAP_RULES = """
federal:
  standard_deduction: {single: 100000, married: 200000}
  brackets:
    - {low: 0, high: 500000, rate_bps: 1000}
    - {low: 600000, high: 0, rate_bps: 2000}
"""


def profile(state: str = "IN", income: int = 5200000, **overrides) -> TaxProfile:
    values = dict(annual_income_cents=income, state=state, term_weeks=12)
    values.update(overrides)
    return TaxProfile(**values)


class TestShippedTables:
    """Tables bundled with the package."""

    def test_available_years(self, isolated_config):
        years = available_years()
        assert 2023 in years
        assert 2024 in years
        assert years == sorted(years, reverse=True)

    def test_load_2024(self, isolated_config):
        rules = load_tax_rules(2024)

        assert rules.year == 2024
        assert rules.standard_deduction("single") == 1460000
        assert rules.federal.brackets[0].low == 0
        assert rules.federal.brackets[-1].is_top
        assert check_bracket_coverage(rules.federal.brackets) == []

    def test_every_state_table_is_well_formed(self, isolated_config):
        for year in available_years():
            rules = load_tax_rules(year)
            for code, brackets in rules.states.items():
                assert check_bracket_coverage(brackets.brackets) == [], f"{year} {code}"

    def test_state_lookup_is_case_insensitive(self, isolated_config):
        rules = load_tax_rules(2023)
        assert rules.state_brackets("in") == rules.state_brackets("IN")
        assert rules.state_brackets("IN")[0].rate_bps == 315

    def test_unknown_state_has_no_table(self, isolated_config):
        assert load_tax_rules(2024).state_brackets("ZZ") is None

    def test_no_income_tax_state_has_empty_table(self, isolated_config):
        assert load_tax_rules(2024).state_brackets("TX") == []


class TestYearResolution:
    """Missing years and fallback to earlier tables."""

    def test_missing_year(self, isolated_config):
        with pytest.raises(TaxRulesNotFoundError):
            load_tax_rules(1999)

    def test_missing_year_is_lookup_error(self, isolated_config):
        with pytest.raises(LookupError):
            load_tax_rules(1999)

    def test_fallback_uses_newest_earlier_year(self, isolated_config):
        newest = available_years()[0]
        assert load_tax_rules(newest + 5, fallback=True).year == newest

    def test_fallback_with_nothing_earlier(self, isolated_config):
        with pytest.raises(TaxRulesNotFoundError):
            load_tax_rules(1999, fallback=True)

    def test_fallback_logs_warning(self, isolated_config, caplog):
        newest = available_years()[0]
        with caplog.at_level(logging.WARNING):
            load_tax_rules(newest + 1, fallback=True)
        assert f"using {newest} tables" in caplog.text


class TestEstimateForYear:
    """Year-aware estimates over shipped tables."""

    def test_indiana_2024(self, isolated_config):
        result = estimate_taxes_for_year(profile("IN"), 2024)

        assert result.taxable_income_cents == 3740000
        # 10% of 11,600 + 12% of 25,800
        assert result.federal_cents == 116000 + 309600
        assert result.state_cents == 114070
        assert result.fica_cents == 397800
        assert result.paychecks == 6

    def test_no_state(self, isolated_config):
        assert estimate_taxes_for_year(profile(""), 2024).state_cents == 0

    def test_no_income_tax_state(self, isolated_config, caplog):
        with caplog.at_level(logging.WARNING):
            result = estimate_taxes_for_year(profile("TX"), 2024, strict_state=True)
        assert result.state_cents == 0
        assert "TX" not in caplog.text

    def test_unknown_state_taxes_zero_and_warns(self, isolated_config, caplog):
        with caplog.at_level(logging.WARNING):
            result = estimate_taxes_for_year(profile("ZZ"), 2024)
        assert result.state_cents == 0
        assert "ZZ" in caplog.text

    def test_unknown_state_strict(self, isolated_config):
        with pytest.raises(UnknownJurisdictionError, match="no tax table for state ZZ in 2024"):
            estimate_taxes_for_year(profile("ZZ"), 2024, strict_state=True)

    def test_married_rejected_before_loading(self, isolated_config):
        """Filing status fails first, even for a year with no tables."""
        with pytest.raises(FilingStatusNotSupportedError):
            estimate_taxes_for_year(profile(filing_status="married"), 1999)

    def test_preloaded_rules(self, isolated_config):
        rules = load_tax_rules(2023)
        assert estimate_taxes_for_year(profile(), 2023, rules=rules) == estimate_taxes_for_year(profile(), 2023)


class TestCustomRulesDir:
    """tax_rules_dir setting and validation of hand-written tables."""

    def test_custom_table(self, custom_rules_dir):
        (custom_rules_dir / "2030.yaml").write_text(VALID_RULES)

        assert available_years() == [2030]
        rules = load_tax_rules(2030)
        assert rules.state_brackets("IN")[0].rate_bps == 300

    def test_year_defaults_to_file_name(self, custom_rules_dir):
        (custom_rules_dir / "2031.yaml").write_text(GAP_RULES.replace("600000", "500000"))
        assert load_tax_rules(2031).year == 2031

    def test_gap_rejected(self, custom_rules_dir):
        (custom_rules_dir / "2030.yaml").write_text(GAP_RULES)
        with pytest.raises(TaxRulesInvalidError, match="gap between 500000 and 600000"):
            load_tax_rules(2030)

    def test_non_year_files_ignored(self, custom_rules_dir):
        (custom_rules_dir / "2030.yaml").write_text(VALID_RULES)
        (custom_rules_dir / "notes.yaml").write_text("hello: world\n")
        assert available_years() == [2030]

    def test_list_at_top_level_rejected(self, custom_rules_dir):
        (custom_rules_dir / "2030.yaml").write_text("- 1\n- 2\n")
        with pytest.raises(TaxRulesInvalidError, match="expected a mapping"):
            load_tax_rules(2030)

    def test_scalar_at_top_level_rejected(self, custom_rules_dir):
        (custom_rules_dir / "2030.yaml").write_text("just text\n")
        with pytest.raises(TaxRulesInvalidError, match="expected a mapping"):
            load_tax_rules(2030)


class TestBracketCoverage:
    """Bracket tables must cover [0, inf) without gaps or overlaps."""

    def test_empty_is_valid(self):
        assert check_bracket_coverage([]) == []

    def test_must_start_at_zero(self):
        errors = check_bracket_coverage([Bracket(low=100, high=0, rate_bps=1000)])
        assert any("expected 0" in e for e in errors)

    def test_overlap(self):
        errors = check_bracket_coverage([
            Bracket(low=0, high=500, rate_bps=1000),
            Bracket(low=400, high=0, rate_bps=2000),
        ])
        assert any("overlap" in e for e in errors)

    def test_top_bracket_must_be_last(self):
        errors = check_bracket_coverage([
            Bracket(low=0, high=0, rate_bps=1000),
            Bracket(low=500, high=0, rate_bps=2000),
        ])
        assert any("not the last bracket" in e for e in errors)

    def test_last_bracket_must_be_unbounded(self):
        errors = check_bracket_coverage([Bracket(low=0, high=500, rate_bps=1000)])
        assert any("high: 0" in e for e in errors)

    def test_jurisdiction_sorts_brackets(self):
        rules = JurisdictionRules(brackets=[
            Bracket(low=500, high=0, rate_bps=2000),
            Bracket(low=0, high=500, rate_bps=1000),
        ])
        assert [b.low for b in rules.brackets] == [0, 500]

    def test_jurisdiction_rejects_gap(self):
        with pytest.raises(ValidationError):
            JurisdictionRules(brackets=[
                Bracket(low=0, high=400, rate_bps=1000),
                Bracket(low=500, high=0, rate_bps=2000),
            ])

    def test_rate_over_100_percent(self):
        with pytest.raises(ValidationError):
            Bracket(low=0, high=0, rate_bps=10001)
