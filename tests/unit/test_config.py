"""Tests for settings.json / profile.yaml handling and the user profile model."""
import json

import pytest
from pydantic import ValidationError

from dayboard.sdk import config
from dayboard.sdk.schemas import TaxProfile, UserProfile


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DAYBOARD_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("DAYBOARD_DEMO_MODE", raising=False)
    return config_dir


class TestConfigDir:
    def test_env_override(self, isolated_config):
        assert config.get_config_dir() == isolated_config

    def test_xdg_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DAYBOARD_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert config.get_config_dir() == tmp_path / "dayboard"


class TestSettings:
    """settings.json read/write."""

    def test_missing_file_is_empty(self, isolated_config):
        assert config.load_settings() == {}

    def test_set_get_unset(self, isolated_config):
        config.set_setting("tax_year", 2024)
        assert config.get_setting("tax_year") == 2024
        assert json.loads((isolated_config / "settings.json").read_text()) == {"tax_year": 2024}

        config.unset_setting("tax_year")
        assert config.get_setting("tax_year", "default") == "default"

    def test_unset_missing_is_noop(self, isolated_config):
        config.unset_setting("nope")
        assert config.load_settings() == {}

    def test_data_dir_setting(self, isolated_config, tmp_path):
        target = tmp_path / "somewhere" / "data"
        config.set_setting("data_dir", str(target))

        assert config.get_data_path() == target
        assert target.is_dir()

    def test_data_dir_xdg_default(self, isolated_config, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        assert config.get_data_path() == tmp_path / "xdg" / "dayboard"


class TestDemoMode:
    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("TRUE", True),
        ("0", False),
        ("", False),
    ])
    def test_env(self, isolated_config, monkeypatch, value, expected):
        monkeypatch.setenv("DAYBOARD_DEMO_MODE", value)
        assert config.is_demo_mode() is expected

    def test_setting(self, isolated_config):
        config.set_setting("demo_mode", True)
        assert config.is_demo_mode() is True


class TestProfileFile:
    """profile.yaml read/write."""

    def test_missing_required(self, isolated_config):
        with pytest.raises(config.ProfileNotFoundError):
            config.load_profile()

    def test_missing_optional(self, isolated_config):
        assert config.load_profile(require_exists=False) == {}

    def test_round_trip(self, isolated_config):
        config.save_profile({"state": "IN", "term_weeks": 12})
        assert config.load_profile() == {"state": "IN", "term_weeks": 12}


class TestUserProfile:
    """Income and tax-profile derivation."""

    def test_hourly_income(self):
        profile = UserProfile(hourly_cents=2500, hours_per_week=40)
        assert profile.annual_income() == 5200000

    def test_stipend_added(self):
        profile = UserProfile(hourly_cents=2500, hours_per_week=40, stipend_cents=300000)
        assert profile.annual_income() == 5500000

    def test_explicit_annual_wins(self):
        profile = UserProfile(annual_income_cents=9000000, hourly_cents=2500, hours_per_week=40)
        assert profile.annual_income() == 9000000

    def test_empty_profile_has_no_income(self):
        assert UserProfile().annual_income() == 0

    def test_to_tax_profile(self):
        tax_profile = UserProfile(state="in", hourly_cents=2500, hours_per_week=40).to_tax_profile()

        assert tax_profile == TaxProfile(
            annual_income_cents=5200000,
            state="IN",
            filing_status="single",
            pay_frequency="biweekly",
            term_weeks=12,
        )

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            UserProfile(stat="IN")

    def test_negative_income_rejected(self):
        with pytest.raises(ValidationError):
            TaxProfile(annual_income_cents=-1)
