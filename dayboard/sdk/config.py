"""Configuration management for DayBoard.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - data_dir: custom data directory (store.json lives here)
   - demo_mode: serve seeded in-memory data instead of the data file
   - tax_year: default year for tax estimates
   - tax_rules_dir: directory of <YEAR>.yaml bracket tables (optional override)

2. profile.yaml - User's personal configuration
   - state, filing_status, pay_frequency, term_weeks
   - hourly_cents / hours_per_week / stipend_cents or annual_income_cents
   - city, food_cost_cents, in_office_days

Config directory resolution:
1. DAYBOARD_CONFIG_PATH environment variable (if set)
2. ~/.config/dayboard/ (XDG_CONFIG_HOME fallback)

Data path follows XDG spec:
- Data: settings.json "data_dir", else XDG_DATA_HOME/dayboard/ or ~/.local/share/dayboard/
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "dayboard"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. DAYBOARD_CONFIG_PATH environment variable
    2. ~/.config/dayboard/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("DAYBOARD_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> Path:
    """Remove a setting from settings.json (no-op if absent)."""
    settings = load_settings()
    settings.pop(key, None)
    return save_settings(settings)


def get_profile_path() -> Path:
    """Get the path to profile.yaml in the config directory."""
    return get_config_dir() / PROFILE_FILENAME


def load_profile(require_exists: bool = True) -> dict:
    """Load user profile from profile.yaml.

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Profile dictionary (empty dict if not required and not found)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    profile_path = get_profile_path()

    if not profile_path.exists():
        if require_exists:
            raise ProfileNotFoundError(
                f"No profile found at {profile_path}\n\n"
                f"Create one with: dayboard profile set state IN"
            )
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user profile to profile.yaml.

    Args:
        profile: Profile dictionary to save
        path: Optional custom path (uses default if not specified)
    """
    if path is None:
        path = get_profile_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def is_demo_mode() -> bool:
    """True when DAYBOARD_DEMO_MODE is 1/true or the demo_mode setting is on."""
    env_value = os.environ.get("DAYBOARD_DEMO_MODE", "")
    if env_value.lower() in ("1", "true"):
        return True
    return bool(get_setting("demo_mode", False))


# =============================================================================
# XDG path helpers
# =============================================================================

def get_data_path() -> Path:
    """Get the data directory path.

    Uses the data_dir setting when present, else XDG_DATA_HOME/dayboard/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_package_data_dir() -> Path:
    """Directory holding the YAML tables shipped with the package."""
    return Path(__file__).parent.parent / "data"
