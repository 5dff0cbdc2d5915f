"""Configuration management for BuellDocs.

Configuration is split into two files:

1. settings.json - Machine-specific tool preferences
   - data_dir: where saved documents live
   - tax_model: default tax model ("flat" or "bracket")
   - jurisdiction: default state code for the bracket model
   - tax_year: which tax rules to load
   - pretax_reduces_taxable_wages: tax base excludes pretax deductions

2. profile.yaml - Names printed on documents
   - account_holder: name and address of the employee/account holder
   - employer: employer name and address
   - bank: bank name, routing and account numbers

Config directory resolution:
1. BUELLDOCS_CONFIG_PATH environment variable (if set)
2. ~/.config/buelldocs/ (XDG_CONFIG_HOME fallback)

Data path resolution:
1. settings.json "data_dir" key (if set)
2. XDG_DATA_HOME/buelldocs/ or ~/.local/share/buelldocs/
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "buelldocs"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

DEFAULT_SETTINGS = {
    "tax_model": "flat",
    "jurisdiction": "CA",
    "tax_year": 2024,
    "pretax_reduces_taxable_wages": False,
}


class ConfigNotFoundError(Exception):
    """Raised when no configuration is found."""
    pass


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. BUELLDOCS_CONFIG_PATH environment variable
    2. ~/.config/buelldocs/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("BUELLDOCS_CONFIG_PATH")
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

    Raises:
        ConfigNotFoundError: If settings.json exists but is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigNotFoundError(f"Invalid settings file {settings_file}: {e}")


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

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
    """Get a setting value, falling back to the built-in default.

    Args:
        key: Setting key (e.g., "tax_model", "data_dir")
        default: Returned if neither settings.json nor the built-in
                 defaults define the key

    Returns:
        Setting value or default
    """
    settings = load_settings()
    if key in settings:
        return settings[key]
    return DEFAULT_SETTINGS.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
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
                f"Create one with: buelldocs settings profile-set account_holder.name 'Jane Doe'"
            )
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user profile to profile.yaml.

    Args:
        profile: Profile dictionary to save
        path: Optional custom path (uses default if not specified)

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def get_profile_value(key: str, default: Any = None) -> Any:
    """Get a profile value by dot-notation key.

    Args:
        key: Dot-notation key (e.g., "employer.name")
        default: Default value if key not found

    Returns:
        Profile value or default
    """
    profile = load_profile(require_exists=False)

    value = profile
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default

    return value


def set_profile_value(key: str, value: Any) -> Path:
    """Set a profile value by dot-notation key, creating parents as needed.

    Returns:
        Path to the saved profile file
    """
    profile = load_profile(require_exists=False)

    parts = key.split(".")
    current = profile
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value

    return save_profile(profile)


def get_data_path() -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" when set, else XDG_DATA_HOME/buelldocs/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = load_settings().get("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
