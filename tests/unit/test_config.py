"""Tests for settings.json / profile.yaml handling and data path resolution."""

import json

import pytest

from buelldocs.sdk.config import (
    ConfigNotFoundError,
    ProfileNotFoundError,
    get_config_dir,
    get_data_path,
    get_profile_value,
    get_setting,
    load_profile,
    load_settings,
    set_profile_value,
    set_setting,
)


# === FIXTURES ===


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_home = tmp_path / "data"
    monkeypatch.setenv("BUELLDOCS_CONFIG_PATH", str(config_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    return {"config_dir": config_dir, "data_home": data_home, "tmp_path": tmp_path}


class TestSettings:

    def test_env_var_selects_config_dir(self, isolated_env):
        assert get_config_dir() == isolated_env["config_dir"]

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BUELLDOCS_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "buelldocs"

    def test_missing_file_is_empty(self, isolated_env):
        assert load_settings() == {}

    def test_defaults_when_unset(self, isolated_env):
        assert get_setting("tax_model") == "flat"
        assert get_setting("jurisdiction") == "CA"
        assert get_setting("pretax_reduces_taxable_wages") is False
        assert get_setting("nonexistent", "fallback") == "fallback"

    def test_set_setting_persists(self, isolated_env):
        path = set_setting("tax_model", "bracket")

        assert json.loads(path.read_text()) == {"tax_model": "bracket"}
        assert get_setting("tax_model") == "bracket"

    def test_invalid_json_raises(self, isolated_env):
        isolated_env["config_dir"].mkdir()
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")

        with pytest.raises(ConfigNotFoundError):
            load_settings()


class TestProfile:

    def test_required_profile_missing_raises(self, isolated_env):
        with pytest.raises(ProfileNotFoundError):
            load_profile()

    def test_optional_profile_missing_is_empty(self, isolated_env):
        assert load_profile(require_exists=False) == {}

    def test_dot_notation_round_trip(self, isolated_env):
        set_profile_value("account_holder.name", "Jane Doe")
        set_profile_value("bank.name", "First National")

        assert get_profile_value("account_holder.name") == "Jane Doe"
        assert get_profile_value("bank.name") == "First National"
        assert get_profile_value("employer.name", "n/a") == "n/a"


class TestDataPath:

    def test_default_under_xdg_data_home(self, isolated_env):
        path = get_data_path()

        assert path == isolated_env["data_home"] / "buelldocs"
        assert path.is_dir()

    def test_custom_data_dir(self, isolated_env):
        custom = isolated_env["tmp_path"] / "custom"
        set_setting("data_dir", str(custom))

        assert get_data_path() == custom
        assert custom.is_dir()
