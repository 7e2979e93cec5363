"""Tests for villabook.config."""

import stat
from pathlib import Path

import pytest

from villabook.config import (
    DEFAULT_EXPENSE_CATEGORIES,
    create_default_config,
    get_config_path,
    get_expense_categories,
    get_gap_policy,
    get_setting,
    load_config,
    load_settings,
)
from villabook.domain.pricing import GapPolicy


class TestConfigFile:
    """Tests for creating and loading the config file."""

    def test_xdg_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should live under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "villabook" / "config.toml"

    def test_default_config_round_trip(self, tmp_path: Path) -> None:
        """Should write readable defaults with owner-only permissions."""
        path = tmp_path / "villabook" / "config.toml"

        create_default_config(path)
        config = load_config(path)

        assert config["currency"] == "$"
        assert config["pricing"]["gap_policy"] == "zero_fill"
        assert config["report"]["projection_months"] == 0
        assert config["expenses"]["categories"] == DEFAULT_EXPENSE_CATEGORIES
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_load_missing_raises(self, tmp_path: Path) -> None:
        """Should raise FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_load_settings_falls_back(self, tmp_path: Path) -> None:
        """Should use defaults when the file is missing."""
        settings = load_settings(tmp_path / "missing.toml")

        assert settings["currency"] == "$"


class TestSettings:
    """Tests for reading individual settings."""

    def test_get_setting_dotted(self) -> None:
        """Should walk nested tables."""
        config = {"report": {"projection_months": 6}}

        assert get_setting(config, "report.projection_months") == 6
        assert get_setting(config, "report.missing", 3) == 3
        assert get_setting(config, "currency", "$") == "$"

    def test_gap_policy_default(self) -> None:
        """Should default to zero fill."""
        assert get_gap_policy({}) is GapPolicy.ZERO_FILL

    def test_gap_policy_fail(self) -> None:
        """Should read the fail policy."""
        assert get_gap_policy({"pricing": {"gap_policy": "fail"}}) is GapPolicy.FAIL

    def test_gap_policy_unknown(self) -> None:
        """Should reject unknown values."""
        with pytest.raises(ValueError, match="pricing.gap_policy"):
            get_gap_policy({"pricing": {"gap_policy": "average"}})

    def test_expense_categories(self) -> None:
        """Should read configured categories or fall back to defaults."""
        assert get_expense_categories({}) == DEFAULT_EXPENSE_CATEGORIES
        assert get_expense_categories({"expenses": {"categories": ["Pool"]}}) == ["Pool"]
