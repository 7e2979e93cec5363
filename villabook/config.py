"""Configuration file management for villabook."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from villabook.domain.pricing import DEFAULT_GAP_POLICY, GapPolicy

DEFAULT_EXPENSE_CATEGORIES = [
    "Maintenance",
    "Utilities",
    "Cleaning",
    "Supplies",
    "Staff",
    "Insurance",
    "Marketing",
    "Repairs",
    "Other",
]


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "villabook" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "currency": "$",
        "pricing": {"gap_policy": DEFAULT_GAP_POLICY.value},
        "report": {"projection_months": 0},
        "expenses": {"categories": list(DEFAULT_EXPENSE_CATEGORIES)},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration, falling back to defaults when the file is missing."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return default_config()


def get_setting(config: dict[str, Any], key: str, default: Any = None) -> Any:
    """Read a dotted key (e.g. "report.projection_months") from a config dict.

    Args:
        config: Configuration dictionary.
        key: Dotted key path.
        default: Value returned when any part of the path is missing.

    Returns:
        The configured value or default.
    """
    value: Any = config
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]
    return value


def get_gap_policy(config: dict[str, Any]) -> GapPolicy:
    """Get the pricing gap policy from config.

    Raises:
        ValueError: If the configured value is not a known policy.
    """
    raw = get_setting(config, "pricing.gap_policy", DEFAULT_GAP_POLICY.value)
    try:
        return GapPolicy(raw)
    except ValueError as e:
        choices = ", ".join(policy.value for policy in GapPolicy)
        raise ValueError(f"Unknown pricing.gap_policy '{raw}' (expected one of: {choices})") from e


def get_expense_categories(config: dict[str, Any]) -> list[str]:
    return list(get_setting(config, "expenses.categories", DEFAULT_EXPENSE_CATEGORIES))
