"""Configuration file management for giftlist."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_API_URL = "http://localhost:3333"

API_URL_ENV = "GIFTLIST_API_URL"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_dir() -> Path:
    return get_xdg_config_home() / "giftlist"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_config_dir() / "config.toml"


def create_default_config(config_path: Path | None = None, api_url: str = DEFAULT_API_URL) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        api_url: Backend base URL to store.
    """
    if config_path is None:
        config_path = get_config_path()

    default_config: dict[str, Any] = {
        "api_url": api_url,
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _load_config_or_empty(config_path: Path | None) -> dict[str, Any]:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return {}


def get_api_url(config_path: Path | None = None) -> str:
    """Resolve the backend base URL.

    The GIFTLIST_API_URL environment variable wins over the config file,
    which wins over the default. A missing config file is not an error.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Base URL without trailing slash.
    """
    env_url = os.environ.get(API_URL_ENV)
    if env_url:
        return env_url.rstrip("/")

    config = _load_config_or_empty(config_path)
    return str(config.get("api_url", DEFAULT_API_URL)).rstrip("/")


def get_current_year(config_path: Path | None = None) -> int | None:
    """Pinned year for date validation, or None to use today's year.

    Raises:
        ValueError: If current_year is not a whole number, or the config
            file is not valid TOML (tomllib.TOMLDecodeError).
    """
    config = _load_config_or_empty(config_path)
    year = config.get("current_year")
    if year is None:
        return None
    if isinstance(year, int) and not isinstance(year, bool):
        return year
    if isinstance(year, str) and year.strip().isdecimal():
        return int(year)
    raise ValueError(f"current_year must be a whole number, got {year!r}")
