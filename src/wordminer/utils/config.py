"""Configuration file management.

Config is stored in TOML format at:
- macOS/Linux: ~/.config/wordminer/config.toml
- Windows: %APPDATA%\\wordminer\\config.toml

Usage:
    config = load_config()
    limit = get_value(config, "reports.top_vocab_limit", 20)
"""

import copy
import platform
from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore

import tomli_w

from wordminer.constants import (
    APP_NAME,
    DEFAULT_TOP_VOCAB_LIMIT,
    MAX_VOCAB_ROWS,
)
from wordminer.exceptions import ConfigError


def get_config_dir() -> Path:
    """Get platform-appropriate config directory."""
    if platform.system() == "Windows":
        base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_config_path() -> Path:
    """Get path to config file."""
    return get_config_dir() / "config.toml"


# Empty strings mean "use the AppConfig default location"
DEFAULT_CONFIG = {
    "general": {
        "app": APP_NAME,
        "database": "",
        "dictionary_dir": "",
    },
    "reports": {
        "top_vocab_limit": DEFAULT_TOP_VOCAB_LIMIT,
        "max_vocab_rows": MAX_VOCAB_ROWS,
    },
}


def load_config() -> dict:
    """Load configuration from file.

    Creates default config if file doesn't exist.

    Returns:
        Dict with configuration values

    Raises:
        ConfigError: If config file is malformed
    """
    config_path = get_config_path()

    if not config_path.exists():
        save_config(DEFAULT_CONFIG)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config: {e}") from e


def save_config(config: dict) -> None:
    """Save configuration to file.

    Args:
        config: Dict with configuration values
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)


def get_value(config: dict, key: str, default: Any = None) -> Any:
    """Get a nested config value using dot notation.

    Args:
        config: Config dict
        key: Dot-separated key (e.g., "reports.top_vocab_limit")
        default: Default value if key not found

    Returns:
        Config value or default

    Example:
        >>> config = {"reports": {"top_vocab_limit": 30}}
        >>> get_value(config, "reports.top_vocab_limit")
        30
    """
    parts = key.split(".")
    current = config

    for part in parts:
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default

    return current


def set_value(config: dict, key: str, value: Any) -> None:
    """Set a nested config value using dot notation.

    Args:
        config: Config dict (modified in place)
        key: Dot-separated key
        value: Value to set

    Example:
        >>> config = {}
        >>> set_value(config, "general.database", "/tmp/words.db")
        >>> config
        {'general': {'database': '/tmp/words.db'}}
    """
    parts = key.split(".")
    current = config

    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def parse_value(raw: str) -> Any:
    """Interpret a command-line string as a TOML scalar.

    "20" becomes 20, "true" becomes True; anything that is not a valid
    TOML value is kept as a plain string.
    """
    try:
        return tomllib.loads(f"value = {raw}")["value"]
    except tomllib.TOMLDecodeError:
        return raw
