"""Configuration management module.

Handles loading, saving, and accessing the missive configuration.
Config is stored at ~/.config/missive/config.toml

Usage:
    from missive.config import load_config, resolve_account

    config = load_config()
    account = resolve_account(config, "work")
"""

import tomllib

import structlog
import tomli_w

from missive.errors import ConfigError

from .paths import CONFIG_FILE, ensure_config_dir
from .schema import AccountConfig, MissiveConfig
from .template import CONFIG_TEMPLATE

# Re-export for convenience
__all__ = [
    "load_config",
    "save_config",
    "init_config",
    "get_account",
    "resolve_account",
    "set_config_value",
    "AccountConfig",
    "MissiveConfig",
    "CONFIG_FILE",
    "DEFAULT_FOLDER",
    "DEFAULT_READ_HEADERS",
]

DEFAULT_FOLDER = "INBOX"
DEFAULT_READ_HEADERS = ["From", "To", "Cc", "Subject"]

# Keys whose values are comma-separated lists on the command line
_LIST_FIELDS = {"read_headers"}

logger = structlog.get_logger()

# Module-level cache for loaded config.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: MissiveConfig | None = None


def load_config(*, force_reload: bool = False) -> MissiveConfig:
    """Load configuration from disk.

    Returns empty dict if config file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The configuration dictionary.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    if not CONFIG_FILE.exists():
        logger.debug("config_missing", path=str(CONFIG_FILE))
        _cached_config = {}
        return _cached_config

    try:
        with open(CONFIG_FILE, "rb") as f:
            _cached_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {CONFIG_FILE}: {e}") from e

    logger.debug("config_loaded", path=str(CONFIG_FILE))
    return _cached_config


def save_config(config: MissiveConfig) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.
    """
    global _cached_config

    ensure_config_dir()

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(config, f)

    # Keep cache in sync with disk
    _cached_config = config


def init_config(*, overwrite: bool = False) -> bool:
    """Create the config directory and a template config file.

    Args:
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    ensure_config_dir()

    if CONFIG_FILE.exists() and not overwrite:
        return False

    CONFIG_FILE.write_text(CONFIG_TEMPLATE)
    return True


def get_account(
    config: MissiveConfig, name: str | None = None
) -> AccountConfig | None:
    """Get account configuration by name.

    Args:
        config: The loaded configuration dictionary.
        name: Account name to retrieve. If None, returns the first account.

    Returns:
        The account configuration, or None if not found.
    """
    accounts = config.get("accounts", {})

    if not accounts:
        return None

    if name is None:
        # Return first account as default
        return next(iter(accounts.values()))

    return accounts.get(name)


def resolve_account(config: MissiveConfig, name: str | None = None) -> AccountConfig:
    """Resolve the account to operate on, with defaults applied.

    Account values win over the [defaults] section; anything neither
    sets falls back to DEFAULT_FOLDER / DEFAULT_READ_HEADERS.

    Args:
        config: The loaded configuration dictionary.
        name: Account name, or None for the first configured account.

    Returns:
        A fresh AccountConfig with default_folder and read_headers always set.

    Raises:
        ConfigError: If no matching account exists or it has no mail_dir.
    """
    account = get_account(config, name)

    if account is None:
        if name is None:
            raise ConfigError(
                "No account configured. Run 'missive config init' and add "
                "an account to config.toml"
            )
        raise ConfigError(f"Account '{name}' not found")

    if not account.get("mail_dir"):
        raise ConfigError(f"Account '{name or 'default'}' has no mail_dir set")

    defaults = config.get("defaults", {})
    resolved: AccountConfig = {
        "mail_dir": account["mail_dir"],
        "default_folder": account.get(
            "default_folder", defaults.get("folder", DEFAULT_FOLDER)
        ),
        "read_headers": list(
            account.get(
                "read_headers", defaults.get("read_headers", DEFAULT_READ_HEADERS)
            )
        ),
    }
    return resolved


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value using dot notation.

    Examples:
        set_config_value("defaults.folder", "Archive")
        set_config_value("accounts.work.read_headers", "From,Subject,Date")

    Args:
        key: Dot-separated key path (e.g., "defaults.folder").
        value: Value to set (list fields are split on commas).

    Raises:
        ValueError: If the key is empty or the value is an empty list.
    """
    config = load_config(force_reload=True)

    parts = key.split(".")
    if not all(parts):
        raise ValueError(f"invalid key '{key}'")

    # Navigate to parent dict, creating intermediate dicts as needed
    current: dict = config
    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    final_key = parts[-1]
    current[final_key] = _convert_value(final_key, value)

    save_config(config)


def _convert_value(key: str, value: str) -> str | list[str]:
    """Convert a string value from the CLI to the type its field expects.

    Raises:
        ValueError: If a list field ends up empty.
    """
    if key in _LIST_FIELDS:
        items = [item.strip() for item in value.split(",") if item.strip()]
        if not items:
            raise ValueError(f"{key} needs at least one entry")
        return items

    return value
