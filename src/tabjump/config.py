"""Configuration management for tabjump."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

# Use tomllib on Python 3.11+, fall back to tomli for 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

logger = logging.getLogger(__name__)

IGNORE_CASE_KEY = "ignore_case"
IGNORE_CASE_ENV = "TABJUMP_IGNORE_CASE"


class ConfigValueError(ValueError):
    """Raised when a configuration value can't be parsed."""


@dataclass
class Config:
    """tabjump configuration."""

    ignore_case: bool = field(default=True)  # Case-insensitive filtering


DEFAULT_CONFIG = Config()

# Config file path
CONFIG_DIR = Path.home() / ".config" / "tabjump"
CONFIG_FILE = CONFIG_DIR / "config.toml"


def parse_bool(text: str) -> bool:
    """Parse ``true``/``false`` (any case, surrounding whitespace ignored).

    Raises:
        ConfigValueError: For anything else.
    """
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigValueError(f"expected 'true' or 'false', got {text!r}")


def _coerce_bool(key: str, value: Any, default: bool) -> bool:
    """Read a bool from a raw config value, falling back to default on error."""
    if isinstance(value, bool):
        return value
    try:
        return parse_bool(str(value))
    except ConfigValueError as exc:
        logger.warning(f"Invalid value for {key}: {exc}; using default {default}")
        return default


def config_from_mapping(mapping: Mapping[str, str], base: Config | None = None) -> Config:
    """Build a config from a string-keyed map of textual values.

    Keys that are absent keep the value from ``base`` (defaults if None).
    Unknown keys are logged and ignored.
    """
    if base is None:
        base = DEFAULT_CONFIG
    ignore_case = base.ignore_case

    for key, value in mapping.items():
        if key == IGNORE_CASE_KEY:
            ignore_case = _coerce_bool(key, value, DEFAULT_CONFIG.ignore_case)
        else:
            logger.warning(f"Ignoring unknown configuration option: {key}")

    return Config(ignore_case=ignore_case)


def _load_file(path: Path) -> dict[str, Any] | None:
    """Read the TOML config file, or None if it is missing or unreadable."""
    if not path.exists():
        return None
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning(f"Ignoring unreadable config file {path}: {exc}")
        return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from environment, file, or defaults.

    Priority (highest to lowest):
    1. Environment variables (TABJUMP_*)
    2. Config file (~/.config/tabjump/config.toml)
    3. Hardcoded defaults

    CLI options are applied on top by the caller.
    """
    if path is None:
        path = CONFIG_FILE

    ignore_case = DEFAULT_CONFIG.ignore_case

    data = _load_file(path)
    if data is not None and IGNORE_CASE_KEY in data:
        ignore_case = _coerce_bool(IGNORE_CASE_KEY, data[IGNORE_CASE_KEY], DEFAULT_CONFIG.ignore_case)

    # Environment variables override the file
    ignore_case_env = os.getenv(IGNORE_CASE_ENV)
    if ignore_case_env is not None:
        ignore_case = _coerce_bool(IGNORE_CASE_ENV, ignore_case_env, DEFAULT_CONFIG.ignore_case)

    return Config(ignore_case=ignore_case)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save configuration to file."""
    if path is None:
        path = CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        IGNORE_CASE_KEY: config.ignore_case,
    }

    with open(path, "wb") as f:
        tomli_w.dump(data, f)
