"""
devdocsx.config - Display configuration loading and defaults.

Configuration is optional and only affects how documents are shown.
The content store location is fixed by the installed package.

Lookup order (later wins):
    1. DEFAULT_CONFIG
    2. $DEVDOCSX_CONFIG, or ~/.config/devdocsx/config.toml
    3. DEVDOCSX_<SECTION>_<KEY> environment variables
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.exceptions import ParseError

from devdocsx.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEVDOCSX_"
CONFIG_ENV_VAR = "DEVDOCSX_CONFIG"

COLOR_MODES = ("auto", "always", "never")

DEFAULT_CONFIG: Dict[str, Any] = {
    "display": {
        "color": "auto",
        "pretty": False,
        "show_path": True,
    },
}


def default_config_path() -> Path:
    """Return the per-user configuration file location."""
    return Path.home() / ".config" / "devdocsx" / "config.toml"


def find_config_file() -> Optional[Path]:
    """Return the configuration file to load, or None if there is none."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    path = default_config_path()
    if path.is_file():
        return path
    return None


def parse_config(text: str, source: str = "<string>") -> Dict[str, Any]:
    """Parse TOML configuration text into a plain dict."""
    try:
        return tomlkit.parse(text).unwrap()
    except ParseError as e:
        raise ConfigError(f"{source}: invalid TOML: {e}") from e


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value as a boolean or JSON list/object.

    Anything else, including malformed JSON, is returned as a string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply DEVDOCSX_<SECTION>_<KEY> variables to known sections."""
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX) or name == CONFIG_ENV_VAR:
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        if not isinstance(config.get(section), dict):
            continue
        config[section][key] = _try_parse_env_value(raw)
    return config


def _validate(config: Dict[str, Any], source: str) -> Dict[str, Any]:
    display = config.get("display")
    if not isinstance(display, dict):
        raise ConfigError(f"{source}: [display] must be a table")
    if display.get("color") not in COLOR_MODES:
        raise ConfigError(
            f"{source}: display.color must be one of {', '.join(COLOR_MODES)}"
        )
    for key in ("pretty", "show_path"):
        if not isinstance(display.get(key), bool):
            raise ConfigError(f"{source}: display.{key} must be true or false")
    return config


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load display configuration.

    Args:
        config_path: Explicit file to load. Defaults to ``find_config_file()``.

    Returns:
        Merged configuration dict.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or
            holds values of the wrong type.
    """
    if config_path is None:
        config_path = find_config_file()

    config = copy.deepcopy(DEFAULT_CONFIG)
    source = "environment"
    if config_path is not None:
        source = str(config_path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        logger.debug("Loaded configuration from %s", config_path)
        config = merge_configs(config, parse_config(text, source))

    return _validate(_apply_env_overrides(config), source)
