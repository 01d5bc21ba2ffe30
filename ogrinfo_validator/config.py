"""Configuration for ogrinfo-validator.

Settings resolve with the following precedence (highest to lowest):
1. CLI argument
2. Environment variable (OGRV_<KEY>)
3. Config file (YAML)
4. Built-in default

Limits can also be kept in a YAML (or JSON) file of the same shape the
Python API accepts::

    limits:
      featureCount: 1000
      checkExtent: true

Usage:
    from ogrinfo_validator.config import get_setting, load_limits_file

    executable = get_setting("ogrinfo", cli_value=cli_ogrinfo, config_file=config_path)
    limits = load_limits_file(Path("limits.yaml"))
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from ogrinfo_validator.errors import ConfigInvalidStructureError, ConfigParseError

# Known settings and their built-in defaults
DEFAULTS: dict[str, Any] = {
    "ogrinfo": "ogrinfo",
}


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    content = path.read_text()
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(path), str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigInvalidStructureError(str(path), "top level must be a mapping")
    return data


def load_config(config_file: Path) -> dict[str, Any]:
    """Load settings from a YAML config file.

    Args:
        config_file: Path to the config file.

    Returns:
        Config dictionary. Returns empty dict if file doesn't exist.

    Raises:
        ConfigParseError: If the file is not valid YAML.
        ConfigInvalidStructureError: If the top level is not a mapping.
    """
    if not config_file.exists():
        return {}
    return _read_yaml_mapping(config_file)


def _get_env_var_name(key: str) -> str:
    """Convert a setting key to environment variable name.

    Args:
        key: Setting key (e.g., "ogrinfo")

    Returns:
        Environment variable name (e.g., "OGRV_OGRINFO")
    """
    return f"OGRV_{key.upper()}"


def get_setting(
    key: str,
    cli_value: Any | None = None,
    config_file: Path | None = None,
) -> Any | None:
    """Resolve a setting with full precedence.

    Args:
        key: Setting key (e.g., "ogrinfo")
        cli_value: Value passed via CLI argument (highest precedence)
        config_file: Optional YAML config file

    Returns:
        Resolved value, or the built-in default (None for unknown keys).
    """
    if cli_value is not None:
        return cli_value

    env_value = os.environ.get(_get_env_var_name(key))
    if env_value is not None:
        return env_value

    if config_file is not None:
        config = load_config(config_file)
        if key in config:
            return config[key]

    return DEFAULTS.get(key)


def load_limits_file(path: Path) -> dict[str, Any]:
    """Load a limits mapping from a YAML or JSON file.

    The returned mapping is not checked here; pass it to parse_limits().

    Raises:
        ConfigParseError: If the file cannot be read or parsed.
        ConfigInvalidStructureError: If the top level is not a mapping.
    """
    try:
        return _read_yaml_mapping(path)
    except OSError as e:
        raise ConfigParseError(str(path), str(e)) from e
