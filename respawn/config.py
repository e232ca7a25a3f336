"""Configuration loader for respawn.

Loads settings from config.yaml and provides typed access.
"""

import logging
import os
from pathlib import Path

import yaml

from respawn.exceptions import ConfigError

_CONFIG_DIR = Path(__file__).parent
_DEFAULT_CONFIG_PATH = _CONFIG_DIR / "config.yaml"
_EXAMPLE_CONFIG_PATH = _CONFIG_DIR / "config.example.yaml"

DEFAULT_ENV_PREFIX = "GATEWAY"
DEFAULT_KICKSTART_TIMEOUT = 10.0

_config: dict | None = None


def load_config(path: Path | None = None) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to respawn/config.yaml,
            then the shipped config.example.yaml.

    Returns:
        Configuration dictionary with every section present.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigError: If a value is invalid.
    """
    if path is not None:
        config_path = path
    elif _DEFAULT_CONFIG_PATH.exists():
        config_path = _DEFAULT_CONFIG_PATH
    elif _EXAMPLE_CONFIG_PATH.exists():
        config_path = _EXAMPLE_CONFIG_PATH
    else:
        raise FileNotFoundError(f"Config file not found: {_DEFAULT_CONFIG_PATH}")

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    _apply_defaults(config)
    _expand_paths(config)
    _validate(config)
    return config


def get_config() -> dict:
    """Get the cached configuration, loading it if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _apply_defaults(config: dict) -> None:
    """Fill in missing sections and keys."""
    defaults = {
        "respawn": {"env_prefix": DEFAULT_ENV_PREFIX, "launchd_label_var": None},
        "kickstart": {"timeout_sec": DEFAULT_KICKSTART_TIMEOUT},
        "systemd": {"user": True, "fallback_to_system": True},
        "logging": {"level": "INFO", "file": None},
    }
    for section, values in defaults.items():
        current = config.get(section)
        if current is None:
            current = config[section] = {}
        if not isinstance(current, dict):
            raise ConfigError(f"{section} must be a mapping")
        for key, value in values.items():
            current.setdefault(key, value)


def _expand_paths(config: dict) -> None:
    """Expand ~ in path-like config values."""
    path_keys = {("logging", "file")}
    for section_key, value_key in path_keys:
        section = config.get(section_key, {})
        if value_key in section and isinstance(section[value_key], str):
            section[value_key] = os.path.expanduser(section[value_key])


def _validate(config: dict) -> None:
    """Validate section values.

    Raises:
        ConfigError: If any value is out of range or of the wrong type.
    """
    prefix = config["respawn"]["env_prefix"]
    if not isinstance(prefix, str) or not prefix.isidentifier():
        raise ConfigError(f"respawn.env_prefix must be an identifier, got {prefix!r}")

    label_var = config["respawn"]["launchd_label_var"]
    if label_var is not None and (not isinstance(label_var, str) or not label_var.strip()):
        raise ConfigError("respawn.launchd_label_var must be a non-empty string or null")

    timeout = config["kickstart"]["timeout_sec"]
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"kickstart.timeout_sec must be a positive number, got {timeout!r}")

    for key in ("user", "fallback_to_system"):
        if not isinstance(config["systemd"][key], bool):
            raise ConfigError(f"systemd.{key} must be true or false")

    level = config["logging"]["level"]
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(f"logging.level is not a known level: {level!r}")
