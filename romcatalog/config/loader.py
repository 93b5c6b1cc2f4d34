"""Configuration loading and parsing."""

import copy

import yaml
from pathlib import Path
from typing import Dict, Any, Optional


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


DEFAULTS: Dict[str, Any] = {
    "paths": {
        "storage_roots": [],
        "preview_cache": None,
        "stations_file": None,
    },
    "catalog": {
        "max_total": 32768,
        "max_depth": 5,
    },
    "preview": {
        "base_url": "https://thumbnails.libretro.com",
        "timeout": 10,
        "batch_delay": 0.1,
        "connectivity_host": "github.com",
        "connectivity_port": 443,
    },
    "logging": {
        "level": "INFO",
        "console": True,
        "file": None,
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.

    Missing sections and keys are filled from DEFAULTS.

    Args:
        config_path: Path to config.yaml file. If None, searches current directory.

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}\n"
            f"Copy config.yaml.example to config.yaml and configure it."
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except Exception as e:
        raise ConfigError(f"Failed to read config file: {e}")

    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    return apply_defaults(config)


def apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing sections and keys from DEFAULTS (in place)."""
    for section, values in DEFAULTS.items():
        current = config.get(section)
        if current is None:
            config[section] = copy.deepcopy(values)
        elif isinstance(current, dict):
            for key, value in values.items():
                current.setdefault(key, copy.deepcopy(value))
    return config


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'preview.timeout')
        default: Default value if path not found

    Returns:
        Configuration value or default

    Example:
        >>> get_config_value(config, 'preview.base_url')
        'https://thumbnails.libretro.com'
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
