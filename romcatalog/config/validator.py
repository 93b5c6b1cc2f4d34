"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    validators = (
        ('paths', _validate_paths),
        ('catalog', _validate_catalog),
        ('preview', _validate_preview),
        ('logging', _validate_logging),
    )
    for name, validate_section in validators:
        section = config.get(name)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            errors.append(f"{name} must be a mapping")
            continue
        errors.extend(validate_section(section))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_paths(section: Dict[str, Any]) -> List[str]:
    """Validate paths section."""
    errors = []

    if not section.get('games_root'):
        errors.append("paths.games_root is required")
    elif not isinstance(section['games_root'], str):
        errors.append("paths.games_root must be a string path")

    roots = section.get('storage_roots', [])
    if roots is not None:
        if not isinstance(roots, list):
            errors.append("paths.storage_roots must be a list")
        elif any(not isinstance(r, str) for r in roots):
            errors.append("paths.storage_roots entries must be strings")

    for key in ('preview_cache', 'stations_file'):
        value = section.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"paths.{key} must be a string path or null")

    return errors


def _validate_catalog(section: Dict[str, Any]) -> List[str]:
    """Validate catalog limits section."""
    errors = []

    max_total = section.get('max_total', 32768)
    if not isinstance(max_total, int) or max_total < 1:
        errors.append("catalog.max_total must be a positive integer")

    max_depth = section.get('max_depth', 5)
    if not isinstance(max_depth, int) or not (0 <= max_depth <= 32):
        errors.append("catalog.max_depth must be between 0 and 32")

    return errors


def _validate_preview(section: Dict[str, Any]) -> List[str]:
    """Validate preview fetching section."""
    errors = []

    base_url = section.get('base_url', '')
    if not isinstance(base_url, str) or not base_url.startswith(('http://', 'https://')):
        errors.append("preview.base_url must be an http(s) URL")

    timeout = section.get('timeout', 10)
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append("preview.timeout must be a positive number")

    delay = section.get('batch_delay', 0.1)
    if not isinstance(delay, (int, float)) or delay < 0:
        errors.append("preview.batch_delay must be non-negative")

    host = section.get('connectivity_host', 'github.com')
    if not isinstance(host, str) or not host:
        errors.append("preview.connectivity_host must be a hostname")

    port = section.get('connectivity_port', 443)
    if not isinstance(port, int) or not (1 <= port <= 65535):
        errors.append("preview.connectivity_port must be between 1 and 65535")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    level = section.get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    if level not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
