"""
Configuration loader — reads phpscan.yml into a ScanConfig.

The file is optional: without one every setting takes its default.
It reads YAML, validates against the Pydantic schema, and returns a
typed ``ScanConfig``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from phpscan.core.models.config import ScanConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "phpscan.yml"


class ConfigError(Exception):
    """Raised when scan configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for phpscan.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to phpscan.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> ScanConfig:
    """Load and validate scan configuration.

    Args:
        path: Explicit path to phpscan.yml. If None, defaults are returned.

    Returns:
        Validated ScanConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        return ScanConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading scan config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ScanConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "phpscan" key or be flat
    config_data = data.get("phpscan", data)
    if not isinstance(config_data, dict):
        raise ConfigError(f"Expected a mapping under 'phpscan' in {path}")

    try:
        config = ScanConfig.model_validate(config_data)
    except Exception as e:
        raise ConfigError(f"Invalid scan configuration: {e}") from e

    logger.info(
        "Loaded scan config from %s (%d excluded dirs, %d secret patterns)",
        path, len(config.excluded_dirs), len(config.secret_patterns),
    )
    return config


def resolve_config(config_path: Path | None, project_path: Path | None = None) -> ScanConfig:
    """Load an explicit config, or the nearest phpscan.yml above the project."""
    if config_path is None and project_path is not None and project_path.is_dir():
        config_path = find_config_file(project_path)
    return load_config(config_path)
