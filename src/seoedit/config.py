"""Configuration loader with YAML and environment variable support.

Reads ~/.config/seoedit/config.yaml (optional) and applies SEOEDIT_* overrides.

Environment variables:
- SEOEDIT_EXPORT_TITLE: Override export.title
- SEOEDIT_EXPORT_FILENAME_PREFIX: Override export.filename_prefix
- SEOEDIT_EDITING_EXCLUSIVE_LOCK: Override editing.exclusive_lock (true/false)
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from seoedit.models.config import Config
from seoedit.utils.logging import get_logger


logger = get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def default_config_path() -> Path:
    return Path.home() / ".config" / "seoedit" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses ~/.config/seoedit/config.yaml

    Returns:
        Validated Config object

    Raises:
        ValueError: If config file or an override is invalid
    """
    if config_path is None:
        config_path = default_config_path()

    data: Dict[str, Any] = {}
    if config_path.exists():
        with config_path.open(encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                logger.error("config_yaml_error", path=str(config_path), error=str(e))
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping: {config_path}")

    data = _apply_env_overrides(data)

    try:
        config = Config.from_dict(data)
    except ValueError as e:
        logger.error("config_validation_error", path=str(config_path), error=str(e))
        raise ValueError(f"Configuration validation failed: {e}") from e

    logger.info("config_loaded", path=str(config_path), from_file=config_path.exists())
    return config


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: SEOEDIT_SECTION_KEY
    For example: SEOEDIT_EXPORT_TITLE sets data['export']['title']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied

    Raises:
        ValueError: If a boolean override is not a recognised boolean
    """
    for section in ("names", "export", "editing"):
        if data.get(section) is None:
            data[section] = {}
        elif not isinstance(data[section], dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping")

    # Title may legitimately be overridden with an empty string
    if "SEOEDIT_EXPORT_TITLE" in os.environ:
        data["export"]["title"] = os.environ["SEOEDIT_EXPORT_TITLE"]

    if env_prefix := os.getenv("SEOEDIT_EXPORT_FILENAME_PREFIX"):
        data["export"]["filename_prefix"] = env_prefix

    if env_lock := os.getenv("SEOEDIT_EDITING_EXCLUSIVE_LOCK"):
        data["editing"]["exclusive_lock"] = _parse_bool("SEOEDIT_EDITING_EXCLUSIVE_LOCK", env_lock)

    return data


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be true or false, got {value!r}")
