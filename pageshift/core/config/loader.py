"""
Configuration loader — reads pageshift.yml into Settings.

The file is optional: when none is found, defaults apply. When one is
found it must be a valid YAML mapping matching the Settings schema.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pageshift.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Accepted config filenames, in lookup order
CONFIG_FILES = ("pageshift.yml", ".pageshift.yml")

# Directories searched, the start directory included
_MAX_DEPTH = 20


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""

    kind = "config"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from the given directory, walking up.

    This lets a page deep inside ``src/Pages/`` pick up the config at the
    project root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in [start, *start.parents][:_MAX_DEPTH]:
        for name in CONFIG_FILES:
            candidate = directory / name
            if candidate.is_file():
                return candidate

    return None


def load_settings(path: Path | None = None, start_dir: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit config path. If None, searches upward from *start_dir*.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated Settings (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No config file found, using defaults")
            return Settings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
