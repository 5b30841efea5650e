from __future__ import annotations

"""
Settings Domain Management.

Handles persistent storage of the tool's own preferences as JSON in the
per-user config directory. Missing or corrupted files fall back to defaults;
unknown keys are dropped and missing ones are filled from the defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from json_env.domain.constants import (
    CURRENT_SETTINGS_VERSION,
    DEFAULT_CONFIG_FILE_NAME,
    DEFAULT_PATH_EXPRESSION,
    SETTINGS_FILE_NAME,
)
from json_env.infra.fs import get_user_config_dir, safe_mkdir, write_json_atomic

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default runtime settings.

    Returns:
        Dict[str, Any]: Default settings values.
    """
    return {
        # Resolution
        "config_file_name": DEFAULT_CONFIG_FILE_NAME,
        "default_expression": DEFAULT_PATH_EXPRESSION,
        "expand": False,

        # Diagnostics
        "log_level": "WARNING",
        "log_file": None,
    }


def get_settings_path(config_dir: Optional[str] = None) -> str:
    return os.path.join(config_dir or get_user_config_dir(), SETTINGS_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_settings(config_dir: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from disk, merged over the defaults.

    Args:
        config_dir: Directory holding settings.json. Defaults to the user
            config dir.

    Returns:
        Dict[str, Any]: The loaded settings or the defaults on failure.
    """
    defaults = get_default_settings()
    path = get_settings_path(config_dir)

    if not os.path.exists(path):
        logger.debug("Settings file not found. Returning defaults.")
        return defaults

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load settings from {path}: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning(f"Corrupted settings file {path}. Using defaults.")
        return defaults

    settings = dict(defaults)
    for key, value in data.items():
        if key in defaults:
            settings[key] = value
        elif key != "version":
            logger.debug(f"Ignoring unknown setting '{key}'")
    return settings


def save_settings(settings: Dict[str, Any], config_dir: Optional[str] = None) -> None:
    """
    Persist settings to disk.

    Args:
        settings: The settings dictionary to save.
        config_dir: Target directory. Defaults to the user config dir.

    Raises:
        OSError: If the directory or the file cannot be written.
    """
    path = get_settings_path(config_dir)
    ok, err = safe_mkdir(os.path.dirname(path))
    if not ok:
        raise OSError(f"Could not create config directory: {err}")

    payload = dict(settings)
    payload["version"] = CURRENT_SETTINGS_VERSION
    write_json_atomic(path, payload)
    logger.debug(f"Settings saved to {path}")
