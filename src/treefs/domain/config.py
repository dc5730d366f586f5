from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences as JSON in the application
data directory. Missing keys are filled from defaults and corrupt files fall
back to the default configuration.
"""

import json
import logging
import os
from typing import Any, Dict

from treefs.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_SNAPSHOT_NAME
from treefs.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Snapshot persistence
        "snapshot_path": os.path.join(get_user_data_dir(), DEFAULT_SNAPSHOT_NAME),
        "autoload": False,
        "autosave": False,

        # Shell
        "prompt_prefix": "Current directory: ",
        "locale": "en",

        # Diagnostics
        "log_level": "WARNING",
        "log_to_file": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the stored configuration, merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.

    Returns:
        bool: True if the file was written.
    """
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {CONFIG_FILE}")
    return True
