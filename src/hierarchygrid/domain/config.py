from __future__ import annotations

"""
Configuration Domain Management.

Handles the default widget configuration and the persistent storage of the
last session in JSON. Secrets are never written to disk.
"""

import json
import logging
import os
from typing import Any, Dict

from hierarchygrid.domain import constants as const
from hierarchygrid.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")

# Keys stripped before the session is persisted
_SECRET_KEYS = ("access_token",)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default widget configuration (Session State).

    'field_list' is left empty here: the validator derives the
    '[Name, <parent field>]' default once the parent field is known.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target hierarchy
        "record_id": "",
        "object_api_name": "",
        "parent_field_api_name": const.DEFAULT_PARENT_FIELD,
        "title": const.DEFAULT_TITLE,
        "field_list": [],

        # Remote collaborators
        "instance_url": "",
        "api_version": const.DEFAULT_API_VERSION,
        "access_token": "",

        # Offline collaborators (JSON snapshots)
        "metadata_file": "",
        "records_file": "",

        # Presentation
        "expand_on_load": False,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": const.CURRENT_CONFIG_VERSION,
        "app_settings": {
            "theme": "System",
            "locale": "en",
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("Corrupted config file. Resetting to defaults.")
            return default_state

        # Merge with defaults to ensure new keys exist
        state = default_state
        if isinstance(data.get("app_settings"), dict):
            state["app_settings"].update(data["app_settings"])
        if isinstance(data.get("last_session"), dict):
            state["last_session"].update(data["last_session"])

        state["version"] = const.CURRENT_CONFIG_VERSION
        return state

    except Exception as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk, dropping secret values.

    Args:
        state: The state dictionary to save.
    """
    payload = dict(state)
    session = dict(payload.get("last_session") or {})
    for key in _SECRET_KEYS:
        session.pop(key, None)
    payload["last_session"] = session
    payload["version"] = const.CURRENT_CONFIG_VERSION

    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the active configuration (Last Session) directly.
    """
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Save the provided config as the 'last_session'.
    """
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
