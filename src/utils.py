"""
Shared utility functions for the Sui wallet client.

Contains path helpers, the settings file, and small hex helpers used
across packages.
"""

import json
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_app_dir() -> Path:
    """Get the application data directory."""
    override = os.environ.get("SUI_WALLET_HOME", "").strip()
    if override:
        app_dir = Path(override)
    elif getattr(sys, 'frozen', False):
        # Running as compiled
        app_dir = Path(sys.executable).parent / "data"
    else:
        app_dir = Path.home() / ".sui-wallet"

    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_settings_path() -> Path:
    """Get path to settings file."""
    return get_app_dir() / "settings.json"


def get_logs_dir() -> Path:
    """Get the logs directory."""
    logs_dir = get_app_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def load_settings() -> dict:
    """Load settings from disk. Missing or unreadable files yield {}."""
    settings_path = get_settings_path()
    if not settings_path.exists():
        return {}
    try:
        with open(settings_path, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load settings: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file: top level must be an object")
        return {}
    return data


def save_settings(settings: dict) -> None:
    """Save settings to disk."""
    settings_path = get_settings_path()
    temp_path = settings_path.with_suffix('.tmp')
    with open(temp_path, 'w') as f:
        json.dump(settings, f, indent=2)
    temp_path.replace(settings_path)


def ensure_hex_prefix(value: str) -> str:
    """Return value with a single leading 0x."""
    return value if value.startswith("0x") else "0x" + value
