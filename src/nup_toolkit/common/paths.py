"""
Path utilities for locating the application data directory.

Override: NUP_TOOLKIT_HOME environment variable
Default: system-standard per-user data location
"""
from __future__ import annotations

import os
import platform
from pathlib import Path

APP_NAME = "NUP Toolkit"
HOME_ENV_VAR = "NUP_TOOLKIT_HOME"


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Windows: %LOCALAPPDATA%/NUP Toolkit
    macOS:   ~/Library/Application Support/NUP Toolkit
    Linux:   ~/.local/share/nup-toolkit
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    system = platform.system()
    if system == "Windows":
        # Use AppData/Local, falling back to roaming APPDATA
        base = os.environ.get("LOCALAPPDATA", os.environ.get("APPDATA"))
        return Path(base) / APP_NAME if base else Path.home() / ".nup_toolkit"
    if system == "Darwin":
        return Path.home() / "Library/Application Support" / APP_NAME
    return Path.home() / ".local/share/nup-toolkit"


def get_settings_path() -> Path:
    """Path of the persisted settings file."""
    return get_app_data_dir() / "settings.json"
