"""Shared utilities: settings persistence, paths and formatting helpers."""

from .helpers import format_size, looks_like_pdf, output_filename, MAX_UPLOAD_BYTES
from .paths import get_app_data_dir, get_settings_path
from .settings_store import SettingsStore

__all__ = [
    "format_size",
    "looks_like_pdf",
    "output_filename",
    "MAX_UPLOAD_BYTES",
    "get_app_data_dir",
    "get_settings_path",
    "SettingsStore",
]
