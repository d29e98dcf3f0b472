"""
Settings persistence for the command line front end.

Stores the last-used composition settings and output directory in a JSON
file. Any malformed data results in a graceful fallback to defaults,
never a crash.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from nup_toolkit.composer.config import CompositionSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Lightweight JSON-backed store for persisting user preferences."""

    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        self.path = path
        self.data: Dict[str, object] = {}
        self.load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                self.load_error = f"Settings file is corrupted: {e}"
                self.data = {}
            except OSError as e:
                self.load_error = f"Failed to read settings: {e}"
                self.data = {}

        if self.load_error:
            logger.warning(f"{self.load_error}; using defaults")

        # Ensure version is set for new files
        if "version" not in self._get_dict():
            self.data["version"] = self.CURRENT_VERSION

    def get_composition_settings(self) -> CompositionSettings:
        """Last-used composition settings, or defaults if missing/invalid."""
        raw = self._get_dict().get("composition")
        if not isinstance(raw, dict):
            return CompositionSettings()
        try:
            return CompositionSettings.from_dict(raw)
        except ValueError as e:
            logger.warning(f"Ignoring invalid stored settings: {e}")
            return CompositionSettings()

    def set_composition_settings(self, settings: CompositionSettings) -> None:
        state = self._get_dict()
        state["composition"] = settings.to_dict()
        self._save()

    def get_output_dir(self) -> Optional[str]:
        value = self._get_dict().get("output_dir")
        return value if isinstance(value, str) else None

    def set_output_dir(self, value: str) -> None:
        state = self._get_dict()
        state["output_dir"] = value
        self._save()

    def _get_dict(self) -> Dict[str, object]:
        if not isinstance(self.data, dict):
            self.data = {}
        return self.data

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp file first
            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

            # Atomic rename (overwrites existing)
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
