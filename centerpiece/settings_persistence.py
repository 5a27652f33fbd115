"""Settings persistence for per-document centered mode preferences.

Centered mode settings (body width, minimum body width, status line) are
stored in a JSON file in the user's config directory, indexed by the
absolute path of the document being viewed.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import platformdirs

from .body_width import InvalidSpecError, parse_body_width
from .config import (
    BODY_WIDTH_KEY,
    HIDE_STATUS_LINE_KEY,
    MINIMUM_BODY_WIDTH_KEY,
    ModeConfig,
)

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Manages persistent storage of per-document settings."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("centerpiece"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load all settings from disk.

        Returns an empty dict if the file doesn't exist or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Save all settings to disk atomically (temp file + rename)."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Load the raw settings dict for a document.

        Returns an empty dict if there are none or `document_path` is None.
        """
        if document_path is None:
            return {}

        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Save the raw settings dict for a document.

        Returns:
            True if save was successful, False otherwise.
        """
        if document_path is None:
            return False

        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        all_settings[abs_path] = settings
        return self._save_all_settings(all_settings)

    def load_config(self, document_path: Optional[str]) -> Tuple[ModeConfig, List[str]]:
        """Load the centered mode config for a document.

        Returns:
            (config, diagnostics) as from ModeConfig.from_settings
        """
        return ModeConfig.from_settings(self.load_settings(document_path))

    def save_config(self, document_path: Optional[str], config: ModeConfig) -> bool:
        """Merge a centered mode config into the document's settings."""
        settings = self.load_settings(document_path)
        settings.update(config.to_settings())
        return self.save_settings(document_path, settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        None means "not set" and is always valid, as are unknown keys.
        """
        if value is None:
            return True

        if key == BODY_WIDTH_KEY:
            try:
                parse_body_width(value)
            except InvalidSpecError:
                return False
            return not isinstance(value, str)

        if key == MINIMUM_BODY_WIDTH_KEY:
            return isinstance(value, int) and not isinstance(value, bool) and value >= 1

        if key == HIDE_STATUS_LINE_KEY:
            return isinstance(value, bool)

        # Unknown settings are considered valid (forward compatibility)
        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
