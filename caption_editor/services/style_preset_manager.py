"""Manager for saving and loading caption style presets."""

from __future__ import annotations

import json
import logging
from typing import Dict, List

from PySide6.QtCore import QSettings

from caption_editor.models.style import CaptionStyle
from caption_editor.utils.config import APP_NAME, ORG_NAME

logger = logging.getLogger(__name__)

_PRESETS_KEY = "style_presets/user"

BUILTIN_PRESETS: Dict[str, CaptionStyle] = {
    "Subway Surfers": CaptionStyle(
        font="Montserrat",
        font_size=85,
        highlighter_color="#00FF41",
        background_color="transparent",
        stroke_width=2,
        text_transform="uppercase",
        position_y=85,
    ),
    "Minimal Lowercase": CaptionStyle(
        font="Inter",
        font_size=72,
        highlighter_color="#3B82F6",
        background_color="transparent",
        stroke_color="transparent",
        stroke_width=0,
        text_transform="lowercase",
        position_y=85,
    ),
    "Standard Loud": CaptionStyle(
        font="Inter",
        font_size=85,
        highlighter_color="#FFFFFF",
        stroke_width=1,
        text_transform="uppercase",
        position_y=85,
        emphasize_mode=False,
    ),
    "Podcast": CaptionStyle(
        font="Source Sans Pro",
        font_size=72,
        highlighter_color="#6B7280",
        background_color="rgba(0, 0, 0, 0.9)",
        stroke_color="transparent",
        stroke_width=0,
        position_y=87,
        emphasize_mode=False,
    ),
    "Classic": CaptionStyle(
        font="Helvetica",
        font_size=78,
        highlighter_color="#FFFFFF",
        background_color="transparent",
        stroke_width=1,
        position_y=86,
        emphasize_mode=False,
    ),
}


class StylePresetManager:
    """Built-in presets plus user presets persisted in QSettings."""

    def __init__(self):
        self._settings = QSettings(ORG_NAME, APP_NAME)

    def _user_presets(self) -> Dict[str, dict]:
        raw = self._settings.value(_PRESETS_KEY, "")
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable style presets in settings")
            return {}
        return data if isinstance(data, dict) else {}

    def _store(self, presets: Dict[str, dict]) -> None:
        self._settings.setValue(_PRESETS_KEY, json.dumps(presets))
        self._settings.sync()

    def save_preset(self, name: str, style: CaptionStyle) -> None:
        """Save a style as a user preset (overwrites a user preset of the same name)."""
        presets = self._user_presets()
        presets[name] = style.to_dict()
        self._store(presets)

    def load_preset(self, name: str) -> CaptionStyle | None:
        """Load a preset by name; user presets shadow built-ins."""
        user = self._user_presets()
        if name in user:
            return CaptionStyle.from_dict(user[name])
        builtin = BUILTIN_PRESETS.get(name)
        return builtin.copy() if builtin else None

    def delete_preset(self, name: str) -> bool:
        """Delete a user preset. Built-ins cannot be deleted."""
        presets = self._user_presets()
        if name not in presets:
            return False
        del presets[name]
        self._store(presets)
        return True

    def rename_preset(self, old_name: str, new_name: str) -> bool:
        """Rename a user preset.

        Returns:
            True if successful, False if old preset not found or new name exists
        """
        presets = self._user_presets()
        if old_name not in presets or self.preset_exists(new_name):
            return False
        presets[new_name] = presets.pop(old_name)
        self._store(presets)
        return True

    def list_presets(self) -> List[str]:
        """All preset names (built-in and user), sorted alphabetically."""
        return sorted(set(BUILTIN_PRESETS) | set(self._user_presets()))

    def preset_exists(self, name: str) -> bool:
        return name in BUILTIN_PRESETS or name in self._user_presets()

    def get_all_presets(self) -> Dict[str, CaptionStyle]:
        """Get all presets as a dictionary."""
        result = {}
        for name in self.list_presets():
            style = self.load_preset(name)
            if style:
                result[name] = style
        return result
