"""Settings manager for caption editing preferences."""

from PySide6.QtCore import QSettings

from caption_editor.services.line_wrapper import WrapSettings
from caption_editor.utils.config import (
    APP_NAME,
    HORIZONTAL_MAX_CHARS_PER_LINE,
    HORIZONTAL_MAX_WORDS_PER_LINE,
    MIN_WORD_HIGHLIGHT_MS,
    ORG_NAME,
    SRT_LINE_ENDING,
    VERTICAL_MAX_CHARS_PER_LINE,
    VERTICAL_MAX_WORDS_PER_LINE,
)

_WRAP_DEFAULTS = {
    "vertical": (VERTICAL_MAX_CHARS_PER_LINE, VERTICAL_MAX_WORDS_PER_LINE),
    "horizontal": (HORIZONTAL_MAX_CHARS_PER_LINE, HORIZONTAL_MAX_WORDS_PER_LINE),
}


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self):
        self._settings = QSettings(ORG_NAME, APP_NAME)

    # ---------------------------------------------------- Line Wrap

    def get_wrap_settings(self, vertical: bool) -> WrapSettings:
        """Get the line-wrap constraints for vertical or horizontal video."""
        key = "vertical" if vertical else "horizontal"
        chars, words = _WRAP_DEFAULTS[key]
        return WrapSettings(
            max_chars_per_line=int(self._settings.value(f"wrap/{key}/max_chars", chars, int)),
            max_words_per_line=int(self._settings.value(f"wrap/{key}/max_words", words, int)),
        )

    def set_wrap_settings(self, vertical: bool, settings: WrapSettings) -> None:
        """Persist line-wrap constraints after validating them."""
        settings.validate()
        key = "vertical" if vertical else "horizontal"
        self._settings.setValue(f"wrap/{key}/max_chars", settings.max_chars_per_line)
        self._settings.setValue(f"wrap/{key}/max_words", settings.max_words_per_line)

    # ---------------------------------------------------- Editing

    def get_min_word_highlight_ms(self) -> int:
        """Get the minimum highlight duration for edited words in ms (default: 500)."""
        return int(self._settings.value("editing/min_word_highlight", MIN_WORD_HIGHLIGHT_MS, int))

    def set_min_word_highlight_ms(self, ms: int) -> None:
        """Set the minimum highlight duration for edited words in ms."""
        self._settings.setValue("editing/min_word_highlight", max(0, ms))

    # ---------------------------------------------------- Export

    def get_srt_line_ending(self) -> str:
        """Get the SRT line ending ("\\n" or "\\r\\n")."""
        value = self._settings.value("export/srt_crlf", SRT_LINE_ENDING == "\r\n", bool)
        return "\r\n" if value in (True, "true") else "\n"

    def set_srt_line_ending(self, line_ending: str) -> None:
        """Set the SRT line ending ("\\n" or "\\r\\n")."""
        self._settings.setValue("export/srt_crlf", line_ending == "\r\n")

    # ---------------------------------------------------- General Methods

    def reset_to_defaults(self) -> None:
        """Reset all settings to default values."""
        self._settings.clear()

    def sync(self) -> None:
        """Force synchronization of settings to disk."""
        self._settings.sync()
