"""Tests for StylePresetManager (QSettings mocked)."""

from __future__ import annotations

from caption_editor.models.style import CaptionStyle
from caption_editor.services.style_preset_manager import BUILTIN_PRESETS, StylePresetManager
from caption_editor.utils.config import APP_NAME, ORG_NAME


class _FakeQSettings:
    def __init__(self):
        self._data: dict[str, object] = {}

    def value(self, key: str, default=None, type_=None):
        return self._data.get(key, default)

    def setValue(self, key: str, value) -> None:
        self._data[key] = value

    def sync(self) -> None:
        pass


def _make_manager() -> StylePresetManager:
    mgr = StylePresetManager.__new__(StylePresetManager)
    mgr._settings = _FakeQSettings()
    return mgr


def test_builtins_listed():
    mgr = _make_manager()
    assert set(BUILTIN_PRESETS) <= set(mgr.list_presets())
    assert mgr.load_preset("Classic").font == "Helvetica"


def test_builtin_load_returns_copy():
    mgr = _make_manager()
    mgr.load_preset("Classic").font = "Changed"
    assert mgr.load_preset("Classic").font == "Helvetica"


def test_save_and_load_user_preset():
    mgr = _make_manager()
    style = CaptionStyle(font="Impact", font_size=60, text_transform="uppercase")
    mgr.save_preset("Mine", style)
    assert mgr.load_preset("Mine") == style
    assert "Mine" in mgr.list_presets()


def test_user_preset_shadows_builtin():
    mgr = _make_manager()
    mgr.save_preset("Classic", CaptionStyle(font="Impact"))
    assert mgr.load_preset("Classic").font == "Impact"


def test_delete_user_preset_only():
    mgr = _make_manager()
    mgr.save_preset("Mine", CaptionStyle())
    assert mgr.delete_preset("Mine") is True
    assert mgr.delete_preset("Classic") is False
    assert mgr.preset_exists("Classic")
    assert not mgr.preset_exists("Mine")


def test_rename():
    mgr = _make_manager()
    mgr.save_preset("Old", CaptionStyle(font="Inter"))
    assert mgr.rename_preset("Old", "New") is True
    assert mgr.load_preset("New").font == "Inter"
    assert mgr.load_preset("Old") is None
    assert mgr.rename_preset("New", "Classic") is False


def test_unknown_preset():
    assert _make_manager().load_preset("nope") is None


def test_corrupt_settings_ignored():
    mgr = _make_manager()
    mgr._settings.setValue("style_presets/user", "{not json")
    assert mgr.load_preset("Classic").font == "Helvetica"
    assert len(mgr.get_all_presets()) == len(BUILTIN_PRESETS)


def test_presets_scoped_to_application():
    settings = StylePresetManager()._settings
    assert settings.organizationName() == ORG_NAME
    assert settings.applicationName() == APP_NAME
