"""Tests for playback-driven selection."""

from caption_editor.models.caption import CaptionSegment
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.services.time_sync import select_for_time


def _timeline() -> CaptionTimeline:
    return CaptionTimeline([
        CaptionSegment(id="a", start_ms=0, end_ms=1000, text="a"),
        CaptionSegment(id="b", start_ms=1000, end_ms=2000, text="b"),
        CaptionSegment(id="c", start_ms=3000, end_ms=4000, text="c"),
    ])


class TestSelectForTime:
    def test_selects_containing_segment(self):
        assert select_for_time(_timeline(), 3500, None) == "c"

    def test_moves_selection(self):
        assert select_for_time(_timeline(), 1500, "a") == "b"

    def test_gap_keeps_selection(self):
        assert select_for_time(_timeline(), 2500, "b") == "b"

    def test_gap_never_clears(self):
        assert select_for_time(_timeline(), 99999, "a") == "a"

    def test_gap_with_nothing_selected(self):
        assert select_for_time(_timeline(), 2500, None) is None

    def test_boundary_prefers_first(self):
        assert select_for_time(_timeline(), 1000, None) == "a"
