"""Tests for data models."""

import pytest

from caption_editor.models.caption import CaptionSegment, Word
from caption_editor.models.errors import NotFoundError, ValidationError
from caption_editor.models.style import CaptionStyle
from caption_editor.models.timeline import CaptionTimeline, Snapshot


def _seg(seg_id: str, start: int, end: int, text: str = "x", **kw) -> CaptionSegment:
    return CaptionSegment(id=seg_id, start_ms=start, end_ms=end, text=text, **kw)


class TestWord:
    def test_duration(self):
        assert Word("hi", 100, 350).duration_ms == 250

    def test_blank(self):
        assert Word("  ", 0, 10).is_blank
        assert not Word("a", 0, 10).is_blank


class TestCaptionSegment:
    def test_duration(self):
        assert _seg("a", 1000, 3500).duration_ms == 2500

    def test_origin_defaults_to_own_id(self):
        assert _seg("segment-0", 0, 1).origin_id == "segment-0"

    def test_origin_uses_source_id(self):
        assert _seg("segment-0-1", 0, 1, source_id="segment-0").origin_id == "segment-0"

    def test_spoken_word_count_ignores_blank(self):
        seg = _seg("a", 0, 300, words=[Word("a", 0, 100), Word("", 100, 200), Word("b", 200, 300)])
        assert seg.spoken_word_count() == 2
        assert seg.joined_words() == "a b"

    def test_copy_is_deep(self):
        seg = _seg("a", 0, 100, words=[Word("a", 0, 100)])
        dup = seg.copy()
        dup.words[0].text = "changed"
        dup.style.font_size = 1
        assert seg.words[0].text == "a"
        assert seg.style.font_size == CaptionStyle().font_size


class TestCaptionStyle:
    def test_defaults(self):
        style = CaptionStyle()
        assert style.font == "Poppins"
        assert style.stroke_width == 2.5
        assert style.burn_in is True

    def test_merged_only_touches_given_fields(self):
        style = CaptionStyle(text_color="#FF0000")
        merged = style.merged({"font_size": 40})
        assert merged.font_size == 40
        assert merged.text_color == "#FF0000"
        assert style.font_size == 85

    def test_merged_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            CaptionStyle().merged({"glow": True})

    def test_dict_roundtrip_ignores_unknown(self):
        d = CaptionStyle(font="Inter").to_dict()
        d["legacy"] = 1
        assert CaptionStyle.from_dict(d) == CaptionStyle(font="Inter")


class TestCaptionTimeline:
    def test_segment_at_inclusive_bounds(self):
        tl = CaptionTimeline([_seg("a", 1000, 4000), _seg("b", 5000, 8000)])
        assert tl.segment_at(0) is None
        assert tl.segment_at(1000).id == "a"
        assert tl.segment_at(4000).id == "a"
        assert tl.segment_at(4500) is None
        assert tl.segment_at(8000).id == "b"

    def test_segment_at_shared_boundary_prefers_first(self):
        tl = CaptionTimeline([_seg("a", 0, 1000), _seg("b", 1000, 2000)])
        assert tl.segment_at(1000).id == "a"

    def test_index_of_unknown_raises(self):
        with pytest.raises(NotFoundError):
            CaptionTimeline().index_of("nope")

    def test_sort(self):
        tl = CaptionTimeline([_seg("b", 5000, 6000), _seg("a", 0, 10)])
        tl.sort()
        assert tl.ids == ["a", "b"]

    def test_validate_duplicate_ids(self):
        tl = CaptionTimeline([_seg("a", 0, 10), _seg("a", 20, 30)])
        with pytest.raises(ValidationError):
            tl.validate()

    def test_validate_inverted_range(self):
        with pytest.raises(ValidationError):
            CaptionTimeline([_seg("a", 50, 10)]).validate()

    def test_equality_is_by_value(self):
        assert CaptionTimeline([_seg("a", 0, 10)]) == CaptionTimeline([_seg("a", 0, 10)])


class TestSnapshot:
    def test_capture_is_independent(self):
        tl = CaptionTimeline([_seg("a", 0, 10, text="before")])
        snap = Snapshot.capture(tl, "a")
        tl[0].text = "after"
        assert snap.captions[0].text == "before"
        assert snap.selected_segment_id == "a"

    def test_empty(self):
        snap = Snapshot.empty()
        assert len(snap.captions) == 0
        assert snap.selected_segment_id is None
