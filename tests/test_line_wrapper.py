"""Tests for caption line wrapping."""

import pytest

from caption_editor.models.caption import CaptionSegment, Word
from caption_editor.models.errors import ValidationError
from caption_editor.models.style import CaptionStyle
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.services.line_wrapper import (
    WrapSettings,
    synthesize_words,
    wrap_segment,
    wrap_timeline,
)


def _fox() -> CaptionSegment:
    return CaptionSegment(
        id="s1", start_ms=0, end_ms=500, text="The quick brown fox",
        words=[Word("The", 0, 100), Word("quick", 100, 250),
               Word("brown", 250, 400), Word("fox", 400, 500)],
    )


def _words_of(segments):
    return [(w.text, w.start_ms, w.end_ms) for seg in segments for w in seg.words]


class TestWrapSettings:
    def test_below_min_chars(self):
        with pytest.raises(ValidationError):
            WrapSettings(11, 3).validate()

    def test_zero_words(self):
        with pytest.raises(ValidationError):
            WrapSettings(20, 0).validate()

    def test_lowered_minimum(self):
        WrapSettings(10, 3).validate(min_chars_per_line=1)

    def test_minimum_must_be_positive(self):
        with pytest.raises(ValidationError):
            WrapSettings(10, 3).validate(min_chars_per_line=0)


class TestWrapSegment:
    def test_char_limit_flush(self):
        out = wrap_segment(_fox(), WrapSettings(10, 3))
        assert [(s.text, s.start_ms, s.end_ms) for s in out] == [
            ("The quick", 0, 250),
            ("brown fox", 250, 500),
        ]

    def test_word_limit_flush(self):
        out = wrap_segment(_fox(), WrapSettings(100, 2))
        assert [s.text for s in out] == ["The quick", "brown fox"]

    def test_ids_and_provenance(self):
        out = wrap_segment(_fox(), WrapSettings(10, 3))
        assert [s.id for s in out] == ["s1-0", "s1-1"]
        assert all(s.source_id == "s1" for s in out)

    def test_rewrap_keeps_ingestion_origin(self):
        first = wrap_segment(_fox(), WrapSettings(10, 3))
        again = wrap_segment(first[0], WrapSettings(100, 1))
        assert [s.id for s in again] == ["s1-0-0", "s1-0-1"]
        assert all(s.source_id == "s1" for s in again)

    def test_oversized_word_kept_whole(self):
        seg = CaptionSegment(
            id="s", start_ms=0, end_ms=300, text="a supercalifragilistic b",
            words=[Word("a", 0, 100), Word("supercalifragilistic", 100, 200), Word("b", 200, 300)],
        )
        out = wrap_segment(seg, WrapSettings(12, 5))
        assert [s.text for s in out] == ["a", "supercalifragilistic", "b"]

    def test_style_inherited(self):
        seg = _fox()
        seg.style = CaptionStyle(font="Impact")
        out = wrap_segment(seg, WrapSettings(10, 3))
        assert all(s.style == seg.style and s.style is not seg.style for s in out)

    def test_segment_without_words_uses_text(self):
        seg = CaptionSegment(id="s", start_ms=0, end_ms=400, text="one two three four")
        out = wrap_segment(seg, WrapSettings(100, 2))
        assert [s.text for s in out] == ["one two", "three four"]
        assert (out[0].start_ms, out[0].end_ms) == (0, 200)
        assert (out[1].start_ms, out[1].end_ms) == (200, 400)

    def test_empty_segment_survives(self):
        seg = CaptionSegment(id="s", start_ms=0, end_ms=400, text="")
        assert [s.id for s in wrap_segment(seg, WrapSettings(12, 2))] == ["s"]


class TestSynthesizeWords:
    def test_even_division(self):
        seg = CaptionSegment(id="s", start_ms=1000, end_ms=1900, text="a b c")
        assert [(w.start_ms, w.end_ms) for w in synthesize_words(seg)] == [
            (1000, 1300), (1300, 1600), (1600, 1900),
        ]


class TestWrapTimeline:
    def test_words_preserved_and_limits_respected(self):
        words = "it was the best of times it was the worst of times".split()
        seg = CaptionSegment(
            id="segment-0", start_ms=0, end_ms=len(words) * 100, text=" ".join(words),
            words=[Word(w, i * 100, (i + 1) * 100) for i, w in enumerate(words)],
        )
        settings = WrapSettings(14, 3)
        out = wrap_timeline(CaptionTimeline([seg]), settings)
        assert _words_of(out) == _words_of([seg])
        for line in out:
            assert len(line.words) <= 3
            assert len(line.text) <= 14 or len(line.words) == 1
            assert line.start_ms == line.words[0].start_ms
            assert line.end_ms == line.words[-1].end_ms

    def test_order_preserved_across_segments(self):
        a = _fox()
        b = _fox()
        b.id = "s2"
        for w in b.words:
            w.start_ms += 1000
            w.end_ms += 1000
        out = wrap_timeline(CaptionTimeline([a, b]), WrapSettings(10, 3), min_chars_per_line=1)
        assert out.ids == ["s1-0", "s1-1", "s2-0", "s2-1"]

    def test_rejects_small_limits(self):
        with pytest.raises(ValidationError):
            wrap_timeline(CaptionTimeline([_fox()]), WrapSettings(10, 3))
