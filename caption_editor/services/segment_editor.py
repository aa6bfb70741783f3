"""In-place caption edits, expressed as pure functions over a timeline.

Every function leaves its input untouched and returns a new timeline, so a
failed edit (``ValidationError`` / ``NotFoundError``) never corrupts state.
"""

from __future__ import annotations

import logging

from caption_editor.models.caption import CaptionSegment, Word
from caption_editor.models.errors import ValidationError
from caption_editor.models.style import CaptionStyle
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.utils.config import MIN_WORD_HIGHLIGHT_MS
from caption_editor.utils.time_utils import ms_to_display

logger = logging.getLogger(__name__)


def _working_copy(timeline: CaptionTimeline, segment_id: str) -> tuple[CaptionTimeline, int]:
    result = timeline.copy()
    return result, result.index_of(segment_id)


def _check_word_index(seg: CaptionSegment, index: int) -> None:
    if not 0 <= index < len(seg.words):
        raise ValidationError(
            f"Word index {index} out of range for segment {seg.id} ({len(seg.words)} words)"
        )


def _retext_word(word: Word, new_text: str, min_duration_ms: int) -> None:
    """Replace the word text; a changed word gets at least *min_duration_ms*."""
    if word.text != new_text:
        word.end_ms = max(word.end_ms, word.start_ms + min_duration_ms)
    word.text = new_text


# ---------------------------------------------------------------- text / words


def replace_text(
    timeline: CaptionTimeline,
    segment_id: str,
    new_text: str,
    min_duration_ms: int = MIN_WORD_HIGHLIGHT_MS,
) -> CaptionTimeline:
    """Replace a segment's full text, re-estimating word timings.

    New word ``i`` reuses original word ``i``'s timing. Words beyond the
    original count get an even share of the segment duration (at least
    *min_duration_ms*), clamped to the segment end. Surplus original words
    are dropped.
    """
    result, idx = _working_copy(timeline, segment_id)
    seg = result[idx]
    if seg.words:
        tokens = new_text.split()
        n = len(tokens)
        new_words: list[Word] = []
        for i, token in enumerate(tokens):
            if i < len(seg.words):
                word = seg.words[i]
                _retext_word(word, token, min_duration_ms)
            else:
                share = seg.duration_ms / n
                start = int(round(seg.start_ms + i * share))
                end = min(start + max(int(round(share)), min_duration_ms), seg.end_ms)
                word = Word(token, start, end)
            new_words.append(word)
        seg.words = new_words
    seg.text = new_text
    logger.debug(f"Replaced text of {segment_id}: {new_text!r}")
    return result


def delete_word(timeline: CaptionTimeline, segment_id: str, index: int) -> CaptionTimeline:
    """Remove the word at *index* and regenerate the segment text."""
    result, idx = _working_copy(timeline, segment_id)
    seg = result[idx]
    _check_word_index(seg, index)
    removed = seg.words.pop(index)
    seg.text = " ".join(w.text for w in seg.words)
    logger.debug(f"Deleted word {index} ({removed.text!r}) from {segment_id}")
    return result


def edit_word(
    timeline: CaptionTimeline,
    segment_id: str,
    index: int,
    new_text: str,
    min_duration_ms: int = MIN_WORD_HIGHLIGHT_MS,
) -> CaptionTimeline:
    """Change one word's text; a blank *new_text* deletes the word."""
    new_text = new_text.strip()
    if not new_text:
        return delete_word(timeline, segment_id, index)
    result, idx = _working_copy(timeline, segment_id)
    seg = result[idx]
    _check_word_index(seg, index)
    _retext_word(seg.words[index], new_text, min_duration_ms)
    seg.text = seg.joined_words()
    return result


def merge_words(timeline: CaptionTimeline, segment_id: str, index: int) -> CaptionTimeline:
    """Join word *index* with the following word into a single word."""
    result, idx = _working_copy(timeline, segment_id)
    seg = result[idx]
    _check_word_index(seg, index)
    if index + 1 >= len(seg.words):
        raise ValidationError(f"Word {index} of {segment_id} has no following word to merge")
    first, second = seg.words[index], seg.words[index + 1]
    seg.words[index] = Word(f"{first.text} {second.text}".strip(), first.start_ms, second.end_ms)
    del seg.words[index + 1]
    seg.text = " ".join(w.text for w in seg.words)
    return result


# ---------------------------------------------------------------- split / merge / delete


def split_segment(
    timeline: CaptionTimeline,
    segment_id: str,
    split_ms: int,
) -> tuple[CaptionTimeline, str]:
    """Split a segment in two at *split_ms*.

    Words ending at or before the split go to the first half, words starting
    at or after it go to the second; a word straddling the split is dropped.
    A half that got words spans exactly them; a half without words keeps the
    split point as its inner edge.
    A segment without word timings has its text divided at the word-count
    midpoint instead.

    Returns:
        ``(new_timeline, first_half_id)``.

    Raises:
        ValidationError: If *split_ms* is not strictly inside the segment.
    """
    result, idx = _working_copy(timeline, segment_id)
    seg = result[idx]
    if not seg.start_ms < split_ms < seg.end_ms:
        raise ValidationError(
            f"Split point {split_ms} must lie strictly inside {segment_id} "
            f"({seg.start_ms}-{seg.end_ms})"
        )

    if seg.words:
        first_words = [w for w in seg.words if w.end_ms <= split_ms]
        second_words = [w for w in seg.words if w.start_ms >= split_ms]
        first_text = " ".join(w.text for w in first_words)
        second_text = " ".join(w.text for w in second_words)
    else:
        first_words, second_words = [], []
        tokens = seg.text.split()
        mid = max(1, len(tokens) // 2)
        first_text = " ".join(tokens[:mid])
        second_text = " ".join(tokens[mid:])

    first = CaptionSegment(
        id=f"{seg.id}-split-1",
        start_ms=seg.start_ms,
        end_ms=split_ms,
        text=first_text,
        words=first_words,
        style=seg.style.copy(),
        source_id=seg.origin_id,
    )
    second = CaptionSegment(
        id=f"{seg.id}-split-2",
        start_ms=split_ms,
        end_ms=seg.end_ms,
        text=second_text,
        words=second_words,
        style=seg.style.copy(),
        source_id=seg.origin_id,
    )
    # Word-bounded halves shrink to their words.
    if first_words:
        first.start_ms = first_words[0].start_ms
        first.end_ms = first_words[-1].end_ms
    if second_words:
        second.start_ms = second_words[0].start_ms
        second.end_ms = second_words[-1].end_ms

    result.segments[idx:idx + 1] = [first, second]
    result.sort()
    result.validate()
    logger.debug(f"Split {segment_id} at {ms_to_display(split_ms)}")
    return result, first.id


def merge_with_next(timeline: CaptionTimeline, segment_id: str) -> CaptionTimeline:
    """Merge a segment with the one after it.

    Only segments descending from the same transcript segment can be merged,
    so deletion detection stays exact.
    """
    result, idx = _working_copy(timeline, segment_id)
    if idx + 1 >= len(result):
        raise ValidationError(f"Segment {segment_id} has no following segment to merge with")
    first, second = result[idx], result[idx + 1]
    if first.origin_id != second.origin_id:
        raise ValidationError(
            f"Cannot merge {first.id} and {second.id}: they come from different "
            f"transcript segments ({first.origin_id}, {second.origin_id})"
        )
    merged = CaptionSegment(
        id=first.id,
        start_ms=min(first.start_ms, second.start_ms),
        end_ms=max(first.end_ms, second.end_ms),
        text=" ".join(t for t in (first.text, second.text) if t),
        words=first.words + second.words,
        style=first.style,
        source_id=first.source_id or second.source_id,
    )
    result.segments[idx:idx + 2] = [merged]
    return result


def delete_segment(timeline: CaptionTimeline, segment_id: str) -> CaptionTimeline:
    """Remove a whole segment."""
    result, idx = _working_copy(timeline, segment_id)
    del result.segments[idx]
    return result


# ---------------------------------------------------------------- style


def apply_style_to_all(timeline: CaptionTimeline, overrides: dict) -> CaptionTimeline:
    """Merge a partial style into every segment, leaving other fields untouched."""
    CaptionStyle().merged(overrides)  # reject unknown fields before copying
    result = timeline.copy()
    for seg in result:
        seg.style = seg.style.merged(overrides)
    return result


def set_segment_style(
    timeline: CaptionTimeline,
    segment_id: str,
    style: CaptionStyle,
) -> CaptionTimeline:
    """Replace one segment's style entirely."""
    result, idx = _working_copy(timeline, segment_id)
    result[idx].style = style.copy()
    return result


# ---------------------------------------------------------------- re-transcription


def merge_retranscription(
    timeline: CaptionTimeline,
    start_ms: int,
    end_ms: int,
    segments: list[CaptionSegment],
) -> CaptionTimeline:
    """Replace every caption overlapping ``[start_ms, end_ms)`` with *segments*.

    Raises:
        ValidationError: On an empty/inverted range, or if the result would
            contain duplicate ids.
    """
    if start_ms >= end_ms:
        raise ValidationError(f"Invalid re-transcription range {start_ms}-{end_ms}")
    kept = [
        seg.copy() for seg in timeline
        if not (seg.start_ms < end_ms and seg.end_ms > start_ms)
    ]
    removed = len(timeline) - len(kept)
    result = CaptionTimeline(kept + [seg.copy() for seg in segments])
    result.sort()
    result.validate()
    logger.info(
        f"Re-transcribed {ms_to_display(start_ms)}-{ms_to_display(end_ms)}: "
        f"replaced {removed} segments with {len(segments)}"
    )
    return result
