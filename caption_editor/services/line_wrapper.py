"""Re-segment captions so each one fits a line-length budget."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from caption_editor.models.caption import CaptionSegment, Word
from caption_editor.models.errors import ValidationError
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.utils.config import MIN_CHARS_PER_LINE, MIN_WORDS_PER_LINE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrapSettings:
    """Maximum characters and words allowed on one caption line."""

    max_chars_per_line: int
    max_words_per_line: int

    def validate(self, min_chars_per_line: int = MIN_CHARS_PER_LINE) -> None:
        """Raise ValidationError if either constraint is below its minimum."""
        if min_chars_per_line < 1:
            raise ValidationError(f"min_chars_per_line must be positive, got {min_chars_per_line}")
        if self.max_chars_per_line < min_chars_per_line:
            raise ValidationError(
                f"max_chars_per_line must be at least {min_chars_per_line}, "
                f"got {self.max_chars_per_line}"
            )
        if self.max_words_per_line < MIN_WORDS_PER_LINE:
            raise ValidationError(
                f"max_words_per_line must be at least {MIN_WORDS_PER_LINE}, "
                f"got {self.max_words_per_line}"
            )


def synthesize_words(segment: CaptionSegment) -> list[Word]:
    """Split the segment text on spaces and share its duration out evenly.

    Used for segments that came without word timings.
    """
    tokens = segment.text.split()
    if not tokens:
        return []
    n = len(tokens)
    duration = segment.duration_ms
    words = []
    for i, token in enumerate(tokens):
        start = segment.start_ms + duration * i // n
        end = segment.start_ms + duration * (i + 1) // n
        words.append(Word(token, start, min(end, segment.end_ms)))
    return words


def _emit(source: CaptionSegment, words: list[Word], counter: int) -> CaptionSegment:
    return CaptionSegment(
        id=f"{source.id}-{counter}",
        start_ms=words[0].start_ms,
        end_ms=words[-1].end_ms,
        text=" ".join(w.text for w in words),
        words=[w.copy() for w in words],
        style=source.style.copy(),
        source_id=source.origin_id,
    )


def wrap_segment(segment: CaptionSegment, settings: WrapSettings) -> list[CaptionSegment]:
    """Greedily pack the segment's words into lines.

    A word is appended while the joined text stays within
    ``max_chars_per_line`` and the line holds fewer than
    ``max_words_per_line`` words; otherwise the line is flushed and the word
    starts the next one. A single word longer than the limit becomes its own
    one-word line. Output ids are ``"{source id}-{n}"`` with ``n`` counting
    flushes from 0.
    """
    words = segment.words or synthesize_words(segment)
    if not words:
        return [segment.copy()]

    out: list[CaptionSegment] = []
    acc: list[Word] = []
    acc_text = ""
    for word in words:
        candidate = f"{acc_text} {word.text}" if acc else word.text
        if len(candidate) <= settings.max_chars_per_line and len(acc) < settings.max_words_per_line:
            acc.append(word)
            acc_text = candidate
            continue
        if acc:
            out.append(_emit(segment, acc, len(out)))
        acc = [word]
        acc_text = word.text
    if acc:
        out.append(_emit(segment, acc, len(out)))
    return out


def wrap_timeline(
    timeline: CaptionTimeline,
    settings: WrapSettings,
    min_chars_per_line: int = MIN_CHARS_PER_LINE,
) -> CaptionTimeline:
    """Wrap every segment independently and concatenate the results in order.

    Raises:
        ValidationError: If *settings* falls below the minimums.
    """
    settings.validate(min_chars_per_line)
    wrapped: list[CaptionSegment] = []
    for seg in timeline:
        wrapped.extend(wrap_segment(seg, settings))
    logger.debug(
        f"Wrapped {len(timeline)} segments into {len(wrapped)} "
        f"(max {settings.max_chars_per_line} chars / {settings.max_words_per_line} words)"
    )
    return CaptionTimeline(wrapped)
