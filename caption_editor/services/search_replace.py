"""Find and replace text across caption words."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from caption_editor.models.errors import ValidationError
from caption_editor.models.timeline import CaptionTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordMatch:
    """Location of a search hit."""

    segment_id: str
    word_index: int
    start_ms: int


def _pattern(term: str, case_sensitive: bool, whole_word: bool) -> re.Pattern[str]:
    if not term:
        raise ValidationError("Search term must not be empty")
    escaped = re.escape(term)
    if whole_word:
        escaped = rf"\b{escaped}\b"
    return re.compile(escaped, 0 if case_sensitive else re.IGNORECASE)


def find_matches(
    timeline: CaptionTimeline,
    term: str,
    case_sensitive: bool = False,
    whole_word: bool = False,
) -> list[WordMatch]:
    """Return every word containing *term*, in timeline order."""
    pattern = _pattern(term, case_sensitive, whole_word)
    return [
        WordMatch(seg.id, i, word.start_ms)
        for seg in timeline
        for i, word in enumerate(seg.words)
        if pattern.search(word.text)
    ]


def replace_all(
    timeline: CaptionTimeline,
    term: str,
    replacement: str,
    case_sensitive: bool = False,
    whole_word: bool = False,
) -> tuple[CaptionTimeline, int]:
    """Replace *term* in every word; word timings are kept as they are.

    Returns:
        ``(new_timeline, number_of_words_changed)``.
    """
    pattern = _pattern(term, case_sensitive, whole_word)
    result = timeline.copy()
    count = 0
    for seg in result:
        touched = False
        for word in seg.words:
            new_text = pattern.sub(lambda _m: replacement, word.text)
            if new_text != word.text:
                word.text = new_text
                count += 1
                touched = True
        if touched:
            seg.text = seg.joined_words()
    logger.debug(f"Replaced {term!r} with {replacement!r} in {count} words")
    return result, count
