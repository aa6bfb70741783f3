"""Convert a raw transcription result into a caption timeline (no Qt dependency).

The transcription service hands back nested segments of words, already in
milliseconds::

    {"segments": [{"start": 0, "end": 1200, "text": "hi there",
                   "words": [{"word": "hi", "start": 0, "end": 400}, ...]}]}

A bare list of segment dicts is accepted as well.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from caption_editor.models.caption import CaptionSegment, Word
from caption_editor.models.errors import ValidationError
from caption_editor.models.style import CaptionStyle
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.services.line_wrapper import WrapSettings, wrap_timeline
from caption_editor.utils.config import (
    HORIZONTAL_FONT_SIZE,
    HORIZONTAL_MAX_CHARS_PER_LINE,
    HORIZONTAL_MAX_WORDS_PER_LINE,
    INGEST_ID_PREFIX,
    VERTICAL_ASPECT_THRESHOLD,
    VERTICAL_FONT_SIZE,
    VERTICAL_MAX_CHARS_PER_LINE,
    VERTICAL_MAX_WORDS_PER_LINE,
)

logger = logging.getLogger(__name__)


def is_vertical(width: int, height: int) -> bool:
    """True for mobile/vertical framing (height/width above the threshold)."""
    if not width or not height or width <= 0 or height <= 0:
        return False
    return height / width > VERTICAL_ASPECT_THRESHOLD


def choose_font_size(width: int, height: int) -> int:
    """Pick the default caption font size from the video frame dimensions."""
    return VERTICAL_FONT_SIZE if is_vertical(width, height) else HORIZONTAL_FONT_SIZE


def default_wrap_settings(width: int, height: int) -> WrapSettings:
    """Default line-wrap constraints for the video's framing."""
    if is_vertical(width, height):
        return WrapSettings(VERTICAL_MAX_CHARS_PER_LINE, VERTICAL_MAX_WORDS_PER_LINE)
    return WrapSettings(HORIZONTAL_MAX_CHARS_PER_LINE, HORIZONTAL_MAX_WORDS_PER_LINE)


def _require_ms(raw: Mapping[str, Any], key: str, where: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{where}: '{key}' must be a number of milliseconds, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{where}: '{key}' is not finite, got {value!r}")
    return int(round(value))


def _parse_word(raw: Any, where: str) -> Word:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{where}: expected a mapping, got {type(raw).__name__}")
    text = raw.get("word", raw.get("text"))
    if not isinstance(text, str):
        raise ValidationError(f"{where}: 'word' must be a string")
    start = _require_ms(raw, "start", where)
    end = _require_ms(raw, "end", where)
    if start > end:
        raise ValidationError(f"{where}: start {start} is after end {end}")
    return Word(text.strip(), start, end)


def _segments_of(result: Any) -> Sequence[Any]:
    if isinstance(result, Mapping):
        result = result.get("segments")
    if result is None or isinstance(result, (str, bytes)) or not isinstance(result, Sequence):
        raise ValidationError("Transcription result must be a sequence of segments")
    return result


def parse_segments(
    result: Any,
    style: CaptionStyle,
    id_prefix: str = INGEST_ID_PREFIX,
) -> list[CaptionSegment]:
    """Validate raw transcription segments and turn them into CaptionSegments.

    Segment ``i`` gets id ``"{id_prefix}-{i}"``. Each segment receives its own
    copy of *style*.

    Raises:
        ValidationError: On missing or non-numeric times, or a segment/word
            that ends before it starts.
    """
    segments: list[CaptionSegment] = []
    for i, raw in enumerate(_segments_of(result)):
        where = f"segment {i}"
        if not isinstance(raw, Mapping):
            raise ValidationError(f"{where}: expected a mapping, got {type(raw).__name__}")
        start = _require_ms(raw, "start", where)
        end = _require_ms(raw, "end", where)
        if start > end:
            raise ValidationError(f"{where}: start {start} is after end {end}")
        text = raw.get("text") or ""
        if not isinstance(text, str):
            raise ValidationError(f"{where}: 'text' must be a string")
        words = [
            _parse_word(w, f"{where}, word {j}")
            for j, w in enumerate(raw.get("words") or [])
        ]
        segments.append(CaptionSegment(
            id=f"{id_prefix}-{i}",
            start_ms=start,
            end_ms=end,
            text=text.strip(),
            words=words,
            style=style.copy(),
        ))
    return segments


def ingest_transcription(
    result: Any,
    width: int,
    height: int,
    style: CaptionStyle | None = None,
) -> CaptionTimeline:
    """Build the initial caption timeline from a transcription result.

    Args:
        result: ``{"segments": [...]}`` or a list of segment dicts, in ms.
        width: Video frame width, used only to classify the aspect ratio.
        height: Video frame height.
        style: Base style; defaults to ``CaptionStyle()``. Its font size is
            replaced by the aspect-ratio default.

    Returns:
        A timeline with ids ``segment-0``, ``segment-1``, ... in source order.
    """
    base = (style or CaptionStyle()).merged({"font_size": choose_font_size(width, height)})
    timeline = CaptionTimeline(parse_segments(result, base))
    timeline.sort()
    logger.info(
        f"Ingested {len(timeline)} segments "
        f"({width}x{height}, font_size={base.font_size})"
    )
    return timeline


def ingest_and_wrap(
    result: Any,
    width: int,
    height: int,
    settings: WrapSettings | None = None,
    style: CaptionStyle | None = None,
) -> tuple[CaptionTimeline, CaptionTimeline]:
    """Ingest then line-wrap a transcription.

    Returns:
        ``(ingested, wrapped)``: the ingested timeline is the baseline for
        deletion detection, the wrapped one is what the user edits.
    """
    ingested = ingest_transcription(result, width, height, style)
    wrapped = wrap_timeline(ingested, settings or default_wrap_settings(width, height))
    return ingested, wrapped
