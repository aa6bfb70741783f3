"""Detect whether editing removed spoken words (media must be cut, not just re-captioned).

The comparison is keyed by ingestion id. Segments derived by a split, wrap
or merge carry that id as ``source_id``, so their words still count toward
the transcript segment they came from.
"""

from __future__ import annotations

import logging
from collections import Counter

from caption_editor.models.timeline import CaptionTimeline

logger = logging.getLogger(__name__)


def word_counts_by_origin(timeline: CaptionTimeline) -> Counter[str]:
    """Non-blank word count per origin id."""
    counts: Counter[str] = Counter()
    for seg in timeline:
        counts[seg.origin_id] += seg.spoken_word_count()
    return counts


def deleted_word_counts(original: CaptionTimeline, current: CaptionTimeline) -> dict[str, int]:
    """Return ``{origin id: words lost}`` for every original segment that lost words."""
    before = word_counts_by_origin(original)
    after = word_counts_by_origin(current)
    return {
        origin: count - after.get(origin, 0)
        for origin, count in before.items()
        if after.get(origin, 0) < count
    }


def has_word_deletions(original: CaptionTimeline, current: CaptionTimeline) -> bool:
    """True if any original segment's non-blank word count strictly decreased."""
    lost = deleted_word_counts(original, current)
    if lost:
        logger.info(f"Word deletions detected in {len(lost)} segment(s): {lost}")
    return bool(lost)
