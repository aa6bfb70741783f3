"""Keep the selected caption in step with the playback position."""

from __future__ import annotations

from caption_editor.models.timeline import CaptionTimeline


def select_for_time(
    timeline: CaptionTimeline,
    position_ms: int,
    selected_segment_id: str | None,
) -> str | None:
    """Return the selection that should be active at *position_ms*.

    The first segment containing the position (inclusive bounds) wins. When
    no segment contains it, the current selection is returned unchanged; the
    selector never clears a selection on its own.
    """
    seg = timeline.segment_at(position_ms)
    if seg is None:
        return selected_segment_id
    return seg.id
