"""Export / import caption timelines in SRT format."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from caption_editor.models.caption import CaptionSegment
from caption_editor.models.errors import ValidationError
from caption_editor.models.timeline import CaptionTimeline
from caption_editor.utils.config import INGEST_ID_PREFIX, SRT_LINE_ENDING
from caption_editor.utils.time_utils import ms_to_srt_time, srt_time_to_ms

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def to_srt(timeline: CaptionTimeline, line_ending: str = SRT_LINE_ENDING) -> str:
    """Render the timeline as SRT text.

    Segments with blank text are skipped and the rest renumbered from 1.
    Runs of whitespace inside a caption collapse to a single space.
    """
    blocks: list[str] = []
    for seg in timeline:
        text = _WS_RE.sub(" ", seg.text).strip()
        if not text:
            continue
        blocks.append(line_ending.join([
            str(len(blocks) + 1),
            f"{ms_to_srt_time(seg.start_ms)} --> {ms_to_srt_time(seg.end_ms)}",
            text,
            "",
        ]))
    return line_ending.join(blocks)


def export_srt(
    timeline: CaptionTimeline,
    output_path: Path,
    line_ending: str = SRT_LINE_ENDING,
) -> None:
    """Export a CaptionTimeline to an SRT file.

    Args:
        timeline: The captions to export.
        output_path: Path to write the SRT file.
        line_ending: ``"\\n"`` or ``"\\r\\n"``.
    """
    output_path.write_text(to_srt(timeline, line_ending), encoding="utf-8", newline="")
    logger.info(f"Exported {len(timeline)} captions to {output_path}")


_TIME_RE = re.compile(
    r"(\d{1,2}:\d{2}:\d{2}[,.]\d{3})\s*-->\s*(\d{1,2}:\d{2}:\d{2}[,.]\d{3})"
)


def parse_srt(text: str) -> CaptionTimeline:
    """Parse SRT text into a timeline without word timings.

    Segment ids follow ingestion order (``segment-0``, ``segment-1``, ...).

    Raises:
        ValidationError: If a cue ends before it starts.
    """
    timeline = CaptionTimeline()
    blocks = re.split(r"\n\s*\n", text.replace("\r\n", "\n").strip())
    for block in blocks:
        lines = block.strip().splitlines()
        if len(lines) < 2:
            continue
        m = _TIME_RE.search(lines[1] if len(lines) > 1 else lines[0])
        if not m:
            continue
        start = srt_time_to_ms(m.group(1))
        end = srt_time_to_ms(m.group(2))
        if start > end:
            raise ValidationError(f"SRT cue ends before it starts: {lines[1].strip()}")
        content = "\n".join(lines[2:]).strip()
        if content:
            timeline.segments.append(CaptionSegment(
                id=f"{INGEST_ID_PREFIX}-{len(timeline)}",
                start_ms=start,
                end_ms=end,
                text=content,
            ))
    timeline.sort()
    return timeline


def import_srt(path: Path) -> CaptionTimeline:
    """Read an SRT file and return a CaptionTimeline."""
    return parse_srt(path.read_text(encoding="utf-8-sig"))
