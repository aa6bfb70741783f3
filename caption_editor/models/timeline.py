"""Caption timeline and history snapshot models."""

from __future__ import annotations

from dataclasses import dataclass, field

from caption_editor.models.caption import CaptionSegment
from caption_editor.models.errors import NotFoundError, ValidationError


@dataclass(slots=True)
class CaptionTimeline:
    """An ordered collection of caption segments, ascending by start time."""

    segments: list[CaptionSegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, index: int) -> CaptionSegment:
        return self.segments[index]

    @property
    def ids(self) -> list[str]:
        return [seg.id for seg in self.segments]

    def segment_at(self, position_ms: int) -> CaptionSegment | None:
        """Return the first segment whose ``[start, end]`` contains the position.

        Both ends are inclusive, so on a shared boundary the earlier segment wins.
        """
        for seg in self.segments:
            if seg.start_ms > position_ms:
                break
            if seg.end_ms >= position_ms:
                return seg
        return None

    def index_of(self, segment_id: str) -> int:
        """Return the index of the segment with *segment_id*.

        Raises:
            NotFoundError: If no segment carries that id.
        """
        for i, seg in enumerate(self.segments):
            if seg.id == segment_id:
                return i
        raise NotFoundError(segment_id)

    def find(self, segment_id: str) -> CaptionSegment | None:
        for seg in self.segments:
            if seg.id == segment_id:
                return seg
        return None

    def sort(self) -> None:
        """Re-sort by start time (stable, so ties keep their order)."""
        self.segments.sort(key=lambda s: s.start_ms)

    def copy(self) -> CaptionTimeline:
        """Return a deep copy; mutating it never touches this timeline."""
        return CaptionTimeline([seg.copy() for seg in self.segments])

    def validate(self) -> None:
        """Check id uniqueness and time ranges.

        Raises:
            ValidationError: On a duplicate id or a segment ending before it starts.
        """
        seen: set[str] = set()
        for seg in self.segments:
            if seg.id in seen:
                raise ValidationError(f"Duplicate segment id: {seg.id}")
            seen.add(seg.id)
            if seg.start_ms > seg.end_ms:
                raise ValidationError(
                    f"Segment {seg.id} ends before it starts ({seg.start_ms} > {seg.end_ms})"
                )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Point-in-time copy of the captions and selection, used for undo/redo."""

    captions: CaptionTimeline
    selected_segment_id: str | None = None

    @classmethod
    def capture(cls, timeline: CaptionTimeline, selected_segment_id: str | None) -> Snapshot:
        return cls(timeline.copy(), selected_segment_id)

    @classmethod
    def empty(cls) -> Snapshot:
        return cls(CaptionTimeline(), None)
