"""Caption data models (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field

from caption_editor.models.style import CaptionStyle


@dataclass(slots=True)
class Word:
    """A single transcribed word with start/end times in milliseconds."""

    text: str
    start_ms: int
    end_ms: int

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def copy(self) -> Word:
        return Word(self.text, self.start_ms, self.end_ms)


@dataclass(slots=True)
class CaptionSegment:
    """A time-coded caption unit with optional word-level timing.

    ``source_id`` points back at the ingestion id (``segment-{i}``) the
    segment was derived from by a split, wrap or merge. Segments loaded
    straight from a transcription leave it unset.
    """

    id: str
    start_ms: int
    end_ms: int
    text: str
    words: list[Word] = field(default_factory=list)
    style: CaptionStyle = field(default_factory=CaptionStyle)
    source_id: str | None = None

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def origin_id(self) -> str:
        """Ingestion id this segment descends from."""
        return self.source_id or self.id

    @property
    def has_word_timings(self) -> bool:
        return bool(self.words)

    def spoken_word_count(self) -> int:
        """Number of non-blank words."""
        return sum(1 for w in self.words if not w.is_blank)

    def contains(self, position_ms: int) -> bool:
        return self.start_ms <= position_ms <= self.end_ms

    def joined_words(self) -> str:
        """Text regenerated from the non-blank words."""
        return " ".join(w.text for w in self.words if not w.is_blank)

    def copy(self) -> CaptionSegment:
        """Return a deep copy (words and style are not shared)."""
        return CaptionSegment(
            id=self.id,
            start_ms=self.start_ms,
            end_ms=self.end_ms,
            text=self.text,
            words=[w.copy() for w in self.words],
            style=self.style.copy(),
            source_id=self.source_id,
        )
