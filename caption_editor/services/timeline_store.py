"""TimelineStore: the editing session's single owner of caption state.

Views (playback, caption list, export) never share the timeline object.
They call commands here and listen to the signals; every mutating command
returns a fresh copy of the resulting timeline.

Undo model: before a mutation is committed the pre-mutation state is pushed
to the HistoryManager (unless it is already the current entry). Before an
undo the live state is pushed too if it is not recorded yet, so redo can
bring it back.
"""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, Signal

from caption_editor.models.caption import CaptionSegment
from caption_editor.models.errors import NotFoundError
from caption_editor.models.style import CaptionStyle
from caption_editor.models.timeline import CaptionTimeline, Snapshot
from caption_editor.services import deletion_detector, segment_editor
from caption_editor.services.history import HistoryManager
from caption_editor.services.line_wrapper import WrapSettings, wrap_timeline
from caption_editor.services.search_replace import WordMatch, find_matches, replace_all
from caption_editor.services.style_preset_manager import StylePresetManager
from caption_editor.services.subtitle_exporter import to_srt
from caption_editor.services.time_sync import select_for_time
from caption_editor.services.transcript_adapter import ingest_and_wrap, parse_segments
from caption_editor.utils.config import (
    MIN_CHARS_PER_LINE,
    MIN_WORD_HIGHLIGHT_MS,
    RETAKE_ID_PREFIX,
    SRT_LINE_ENDING,
)

logger = logging.getLogger(__name__)


def _overlap(a: CaptionSegment, b: CaptionSegment) -> int:
    return min(a.end_ms, b.end_ms) - max(a.start_ms, b.start_ms)


class TimelineStore(QObject):
    """Owns the live caption timeline, its selection and its undo history.

    Signals:
        captions_changed(CaptionTimeline): A copy of the new timeline.
        selection_changed(object): New selected segment id (str or None).
        project_modified(): Captions changed through an edit, undo or redo.
        history_changed(bool, bool): (can_undo, can_redo).
    """

    captions_changed = Signal(object)
    selection_changed = Signal(object)
    project_modified = Signal()
    history_changed = Signal(bool, bool)

    def __init__(self, min_word_highlight_ms: int = MIN_WORD_HIGHLIGHT_MS, parent: QObject = None):
        super().__init__(parent)
        self._timeline = CaptionTimeline()
        self._original = CaptionTimeline()
        self._selected: str | None = None
        self._history = HistoryManager()
        self._min_word_highlight_ms = min_word_highlight_ms

    # ------------------------------------------------------------ state

    @property
    def captions(self) -> CaptionTimeline:
        """A copy of the live timeline."""
        return self._timeline.copy()

    @property
    def original_captions(self) -> CaptionTimeline:
        """A copy of the timeline as ingested, before any edit or wrap."""
        return self._original.copy()

    @property
    def selected_segment_id(self) -> str | None:
        return self._selected

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo or not self._is_recorded()

    @property
    def can_redo(self) -> bool:
        return self._is_recorded() and self._history.can_redo

    def _is_recorded(self) -> bool:
        return self._history.is_current(self._timeline)

    # ------------------------------------------------------------ commit / restore

    def _commit(self, timeline: CaptionTimeline, selection: Any = ...) -> CaptionTimeline:
        timeline.validate()
        if self._is_recorded():
            self._history.discard_redo()
        else:
            self._history.snapshot(self._timeline, self._selected)

        self._timeline = timeline
        if selection is ...:
            selection = self._selected
        if selection is not None and self._timeline.find(selection) is None:
            selection = None
        self._set_selection(selection)

        logger.debug(f"Committed timeline with {len(timeline)} segments")
        self.captions_changed.emit(self.captions)
        self.project_modified.emit()
        self._emit_history()
        return self.captions

    def _restore(self, snap: Snapshot) -> None:
        self._timeline = snap.captions
        self._set_selection(snap.selected_segment_id)
        self.captions_changed.emit(self.captions)
        self.project_modified.emit()
        self._emit_history()

    def _set_selection(self, segment_id: str | None) -> None:
        if segment_id != self._selected:
            self._selected = segment_id
            self.selection_changed.emit(segment_id)

    def _emit_history(self) -> None:
        self.history_changed.emit(self.can_undo, self.can_redo)

    # ------------------------------------------------------------ loading

    def load_transcription(
        self,
        result: Any,
        width: int,
        height: int,
        settings: WrapSettings | None = None,
        style: CaptionStyle | None = None,
    ) -> CaptionTimeline:
        """Ingest and line-wrap a transcription, replacing the current captions."""
        ingested, wrapped = ingest_and_wrap(result, width, height, settings, style)
        self._original = ingested
        logger.info(f"Loaded transcription: {len(ingested)} segments, {len(wrapped)} lines")
        return self._commit(wrapped, None)

    def load(self, timeline: CaptionTimeline, original: CaptionTimeline | None = None) -> CaptionTimeline:
        """Replace the captions with *timeline*.

        *original* is the deletion-detection baseline; defaults to *timeline*.
        """
        timeline = timeline.copy()
        timeline.sort()
        timeline.validate()
        self._original = (original if original is not None else timeline).copy()
        return self._commit(timeline, None)

    # ------------------------------------------------------------ selection / playback

    def select(self, segment_id: str | None) -> None:
        """Select a segment (or clear the selection). Not recorded in history."""
        if segment_id is not None and self._timeline.find(segment_id) is None:
            raise NotFoundError(segment_id)
        self._set_selection(segment_id)

    def sync_to_time(self, position_ms: int) -> str | None:
        """Move the selection to the segment playing at *position_ms*."""
        self._set_selection(select_for_time(self._timeline, position_ms, self._selected))
        return self._selected

    # ------------------------------------------------------------ text edits

    def replace_text(self, segment_id: str, new_text: str) -> CaptionTimeline:
        return self._commit(segment_editor.replace_text(
            self._timeline, segment_id, new_text, self._min_word_highlight_ms))

    def edit_word(self, segment_id: str, index: int, new_text: str) -> CaptionTimeline:
        return self._commit(segment_editor.edit_word(
            self._timeline, segment_id, index, new_text, self._min_word_highlight_ms))

    def delete_word(self, segment_id: str, index: int) -> CaptionTimeline:
        return self._commit(segment_editor.delete_word(self._timeline, segment_id, index))

    def merge_words(self, segment_id: str, index: int) -> CaptionTimeline:
        return self._commit(segment_editor.merge_words(self._timeline, segment_id, index))

    def replace_all(
        self,
        term: str,
        replacement: str,
        case_sensitive: bool = False,
        whole_word: bool = False,
    ) -> int:
        """Replace *term* in every word. Returns the number of words changed."""
        timeline, count = replace_all(self._timeline, term, replacement, case_sensitive, whole_word)
        if count:
            self._commit(timeline)
        return count

    def find(self, term: str, case_sensitive: bool = False, whole_word: bool = False) -> list[WordMatch]:
        return find_matches(self._timeline, term, case_sensitive, whole_word)

    # ------------------------------------------------------------ structure edits

    def split(self, segment_id: str, split_ms: int) -> CaptionTimeline:
        """Split a segment at *split_ms*; the first half becomes the selection."""
        timeline, first_id = segment_editor.split_segment(self._timeline, segment_id, split_ms)
        return self._commit(timeline, first_id)

    def merge_with_next(self, segment_id: str) -> CaptionTimeline:
        idx = self._timeline.index_of(segment_id)
        timeline = segment_editor.merge_with_next(self._timeline, segment_id)
        absorbed = self._timeline[idx + 1].id
        selection = segment_id if self._selected == absorbed else self._selected
        return self._commit(timeline, selection)

    def delete_segment(self, segment_id: str) -> CaptionTimeline:
        return self._commit(segment_editor.delete_segment(self._timeline, segment_id))

    def rewrap(self, settings: WrapSettings, min_chars_per_line: int = MIN_CHARS_PER_LINE) -> CaptionTimeline:
        """Re-flow every segment with new line constraints."""
        return self._commit(wrap_timeline(self._timeline, settings, min_chars_per_line))

    def merge_retranscription(
        self,
        start_ms: int,
        end_ms: int,
        result: Any,
        settings: WrapSettings | None = None,
    ) -> CaptionTimeline:
        """Replace captions overlapping ``[start_ms, end_ms)`` with a fresh transcription.

        New segments are ids ``retake-{start_ms}-{i}``. Each one is attributed
        to the replaced segment it overlaps most, so deletion detection keeps
        comparing against the original transcript.
        """
        replaced = [
            seg for seg in self._timeline
            if seg.start_ms < end_ms and seg.end_ms > start_ms
        ]
        style = replaced[0].style if replaced else CaptionStyle()
        fresh = parse_segments(result, style, id_prefix=f"{RETAKE_ID_PREFIX}-{start_ms}")
        for seg in fresh:
            best = max(replaced, key=lambda r: _overlap(r, seg), default=None)
            if best is not None and _overlap(best, seg) > 0:
                seg.source_id = best.origin_id
        if settings is not None:
            fresh = wrap_timeline(CaptionTimeline(fresh), settings).segments
        return self._commit(segment_editor.merge_retranscription(self._timeline, start_ms, end_ms, fresh))

    # ------------------------------------------------------------ style

    def apply_style_to_all(self, overrides: dict) -> CaptionTimeline:
        return self._commit(segment_editor.apply_style_to_all(self._timeline, overrides))

    def set_segment_style(self, segment_id: str, style: CaptionStyle) -> CaptionTimeline:
        return self._commit(segment_editor.set_segment_style(self._timeline, segment_id, style))

    def apply_preset(self, name: str, presets: StylePresetManager) -> CaptionTimeline:
        """Apply a named style preset to every segment."""
        style = presets.load_preset(name)
        if style is None:
            raise NotFoundError(name)
        return self.apply_style_to_all(style.to_dict())

    # ------------------------------------------------------------ history

    def undo(self) -> bool:
        """Restore the previous state. Returns False if there is nothing to undo."""
        if not self._is_recorded():
            self._history.snapshot(self._timeline, self._selected)
        snap = self._history.undo()
        if snap is None:
            return False
        self._restore(snap)
        logger.debug(f"Undo -> history entry {self._history.cursor}")
        return True

    def redo(self) -> bool:
        """Re-apply an undone state. Returns False if there is nothing to redo."""
        if not self.can_redo:
            return False
        self._restore(self._history.redo())
        logger.debug(f"Redo -> history entry {self._history.cursor}")
        return True

    # ------------------------------------------------------------ export

    def has_deletions(self) -> bool:
        """True if editing removed spoken words since ingestion."""
        return deletion_detector.has_word_deletions(self._original, self._timeline)

    def deleted_word_counts(self) -> dict[str, int]:
        return deletion_detector.deleted_word_counts(self._original, self._timeline)

    def to_srt(self, line_ending: str = SRT_LINE_ENDING) -> str:
        return to_srt(self._timeline, line_ending)
