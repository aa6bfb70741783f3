"""Linear undo/redo history of timeline snapshots (no Qt dependency)."""

from __future__ import annotations

from caption_editor.models.timeline import CaptionTimeline, Snapshot


def _detached(snap: Snapshot) -> Snapshot:
    return Snapshot.capture(snap.captions, snap.selected_segment_id)


class HistoryManager:
    """Snapshot stack with a cursor.

    Starts with one empty snapshot at index 0. ``snapshot()`` drops every
    entry after the cursor before appending; ``undo()``/``redo()`` only move
    the cursor. Snapshots handed out are copies, so callers cannot rewrite
    recorded states.
    """

    def __init__(self) -> None:
        self._snapshots: list[Snapshot] = [Snapshot.empty()]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Snapshot:
        """A copy of the entry at the cursor."""
        return _detached(self._snapshots[self._cursor])

    def is_current(self, timeline: CaptionTimeline) -> bool:
        """True if *timeline* equals the captions of the entry at the cursor."""
        return self._snapshots[self._cursor].captions == timeline

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def snapshot(self, timeline: CaptionTimeline, selected_segment_id: str | None) -> Snapshot:
        """Record a copy of *timeline* and the selection as the newest entry."""
        del self._snapshots[self._cursor + 1:]
        snap = Snapshot.capture(timeline, selected_segment_id)
        self._snapshots.append(snap)
        self._cursor = len(self._snapshots) - 1
        return _detached(snap)

    def discard_redo(self) -> None:
        """Drop every entry after the cursor."""
        del self._snapshots[self._cursor + 1:]

    def undo(self) -> Snapshot | None:
        """Step back; return the snapshot now current, or None at the start."""
        if not self.can_undo:
            return None
        self._cursor -= 1
        return _detached(self._snapshots[self._cursor])

    def redo(self) -> Snapshot | None:
        """Step forward; return the snapshot now current, or None at the end."""
        if not self.can_redo:
            return None
        self._cursor += 1
        return _detached(self._snapshots[self._cursor])

    def clear(self) -> None:
        """Back to the initial single empty snapshot."""
        self._snapshots = [Snapshot.empty()]
        self._cursor = 0
