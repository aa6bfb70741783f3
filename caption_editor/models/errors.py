"""Exceptions raised by the caption editing engine."""


class CaptionEngineError(Exception):
    """Base class for every engine error."""


class ValidationError(CaptionEngineError, ValueError):
    """Malformed input: bad timestamps, constraints below minimum, bad indices."""


class NotFoundError(CaptionEngineError, LookupError):
    """A referenced segment id does not exist in the timeline."""

    def __init__(self, segment_id: str):
        super().__init__(f"Segment not found: {segment_id}")
        self.segment_id = segment_id
