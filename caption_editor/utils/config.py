"""Application configuration constants."""

from __future__ import annotations

APP_NAME = "CaptionEditor"
ORG_NAME = "CaptionEditor"

# Ingestion
INGEST_ID_PREFIX = "segment"
RETAKE_ID_PREFIX = "retake"
VERTICAL_ASPECT_THRESHOLD = 1.5  # height / width above this = 9:16-style framing
VERTICAL_FONT_SIZE = 50
HORIZONTAL_FONT_SIZE = 85

# Line wrap
MIN_CHARS_PER_LINE = 12
MIN_WORDS_PER_LINE = 1
VERTICAL_MAX_CHARS_PER_LINE = 12
VERTICAL_MAX_WORDS_PER_LINE = 2
HORIZONTAL_MAX_CHARS_PER_LINE = 16
HORIZONTAL_MAX_WORDS_PER_LINE = 5

# Editing
MIN_WORD_HIGHLIGHT_MS = 500  # edited words stay highlighted at least this long

# Export
SRT_LINE_ENDING = "\n"
