"""Line-indexed text buffer and its storage."""

from .buffer import Buffer
from .document import (
    LineStore,
    TERMINATOR_CHARS,
    content_length,
    split_lines,
    terminator_length,
)
from .validation import BufferIndexError, ensure_line, ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "LineStore",
    "TERMINATOR_CHARS",
    "BufferIndexError",
    "content_length",
    "split_lines",
    "terminator_length",
    "ensure_line",
    "ensure_offset",
    "ensure_range",
]
