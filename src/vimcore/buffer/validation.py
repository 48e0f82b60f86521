"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import LineStore


class BufferIndexError(IndexError):
    """Raised when a caller hands the buffer an out-of-range offset or line."""

    def __init__(
        self, message: str, *, offset: int | None = None, line: int | None = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.line = line


def ensure_offset(store: LineStore, offset: int) -> int:
    if offset < 0 or offset > store.char_count:
        raise BufferIndexError("Offset out of range", offset=offset)
    return offset


def ensure_range(store: LineStore, start: int, end: int) -> tuple[int, int]:
    ensure_offset(store, start)
    ensure_offset(store, end)
    if start > end:
        raise BufferIndexError("Range start after end", offset=start)
    return start, end


def ensure_line(store: LineStore, line: int, *, allow_end: bool = False) -> int:
    limit = store.line_count if allow_end else store.line_count - 1
    if line < 0 or line > limit:
        raise BufferIndexError("Line out of range", line=line)
    return line
