"""Scrolling window over a buffer with a sticky-column cursor."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from vimcore.buffer import TERMINATOR_CHARS, Buffer, content_length, terminator_length
from vimcore.runtime import telemetry

Position = Tuple[int, int]  # (column, line)
Size = Tuple[int, int]  # (columns, rows)


class VisibleLines:
    """Finite, restartable view of ``count`` buffer lines from ``start``.

    Each iteration reads the buffer afresh, so the same object can be
    rendered repeatedly.
    """

    __slots__ = ("_buffer", "_start", "_count")

    def __init__(self, buffer: Buffer, start: int, count: int) -> None:
        self._buffer = buffer
        self._start = start
        self._count = max(0, count)

    @property
    def start(self) -> int:
        return self._start

    def _stop(self) -> int:
        return min(self._start + self._count, self._buffer.len_lines())

    def __iter__(self) -> Iterator[str]:
        for index in range(self._start, self._stop()):
            yield self._buffer.line(index)

    def __len__(self) -> int:
        return max(0, self._stop() - self._start)


class Viewport:
    """Owns one buffer, a screen size, a scroll offset and a cursor.

    Every public operation leaves ``cursor`` on an existing line at a column
    no greater than that line's editable length, and leaves the cursor
    visible, i.e. ``rel_cursor_pos()`` inside ``[0, size)``.
    """

    def __init__(self, cols: int, rows: int, buffer: Optional[Buffer] = None) -> None:
        self.logger = telemetry.get_logger("vimcore.view")
        self._buffer = buffer if buffer is not None else Buffer()
        self._size: Size = (max(1, cols), max(1, rows))
        self._scroll: Position = (0, 0)
        self._cursor: Position = (0, 0)
        self._sticky_col = 0

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def size(self) -> Size:
        return self._size

    @property
    def scroll_offset(self) -> Position:
        return self._scroll

    @property
    def cursor(self) -> Position:
        return self._cursor

    @property
    def sticky_column(self) -> int:
        return self._sticky_col

    def set_buffer(self, buffer: Buffer) -> None:
        self._buffer = buffer
        self._scroll = (0, 0)
        self._cursor = (0, 0)
        self._sticky_col = 0
        telemetry.record_event(
            "viewport.set_buffer",
            level="debug",
            data={"buffer": buffer.name, "lines": buffer.len_lines()},
        )

    def resize(self, cols: int, rows: int) -> None:
        cols, rows = max(1, cols), max(1, rows)
        rel_x, rel_y = self.rel_cursor_pos()
        x, y = self._scroll
        if rel_y >= rows:
            y += rel_y - rows + 1
        if rel_x >= cols:
            x += rel_x - cols + 1
        self._scroll = (x, y)
        self._size = (cols, rows)
        telemetry.record_event(
            "viewport.resize",
            level="debug",
            data={"size": self._size, "scroll": self._scroll},
        )

    def visible_lines(self) -> VisibleLines:
        return VisibleLines(self._buffer, self._scroll[1], self._size[1])

    def visible_lines_from(self, row: int) -> VisibleLines:
        row = max(0, row)
        return VisibleLines(self._buffer, self._scroll[1] + row, self._size[1] - row)

    def rel_cursor_pos(self) -> Position:
        return (
            self._cursor[0] - self._scroll[0],
            self._cursor[1] - self._scroll[1],
        )

    # -- motion -----------------------------------------------------------

    def move_cursor_down(self, lines: int) -> None:
        line = self._cursor[1]
        target = min(line + max(0, lines), self._buffer.len_lines() - 1)

        x, y = self._scroll
        bottom = y + self._size[1]
        if target >= bottom:
            y += target - bottom + 1
        self._scroll = (x, y)

        self._cursor = (self._sticky_col, target)
        self._settle_column()

    def move_cursor_up(self, lines: int) -> None:
        line = self._cursor[1]
        target = max(0, line - max(0, lines))

        x, y = self._scroll
        if target < y:
            y = target
        self._scroll = (x, y)

        self._cursor = (self._sticky_col, target)
        self._settle_column()

    def move_cursor_left(self, cols: int) -> None:
        col, line = self._cursor
        self._cursor = (max(0, col - max(0, cols)), line)
        self._settle_column(remember=True)

    def move_cursor_right(self, cols: int) -> None:
        col, line = self._cursor
        self._cursor = (col + max(0, cols), line)
        self._settle_column(remember=True)

    # -- editing ----------------------------------------------------------

    def insert_char(self, char: str) -> None:
        if char in TERMINATOR_CHARS:
            self.insert_enter()
            return
        self._buffer.insert_char(self._cursor_offset(), char)
        col, line = self._cursor
        self._cursor = (col + 1, line)
        self._settle_column(remember=True)

    def insert_enter(self) -> None:
        offset = self._cursor_offset()
        # a "\n" right after a lone "\r" would fuse into one "\r\n" boundary
        newline = "\r" if offset and self._buffer.char(offset - 1) == "\r" else "\n"
        self._buffer.insert_char(offset, newline)
        target = self._buffer.char_to_line(offset + 1)
        self.move_cursor_down(target - self._cursor[1])
        self._cursor = (offset + 1 - self._buffer.line_to_char(target), target)
        self._settle_column(remember=True)

    def backspace(self) -> None:
        col, line = self._cursor
        if (col, line) == (0, 0):
            return

        line_start = self._buffer.line_to_char(line)
        end = line_start + col
        if col == 0:
            # the character before the cursor is the previous line's terminator
            start = line_start - terminator_length(self._buffer.line(line - 1))
        else:
            start = end - 1
        self._buffer.remove(start, end)

        new_line = self._buffer.char_to_line(start)
        if new_line != line:
            self.move_cursor_up(line - new_line)
        self._cursor = (start - self._buffer.line_to_char(new_line), new_line)
        self._settle_column(remember=True)

    def delete(self) -> None:
        col, line = self._cursor
        offset = self._cursor_offset()
        if offset < self._buffer.len_chars():
            end = offset + 1
            if self._buffer.line(line)[col:].startswith("\r\n"):
                end += 1
            self._buffer.remove(offset, end)
        self._settle_column()

    # -- helpers ----------------------------------------------------------

    def _cursor_offset(self) -> int:
        col, line = self._cursor
        return self._buffer.line_to_char(line) + col

    def _line_limit(self, line: int) -> int:
        return content_length(self._buffer.line(line))

    def _settle_column(self, *, remember: bool = False) -> None:
        """Clamp the cursor column to its line and scroll it into view."""

        col, line = self._cursor
        col = max(0, min(col, self._line_limit(line)))
        self._cursor = (col, line)
        if remember:
            self._sticky_col = col

        x, y = self._scroll
        if col < x:
            x = col
        elif col >= x + self._size[0]:
            x = col - self._size[0] + 1
        self._scroll = (x, y)


__all__ = ["Position", "Size", "Viewport", "VisibleLines"]
