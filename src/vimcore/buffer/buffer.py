"""Character-offset buffer façade over ``LineStore``."""

from __future__ import annotations

from typing import Iterator, Optional, TextIO

from vimcore.runtime import telemetry

from .document import LineStore
from .validation import BufferIndexError, ensure_line, ensure_offset, ensure_range


class Buffer:
    """Line-indexed text container addressed by absolute character offsets.

    A buffer always has at least one line. Lines returned by ``line`` keep
    their terminator; the last line never has one.
    """

    def __init__(
        self, *, name: str = "[No Name]", store: Optional[LineStore] = None
    ) -> None:
        self.name = name
        self.store = store or LineStore()

    @classmethod
    def from_text(cls, text: str, *, name: str = "[No Name]") -> "Buffer":
        return cls(name=name, store=LineStore.from_text(text))

    @classmethod
    def from_reader(cls, stream: TextIO, *, name: str = "[No Name]") -> "Buffer":
        return cls.from_text(stream.read(), name=name)

    def write_to(self, stream: TextIO) -> int:
        """Write every line to ``stream`` unchanged; return characters written."""

        written = 0
        with telemetry.span(
            "buffer::write",
            component="buffer",
            metadata={"buffer": self.name, "lines": self.len_lines()},
        ):
            for line in self.store.snapshot():
                stream.write(line)
                written += len(line)
        return written

    @property
    def version(self) -> int:
        return self.store.version

    @property
    def dirty(self) -> bool:
        return self.store.dirty

    def mark_clean(self) -> None:
        self.store.dirty = False

    def len_chars(self) -> int:
        return self.store.char_count

    def len_lines(self) -> int:
        return self.store.line_count

    def line(self, index: int) -> str:
        return self.store.get_line(ensure_line(self.store, index))

    def lines_at(self, index: int) -> Iterator[str]:
        """Iterate lines starting at ``index``; past the end yields nothing."""

        lines = self.store.snapshot()
        for position in range(max(0, index), len(lines)):
            yield lines[position]

    def line_to_char(self, index: int) -> int:
        return self.store.line_start(ensure_line(self.store, index, allow_end=True))

    def char_to_line(self, offset: int) -> int:
        return self.store.line_of(ensure_offset(self.store, offset))

    def char(self, offset: int) -> str:
        if offset < 0 or offset >= self.len_chars():
            raise BufferIndexError("Offset out of range", offset=offset)
        line_index = self.store.line_of(offset)
        return self.store.get_line(line_index)[offset - self.store.line_start(line_index)]

    def text(self) -> str:
        return self.store.text()

    def insert(self, offset: int, text: str) -> None:
        ensure_offset(self.store, offset)
        if not text:
            return
        with telemetry.span(
            "buffer::insert",
            component="buffer",
            metadata={"buffer": self.name, "offset": offset, "length": len(text)},
        ):
            self.store.splice(offset, offset, text)

    def insert_char(self, offset: int, char: str) -> None:
        if len(char) != 1:
            raise ValueError("insert_char expects exactly one character")
        self.insert(offset, char)

    def remove(self, start: int, end: int) -> None:
        start, end = ensure_range(self.store, start, end)
        if start == end:
            return
        with telemetry.span(
            "buffer::remove",
            component="buffer",
            metadata={"buffer": self.name, "start": start, "end": end},
        ):
            self.store.splice(start, end, "")

    def __str__(self) -> str:
        return self.text()
