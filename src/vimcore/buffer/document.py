"""Line storage backing ``Buffer``."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

# ``\r\n`` must come first so it wins over the lone ``\r`` alternative.
TERMINATOR_PATTERN = re.compile("\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")
TERMINATOR_CHARS = frozenset("\n\r\x0b\x0c\x85\u2028\u2029")


def terminator_length(line: str) -> int:
    """Length of the terminator ending ``line`` (``\\r\\n`` counts as 2)."""

    if line.endswith("\r\n"):
        return 2
    if line and line[-1] in TERMINATOR_CHARS:
        return 1
    return 0


def content_length(line: str) -> int:
    """Number of editable characters in ``line``, terminator excluded."""

    return len(line) - terminator_length(line)


def split_lines(text: str) -> List[str]:
    """Split ``text`` after every terminator, keeping the terminators.

    The result always has at least one entry; text ending in a terminator
    yields a trailing empty line.
    """

    lines: List[str] = []
    start = 0
    for match in TERMINATOR_PATTERN.finditer(text):
        lines.append(text[start : match.end()])
        start = match.end()
    lines.append(text[start:])
    return lines


@dataclass(slots=True)
class LineStore:
    """Mutable list-of-lines text model.

    Every line except the last keeps its terminator, so joining the lines
    reproduces the original text exactly. Line start offsets are cached and
    rebuilt lazily after an edit.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False
    _starts: Optional[List[int]] = field(default=None, repr=False)

    @classmethod
    def from_text(cls, text: str) -> "LineStore":
        return cls(_lines=split_lines(text))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def char_count(self) -> int:
        starts = self._line_starts()
        return starts[-1] + len(self._lines[-1])

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_start(self, index: int) -> int:
        if index == len(self._lines):
            return self.char_count
        return self._line_starts()[index]

    def line_of(self, offset: int) -> int:
        return bisect_right(self._line_starts(), offset) - 1

    def text(self) -> str:
        return "".join(self._lines)

    def splice(self, start: int, end: int, insert: str) -> None:
        """Replace characters ``[start, end)`` with ``insert``.

        Only the affected lines plus one neighbour on each side are re-split,
        which is enough to merge or break a ``\\r\\n`` pair at the seams.
        """

        first = self.line_of(start)
        last = self.line_of(end)
        lo = max(0, first - 1)
        hi = min(len(self._lines), last + 2)
        base = self.line_start(lo)
        region = "".join(self._lines[lo:hi])
        region = region[: start - base] + insert + region[end - base :]
        pieces = split_lines(region)
        if hi < len(self._lines):
            # the region ended on a terminator; the next line is untouched
            pieces.pop()
        self._lines[lo:hi] = pieces
        self._starts = None
        self.version += 1
        self.dirty = True

    def _line_starts(self) -> List[int]:
        if self._starts is None:
            starts: List[int] = []
            running = 0
            for line in self._lines:
                starts.append(running)
                running += len(line)
            self._starts = starts
        return self._starts


__all__ = [
    "LineStore",
    "TERMINATOR_CHARS",
    "TERMINATOR_PATTERN",
    "content_length",
    "split_lines",
    "terminator_length",
]
