"""Single-line editor used to compose ``:`` commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from vimcore.modes.base_mode import KeyInput


class ExStatus(str, Enum):
    STILL_EDITING = "still_editing"
    ABORTED = "aborted"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class ExResult:
    """Outcome of feeding one key to ``ExLineEditor``."""

    status: ExStatus
    text: Optional[str] = None

    @classmethod
    def still_editing(cls) -> "ExResult":
        return cls(ExStatus.STILL_EDITING)

    @classmethod
    def aborted(cls) -> "ExResult":
        return cls(ExStatus.ABORTED)

    @classmethod
    def finished(cls, text: str) -> "ExResult":
        return cls(ExStatus.FINISHED, text)


class ExLineEditor:
    """Text plus a cursor index in ``[0, len(text)]``."""

    def __init__(self) -> None:
        self._chars: List[str] = []
        self._cursor = 0

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor_index(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._chars)

    def clear(self) -> None:
        self._chars.clear()
        self._cursor = 0

    def handle_key(self, key: KeyInput) -> ExResult:
        if key.modifiers:
            return ExResult.still_editing()

        if key.is_character:
            self._chars.insert(self._cursor, key.key)
            self._cursor += 1
            return ExResult.still_editing()

        if key.key == "ENTER":
            text = self.text
            self.clear()
            return ExResult.finished(text)

        if key.key == "BACKSPACE":
            if not self._chars:
                self.clear()
                return ExResult.aborted()
            if self._cursor > 0:
                del self._chars[self._cursor - 1]
                self._cursor -= 1
            return ExResult.still_editing()

        if key.key == "DELETE":
            if self._cursor < len(self._chars):
                del self._chars[self._cursor]
            return ExResult.still_editing()

        if key.key == "LEFT":
            self._cursor = max(0, self._cursor - 1)
            return ExResult.still_editing()

        if key.key == "RIGHT":
            self._cursor = min(len(self._chars), self._cursor + 1)
            return ExResult.still_editing()

        if key.key == "ESC":
            self.clear()
            return ExResult.aborted()

        return ExResult.still_editing()


__all__ = ["ExLineEditor", "ExResult", "ExStatus"]
