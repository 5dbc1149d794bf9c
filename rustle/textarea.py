"""A small multi-line text buffer driven by key events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable

TAB_WIDTH = 4


class Key(Enum):
    """Keys a text area understands."""

    CHAR = auto()
    ENTER = auto()
    TAB = auto()
    BACKSPACE = auto()
    DELETE = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    ESC = auto()
    NULL = auto()


@dataclass(frozen=True)
class Input:
    """One key press, with the character for ``Key.CHAR`` and modifier flags."""

    key: Key = Key.NULL
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False


class TextArea:
    """Editable lines of text with a cursor.

    The buffer always holds at least one (possibly empty) line.
    """

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self.lines: list[str] = list(lines) if lines is not None else []
        if not self.lines:
            self.lines = [""]
        self.cursor: tuple[int, int] = (0, 0)

    def __repr__(self) -> str:
        return f"TextArea(lines={self.lines!r}, cursor={self.cursor!r})"

    def text(self) -> str:
        """The whole buffer with lines joined by newlines."""
        return "\n".join(self.lines)

    def input(self, event: Input) -> bool:
        """Apply a key event; return True if the text changed."""
        if event.key is Key.CHAR:
            if event.ctrl:
                action = self._ctrl_bindings().get(event.char.lower())
                return action() if action else False
            if event.alt or not event.char:
                return False
            return self._insert(event.char)
        action = self._key_bindings().get(event.key)
        return action() if action else False

    def _key_bindings(self) -> dict[Key, Callable[[], bool]]:
        return {
            Key.ENTER: self._newline,
            Key.TAB: self._tab,
            Key.BACKSPACE: self._backspace,
            Key.DELETE: self._delete,
            Key.LEFT: self._left,
            Key.RIGHT: self._right,
            Key.UP: self._up,
            Key.DOWN: self._down,
            Key.HOME: self._home,
            Key.END: self._end,
        }

    def _ctrl_bindings(self) -> dict[str, Callable[[], bool]]:
        return {
            "h": self._backspace,
            "d": self._delete,
            "m": self._newline,
            "f": self._right,
            "b": self._left,
            "p": self._up,
            "n": self._down,
            "a": self._home,
            "e": self._end,
            "k": self._kill_to_end,
        }

    def _insert(self, s: str) -> bool:
        row, col = self.cursor
        line = self.lines[row]
        self.lines[row] = line[:col] + s + line[col:]
        self.cursor = (row, col + len(s))
        return True

    def _tab(self) -> bool:
        _, col = self.cursor
        return self._insert(" " * (TAB_WIDTH - col % TAB_WIDTH))

    def _newline(self) -> bool:
        row, col = self.cursor
        line = self.lines[row]
        self.lines[row : row + 1] = [line[:col], line[col:]]
        self.cursor = (row + 1, 0)
        return True

    def _backspace(self) -> bool:
        row, col = self.cursor
        if col > 0:
            line = self.lines[row]
            self.lines[row] = line[: col - 1] + line[col:]
            self.cursor = (row, col - 1)
            return True
        if row > 0:
            prev = self.lines[row - 1]
            self.lines[row - 1 : row + 1] = [prev + self.lines[row]]
            self.cursor = (row - 1, len(prev))
            return True
        return False

    def _delete(self) -> bool:
        row, col = self.cursor
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col] + line[col + 1 :]
            return True
        if row + 1 < len(self.lines):
            self.lines[row : row + 2] = [line + self.lines[row + 1]]
            return True
        return False

    def _kill_to_end(self) -> bool:
        row, col = self.cursor
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col]
            return True
        return self._delete()

    def _left(self) -> bool:
        row, col = self.cursor
        if col > 0:
            self.cursor = (row, col - 1)
        elif row > 0:
            self.cursor = (row - 1, len(self.lines[row - 1]))
        return False

    def _right(self) -> bool:
        row, col = self.cursor
        if col < len(self.lines[row]):
            self.cursor = (row, col + 1)
        elif row + 1 < len(self.lines):
            self.cursor = (row + 1, 0)
        return False

    def _up(self) -> bool:
        row, col = self.cursor
        if row > 0:
            self.cursor = (row - 1, min(col, len(self.lines[row - 1])))
        return False

    def _down(self) -> bool:
        row, col = self.cursor
        if row + 1 < len(self.lines):
            self.cursor = (row + 1, min(col, len(self.lines[row + 1])))
        return False

    def _home(self) -> bool:
        self.cursor = (self.cursor[0], 0)
        return False

    def _end(self) -> bool:
        row, _ = self.cursor
        self.cursor = (row, len(self.lines[row]))
        return False