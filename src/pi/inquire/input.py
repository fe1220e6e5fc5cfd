"""Grapheme-aware single-line input buffer.

The cursor is a grapheme index, so composed emoji and base characters with
variation selectors move and delete as one user-visible character.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.utils import get_segmenter, is_word_grapheme

_segmenter = get_segmenter()


class Magnitude(enum.Enum):
    CHAR = "char"
    WORD = "word"
    LINE = "line"


class LineDirection(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


class InputActionResult(enum.Enum):
    CONTENT_CHANGED = "contentChanged"
    POSITION_CHANGED = "positionChanged"
    CLEAN = "clean"

    @property
    def needs_redraw(self) -> bool:
        return self is not InputActionResult.CLEAN


@dataclass(frozen=True)
class Write:
    char: str


@dataclass(frozen=True)
class Delete:
    magnitude: Magnitude
    direction: LineDirection


@dataclass(frozen=True)
class MoveCursor:
    magnitude: Magnitude
    direction: LineDirection


InputAction = Write | Delete | MoveCursor


def input_action_from_key(key: Key) -> InputAction | None:
    """Map a key to the input buffer action it triggers, if any."""
    ctrl = key.has(KeyModifiers.CONTROL)

    if key.kind is KeyKind.BACKSPACE:
        return Delete(Magnitude.CHAR, LineDirection.LEFT)
    if key.kind is KeyKind.CHAR and key.char in ("h", "H") and ctrl:
        # Ctrl+Backspace arrives as Ctrl+H on many terminals; never write "h".
        return None
    if key.kind is KeyKind.DELETE:
        return Delete(Magnitude.WORD if ctrl else Magnitude.CHAR, LineDirection.RIGHT)
    if key.kind is KeyKind.HOME:
        return MoveCursor(Magnitude.LINE, LineDirection.LEFT)
    if key.kind is KeyKind.END:
        return MoveCursor(Magnitude.LINE, LineDirection.RIGHT)
    if key.kind is KeyKind.LEFT:
        return MoveCursor(Magnitude.WORD if ctrl else Magnitude.CHAR, LineDirection.LEFT)
    if key.kind is KeyKind.RIGHT:
        return MoveCursor(Magnitude.WORD if ctrl else Magnitude.CHAR, LineDirection.RIGHT)
    if key.kind is KeyKind.CHAR and key.char:
        return Write(key.char)
    return None


class Input:
    """Text buffer with a grapheme-indexed cursor."""

    def __init__(self, content: str = "", placeholder: str | None = None) -> None:
        self._content: str = content
        self._length: int = _segmenter.count(content)
        self._cursor: int = self._length
        self.placeholder: str | None = placeholder

    @classmethod
    def new_with(cls, content: str) -> Input:
        """Create a buffer holding *content* with the cursor at the end."""
        return cls(content)

    def with_placeholder(self, placeholder: str) -> Input:
        self.placeholder = placeholder
        return self

    def with_cursor(self, cursor: int) -> Input:
        if not 0 <= cursor <= self._length:
            raise ValueError(
                f"Cursor position {cursor} out of bounds for input of length {self._length}"
            )
        self._cursor = cursor
        return self

    # -- accessors ------------------------------------------------------------

    @property
    def content(self) -> str:
        return self._content

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def pre_cursor(self) -> str:
        """Return the text before the grapheme under the cursor."""
        return "".join(_segmenter.segment(self._content)[: self._cursor])

    def clear(self) -> None:
        self._content = ""
        self._length = 0
        self._cursor = 0

    # -- dispatch -------------------------------------------------------------

    def handle(self, action: InputAction) -> InputActionResult:
        if isinstance(action, Write):
            return self._insert(action.char)
        if isinstance(action, Delete):
            if action.direction is LineDirection.LEFT:
                return self._backwards_delete(action.magnitude)
            return self._forwards_delete(action.magnitude)
        return self._move_cursor(action.magnitude, action.direction)

    # -- motion ---------------------------------------------------------------

    def _target_position(self, magnitude: Magnitude, direction: LineDirection) -> int:
        if direction is LineDirection.LEFT:
            if magnitude is Magnitude.CHAR:
                return max(self._cursor - 1, 0)
            if magnitude is Magnitude.WORD:
                return self._prev_word_index()
            return 0

        if magnitude is Magnitude.CHAR:
            return min(self._cursor + 1, self._length)
        if magnitude is Magnitude.WORD:
            return self._next_word_index()
        return self._length

    def _move_cursor(self, magnitude: Magnitude, direction: LineDirection) -> InputActionResult:
        target = self._target_position(magnitude, direction)
        if target == self._cursor:
            return InputActionResult.CLEAN
        self._cursor = target
        return InputActionResult.POSITION_CHANGED

    def _prev_word_index(self) -> int:
        graphemes = _segmenter.segment(self._content)[: self._cursor]
        seen_word = False
        for i in range(len(graphemes) - 1, -1, -1):
            if is_word_grapheme(graphemes[i]):
                seen_word = True
            elif seen_word:
                return i + 1
        return 0

    def _next_word_index(self) -> int:
        graphemes = _segmenter.segment(self._content)
        seen_word = False
        for i in range(self._cursor, len(graphemes)):
            if is_word_grapheme(graphemes[i]):
                seen_word = True
            elif seen_word:
                return i
        return self._length

    # -- edits ----------------------------------------------------------------

    def _insert(self, char: str) -> InputActionResult:
        graphemes = _segmenter.segment(self._content)
        before = "".join(graphemes[: self._cursor])
        after = "".join(graphemes[self._cursor :])
        self._content = before + char + after

        new_length = _segmenter.count(self._content)
        if new_length > self._length:
            self._cursor += 1
        self._length = new_length
        return InputActionResult.CONTENT_CHANGED

    def _remove_range(self, start: int, end: int) -> None:
        graphemes = _segmenter.segment(self._content)
        self._content = "".join(graphemes[:start] + graphemes[end:])
        self._length = _segmenter.count(self._content)

    def _backwards_delete(self, magnitude: Magnitude) -> InputActionResult:
        target = self._target_position(magnitude, LineDirection.LEFT)
        if target == self._cursor:
            return InputActionResult.CLEAN
        self._remove_range(target, self._cursor)
        self._cursor = target
        return InputActionResult.CONTENT_CHANGED

    def _forwards_delete(self, magnitude: Magnitude) -> InputActionResult:
        end = self._target_position(magnitude, LineDirection.RIGHT)
        if end == self._cursor:
            return InputActionResult.CLEAN
        self._remove_range(self._cursor, end)
        return InputActionResult.CONTENT_CHANGED

    def __repr__(self) -> str:
        return f"Input(content={self._content!r}, cursor={self._cursor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Input):
            return NotImplemented
        return (self._content, self._cursor, self.placeholder) == (
            other._content,
            other._cursor,
            other.placeholder,
        )
