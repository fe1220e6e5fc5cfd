"""Incremental frame renderer.

A frame is the list of rows a prompt draws in one iteration. Each finished
row keeps its styled runs and a 64-bit hash of content plus style, so
:meth:`FrameRenderer.finish_current_frame` only rewrites rows whose hash
changed since the previous frame. Rows are wrapped at write time when the
next grapheme would not fit the terminal width.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pi.inquire.style import StyleSheet, Styled
from pi.inquire.terminal import Terminal
from pi.inquire.utils import extract_ansi_code, get_segmenter, grapheme_width

logger = logging.getLogger(__name__)

_segmenter = get_segmenter()

_HASH_MASK = (1 << 64) - 1

# Used when the terminal cannot report its size (e.g. output is a pipe).
FALLBACK_SIZE = (1000, 1000)


@dataclass(frozen=True)
class FrameRow:
    content: tuple[Styled, ...]
    hash: int


@dataclass(frozen=True)
class Position:
    row: int = 0
    col: int = 0


@dataclass
class FrameState:
    """Rows of a frame under construction for a given terminal size."""

    width: int
    height: int
    rows: list[FrameRow] = field(default_factory=list)
    cursor: Position | None = None
    _line: list[Styled] = field(default_factory=list, init=False, repr=False)
    _line_width: int = field(default=0, init=False, repr=False)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def frame_height(self) -> int:
        return len(self.rows)

    # -- writing ----------------------------------------------------------

    def write(self, styled: Styled) -> None:
        text = styled.content
        style = styled.style
        pos = 0

        while pos < len(text):
            ansi = extract_ansi_code(text, pos)
            if ansi is not None:
                code, length = ansi
                # Escape sequences count for the hash but take no columns.
                self._append(code, style)
                pos += length
                continue

            end = text.find("\x1b", pos + 1)
            if end == -1:
                end = len(text)

            for g in _segmenter.segment(text[pos:end]):
                if "\n" in g:
                    self.finish_line()
                    continue

                width = grapheme_width(g)
                if width > self.width - self._line_width:
                    self.finish_line()

                self._append(g, style)
                self._line_width += width

            pos = end

    def _append(self, piece: str, style: StyleSheet) -> None:
        if self._line and self._line[-1].style == style:
            self._line[-1] = self._line[-1].with_content(self._line[-1].content + piece)
        else:
            self._line.append(Styled(piece, style))

    def mark_cursor_position(self, offset: int) -> None:
        row = len(self.rows)
        col = self._line_width + offset

        if col >= self.width:
            row += col // self.width
            col %= self.width

        self.cursor = Position(row, col)

    def finish_line(self) -> None:
        if not self._line:
            self._line_width = 0
            return

        content = tuple(self._line)
        self.rows.append(FrameRow(content, hash(content) & _HASH_MASK))
        self._line = []
        self._line_width = 0

    def finish(self) -> None:
        self.finish_line()

    def resized(self, width: int, height: int) -> FrameState:
        """Replay every row into a new state laid out for the new size."""
        state = FrameState(width, height)
        for row in self.rows:
            for styled in row.content:
                state.write(styled)
            state.finish_line()
        for styled in self._line:
            state.write(styled)
        state.finish_line()
        return state


class FrameRenderer:
    """Owns the terminal and diff-renders successive frames."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._cursor = Position()
        self._last_rendered: FrameState | None = None
        self._current: FrameState | None = None

    # ------------------------------------------------------------------
    # Frame lifecycle
    # ------------------------------------------------------------------

    def start_frame(self) -> None:
        width, height = self._refresh_terminal_size()
        self._current = FrameState(width, height)

    def write(self, text: str) -> None:
        self.write_styled(Styled(text))

    def write_styled(self, styled: Styled) -> None:
        if self._current is not None:
            self._current.write(styled)

    def mark_cursor_position(self, offset: int) -> None:
        if self._current is not None:
            self._current.mark_cursor_position(offset)

    def finish_current_frame(self) -> None:
        """Write the rows that changed and park the cursor on the mark."""
        current = self._current
        if current is None:
            return
        self._current = None

        current.finish()
        last = self._last_rendered or FrameState(current.width, current.height)
        rows_to_iterate = max(last.frame_height, current.frame_height)

        self.terminal.hide_cursor()
        self._move_cursor_to(Position(0, 0))

        for i in range(rows_to_iterate):
            last_row = last.rows[i] if i < last.frame_height else None
            current_row = current.rows[i] if i < current.frame_height else None

            if last_row is not None and current_row is not None:
                if last_row.hash != current_row.hash:
                    self._write_row(current_row)
                    self.terminal.clear_until_new_line()
            elif last_row is not None:
                self.terminal.clear_line()
            elif current_row is not None:
                self._write_row(current_row)

            self.terminal.write("\r")
            self._cursor = Position(self._cursor.row, 0)
            if i + 1 < rows_to_iterate:
                self.terminal.write("\n")
                self._cursor = Position(self._cursor.row + 1, 0)

        if current.cursor is not None:
            self._move_cursor_to(current.cursor)

        self.terminal.show_cursor()
        self.terminal.flush()

        self._last_rendered = current

    def close(self) -> None:
        """Leave the cursor on a fresh line below the last frame."""
        last = self._last_rendered
        if last is not None and last.frame_height > 0:
            self._move_cursor_to(Position(last.frame_height - 1, 0))
            self.terminal.write("\r\n")
            self._cursor = Position(last.frame_height, 0)
        self.terminal.show_cursor()
        self.terminal.flush()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write_row(self, row: FrameRow) -> None:
        for styled in row.content:
            self.terminal.write_styled(styled)

    def _move_cursor_to(self, position: Position) -> None:
        current = self._cursor

        if current.row > position.row:
            self.terminal.cursor_up(current.row - position.row)
        elif current.row < position.row:
            self.terminal.cursor_down(position.row - current.row)

        if current.col > position.col:
            self.terminal.cursor_left(current.col - position.col)
        elif current.col < position.col:
            self.terminal.cursor_right(position.col - current.col)

        self._cursor = position

    def _refresh_terminal_size(self) -> tuple[int, int]:
        try:
            width, height = self.terminal.get_size()
        except (OSError, ValueError):
            logger.debug("Terminal size unavailable, assuming %sx%s", *FALLBACK_SIZE)
            width, height = FALLBACK_SIZE

        width = max(width, 1)

        if self._cursor.col >= width:
            self._cursor = Position(
                self._cursor.row + self._cursor.col // width,
                self._cursor.col % width,
            )

        last = self._last_rendered
        if last is not None and last.size != (width, height):
            self._last_rendered = last.resized(width, height)

        return width, height
