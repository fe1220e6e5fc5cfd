"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol listing the primitives the renderer and
prompt loop consume, and a concrete ``ProcessTerminal`` backed by
``sys.stdin``/``sys.stdout`` that manages raw mode via :mod:`tty` and
:mod:`termios`.
"""

from __future__ import annotations

import codecs
import errno
import logging
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import Protocol, TextIO

from pi.inquire.errors import NotTTYError
from pi.inquire.keys import Key, parse_key, split_sequences
from pi.inquire.style import Styled

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K"
_CLEAR_UNTIL_NEW_LINE = "\x1b[K"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"
_CURSOR_LEFT_FMT = "\x1b[{}D"
_CURSOR_COLUMN_FMT = "\x1b[{}G"

# Seconds to wait for the rest of an escape sequence before treating a lone
# ESC as the Escape key.
_ESCAPE_TIMEOUT = 0.05


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_key(self) -> Key: ...

    def get_size(self) -> tuple[int, int]: ...

    def cursor_up(self, n: int) -> None: ...

    def cursor_down(self, n: int) -> None: ...

    def cursor_left(self, n: int) -> None: ...

    def cursor_right(self, n: int) -> None: ...

    def cursor_move_to_column(self, n: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def write(self, data: str) -> None: ...

    def write_styled(self, styled: Styled) -> None: ...

    def clear_line(self) -> None: ...

    def clear_until_new_line(self) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Output is buffered until :meth:`flush`. Raw mode is entered in
    :meth:`start` and the previous terminal attributes are restored in
    :meth:`stop`; use the instance as a context manager to guarantee that.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._original_termios: list | None = None
        self._out: list[str] = []
        self._pending: deque[str] = deque()
        self._remainder: str = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode on stdin."""
        fd = self._stdin.fileno()
        try:
            self._original_termios = termios.tcgetattr(fd)
        except termios.error as exc:
            if exc.args and exc.args[0] in (errno.ENOTTY, errno.ENXIO):
                raise NotTTYError() from exc
            raise
        tty.setraw(fd)
        logger.debug("Entered raw mode on fd %d", fd)

    def stop(self) -> None:
        """Restore terminal attributes saved by :meth:`start`."""
        self.flush()
        if self._original_termios is not None:
            fd = self._stdin.fileno()
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
            logger.debug("Restored terminal mode on fd %d", fd)

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # -- input --------------------------------------------------------------

    def read_key(self) -> Key:
        """Block until a recognised key arrives and return it."""
        while True:
            while self._pending:
                key = parse_key(self._pending.popleft())
                if key is not None:
                    return key
            self._fill_pending()

    def _fill_pending(self) -> None:
        fd = self._stdin.fileno()

        if self._remainder and not self._input_ready(fd, _ESCAPE_TIMEOUT):
            # Nothing followed the partial sequence: deliver it as typed.
            self._pending.append(self._remainder)
            self._remainder = ""
            return

        raw = os.read(fd, 1024)
        if not raw:
            raise EOFError("stdin closed")

        data = self._remainder + self._decoder.decode(raw)
        sequences, self._remainder = split_sequences(data)
        self._pending.extend(sequences)

    @staticmethod
    def _input_ready(fd: int, timeout: float) -> bool:
        readable, _, _ = select.select([fd], [], [], timeout)
        return bool(readable)

    # -- size ---------------------------------------------------------------

    def get_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``; raises ``OSError`` when unavailable."""
        size = os.get_terminal_size(self._stdout.fileno())
        return size.columns, size.lines

    # -- cursor / screen manipulation --------------------------------------

    def cursor_up(self, n: int) -> None:
        if n > 0:
            self.write(_CURSOR_UP_FMT.format(n))

    def cursor_down(self, n: int) -> None:
        if n > 0:
            self.write(_CURSOR_DOWN_FMT.format(n))

    def cursor_left(self, n: int) -> None:
        if n > 0:
            self.write(_CURSOR_LEFT_FMT.format(n))

    def cursor_right(self, n: int) -> None:
        if n > 0:
            self.write(_CURSOR_RIGHT_FMT.format(n))

    def cursor_move_to_column(self, n: int) -> None:
        self.write(_CURSOR_COLUMN_FMT.format(n + 1))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def clear_line(self) -> None:
        self.write(_CLEAR_LINE)

    def clear_until_new_line(self) -> None:
        self.write(_CLEAR_UNTIL_NEW_LINE)

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        self._out.append(data)

    def write_styled(self, styled: Styled) -> None:
        self._out.append(str(styled))

    def flush(self) -> None:
        if not self._out:
            return
        self._stdout.write("".join(self._out))
        self._stdout.flush()
        self._out.clear()
