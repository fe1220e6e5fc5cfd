"""Keyboard input parsing.

Turns raw terminal input into ``Key`` values. Legacy xterm escape
sequences (with the ``1;<mod>`` modifier parameter), SS3 arrows, control
characters and ESC-prefixed Alt combinations are understood. Enter, Esc and
Ctrl+C are reported as the synthetic ``SUBMIT``, ``CANCEL`` and
``INTERRUPT`` keys that the prompt loop consumes.
"""

from __future__ import annotations

import enum
import re
import unicodedata
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key model
# ---------------------------------------------------------------------------


class KeyModifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


class KeyKind(enum.Enum):
    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CHAR = "char"
    ESCAPE = "escape"
    INTERRUPT = "interrupt"
    SUBMIT = "submit"
    CANCEL = "cancel"
    ANY = "any"


@dataclass(frozen=True)
class Key:
    """A single logical key event.

    ``char`` is set only for ``KeyKind.CHAR``.
    """

    kind: KeyKind
    char: str | None = None
    modifiers: KeyModifiers = KeyModifiers.NONE

    @classmethod
    def of(cls, kind: KeyKind, modifiers: KeyModifiers = KeyModifiers.NONE) -> Key:
        return cls(kind=kind, modifiers=modifiers)

    @classmethod
    def char_key(cls, char: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> Key:
        return cls(kind=KeyKind.CHAR, char=char, modifiers=modifiers)

    def has(self, modifier: KeyModifiers) -> bool:
        return bool(self.modifiers & modifier)

    def is_char(self, char: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> bool:
        """Return ``True`` for a CHAR key with exactly *char* and *modifiers*."""
        return (
            self.kind is KeyKind.CHAR
            and self.char == char
            and self.modifiers == modifiers
        )

    def __str__(self) -> str:
        parts = []
        if self.has(KeyModifiers.CONTROL):
            parts.append("ctrl")
        if self.has(KeyModifiers.SHIFT):
            parts.append("shift")
        if self.has(KeyModifiers.ALT):
            parts.append("alt")
        parts.append(self.char if self.kind is KeyKind.CHAR else self.kind.value)
        return "+".join(parts)


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# Final byte of ``ESC [ ... <final>`` / ``ESC O <final>``
_FINAL_BYTE_KEYS: dict[str, KeyKind] = {
    "A": KeyKind.UP,
    "B": KeyKind.DOWN,
    "C": KeyKind.RIGHT,
    "D": KeyKind.LEFT,
    "H": KeyKind.HOME,
    "F": KeyKind.END,
}

# Number of ``ESC [ <n> ~``
_TILDE_KEYS: dict[int, KeyKind] = {
    1: KeyKind.HOME,
    3: KeyKind.DELETE,
    4: KeyKind.END,
    5: KeyKind.PAGE_UP,
    6: KeyKind.PAGE_DOWN,
    7: KeyKind.HOME,
    8: KeyKind.END,
}

_CSI_FINAL_RE = re.compile(r"^\x1b\[(?:1;(\d+))?([ABCDHF])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")
_SS3_RE = re.compile(r"^\x1bO(\d?)([ABCDHF])$")
_MODIFY_OTHER_KEYS_RE = re.compile(r"^\x1b\[27;(\d+);(\d+)~$")


def _modifiers_from_param(param: str | None) -> KeyModifiers:
    """Decode the xterm modifier parameter (``1 + bitmask``)."""
    if not param:
        return KeyModifiers.NONE
    bits = max(int(param) - 1, 0)
    mods = KeyModifiers.NONE
    if bits & 1:
        mods |= KeyModifiers.SHIFT
    if bits & 2:
        mods |= KeyModifiers.ALT
    if bits & 4:
        mods |= KeyModifiers.CONTROL
    return mods


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> Key | None:  # noqa: C901
    """Parse one complete input sequence into a ``Key``, or ``None``."""
    if not data:
        return None

    # --- Legacy CSI / SS3 sequences ---
    match = _CSI_FINAL_RE.match(data)
    if match:
        return Key.of(_FINAL_BYTE_KEYS[match.group(2)], _modifiers_from_param(match.group(1)))

    match = _SS3_RE.match(data)
    if match:
        return Key.of(_FINAL_BYTE_KEYS[match.group(2)], _modifiers_from_param(match.group(1)))

    match = _MODIFY_OTHER_KEYS_RE.match(data)
    if match:
        mods = _modifiers_from_param(match.group(1))
        keycode = int(match.group(2))
        if keycode == 13:
            return Key.of(KeyKind.SUBMIT, mods)
        if keycode == 9:
            return Key.of(KeyKind.TAB, mods)
        if keycode > 0 and unicodedata.category(chr(keycode)) != "Cc":
            return Key.char_key(chr(keycode), mods)
        return None

    match = _CSI_TILDE_RE.match(data)
    if match:
        kind = _TILDE_KEYS.get(int(match.group(1)))
        if kind is None:
            return None
        return Key.of(kind, _modifiers_from_param(match.group(2)))

    if data == "\x1b[Z":
        return Key.of(KeyKind.TAB, KeyModifiers.SHIFT)

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return Key.of(KeyKind.CANCEL)
    if data in ("\r", "\n"):
        return Key.of(KeyKind.SUBMIT)
    if data == "\x03":
        return Key.of(KeyKind.INTERRUPT)
    if data == "\t":
        return Key.of(KeyKind.TAB)
    if data in ("\x7f", "\x08"):
        return Key.of(KeyKind.BACKSPACE)
    if data == "\x00":
        return Key.char_key(" ", KeyModifiers.CONTROL)

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return Key.char_key(chr(ord(data) + ord("a") - 1), KeyModifiers.CONTROL)

    # --- Alt + key (ESC prefix, possibly in front of a whole sequence) ---
    if len(data) >= 2 and data[0] == "\x1b":
        inner = parse_key(data[1:])
        if inner is None or inner.kind is KeyKind.CANCEL:
            return None
        if inner.kind is KeyKind.SUBMIT:
            return Key.char_key("\n", KeyModifiers.ALT)
        if inner.kind is KeyKind.CHAR:
            return Key.char_key(inner.char or "", inner.modifiers | KeyModifiers.ALT)
        return Key.of(inner.kind, inner.modifiers | KeyModifiers.ALT)

    # --- Any other single character that is not a control code ---
    if len(data) == 1 and unicodedata.category(data) != "Cc":
        if data.isupper():
            return Key.char_key(data, KeyModifiers.SHIFT)
        return Key.char_key(data)

    return None


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _sequence_length(data: str) -> int | None:
    """Length of the escape sequence at the start of *data*.

    Returns ``None`` when the sequence is incomplete.
    """
    if len(data) == 1:
        return None

    second = data[1]

    if second == "[":
        for i in range(2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return None

    if second == "O":
        for i in range(2, len(data)):
            if data[i].isalpha():
                return i + 1
        return None

    # ESC in front of another escape sequence: Alt plus that key
    if second == "\x1b" and len(data) > 2 and data[2] in "[O":
        inner = _sequence_length(data[1:])
        return None if inner is None else inner + 1

    # ESC followed by a single character: Alt combination
    return 2


def split_sequences(data: str) -> tuple[list[str], str]:
    """Split raw input into complete key sequences.

    Returns ``(sequences, remainder)``; the remainder is an incomplete
    escape sequence waiting for more bytes.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(data):
        remaining = data[pos:]

        if remaining[0] == "\x1b":
            length = _sequence_length(remaining)
            if length is None:
                return sequences, remaining
            sequences.append(remaining[:length])
            pos += length
        else:
            sequences.append(remaining[0])
            pos += 1

    return sequences, ""
