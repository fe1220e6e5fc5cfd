"""Text utilities shared by the input buffer, renderer and list prompts.

Provides grapheme segmentation, terminal width measurement, ANSI escape
detection, word classification for cursor motion, and list pagination.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

import grapheme
import wcwidth as _wcwidth

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Grapheme segmenter wrapper
# ---------------------------------------------------------------------------


class _GraphemeSegmenter:
    """Thin wrapper around ``grapheme.graphemes``."""

    @staticmethod
    def segment(text: str) -> list[str]:
        return list(grapheme.graphemes(text))

    @staticmethod
    def count(text: str) -> int:
        return grapheme.length(text)


def get_segmenter() -> _GraphemeSegmenter:
    """Return a grapheme segmenter instance."""
    return _GraphemeSegmenter()


# ---------------------------------------------------------------------------
# ANSI sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"              # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"   # OSC
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"    # APC
)


def strip_ansi(text: str) -> str:
    """Remove every ANSI escape sequence from *text*."""
    return _STRIP_RE.sub("", text)


def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an ANSI escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` or ``None`` if there is no escape sequence at
    *pos*. CSI sequences end at the first byte in ``@`` .. ``~``; OSC and APC
    sequences end at BEL or ST.
    """
    if pos >= len(text) or text[pos] != "\x1b":
        return None

    if pos + 1 >= len(text):
        return None

    next_ch = text[pos + 1]

    # CSI: ESC[ <params> <final>
    if next_ch == "[":
        i = pos + 2
        while i < len(text):
            if 0x40 <= ord(text[i]) <= 0x7E:
                code = text[pos : i + 1]
                return (code, len(code))
            i += 1
        return None

    # OSC / APC: ESC] or ESC_ ... (BEL | ESC\)
    if next_ch in ("]", "_"):
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if ch == "\x07":
                code = text[pos : i + 1]
                return (code, len(code))
            if ch == "\x1b" and i + 1 < len(text) and text[i + 1] == "\\":
                code = text[pos : i + 2]
                return (code, len(code))
            i += 1
        return None

    return None


# ---------------------------------------------------------------------------
# Width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone combining marks are zero-width. Emoji
    clusters (VS16, ZWJ, skin tones, regional indicators) are two columns.
    Everything else is delegated to wcwidth on the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*, ignoring ANSI codes."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    return sum(grapheme_width(g) for g in grapheme.graphemes(stripped))


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_word_grapheme(g: str) -> bool:
    """Return ``True`` if the grapheme belongs to a word.

    A grapheme is part of a word when any of its codepoints is alphanumeric
    or an underscore.
    """
    return any(ch.isalnum() or ch == "_" for ch in g)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


@dataclass
class Page(Generic[T]):
    """A window over a list of items.

    ``cursor`` is the position of the selection relative to ``content``.
    ``first`` / ``last`` tell whether the window touches the start / end of
    the full list, which drives the scroll indicators.
    """

    first: bool
    last: bool
    content: list[T]
    cursor: int | None
    total: int


def paginate(page_size: int, items: Sequence[T], cursor: int | None) -> Page[T]:
    """Return the window of *items* that keeps *cursor* visible."""
    total = len(items)

    if total <= page_size:
        return Page(
            first=True,
            last=True,
            content=list(items),
            cursor=cursor,
            total=total,
        )

    half = page_size // 2
    sel = cursor if cursor is not None else 0

    if sel < half:
        start, rel = 0, sel
    elif total - sel - 1 < half:
        start = total - page_size
        rel = sel - start
    else:
        start, rel = sel - half, half

    end = start + page_size
    return Page(
        first=start == 0,
        last=end == total,
        content=list(items[start:end]),
        cursor=rel if cursor is not None else None,
        total=total,
    )


def int_log10(value: int) -> int:
    """Number of decimal digits of a positive integer, ``0`` for zero."""
    digits = 0
    while value > 0:
        value //= 10
        digits += 1
    return digits
