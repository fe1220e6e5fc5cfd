"""Colours, text attributes and styled text.

A ``StyleSheet`` is an immutable (fg, bg, attributes) triple that knows how
to wrap text in SGR escape sequences. ``Styled`` pairs a piece of text with
its style sheet.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Union

_RESET = "\x1b[0m"


class Color(enum.Enum):
    """Terminal colours, valued by their SGR foreground code."""

    BLACK = 30
    DARK_RED = 31
    DARK_GREEN = 32
    DARK_YELLOW = 33
    DARK_BLUE = 34
    DARK_MAGENTA = 35
    DARK_CYAN = 36
    GREY = 37
    DARK_GREY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_MAGENTA = 95
    LIGHT_CYAN = 96
    WHITE = 97


@dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class AnsiValue:
    """One of the 256 indexed terminal colours."""

    value: int


ColorSpec = Union[Color, Rgb, AnsiValue]


class Attributes(enum.IntFlag):
    NONE = 0
    BOLD = 1
    ITALIC = 2


def _color_params(color: ColorSpec, background: bool) -> str:
    if isinstance(color, Color):
        return str(color.value + 10 if background else color.value)
    base = "48" if background else "38"
    if isinstance(color, Rgb):
        return f"{base};2;{color.r};{color.g};{color.b}"
    return f"{base};5;{color.value}"


@dataclass(frozen=True)
class StyleSheet:
    fg: ColorSpec | None = None
    bg: ColorSpec | None = None
    att: Attributes = Attributes.NONE

    @classmethod
    def empty(cls) -> StyleSheet:
        return cls()

    def is_empty(self) -> bool:
        return self.fg is None and self.bg is None and not self.att

    def with_fg(self, fg: ColorSpec) -> StyleSheet:
        return replace(self, fg=fg)

    def with_bg(self, bg: ColorSpec) -> StyleSheet:
        return replace(self, bg=bg)

    def with_attr(self, att: Attributes) -> StyleSheet:
        return replace(self, att=att)

    def sgr(self) -> str:
        """Return the SGR sequence that switches this style on."""
        params: list[str] = []
        if self.att & Attributes.BOLD:
            params.append("1")
        if self.att & Attributes.ITALIC:
            params.append("3")
        if self.fg is not None:
            params.append(_color_params(self.fg, background=False))
        if self.bg is not None:
            params.append(_color_params(self.bg, background=True))
        if not params:
            return ""
        return f"\x1b[{';'.join(params)}m"

    def apply(self, text: str) -> str:
        """Wrap *text* in this style, or return it unchanged when empty."""
        if self.is_empty() or not text:
            return text
        return f"{self.sgr()}{text}{_RESET}"


@dataclass(frozen=True)
class Styled:
    content: str
    style: StyleSheet = StyleSheet()

    def with_style_sheet(self, style: StyleSheet) -> Styled:
        return replace(self, style=style)

    def with_fg(self, fg: ColorSpec) -> Styled:
        return replace(self, style=self.style.with_fg(fg))

    def with_bg(self, bg: ColorSpec) -> Styled:
        return replace(self, style=self.style.with_bg(bg))

    def with_attr(self, att: Attributes) -> Styled:
        return replace(self, style=self.style.with_attr(att))

    def with_content(self, content: str) -> Styled:
        return replace(self, content=content)

    def __str__(self) -> str:
        return self.style.apply(self.content)
