"""Render configuration: glyphs and style sheets consumed by the backend.

``RenderConfig.default()`` honours the ``NO_COLOR`` environment variable.
A process-wide default is created lazily on first use and can be replaced
with :func:`set_global_render_config`.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field, replace

from pi.inquire.style import Color, StyleSheet, Styled


class IndexPrefix(enum.Enum):
    """How option indices are printed in list prompts."""

    NONE = "none"
    SIMPLE = "simple"
    SPACE_PADDED = "spacePadded"
    ZERO_PADDED = "zeroPadded"


@dataclass(frozen=True)
class ErrorMessageRenderConfig:
    prefix: Styled = Styled("#")
    separator: StyleSheet = StyleSheet()
    message: StyleSheet = StyleSheet()
    default_message: str = "Invalid input."

    @classmethod
    def empty(cls) -> ErrorMessageRenderConfig:
        return cls()

    @classmethod
    def default_colored(cls) -> ErrorMessageRenderConfig:
        return cls(
            prefix=Styled("#").with_fg(Color.LIGHT_RED),
            message=StyleSheet().with_fg(Color.LIGHT_RED),
        )


@dataclass(frozen=True)
class CalendarRenderConfig:
    prefix: Styled = Styled(">")
    header: StyleSheet = StyleSheet()
    week_header: StyleSheet = StyleSheet()
    # None means "show the terminal cursor on the selected date instead"
    selected_date: StyleSheet | None = None
    today_date: StyleSheet = StyleSheet()
    different_month_date: StyleSheet = StyleSheet()
    unavailable_date: StyleSheet = StyleSheet()

    @classmethod
    def empty(cls) -> CalendarRenderConfig:
        return cls()

    @classmethod
    def default_colored(cls) -> CalendarRenderConfig:
        return cls(
            prefix=Styled(">").with_fg(Color.LIGHT_GREEN),
            selected_date=StyleSheet().with_fg(Color.BLACK).with_bg(Color.GREY),
            today_date=StyleSheet().with_fg(Color.LIGHT_GREEN),
            different_month_date=StyleSheet().with_fg(Color.DARK_GREY),
            unavailable_date=StyleSheet().with_fg(Color.DARK_GREY),
        )


@dataclass(frozen=True)
class RenderConfig:
    prompt_prefix: Styled = Styled("?")
    answered_prompt_prefix: Styled = Styled("?")
    prompt: StyleSheet = StyleSheet()
    default_value: StyleSheet = StyleSheet()
    placeholder: StyleSheet = StyleSheet()
    help_message: StyleSheet = StyleSheet()
    password_mask: str = "*"
    text_input: StyleSheet = StyleSheet()
    answer: StyleSheet = StyleSheet()
    canceled_prompt_indicator: Styled = Styled("<canceled>")
    error_message: ErrorMessageRenderConfig = field(default_factory=ErrorMessageRenderConfig)
    highlighted_option_prefix: Styled = Styled(">")
    scroll_up_prefix: Styled = Styled("^")
    scroll_down_prefix: Styled = Styled("v")
    selected_checkbox: Styled = Styled("[x]")
    unselected_checkbox: Styled = Styled("[ ]")
    option_index_prefix: IndexPrefix = IndexPrefix.NONE
    option: StyleSheet = StyleSheet()
    selected_option: StyleSheet | None = None
    calendar: CalendarRenderConfig = field(default_factory=CalendarRenderConfig)
    editor_prompt: StyleSheet = StyleSheet()

    @classmethod
    def empty(cls) -> RenderConfig:
        """Configuration without any colour."""
        return cls()

    @classmethod
    def default_colored(cls) -> RenderConfig:
        return cls(
            prompt_prefix=Styled("?").with_fg(Color.LIGHT_GREEN),
            answered_prompt_prefix=Styled(">").with_fg(Color.LIGHT_GREEN),
            placeholder=StyleSheet().with_fg(Color.DARK_GREY),
            help_message=StyleSheet().with_fg(Color.LIGHT_CYAN),
            answer=StyleSheet().with_fg(Color.LIGHT_CYAN),
            canceled_prompt_indicator=Styled("<canceled>").with_fg(Color.DARK_RED),
            error_message=ErrorMessageRenderConfig.default_colored(),
            highlighted_option_prefix=Styled(">").with_fg(Color.LIGHT_CYAN),
            selected_checkbox=Styled("[x]").with_fg(Color.LIGHT_GREEN),
            selected_option=StyleSheet().with_fg(Color.LIGHT_CYAN),
            calendar=CalendarRenderConfig.default_colored(),
            editor_prompt=StyleSheet().with_fg(Color.DARK_CYAN),
        )

    @classmethod
    def default(cls) -> RenderConfig:
        """Coloured configuration unless ``NO_COLOR`` is set to a non-empty value."""
        if os.environ.get("NO_COLOR"):
            return cls.empty()
        return cls.default_colored()

    def with_(self, **changes: object) -> RenderConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# Global default
# ---------------------------------------------------------------------------

_global_render_config: RenderConfig | None = None


def get_global_render_config() -> RenderConfig:
    global _global_render_config
    if _global_render_config is None:
        _global_render_config = RenderConfig.default()
    return _global_render_config


def set_global_render_config(config: RenderConfig) -> None:
    global _global_render_config
    _global_render_config = config


def reset_global_render_config() -> None:
    """Forget the current default so the next read consults the environment again."""
    global _global_render_config
    _global_render_config = None
