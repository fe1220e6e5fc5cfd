"""Rendering primitives shared by every prompt.

The backend turns prompt state into styled text written through a
:class:`~pi.inquire.frame.FrameRenderer`. Prompts never touch the terminal
directly; they call the ``render_*`` methods between :meth:`frame_setup`
and :meth:`frame_finish`.
"""

from __future__ import annotations

import datetime
from typing import Collection, Mapping, Sequence

from pi.inquire.date_utils import WEEKDAY_NAMES, calendar_start, month_name
from pi.inquire.frame import FrameRenderer
from pi.inquire.input import Input
from pi.inquire.keys import Key
from pi.inquire.list_option import ListOption
from pi.inquire.render_config import IndexPrefix, RenderConfig
from pi.inquire.style import StyleSheet, Styled
from pi.inquire.terminal import Terminal
from pi.inquire.utils import Page, int_log10, visible_width

_CALENDAR_WIDTH = 20


class Backend:
    """Draws prompt frames on a terminal using a render configuration."""

    def __init__(self, terminal: Terminal, render_config: RenderConfig) -> None:
        self.terminal = terminal
        self.render_config = render_config
        self.renderer = FrameRenderer(terminal)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def frame_setup(self) -> None:
        self.renderer.start_frame()

    def frame_finish(self) -> None:
        self.renderer.finish_current_frame()

    def read_key(self) -> Key:
        return self.terminal.read_key()

    def close(self) -> None:
        self.renderer.close()

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self.renderer.write(text)

    def _write_styled(self, styled: Styled) -> None:
        self.renderer.write_styled(styled)

    def _new_line(self) -> None:
        self._write("\n")

    def _print_prompt_with_prefix(self, prefix: Styled, prompt: str) -> None:
        self._write_styled(prefix)
        self._write(" ")
        self._write_styled(Styled(prompt, self.render_config.prompt))

    def _print_prompt(self, prompt: str) -> None:
        self._print_prompt_with_prefix(self.render_config.prompt_prefix, prompt)

    def _print_default_value(self, value: str) -> None:
        self._write_styled(Styled(f"({value})", self.render_config.default_value))

    def _print_input(self, input: Input) -> None:
        self._write(" ")
        self.renderer.mark_cursor_position(visible_width(input.pre_cursor()))

        if input.is_empty():
            if input.placeholder:
                self._write_styled(Styled(input.placeholder, self.render_config.placeholder))
        else:
            self._write_styled(Styled(input.content, self.render_config.text_input))

        # Keep the cursor off the line break when it sits after the last grapheme.
        if input.cursor == input.length:
            self._write(" ")

    def _print_prompt_with_input(self, prompt: str, default: str | None, input: Input) -> None:
        self._print_prompt(prompt)
        if default is not None:
            self._write(" ")
            self._print_default_value(default)
        self._print_input(input)
        self._new_line()

    def _print_option_prefix(self, relative_index: int, page: Page) -> None:
        config = self.render_config
        if page.cursor == relative_index:
            prefix = config.highlighted_option_prefix
        elif relative_index == 0 and not page.first:
            prefix = config.scroll_up_prefix
        elif relative_index + 1 == len(page.content) and not page.last:
            prefix = config.scroll_down_prefix
        else:
            prefix = Styled(" ")
        self._write_styled(prefix)

    def _option_style(self, relative_index: int, page: Page) -> StyleSheet:
        selected = self.render_config.selected_option
        if selected is not None and page.cursor == relative_index:
            return selected
        return self.render_config.option

    def _print_option_index_prefix(self, index: int, total: int) -> bool:
        number = index + 1
        mode = self.render_config.option_index_prefix
        if mode is IndexPrefix.NONE:
            return False

        width = int_log10(total + 1)
        if mode is IndexPrefix.SIMPLE:
            content = f"{number})"
        elif mode is IndexPrefix.SPACE_PADDED:
            content = f"{number:>{width}})"
        else:
            content = f"{number:0{width}})"

        self._write_styled(Styled(content, self.render_config.option))
        return True

    # ------------------------------------------------------------------
    # Common
    # ------------------------------------------------------------------

    def render_canceled_prompt(self, prompt: str) -> None:
        self._print_prompt(prompt)
        self._write(" ")
        self._write_styled(self.render_config.canceled_prompt_indicator)
        self._new_line()

    def render_prompt_with_answer(self, prompt: str, answer: str) -> None:
        self._print_prompt_with_prefix(self.render_config.answered_prompt_prefix, prompt)
        self._write(" ")
        self._write_styled(Styled(answer, self.render_config.answer))
        self._new_line()

    def render_error_message(self, message: str | None) -> None:
        error_config = self.render_config.error_message
        self._write_styled(error_config.prefix)
        self._write_styled(Styled(" ", error_config.separator))
        text = message if message is not None else error_config.default_message
        self._write_styled(Styled(text, error_config.message))
        self._new_line()

    def render_help_message(self, help: str) -> None:
        style = self.render_config.help_message
        self._write_styled(Styled("[", style))
        self._write_styled(Styled(help, style))
        self._write_styled(Styled("]", style))
        self._new_line()

    # ------------------------------------------------------------------
    # Text-like prompts
    # ------------------------------------------------------------------

    def render_prompt(self, prompt: str, default: str | None, input: Input) -> None:
        """Prompt line with an editable input (text and custom-type prompts)."""
        self._print_prompt_with_input(prompt, default, input)

    def render_suggestions(self, page: Page[ListOption[str]]) -> None:
        for idx, option in enumerate(page.content):
            self._print_option_prefix(idx, page)
            self._write(" ")
            self._write_styled(Styled(str(option.value), self._option_style(idx, page)))
            self._new_line()

    def render_editor_prompt(self, prompt: str, editor_name: str) -> None:
        self._print_prompt(prompt)
        self._write(" ")
        message = f"[(e) to open {editor_name}, (enter) to submit]"
        self._write_styled(Styled(message, self.render_config.editor_prompt))
        self._new_line()

    # ------------------------------------------------------------------
    # Password
    # ------------------------------------------------------------------

    def render_password_prompt(self, prompt: str) -> None:
        self._print_prompt(prompt)
        self._new_line()

    def render_prompt_with_masked_input(self, prompt: str, input: Input) -> None:
        masked = Input(self.render_config.password_mask * input.length).with_cursor(input.cursor)
        self._print_prompt_with_input(prompt, None, masked)

    def render_prompt_with_full_input(self, prompt: str, input: Input) -> None:
        self._print_prompt_with_input(prompt, None, input)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def render_select_prompt(self, prompt: str, input: Input | None) -> None:
        if input is not None:
            self._print_prompt_with_input(prompt, None, input)
        else:
            self._print_prompt(prompt)
            self._new_line()

    def render_location(self, location: str) -> None:
        """Directory line shown under the path-select prompt."""
        self._write_styled(Styled(location, self.render_config.default_value))
        self._new_line()

    def render_options(
        self,
        page: Page[ListOption],
        checked: Collection[int] | None = None,
    ) -> None:
        """Draw a page of options; *checked* adds checkboxes (multi-select)."""
        config = self.render_config
        for idx, option in enumerate(page.content):
            self._print_option_prefix(idx, page)
            self._write(" ")

            if self._print_option_index_prefix(option.index, page.total):
                self._write(" ")

            if checked is not None:
                checkbox = (
                    config.selected_checkbox
                    if option.index in checked
                    else config.unselected_checkbox
                )
                if config.selected_option is not None and page.cursor == idx:
                    checkbox = checkbox.with_style_sheet(config.selected_option)
                self._write_styled(checkbox)
                self._write(" ")

            self._write_styled(Styled(str(option.value), self._option_style(idx, page)))
            self._new_line()

    def render_counted_options(self, page: Page[ListOption], counts: Mapping[int, int]) -> None:
        """Draw a page of options, each preceded by its current count."""
        config = self.render_config
        for idx, option in enumerate(page.content):
            self._print_option_prefix(idx, page)
            self._write(" ")

            if self._print_option_index_prefix(option.index, page.total):
                self._write(" ")

            count = counts.get(option.index, 0)
            if count > 0:
                marker = config.selected_checkbox.with_content(f"[{count}]")
            else:
                marker = config.unselected_checkbox
            if config.selected_option is not None and page.cursor == idx:
                marker = marker.with_style_sheet(config.selected_option)
            self._write_styled(marker)
            self._write(" ")

            self._write_styled(Styled(str(option.value), self._option_style(idx, page)))
            self._new_line()

    # ------------------------------------------------------------------
    # Calendar
    # ------------------------------------------------------------------

    def render_calendar_prompt(self, prompt: str) -> None:
        self._print_prompt(prompt)
        self._new_line()

    def _write_calendar_prefix(self) -> None:
        self._write_styled(self.render_config.calendar.prefix)
        self._write(" ")

    def render_calendar(
        self,
        month: int,
        year: int,
        week_start: int,
        today: datetime.date,
        selected_date: datetime.date,
        min_date: datetime.date | None,
        max_date: datetime.date | None,
    ) -> None:
        calendar_config = self.render_config.calendar

        header = f"{month_name(month).lower()} {year}".center(_CALENDAR_WIDTH)
        self._write_calendar_prefix()
        self._write_styled(Styled(header, calendar_config.header))
        self._new_line()

        week_days: Sequence[str] = [
            WEEKDAY_NAMES[(week_start + i) % 7][:2].lower() for i in range(7)
        ]
        self._write_calendar_prefix()
        self._write_styled(Styled(" ".join(week_days), calendar_config.week_header))
        self._new_line()

        date = calendar_start(year, month, week_start)
        for _ in range(6):
            self._write_calendar_prefix()

            for i in range(7):
                if i > 0:
                    self._write(" ")

                style = StyleSheet()
                if date == selected_date:
                    self.renderer.mark_cursor_position(1 if date.day < 10 else 0)
                    if calendar_config.selected_date is not None:
                        style = calendar_config.selected_date
                elif date == today:
                    style = calendar_config.today_date
                elif date.month != month:
                    style = calendar_config.different_month_date

                if min_date is not None and date < min_date:
                    style = calendar_config.unavailable_date
                if max_date is not None and date > max_date:
                    style = calendar_config.unavailable_date

                self._write_styled(Styled(f"{date.day:2}", style))

                if date < datetime.date.max:
                    date += datetime.timedelta(days=1)

            self._new_line()
