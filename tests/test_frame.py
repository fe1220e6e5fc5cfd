"""Tests for the incremental frame renderer."""

from __future__ import annotations

from pi.inquire.frame import FrameRenderer, FrameState, Position
from pi.inquire.style import Color, StyleSheet, Styled

from .virtual_terminal import VirtualTerminal


def _render(renderer: FrameRenderer, *lines: str) -> None:
    renderer.start_frame()
    for line in lines:
        renderer.write(line + "\n")
    renderer.finish_current_frame()


class TestFrameState:
    """Rows are split on newlines and wrapped at the terminal width."""

    def test_rows_split_on_newline(self) -> None:
        state = FrameState(80, 24)
        state.write(Styled("one\ntwo\n"))
        state.finish()
        assert state.frame_height == 2

    def test_wraps_at_width(self) -> None:
        state = FrameState(4, 24)
        state.write(Styled("abcdefghij"))
        state.finish()
        assert [row.content[0].content for row in state.rows] == ["abcd", "efgh", "ij"]

    def test_wide_grapheme_does_not_split(self) -> None:
        state = FrameState(3, 24)
        state.write(Styled("a日本"))
        state.finish()
        assert [row.content[0].content for row in state.rows] == ["a日", "本"]

    def test_same_style_runs_merge(self) -> None:
        state = FrameState(80, 24)
        state.write(Styled("ab"))
        state.write(Styled("cd"))
        state.finish()
        assert state.rows[0].content == (Styled("abcd"),)

    def test_different_styles_stay_separate(self) -> None:
        red = StyleSheet().with_fg(Color.DARK_RED)
        state = FrameState(80, 24)
        state.write(Styled("ab"))
        state.write(Styled("cd", red))
        state.finish()
        assert state.rows[0].content == (Styled("ab"), Styled("cd", red))

    def test_style_changes_hash(self) -> None:
        plain = FrameState(80, 24)
        plain.write(Styled("x"))
        plain.finish()
        red = FrameState(80, 24)
        red.write(Styled("x", StyleSheet().with_fg(Color.DARK_RED)))
        red.finish()
        assert plain.rows[0].hash != red.rows[0].hash

    def test_cursor_mark(self) -> None:
        state = FrameState(80, 24)
        state.write(Styled("first\n"))
        state.write(Styled("? name "))
        state.mark_cursor_position(2)
        state.write(Styled("bob"))
        assert state.cursor == Position(1, 9)

    def test_cursor_mark_wraps(self) -> None:
        state = FrameState(10, 24)
        state.write(Styled("12345678"))
        state.mark_cursor_position(4)
        assert state.cursor == Position(1, 2)

    def test_resized_replays_rows(self) -> None:
        state = FrameState(10, 24)
        state.write(Styled("abcdefgh\n"))
        state.finish()
        narrower = state.resized(4, 24)
        assert narrower.frame_height == 2


class TestFrameRenderer:
    """Only rows that changed are rewritten."""

    def test_first_frame_writes_everything(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "alpha", "beta")
        assert "alpha" in terminal.text
        assert "beta" in terminal.text

    def test_unchanged_rows_are_not_rewritten(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "alpha", "beta")
        terminal.clear_buffer()

        _render(renderer, "alpha", "gamma")
        assert "alpha" not in terminal.text
        assert "gamma" in terminal.text

    def test_identical_frame_writes_no_content(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "alpha", "beta")
        terminal.clear_buffer()

        _render(renderer, "alpha", "beta")
        assert terminal.text.strip() == ""

    def test_shrinking_frame_clears_rows(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "alpha", "beta", "gamma")
        terminal.clear_buffer()

        _render(renderer, "alpha")
        assert terminal.output.count("\x1b[2K") == 2

    def test_changed_row_clears_tail(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "a longer line")
        terminal.clear_buffer()

        _render(renderer, "short")
        assert "short\x1b[K" in terminal.output

    def test_styles_reach_terminal(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        renderer.start_frame()
        renderer.write_styled(Styled("hi", StyleSheet().with_fg(Color.LIGHT_GREEN)))
        renderer.finish_current_frame()
        assert "\x1b[92mhi\x1b[0m" in terminal.output

    def test_cursor_is_shown_and_flushed(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "x")
        assert terminal.cursor_visible
        assert terminal.flush_count == 1

    def test_cursor_moves_to_mark(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        renderer.start_frame()
        renderer.write("? q ")
        renderer.mark_cursor_position(0)
        renderer.write("\nhelp\n")
        renderer.finish_current_frame()
        # after writing two rows the cursor is on row 1, the mark is row 0 col 4
        assert terminal.output.endswith("\x1b[1A\x1b[4C\x1b[?25h")

    def test_close_leaves_cursor_below_frame(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "one", "two")
        terminal.clear_buffer()
        renderer.close()
        assert terminal.output == "\r\n\x1b[?25h"

    def test_close_without_frames(self) -> None:
        terminal = VirtualTerminal()
        renderer = FrameRenderer(terminal)
        renderer.close()
        assert terminal.output == "\x1b[?25h"

    def test_size_failure_falls_back(self) -> None:
        class NoSizeTerminal(VirtualTerminal):
            def get_size(self) -> tuple[int, int]:
                raise OSError("not a tty")

        terminal = NoSizeTerminal()
        renderer = FrameRenderer(terminal)
        _render(renderer, "x" * 200)
        assert "x" * 200 in terminal.text

    def test_resize_between_frames(self) -> None:
        terminal = VirtualTerminal(columns=20)
        renderer = FrameRenderer(terminal)
        _render(renderer, "abcdefghij")
        terminal.resize(columns=5)
        terminal.clear_buffer()
        _render(renderer, "abcdefghij")
        # the replayed previous frame matches, nothing is rewritten
        assert "abcde" not in terminal.text
