"""Tests for the shared prompt loop and terminal lifecycle."""

from __future__ import annotations

import pytest

from pi.inquire.errors import OperationCanceledError, OperationInterruptedError
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.prompts.prompt import Action, ActionResult, run_prompt
from pi.inquire.prompts.text import Text
from pi.inquire.render_config import RenderConfig

from .virtual_terminal import VirtualTerminal

SUBMIT = "\r"
ESC = "\x1b"
CTRL_C = "\x03"


def _text(**kwargs) -> Text:
    return Text("Name?", render_config=RenderConfig.empty(), **kwargs)


class TestActionResult:
    def test_merge(self) -> None:
        clean, redraw = ActionResult.CLEAN, ActionResult.NEEDS_REDRAW
        assert clean.merge(clean) is clean
        assert clean.merge(redraw) is redraw
        assert redraw.merge(clean) is redraw


class TestLoopActions:
    def test_submit_keys(self) -> None:
        assert Action.from_key(Key.of(KeyKind.SUBMIT)) is Action.SUBMIT
        assert Action.from_key(Key.of(KeyKind.ENTER)) is Action.SUBMIT

    def test_cancel_keys(self) -> None:
        assert Action.from_key(Key.of(KeyKind.CANCEL)) is Action.CANCEL
        assert Action.from_key(Key.of(KeyKind.ESCAPE)) is Action.CANCEL

    def test_modified_escape_does_not_cancel(self) -> None:
        assert Action.from_key(Key.of(KeyKind.CANCEL, KeyModifiers.ALT)) is None

    def test_interrupt(self) -> None:
        assert Action.from_key(Key.of(KeyKind.INTERRUPT)) is Action.INTERRUPT

    def test_other_keys(self) -> None:
        assert Action.from_key(Key.char_key("a")) is None


class TestPromptLoop:
    """The loop reads keys until an answer is accepted."""

    def test_answer_line(self) -> None:
        terminal = VirtualTerminal(["h", "i", SUBMIT])
        assert _text().prompt(terminal) == "hi"
        assert "? Name? hi" in terminal.text

    def test_cancel_raises(self) -> None:
        terminal = VirtualTerminal(["a", ESC])
        with pytest.raises(OperationCanceledError):
            _text().prompt(terminal)
        assert "? Name? <canceled>" in terminal.text

    def test_interrupt_raises(self) -> None:
        terminal = VirtualTerminal(["a", CTRL_C, "b"])
        with pytest.raises(OperationInterruptedError):
            _text().prompt(terminal)
        assert terminal.pending_keys == 1

    def test_skippable_returns_none_on_cancel(self) -> None:
        terminal = VirtualTerminal([ESC])
        assert _text().prompt_skippable(terminal) is None

    def test_skippable_returns_answer(self) -> None:
        terminal = VirtualTerminal(["x", SUBMIT])
        assert _text().prompt_skippable(terminal) == "x"

    def test_skippable_propagates_interrupt(self) -> None:
        terminal = VirtualTerminal([CTRL_C])
        with pytest.raises(OperationInterruptedError):
            _text().prompt_skippable(terminal)

    def test_end_of_input_propagates(self) -> None:
        terminal = VirtualTerminal(["a"])
        with pytest.raises(EOFError):
            _text().prompt(terminal)

    def test_unmapped_keys_are_ignored(self) -> None:
        terminal = VirtualTerminal(["a", "\x1b[5~", "\x1b[1;5A", "b", SUBMIT])
        assert _text().prompt(terminal) == "ab"

    def test_meta_escape_arrow_does_not_cancel(self) -> None:
        terminal = VirtualTerminal(["a", "\x1b\x1b[A", "b", SUBMIT])
        assert _text().prompt(terminal) == "ab"

    def test_clean_actions_do_not_redraw(self) -> None:
        terminal = VirtualTerminal(["\x1b[D", "\x1b[D", SUBMIT])
        _text().prompt(terminal)
        # prompt frame, answer frame and close
        assert terminal.flush_count == 3


class TestTerminalLifecycle:
    """Raw mode is entered once and always left."""

    def test_start_stop_on_success(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        _text().prompt(terminal)
        assert terminal.start_count == 1
        assert terminal.stop_count == 1

    def test_stop_on_error(self) -> None:
        terminal = VirtualTerminal([ESC])
        with pytest.raises(OperationCanceledError):
            _text().prompt(terminal)
        assert terminal.stop_count == 1
        assert not terminal.started

    def test_cursor_left_below_prompt(self) -> None:
        terminal = VirtualTerminal(["a", SUBMIT])
        _text().prompt(terminal)
        assert terminal.output.endswith("\r\n\x1b[?25h")

    def test_run_prompt_directly(self) -> None:
        terminal = VirtualTerminal(["o", "k", SUBMIT])
        prompt = _text()._build()
        assert run_prompt(prompt, RenderConfig.empty(), terminal) == "ok"

    def test_default_terminal_is_process_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        terminal = VirtualTerminal(["z", SUBMIT])
        monkeypatch.setattr("pi.inquire.prompts.prompt.ProcessTerminal", lambda: terminal)
        assert _text().prompt() == "z"
        assert terminal.stop_count == 1
