"""Tests for custom-type prompts, confirm and the one-line shortcuts."""

from __future__ import annotations

import datetime

import pytest

from pi.inquire.parser import parse_number
from pi.inquire.prompts import one_liners
from pi.inquire.prompts.confirm import Confirm
from pi.inquire.prompts.custom_type import CustomType
from pi.inquire.render_config import RenderConfig
from pi.inquire.validator import Invalid, Valid, Validation

from .virtual_terminal import VirtualTerminal

SUBMIT = "\r"
BACKSPACE = "\x7f"


def _custom(parser, **kwargs) -> CustomType:
    return CustomType("Amount", parser, render_config=RenderConfig.empty(), **kwargs)


def _confirm(**kwargs) -> Confirm:
    return Confirm("Continue?", render_config=RenderConfig.empty(), **kwargs)


class TestCustomType:
    def test_parse_int(self) -> None:
        terminal = VirtualTerminal(["4", "2", SUBMIT])
        assert _custom(parse_number(int)).prompt(terminal) == 42
        assert "? Amount 42" in terminal.text

    def test_parse_float(self) -> None:
        terminal = VirtualTerminal([*"2.5", SUBMIT])
        assert _custom(parse_number(float)).prompt(terminal) == 2.5

    def test_parse_error_keeps_prompt_running(self) -> None:
        terminal = VirtualTerminal(["x", SUBMIT, BACKSPACE, "3", SUBMIT])
        assert _custom(parse_number(int)).prompt(terminal) == 3
        assert "# Invalid input" in terminal.text

    def test_custom_error_message(self) -> None:
        terminal = VirtualTerminal(["x", SUBMIT, BACKSPACE, "1", SUBMIT])
        _custom(parse_number(int), error_message="numbers only").prompt(terminal)
        assert "# numbers only" in terminal.text

    def test_default_used_for_empty_input(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        assert _custom(parse_number(int), default=7).prompt(terminal) == 7
        assert "? Amount (7)" in terminal.text

    def test_typed_value_overrides_default(self) -> None:
        terminal = VirtualTerminal(["9", SUBMIT])
        assert _custom(parse_number(int), default=7).prompt(terminal) == 9

    def test_empty_input_without_default_is_parsed(self) -> None:
        terminal = VirtualTerminal([SUBMIT, "5", SUBMIT])
        assert _custom(parse_number(int)).prompt(terminal) == 5
        assert "# Invalid input" in terminal.text

    def test_starting_input(self) -> None:
        terminal = VirtualTerminal(["0", SUBMIT])
        assert _custom(parse_number(int), starting_input="1").prompt(terminal) == 10

    def test_validators_run_after_parsing(self) -> None:
        def positive(value: int) -> Validation:
            return Valid() if value > 0 else Invalid("must be positive")

        terminal = VirtualTerminal(["-", "1", SUBMIT, BACKSPACE, BACKSPACE, "2", SUBMIT])
        answer = _custom(parse_number(int), validators=[positive]).prompt(terminal)
        assert answer == 2
        assert "# must be positive" in terminal.text

    def test_formatters(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        _custom(
            parse_number(float),
            default=1.5,
            formatter=lambda value: f"${value:.2f}",
            default_value_formatter=lambda value: f"{value:.1f} USD",
        ).prompt(terminal)
        assert "(1.5 USD)" in terminal.text
        assert "? Amount $1.50" in terminal.text


class TestConfirm:
    @pytest.mark.parametrize(
        ("typed", "expected"),
        [("y", True), ("Y", True), ("yes", True), ("n", False), ("NO", False)],
    )
    def test_answers(self, typed: str, expected: bool) -> None:
        terminal = VirtualTerminal([*typed, SUBMIT])
        assert _confirm().prompt(terminal) is expected

    def test_answer_line(self) -> None:
        terminal = VirtualTerminal(["n", SUBMIT])
        _confirm().prompt(terminal)
        assert "? Continue? No" in terminal.text

    def test_default_hint(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        assert _confirm(default=True).prompt(terminal) is True
        assert "(Y/n)" in terminal.text

        terminal = VirtualTerminal([SUBMIT])
        assert _confirm(default=False).prompt(terminal) is False
        assert "(y/N)" in terminal.text

    def test_invalid_answer(self) -> None:
        terminal = VirtualTerminal(["m", SUBMIT, BACKSPACE, "y", SUBMIT])
        assert _confirm().prompt(terminal) is True
        assert "# Invalid answer, try typing 'y' for yes or 'n' for no" in terminal.text

    def test_as_custom_type(self) -> None:
        custom = _confirm(default=True, help_message="hint").as_custom_type()
        assert custom.default is True
        assert custom.help_message == "hint"
        assert custom.parser("yes") is True


class TestOneLiners:
    @pytest.fixture
    def terminal(self, monkeypatch: pytest.MonkeyPatch) -> VirtualTerminal:
        terminal = VirtualTerminal()
        monkeypatch.setattr("pi.inquire.prompts.prompt.ProcessTerminal", lambda: terminal)
        return terminal

    def test_prompt_text(self, terminal: VirtualTerminal) -> None:
        terminal.feed(["h", "i", SUBMIT])
        assert one_liners.prompt_text("Say") == "hi"

    def test_prompt_secret_has_no_confirmation(self, terminal: VirtualTerminal) -> None:
        terminal.feed(["s", SUBMIT])
        assert one_liners.prompt_secret("Token") == "s"
        assert terminal.pending_keys == 0

    def test_prompt_confirm(self, terminal: VirtualTerminal) -> None:
        terminal.feed(["y", SUBMIT])
        assert one_liners.prompt_confirm("Sure?") is True

    def test_prompt_int(self, terminal: VirtualTerminal) -> None:
        terminal.feed(["1", "2", SUBMIT])
        assert one_liners.prompt_int("Count") == 12

    def test_prompt_float(self, terminal: VirtualTerminal) -> None:
        terminal.feed(["0", ".", "5", SUBMIT])
        assert one_liners.prompt_float("Ratio") == 0.5

    def test_prompt_date(self, terminal: VirtualTerminal, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "pi.inquire.prompts.dateselect.get_current_date", lambda: datetime.date(2021, 7, 25)
        )
        terminal.feed(["\x1b[C", SUBMIT])
        assert one_liners.prompt_date("When") == datetime.date(2021, 7, 26)
