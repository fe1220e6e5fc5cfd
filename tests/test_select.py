"""Tests for the select prompt and shared list navigation."""

from __future__ import annotations

import pytest

from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.select import Select
from pi.inquire.render_config import RenderConfig
from pi.inquire.scoring import substring_scorer

from .virtual_terminal import VirtualTerminal

SUBMIT = "\r"
BACKSPACE = "\x7f"
UP = "\x1b[A"
DOWN = "\x1b[B"
PAGE_UP = "\x1b[5~"
PAGE_DOWN = "\x1b[6~"
HOME = "\x1b[H"
END = "\x1b[F"

FRUITS = ["Banana", "Apple", "Strawberry"]


def _select(options: list[str] = FRUITS, **kwargs) -> Select[str]:
    return Select("Fruit?", options, render_config=RenderConfig.empty(), **kwargs)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestListActionFromKey:
    def test_arrows(self) -> None:
        assert list_action_from_key(Key.of(KeyKind.UP), False) is ListAction.MOVE_UP
        assert list_action_from_key(Key.of(KeyKind.DOWN), False) is ListAction.MOVE_DOWN

    def test_modified_arrows_are_not_navigation(self) -> None:
        key = Key.of(KeyKind.DOWN, KeyModifiers.CONTROL)
        assert list_action_from_key(key, False) is None

    def test_paging_and_ends(self) -> None:
        assert list_action_from_key(Key.of(KeyKind.PAGE_UP), False) is ListAction.PAGE_UP
        assert list_action_from_key(Key.of(KeyKind.PAGE_DOWN), False) is ListAction.PAGE_DOWN
        assert list_action_from_key(Key.of(KeyKind.HOME), False) is ListAction.MOVE_TO_START
        assert list_action_from_key(Key.of(KeyKind.END), False) is ListAction.MOVE_TO_END

    def test_vim_keys(self) -> None:
        assert list_action_from_key(Key.char_key("j"), True) is ListAction.MOVE_DOWN
        assert list_action_from_key(Key.char_key("k"), True) is ListAction.MOVE_UP
        assert list_action_from_key(Key.char_key("j"), False) is None


class TestNavigate:
    """Single steps wrap around, page jumps stop at the ends."""

    def test_down_wraps(self) -> None:
        assert navigate(ListAction.MOVE_DOWN, 4, 5, 3) == 0

    def test_up_wraps(self) -> None:
        assert navigate(ListAction.MOVE_UP, 0, 5, 3) == 4

    def test_page_down_saturates(self) -> None:
        assert navigate(ListAction.PAGE_DOWN, 0, 10, 3) == 3
        assert navigate(ListAction.PAGE_DOWN, 8, 10, 3) == 9

    def test_page_up_saturates(self) -> None:
        assert navigate(ListAction.PAGE_UP, 5, 10, 3) == 2
        assert navigate(ListAction.PAGE_UP, 1, 10, 3) == 0

    def test_start_and_end(self) -> None:
        assert navigate(ListAction.MOVE_TO_START, 5, 10, 3) == 0
        assert navigate(ListAction.MOVE_TO_END, 5, 10, 3) == 9

    def test_empty_list(self) -> None:
        for action in ListAction:
            assert navigate(action, 0, 0, 3) == 0


# ---------------------------------------------------------------------------
# Select prompt
# ---------------------------------------------------------------------------


class TestSelectConfiguration:
    def test_empty_options(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        with pytest.raises(InvalidConfigurationError, match="can not be empty"):
            _select([]).prompt(terminal)
        assert terminal.start_count == 0

    def test_starting_cursor_out_of_bounds(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="out-of-bounds"):
            _select(starting_cursor=3).prompt(VirtualTerminal([SUBMIT]))


class TestSelectPrompt:
    def test_filter_then_submit(self) -> None:
        terminal = VirtualTerminal(["a", "p", SUBMIT])
        assert _select().prompt(terminal) == "Apple"
        assert "? Fruit? Apple" in terminal.text

    def test_raw_prompt_returns_list_option(self) -> None:
        terminal = VirtualTerminal([DOWN, DOWN, SUBMIT])
        assert _select().raw_prompt(terminal) == ListOption(2, "Strawberry")

    def test_starting_cursor(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        assert _select(starting_cursor=1).prompt(terminal) == "Apple"

    def test_down_wraps_around(self) -> None:
        terminal = VirtualTerminal([DOWN, DOWN, DOWN, SUBMIT])
        assert _select().prompt(terminal) == "Banana"

    def test_up_wraps_to_last(self) -> None:
        terminal = VirtualTerminal([UP, SUBMIT])
        assert _select().prompt(terminal) == "Strawberry"

    def test_page_keys(self) -> None:
        options = [str(i) for i in range(10)]
        terminal = VirtualTerminal([PAGE_DOWN, PAGE_DOWN, PAGE_UP, SUBMIT])
        assert _select(options, page_size=3).prompt(terminal) == "3"

    def test_home_and_end(self) -> None:
        options = [str(i) for i in range(10)]
        assert _select(options).prompt(VirtualTerminal([END, SUBMIT])) == "9"
        assert _select(options, starting_cursor=5).prompt(VirtualTerminal([HOME, SUBMIT])) == "0"

    def test_no_match_rejects_submit(self) -> None:
        terminal = VirtualTerminal(["z", "z", SUBMIT, BACKSPACE, BACKSPACE, SUBMIT])
        assert _select().prompt(terminal) == "Banana"

    def test_starting_filter(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        assert _select(starting_filter_input="straw").prompt(terminal) == "Strawberry"

    def test_filter_disabled_ignores_typing(self) -> None:
        terminal = VirtualTerminal(["a", "p", SUBMIT])
        assert _select(filter_input_enabled=False).prompt(terminal) == "Banana"

    def test_vim_mode(self) -> None:
        terminal = VirtualTerminal(["j", SUBMIT])
        assert _select(vim_mode=True).prompt(terminal) == "Apple"

    def test_cursor_kept_when_reset_disabled(self) -> None:
        options = ["ab1", "ab2", "ab3", "xy"]
        terminal = VirtualTerminal([DOWN, DOWN, "a", SUBMIT])
        assert _select(options, reset_cursor=False, scorer=substring_scorer).prompt(terminal) == "ab3"

    def test_cursor_reset_on_filter_change(self) -> None:
        options = ["ab1", "ab2", "ab3", "xy"]
        terminal = VirtualTerminal([DOWN, DOWN, "a", SUBMIT])
        assert _select(options, scorer=substring_scorer).prompt(terminal) == "ab1"

    def test_custom_scorer(self) -> None:
        def exact(filter_text: str, option: str, string_value: str, index: int) -> int | None:
            return 0 if string_value.lower() == filter_text else None

        terminal = VirtualTerminal([*"apple", SUBMIT])
        assert _select(scorer=exact).prompt(terminal) == "Apple"

    def test_non_string_options(self) -> None:
        terminal = VirtualTerminal(["2", "0", SUBMIT])
        assert _select([10, 20, 30]).prompt(terminal) == 20

    def test_formatter(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        _select(formatter=lambda option: f"#{option.index}").prompt(terminal)
        assert "? Fruit? #0" in terminal.text

    def test_options_and_help_rendered(self) -> None:
        terminal = VirtualTerminal([SUBMIT])
        _select().prompt(terminal)
        assert "> Banana" in terminal.text
        assert "  Apple" in terminal.text
        assert "[↑↓ to move, enter to select, type to filter]" in terminal.text
