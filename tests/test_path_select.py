"""Tests for the filesystem path-select prompt."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.input import Write
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.prompts.list_navigation import ListAction
from pi.inquire.prompts.path_select import (
    PathAction,
    PathEntry,
    PathSelect,
    PathSelectConfig,
    PathSelectionMode,
    PathSortingMode,
    accept_extensions,
    list_directory,
    path_select_action_from_key,
)
from pi.inquire.render_config import RenderConfig
from pi.inquire.validator import Invalid, Valid

from .virtual_terminal import VirtualTerminal

SUBMIT = "\r"
SPACE = " "
TAB = "\t"
DOWN = "\x1b[B"
LEFT = "\x1b[D"
RIGHT = "\x1b[C"
SHIFT_LEFT = "\x1b[1;2D"
SHIFT_RIGHT = "\x1b[1;2C"


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """big.log, docs/{a.md,b.txt}, empty/, notes.txt and a hidden file."""
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "a.md").write_text("# a")
    (tmp_path / "docs" / "b.txt").write_text("b")
    (tmp_path / "empty").mkdir()
    (tmp_path / "notes.txt").write_text("x" * 5)
    (tmp_path / "big.log").write_text("x" * 50)
    (tmp_path / ".hidden").write_text("")
    return tmp_path


def _path_select(start: Path, **kwargs) -> PathSelect:
    return PathSelect("Pick", start_path=start, render_config=RenderConfig.empty(), **kwargs)


class TestPathSelectKeyMapping:
    config = PathSelectConfig()

    def test_arrows(self) -> None:
        action = path_select_action_from_key
        assert action(Key.of(KeyKind.RIGHT), self.config) is PathAction.NAVIGATE_DEEPER
        assert action(Key.of(KeyKind.LEFT), self.config) is PathAction.NAVIGATE_HIGHER
        shift = KeyModifiers.SHIFT
        assert action(Key.of(KeyKind.RIGHT, shift), self.config) is PathAction.SELECT_ALL
        assert action(Key.of(KeyKind.LEFT, shift), self.config) is PathAction.CLEAR_SELECTIONS

    def test_space_tab_and_typing(self) -> None:
        action = path_select_action_from_key
        assert action(Key.char_key(" "), self.config) is PathAction.TOGGLE_CURRENT_OPTION
        assert action(Key.of(KeyKind.TAB), self.config) is PathAction.CHANGE_SORTING_MODE
        assert action(Key.char_key("q"), self.config) == Write("q")

    def test_vim_mode(self) -> None:
        vim = PathSelectConfig(vim_mode=True)
        assert path_select_action_from_key(Key.char_key("j"), vim) is ListAction.MOVE_DOWN


class TestListing:
    def test_default_listing(self, tree: Path) -> None:
        entries = list_directory(tree, PathSelectionMode.FILE)
        assert [str(entry) for entry in entries] == [
            "big.log",
            "(dir) docs",
            "(dir) empty",
            "notes.txt",
        ]

    def test_directory_mode_lists_only_folders(self, tree: Path) -> None:
        entries = list_directory(tree, PathSelectionMode.DIRECTORY)
        assert [entry.name for entry in entries] == ["docs", "empty"]

    def test_path_filter(self, tree: Path) -> None:
        entries = list_directory(tree, PathSelectionMode.FILE, accept_extensions(".TXT"))
        assert [entry.name for entry in entries] == ["docs", "empty", "notes.txt"]

    def test_hidden_files(self, tree: Path) -> None:
        entries = list_directory(tree, PathSelectionMode.FILE, show_hidden=True)
        assert entries[0].name == ".hidden"

    def test_size_sorting_puts_folders_first(self, tree: Path) -> None:
        entries = list_directory(tree, PathSelectionMode.FILE, sorting_mode=PathSortingMode.SIZE)
        assert [entry.name for entry in entries] == ["docs", "empty", "notes.txt", "big.log"]

    def test_symlinks(self, tree: Path) -> None:
        os.symlink(tree / "notes.txt", tree / "link")
        assert "link" not in [entry.name for entry in list_directory(tree, PathSelectionMode.FILE)]

        entries = list_directory(tree, PathSelectionMode.FILE, show_symlinks=True)
        link = next(entry for entry in entries if entry.name == "link")
        assert link.path == (tree / "notes.txt").resolve()
        assert str(link) == f"link -> {link.path}"

    def test_sorting_modes_cycle(self) -> None:
        assert PathSortingMode.PATH.next() is PathSortingMode.SIZE
        assert PathSortingMode.EXTENSION.next() is PathSortingMode.PATH

    def test_selectable(self, tree: Path) -> None:
        folder = PathEntry.from_path(tree / "docs")
        assert not folder.is_selectable(PathSelectionMode.FILE, None)
        assert folder.is_selectable(PathSelectionMode.FILE_OR_DIRECTORY, None)


class TestPathSelectPrompt:
    def test_pick_single_file(self, tree: Path) -> None:
        terminal = VirtualTerminal([SPACE, SUBMIT])
        assert _path_select(tree).prompt(terminal) == [tree / "big.log"]
        assert f"? Pick {tree / 'big.log'}" in terminal.text

    def test_single_selection_replaces(self, tree: Path) -> None:
        keys = [SPACE, DOWN, DOWN, DOWN, SPACE, SUBMIT]
        assert _path_select(tree).prompt(VirtualTerminal(keys)) == [tree / "notes.txt"]

    def test_multiple_selection(self, tree: Path) -> None:
        keys = [SPACE, DOWN, DOWN, DOWN, SPACE, SUBMIT]
        answer = _path_select(tree, select_multiple=True).prompt(VirtualTerminal(keys))
        assert answer == [tree / "big.log", tree / "notes.txt"]

    def test_folder_not_selectable_in_file_mode(self, tree: Path) -> None:
        assert _path_select(tree).prompt(VirtualTerminal([DOWN, SPACE, SUBMIT])) == []

    def test_directory_mode(self, tree: Path) -> None:
        terminal = VirtualTerminal([SPACE, SUBMIT])
        answer = _path_select(tree, selection_mode=PathSelectionMode.DIRECTORY).prompt(terminal)
        assert answer == [tree / "docs"]
        assert "notes.txt" not in terminal.text

    def test_navigate_into_folder(self, tree: Path) -> None:
        terminal = VirtualTerminal([DOWN, RIGHT, SPACE, SUBMIT])
        assert _path_select(tree).prompt(terminal) == [tree / "docs" / "a.md"]
        assert str(tree / "docs") in terminal.text

    def test_navigate_up(self, tree: Path) -> None:
        terminal = VirtualTerminal([LEFT, SPACE, SUBMIT])
        assert _path_select(tree / "docs").prompt(terminal) == [tree / "big.log"]

    def test_selection_survives_navigation(self, tree: Path) -> None:
        keys = [SPACE, DOWN, RIGHT, SPACE, SUBMIT]
        answer = _path_select(tree, select_multiple=True).prompt(VirtualTerminal(keys))
        assert answer == [tree / "big.log", tree / "docs" / "a.md"]

    def test_empty_folder(self, tree: Path) -> None:
        keys = [DOWN, DOWN, RIGHT, RIGHT, SPACE, SUBMIT]
        assert _path_select(tree).prompt(VirtualTerminal(keys)) == []

    def test_filter_by_name(self, tree: Path) -> None:
        terminal = VirtualTerminal(["n", "o", SPACE, SUBMIT])
        assert _path_select(tree).prompt(terminal) == [tree / "notes.txt"]

    def test_tab_changes_sorting(self, tree: Path) -> None:
        keys = [TAB, DOWN, DOWN, SPACE, SUBMIT]
        assert _path_select(tree).prompt(VirtualTerminal(keys)) == [tree / "notes.txt"]

    def test_select_all_and_clear(self, tree: Path) -> None:
        answer = _path_select(tree, select_multiple=True).prompt(VirtualTerminal([SHIFT_RIGHT, SUBMIT]))
        assert answer == [tree / "big.log", tree / "notes.txt"]

        keys = [SHIFT_RIGHT, SHIFT_LEFT, SUBMIT]
        assert _path_select(tree, select_multiple=True).prompt(VirtualTerminal(keys)) == []

    def test_select_all_in_single_mode_picks_current(self, tree: Path) -> None:
        keys = [SPACE, SHIFT_RIGHT, SUBMIT]
        assert _path_select(tree).prompt(VirtualTerminal(keys)) == [tree / "big.log"]

    def test_start_path_file_uses_parent(self, tree: Path) -> None:
        terminal = VirtualTerminal([SPACE, SUBMIT])
        assert _path_select(tree / "notes.txt").prompt(terminal) == [tree / "big.log"]

    def test_default_paths(self, tree: Path) -> None:
        terminal = VirtualTerminal([SUBMIT])
        assert _path_select(tree, default=[tree / "notes.txt"]).prompt(terminal) == [
            tree / "notes.txt"
        ]
        assert "  [x] notes.txt" in terminal.text

    def test_missing_default(self, tree: Path) -> None:
        with pytest.raises(InvalidConfigurationError, match="does not exist"):
            _path_select(tree, default=[tree / "gone.txt"]).prompt(VirtualTerminal([SUBMIT]))

    def test_validation(self, tree: Path) -> None:
        def one_path(paths: list[Path]):
            return Valid() if paths else Invalid("pick a file")

        terminal = VirtualTerminal([SUBMIT, SPACE, SUBMIT])
        assert _path_select(tree, validators=[one_path]).prompt(terminal) == [tree / "big.log"]
        assert "# pick a file" in terminal.text


class TestPathSelectFilterPolicy:
    def _toggle_after_filter(self, tree: Path, keep_filter: bool):
        prompt = _path_select(tree, keep_filter=keep_filter)._build()
        prompt.handle(Write("n"))
        prompt.handle(Write("o"))
        prompt.handle(PathAction.TOGGLE_CURRENT_OPTION)
        return prompt

    def test_keep_filter(self, tree: Path) -> None:
        prompt = self._toggle_after_filter(tree, keep_filter=True)
        assert prompt.input.content == "no"
        assert prompt.selected == {tree / "notes.txt"}

    def test_clear_filter(self, tree: Path) -> None:
        prompt = self._toggle_after_filter(tree, keep_filter=False)
        assert prompt.input.content == ""
        assert len(prompt.view) == 4
        assert prompt.selected == {tree / "notes.txt"}

    def test_navigation_clears_filter(self, tree: Path) -> None:
        prompt = _path_select(tree)._build()
        prompt.handle(Write("d"))
        prompt.handle(PathAction.NAVIGATE_DEEPER)
        assert prompt.current_dir == tree / "docs"
        assert prompt.input.content == ""
        assert prompt.cursor == 0
