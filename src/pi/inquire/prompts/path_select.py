"""Filesystem browser prompt: walk directories and pick files or folders."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE
from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.formatter import Formatter
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.scoring import ScoredView, adjust_cursor, substring_scorer
from pi.inquire.utils import paginate
from pi.inquire.validator import Invalid, Validator, run_validators

logger = logging.getLogger(__name__)

DEFAULT_HELP_MESSAGE = (
    "↑↓ to move, space to select, → to open folder, ← to go up, "
    "shift+→ to select all, shift+← to clear, tab to change sorting"
)

PathFilter = Callable[[Path], bool]


def accept_extensions(*extensions: str) -> PathFilter:
    """Filter accepting paths whose suffix is one of *extensions* (case-insensitive)."""
    wanted = {ext.lower().lstrip(".") for ext in extensions}
    return lambda path: path.suffix.lower().lstrip(".") in wanted


# ---------------------------------------------------------------------------
# Modes and entries
# ---------------------------------------------------------------------------


class PathSelectionMode(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    FILE_OR_DIRECTORY = "fileOrDirectory"


class PathSortingMode(enum.Enum):
    PATH = "path"
    SIZE = "size"
    EXTENSION = "extension"

    def next(self) -> PathSortingMode:
        modes = list(PathSortingMode)
        return modes[(modes.index(self) + 1) % len(modes)]


@dataclass(frozen=True)
class PathEntry:
    """A directory listing entry. *path* is the symlink target for links."""

    path: Path
    is_dir: bool
    size: int = 0
    symlink_path: Path | None = None

    @classmethod
    def from_path(cls, path: Path) -> PathEntry:
        if path.is_symlink():
            target = path.resolve()
            return cls(target, target.is_dir(), _file_size(target), symlink_path=path)
        return cls(path, path.is_dir(), _file_size(path))

    @property
    def name(self) -> str:
        return (self.symlink_path or self.path).name

    def is_selectable(self, mode: PathSelectionMode, path_filter: PathFilter | None) -> bool:
        if mode is PathSelectionMode.FILE and self.is_dir:
            return False
        if mode is PathSelectionMode.DIRECTORY and not self.is_dir:
            return False
        return path_filter is None or path_filter(self.path)

    def __str__(self) -> str:
        if self.symlink_path is not None:
            return f"{self.symlink_path.name} -> {self.path}"
        if self.is_dir:
            return f"(dir) {self.path.name}"
        return self.path.name


def _file_size(path: Path) -> int:
    try:
        return 0 if path.is_dir() else path.stat().st_size
    except OSError:
        return 0


def _sort_key(mode: PathSortingMode) -> Callable[[PathEntry], tuple]:
    if mode is PathSortingMode.SIZE:
        return lambda entry: (not entry.is_dir, entry.size, entry.path)
    if mode is PathSortingMode.EXTENSION:
        return lambda entry: (entry.path.suffix.lower(), entry.path)
    return lambda entry: (entry.path,)


def list_directory(
    directory: Path,
    mode: PathSelectionMode,
    path_filter: PathFilter | None = None,
    show_hidden: bool = False,
    show_symlinks: bool = False,
    sorting_mode: PathSortingMode = PathSortingMode.PATH,
) -> list[PathEntry]:
    """Entries of *directory* worth showing: every folder plus selectable files."""
    entries: list[PathEntry] = []
    for child in directory.iterdir():
        if not show_hidden and child.name.startswith("."):
            continue
        if not show_symlinks and child.is_symlink():
            continue
        entry = PathEntry.from_path(child)
        if entry.is_dir or entry.is_selectable(mode, path_filter):
            entries.append(entry)
    entries.sort(key=_sort_key(sorting_mode))
    return entries


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class PathAction(enum.Enum):
    TOGGLE_CURRENT_OPTION = "toggleCurrentOption"
    SELECT_ALL = "selectAll"
    CLEAR_SELECTIONS = "clearSelections"
    NAVIGATE_DEEPER = "navigateDeeper"
    NAVIGATE_HIGHER = "navigateHigher"
    CHANGE_SORTING_MODE = "changeSortingMode"


PathSelectAction = ListAction | PathAction | InputAction


@dataclass(frozen=True)
class PathSelectConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    page_size: int = DEFAULT_PAGE_SIZE
    keep_filter: bool = True


def path_select_action_from_key(key: Key, config: PathSelectConfig) -> PathSelectAction | None:
    action = list_action_from_key(key, config.vim_mode)
    if action is not None:
        return action

    if key.is_char(" "):
        return PathAction.TOGGLE_CURRENT_OPTION
    if key.kind is KeyKind.TAB and key.modifiers == KeyModifiers.NONE:
        return PathAction.CHANGE_SORTING_MODE
    if key.kind is KeyKind.RIGHT:
        if key.modifiers == KeyModifiers.NONE:
            return PathAction.NAVIGATE_DEEPER
        if key.modifiers == KeyModifiers.SHIFT:
            return PathAction.SELECT_ALL
    if key.kind is KeyKind.LEFT:
        if key.modifiers == KeyModifiers.NONE:
            return PathAction.NAVIGATE_HIGHER
        if key.modifiers == KeyModifiers.SHIFT:
            return PathAction.CLEAR_SELECTIONS
    return input_action_from_key(key)


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------


class PathSelectPrompt(Prompt[PathSelectAction, list[Path]]):
    def __init__(self, path_select: PathSelect) -> None:
        selected: set[Path] = set()
        for default in path_select.default or ():
            path = Path(default)
            if not path.exists():
                raise InvalidConfigurationError(f"Default path {str(path)!r} does not exist")
            selected.add(PathEntry.from_path(path).path)

        start = Path(path_select.start_path) if path_select.start_path is not None else Path.cwd()
        if not start.is_dir():
            start = start.parent
        if not start.is_dir():
            raise InvalidConfigurationError(f"Start path {str(start)!r} is not a directory")

        self.message = path_select.message
        self.config = PathSelectConfig(
            vim_mode=path_select.vim_mode,
            page_size=path_select.page_size,
            keep_filter=path_select.keep_filter,
        )
        self.help_message = path_select.help_message
        self.formatter = path_select.formatter
        self.validators = list(path_select.validators)
        self.selection_mode = path_select.selection_mode
        self.path_filter = path_select.path_filter
        self.show_hidden = path_select.show_hidden
        self.show_symlinks = path_select.show_symlinks
        self.select_multiple = path_select.select_multiple
        self.sorting_mode = path_select.sorting_mode
        self.selected = selected
        self.input = Input()
        self.error: Invalid | None = None
        self.cursor = 0
        self.current_dir = start.absolute()
        self.entries: list[PathEntry] = []
        self.view: ScoredView[PathEntry] = ScoredView([], [])
        self._load(self.current_dir)

    def _load(self, directory: Path) -> bool:
        try:
            entries = list_directory(
                directory,
                self.selection_mode,
                self.path_filter,
                self.show_hidden,
                self.show_symlinks,
                self.sorting_mode,
            )
        except PermissionError:
            logger.debug("Cannot list %s", directory, exc_info=True)
            self.error = Invalid(f"Permission denied: {directory}")
            return False

        logger.debug("Listing %s (%d entries)", directory, len(entries))
        self.current_dir = directory
        self.entries = entries
        self.view = ScoredView(entries, [entry.name for entry in entries], substring_scorer)
        self.input.clear()
        self.cursor = 0
        self.error = None
        return True

    def _run_scorer(self) -> None:
        if self.view.refresh(self.input.content):
            self.cursor = adjust_cursor(self.cursor, len(self.view), reset_cursor=False)

    def _current_entry(self) -> PathEntry | None:
        if self.cursor >= len(self.view):
            return None
        return self.entries[self.view[self.cursor]]

    def _selectable(self, entry: PathEntry) -> bool:
        return entry.is_selectable(self.selection_mode, self.path_filter)

    def _selection_changed(self) -> ActionResult:
        if not self.config.keep_filter and not self.input.is_empty():
            self.input.clear()
            self._run_scorer()
        return ActionResult.NEEDS_REDRAW

    def _toggle_current(self) -> ActionResult:
        entry = self._current_entry()
        if entry is None or not self._selectable(entry):
            return ActionResult.CLEAN
        if entry.path in self.selected:
            self.selected.remove(entry.path)
        else:
            if not self.select_multiple:
                self.selected.clear()
            self.selected.add(entry.path)
        return self._selection_changed()

    def _select_all(self) -> ActionResult:
        if not self.select_multiple:
            entry = self._current_entry()
            if entry is None or not self._selectable(entry):
                return ActionResult.CLEAN
            self.selected = {entry.path}
            return self._selection_changed()
        for index in self.view.indices:
            entry = self.entries[index]
            if self._selectable(entry):
                self.selected.add(entry.path)
        return self._selection_changed()

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> PathSelectAction | None:
        return path_select_action_from_key(key, self.config)

    def submit(self) -> list[Path] | None:
        answer = sorted(self.selected)
        validation = run_validators(self.validators, answer)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: PathSelectAction) -> ActionResult:
        if isinstance(action, ListAction):
            position = navigate(action, self.cursor, len(self.view), self.config.page_size)
            if position == self.cursor:
                return ActionResult.CLEAN
            self.cursor = position
            return ActionResult.NEEDS_REDRAW

        if action is PathAction.TOGGLE_CURRENT_OPTION:
            return self._toggle_current()
        if action is PathAction.SELECT_ALL:
            return self._select_all()
        if action is PathAction.CLEAR_SELECTIONS:
            self.selected.clear()
            return self._selection_changed()
        if action is PathAction.NAVIGATE_DEEPER:
            entry = self._current_entry()
            if entry is None or not entry.is_dir:
                return ActionResult.CLEAN
            self._load(entry.path)
            return ActionResult.NEEDS_REDRAW
        if action is PathAction.NAVIGATE_HIGHER:
            parent = self.current_dir.parent
            if parent == self.current_dir:
                return ActionResult.CLEAN
            self._load(parent)
            return ActionResult.NEEDS_REDRAW
        if action is PathAction.CHANGE_SORTING_MODE:
            self.sorting_mode = self.sorting_mode.next()
            self._load(self.current_dir)
            return ActionResult.NEEDS_REDRAW

        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._run_scorer()
        return ActionResult.from_input(result)

    def format_answer(self, answer: list[Path]) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_select_prompt(self.message, self.input)
        backend.render_location(str(self.current_dir))

        choices = [ListOption(i, self.entries[i]) for i in self.view.indices]
        page = paginate(self.config.page_size, choices, self.cursor)
        checked = {i for i, entry in enumerate(self.entries) if entry.path in self.selected}
        backend.render_options(page, checked)

        if self.help_message:
            backend.render_help_message(self.help_message)


def format_paths(paths: Sequence[Path]) -> str:
    return ", ".join(str(path) for path in paths)


@dataclass
class PathSelect(PromptBuilder[list[Path]]):
    """Browse the filesystem from *start_path* and pick paths.

    Only one path can be picked unless ``select_multiple`` is set. Folders
    are always listed so they can be opened; whether they can be picked
    depends on ``selection_mode``. Selections survive moving between
    folders, and the answer is sorted.
    """

    message: str
    start_path: str | os.PathLike[str] | None = None
    default: Sequence[str | os.PathLike[str]] | None = None
    help_message: str | None = DEFAULT_HELP_MESSAGE
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    selection_mode: PathSelectionMode = PathSelectionMode.FILE
    path_filter: PathFilter | None = None
    show_hidden: bool = False
    show_symlinks: bool = False
    select_multiple: bool = False
    sorting_mode: PathSortingMode = PathSortingMode.PATH
    keep_filter: bool = True
    formatter: Formatter[Sequence[Path]] = format_paths
    validators: list[Validator[list[Path]]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> PathSelectPrompt:
        return PathSelectPrompt(self)
