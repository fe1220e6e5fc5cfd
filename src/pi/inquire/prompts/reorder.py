"""Reorderable list prompt.

The prompt keeps a permutation of the original option indices. Filtering
only hides rows: the cursor indexes the visible rows and moving an item
swaps it with its visible neighbour, so the permutation stays complete.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.prompts.select import check_options
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.scoring import Scorer, adjust_cursor, fuzzy_scorer
from pi.inquire.utils import paginate

T = TypeVar("T")

DEFAULT_HELP_MESSAGE = "↑↓ to move cursor, Ctrl+↑↓ to move item, type to filter"


class MoveItem(enum.Enum):
    UP = "moveItemUp"
    DOWN = "moveItemDown"


ReorderAction = ListAction | MoveItem | InputAction


@dataclass(frozen=True)
class ReorderConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    page_size: int = DEFAULT_PAGE_SIZE
    reset_cursor: bool = True
    filter_input_enabled: bool = True


def reorder_action_from_key(key: Key, config: ReorderConfig) -> ReorderAction | None:
    if config.vim_mode:
        if key.is_char("K", KeyModifiers.SHIFT):
            return MoveItem.UP
        if key.is_char("J", KeyModifiers.SHIFT):
            return MoveItem.DOWN

    if key.is_char("p", KeyModifiers.CONTROL):
        return ListAction.MOVE_UP
    if key.is_char("n", KeyModifiers.CONTROL):
        return ListAction.MOVE_DOWN
    if key.kind is KeyKind.UP and key.modifiers == KeyModifiers.CONTROL:
        return MoveItem.UP
    if key.kind is KeyKind.DOWN and key.modifiers == KeyModifiers.CONTROL:
        return MoveItem.DOWN

    action = list_action_from_key(key, config.vim_mode)
    if action is not None:
        return action

    if config.filter_input_enabled:
        return input_action_from_key(key)
    return None


def _format_items(items: Sequence[object]) -> str:
    return ", ".join(str(item) for item in items)


class ReorderPrompt(Prompt[ReorderAction, list[T]]):
    def __init__(self, reorder: Reorder[T]) -> None:
        check_options(reorder.options, reorder.starting_cursor)

        self.message = reorder.message
        self.config = ReorderConfig(
            vim_mode=reorder.vim_mode,
            page_size=reorder.page_size,
            reset_cursor=reorder.reset_cursor,
            filter_input_enabled=reorder.filter_input_enabled,
        )
        self.options = list(reorder.options)
        self.string_options = [str(option) for option in self.options]
        self.help_message = reorder.help_message
        self.formatter = reorder.formatter
        self.scorer = reorder.scorer
        self.cursor = reorder.starting_cursor
        self.input: Input | None = (
            Input(reorder.starting_filter_input or "") if reorder.filter_input_enabled else None
        )
        # order[p] is the original index of the option shown at display position p
        self.order: list[int] = list(range(len(self.options)))
        self.visible: list[int] = list(range(len(self.options)))

    def _filter(self) -> None:
        """Recompute the display positions matching the filter text."""
        filter_text = self.input.content if self.input is not None else ""
        if filter_text:
            visible = [
                position
                for position, index in enumerate(self.order)
                if self.scorer(filter_text, self.options[index], self.string_options[index], index)
                is not None
            ]
        else:
            visible = list(range(len(self.order)))

        if visible != self.visible:
            self.visible = visible
            self.cursor = adjust_cursor(self.cursor, len(visible), self.config.reset_cursor)

    def _move_item(self, step: int) -> ActionResult:
        target = self.cursor + step
        if not self.visible or not 0 <= target < len(self.visible):
            return ActionResult.CLEAN

        a, b = self.visible[self.cursor], self.visible[target]
        self.order[a], self.order[b] = self.order[b], self.order[a]
        self.cursor = target
        return ActionResult.NEEDS_REDRAW

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> ReorderAction | None:
        return reorder_action_from_key(key, self.config)

    def setup(self) -> None:
        self._filter()

    def submit(self) -> list[T] | None:
        return [self.options[index] for index in self.order]

    def handle(self, action: ReorderAction) -> ActionResult:
        if isinstance(action, ListAction):
            position = navigate(action, self.cursor, len(self.visible), self.config.page_size)
            if position == self.cursor:
                return ActionResult.CLEAN
            self.cursor = position
            return ActionResult.NEEDS_REDRAW

        if action is MoveItem.UP:
            return self._move_item(-1)
        if action is MoveItem.DOWN:
            return self._move_item(1)

        if self.input is None:
            return ActionResult.CLEAN
        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._filter()
        return ActionResult.from_input(result)

    def format_answer(self, answer: list[T]) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        backend.render_select_prompt(self.message, self.input)

        choices = [
            ListOption(position, self.options[self.order[position]]) for position in self.visible
        ]
        page = paginate(self.config.page_size, choices, self.cursor)
        backend.render_options(page)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class Reorder(PromptBuilder[list[T]], Generic[T]):
    """Let the user rearrange a list; the answer is the options in the new order."""

    message: str
    options: Sequence[T]
    help_message: str | None = DEFAULT_HELP_MESSAGE
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    starting_cursor: int = 0
    starting_filter_input: str | None = None
    filter_input_enabled: bool = True
    reset_cursor: bool = True
    scorer: Scorer[T] = fuzzy_scorer
    formatter: Callable[[Sequence[T]], str] = _format_items
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> ReorderPrompt[T]:
        return ReorderPrompt(self)
