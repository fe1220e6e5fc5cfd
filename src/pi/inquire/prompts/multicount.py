"""List prompt where every option carries a count instead of a checkbox."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE
from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.formatter import Formatter, format_counted_options
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import CountedListOption, ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.prompts.select import check_options
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.scoring import Scorer, ScoredView, adjust_cursor, fuzzy_scorer
from pi.inquire.utils import paginate
from pi.inquire.validator import Invalid, Validator, run_validators

T = TypeVar("T")

DEFAULT_HELP_MESSAGE = (
    "↑↓ to move, → to add one, ← to remove one, shift for ten, type to filter"
)
SHIFT_STEP = 10


@dataclass(frozen=True)
class ChangeCount:
    """Add *delta* (possibly negative) to the highlighted option's count."""

    delta: int


@dataclass(frozen=True)
class SetCount:
    count: int


class CountAction(enum.Enum):
    CLEAR_SELECTIONS = "clearSelections"


MultiCountAction = ListAction | ChangeCount | SetCount | CountAction | InputAction


@dataclass(frozen=True)
class MultiCountConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    page_size: int = DEFAULT_PAGE_SIZE
    keep_filter: bool = True
    reset_cursor: bool = True
    filter_input_enabled: bool = True


def multicount_action_from_key(key: Key, config: MultiCountConfig) -> MultiCountAction | None:
    action = list_action_from_key(key, config.vim_mode)
    if action is not None:
        return action

    if config.vim_mode:
        if key.is_char("+"):
            return ChangeCount(1)
        if key.is_char("-"):
            return ChangeCount(-1)

    if key.kind is KeyKind.RIGHT:
        if key.modifiers == KeyModifiers.NONE:
            return ChangeCount(1)
        if key.modifiers == KeyModifiers.SHIFT:
            return ChangeCount(SHIFT_STEP)
    if key.kind is KeyKind.LEFT:
        if key.modifiers == KeyModifiers.NONE:
            return ChangeCount(-1)
        if key.modifiers == KeyModifiers.SHIFT:
            return ChangeCount(-SHIFT_STEP)

    if config.filter_input_enabled:
        return input_action_from_key(key)

    # Without a filter, digits and Delete are free for direct edits.
    if key.kind is KeyKind.CHAR and key.modifiers == KeyModifiers.NONE and key.char.isdigit():
        return SetCount(int(key.char))
    if key.kind is KeyKind.DELETE:
        return CountAction.CLEAR_SELECTIONS
    return None


class MultiCountPrompt(Prompt[MultiCountAction, list[CountedListOption[T]]]):
    def __init__(self, multicount: MultiCount[T]) -> None:
        options = multicount.options
        check_options(options, multicount.starting_cursor)
        for index, _count in multicount.default or ():
            if not 0 <= index < len(options):
                raise InvalidConfigurationError(
                    f"Index {index} is out-of-bounds for length {len(options)} of options"
                )

        self.message = multicount.message
        self.config = MultiCountConfig(
            vim_mode=multicount.vim_mode,
            page_size=multicount.page_size,
            keep_filter=multicount.keep_filter,
            reset_cursor=multicount.reset_cursor,
            filter_input_enabled=multicount.filter_input_enabled,
        )
        self.options = list(options)
        self.help_message = multicount.help_message
        self.formatter = multicount.formatter
        self.validators = list(multicount.validators)
        self.cursor = multicount.starting_cursor
        self.counts: dict[int, int] = {
            index: count for index, count in multicount.default or () if count > 0
        }
        self.input: Input | None = (
            Input(multicount.starting_filter_input or "")
            if multicount.filter_input_enabled
            else None
        )
        self.view: ScoredView[T] = ScoredView(
            self.options, [str(option) for option in self.options], multicount.scorer
        )
        self.error: Invalid | None = None

    def _run_scorer(self) -> None:
        filter_text = self.input.content if self.input is not None else ""
        if self.view.refresh(filter_text):
            self.cursor = adjust_cursor(self.cursor, len(self.view), self.config.reset_cursor)

    def _counts_changed(self) -> ActionResult:
        if not self.config.keep_filter and self.input is not None and not self.input.is_empty():
            self.input.clear()
            self._run_scorer()
        return ActionResult.NEEDS_REDRAW

    def _set_current(self, count: int) -> ActionResult:
        if self.cursor >= len(self.view):
            return ActionResult.CLEAN
        index = self.view[self.cursor]
        count = max(count, 0)
        if count == self.counts.get(index, 0):
            return ActionResult.CLEAN
        if count:
            self.counts[index] = count
        else:
            del self.counts[index]
        return self._counts_changed()

    def _counted_options(self) -> list[CountedListOption[T]]:
        return [
            CountedListOption(self.counts[i], ListOption(i, self.options[i]))
            for i in sorted(self.counts)
        ]

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> MultiCountAction | None:
        return multicount_action_from_key(key, self.config)

    def setup(self) -> None:
        self._run_scorer()

    def submit(self) -> list[CountedListOption[T]] | None:
        answer = self._counted_options()
        validation = run_validators(self.validators, [option.list_option for option in answer])
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: MultiCountAction) -> ActionResult:
        if isinstance(action, ListAction):
            position = navigate(action, self.cursor, len(self.view), self.config.page_size)
            if position == self.cursor:
                return ActionResult.CLEAN
            self.cursor = position
            return ActionResult.NEEDS_REDRAW

        if isinstance(action, ChangeCount):
            if self.cursor >= len(self.view):
                return ActionResult.CLEAN
            current = self.counts.get(self.view[self.cursor], 0)
            return self._set_current(current + action.delta)
        if isinstance(action, SetCount):
            return self._set_current(action.count)
        if action is CountAction.CLEAR_SELECTIONS:
            self.counts.clear()
            return self._counts_changed()

        if self.input is None:
            return ActionResult.CLEAN
        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._run_scorer()
        return ActionResult.from_input(result)

    def format_answer(self, answer: list[CountedListOption[T]]) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_select_prompt(self.message, self.input)

        choices = [ListOption(i, self.options[i]) for i in self.view.indices]
        page = paginate(self.config.page_size, choices, self.cursor)
        backend.render_counted_options(page, self.counts)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class MultiCount(PromptBuilder[list[tuple[int, T]]], Generic[T]):
    """Let the user pick a quantity for each option.

    Counts never drop below zero. ``prompt`` returns ``(count, value)`` pairs
    for the options with a positive count, in the original option order.
    *default* holds ``(index, count)`` pairs.
    """

    message: str
    options: Sequence[T]
    default: Sequence[tuple[int, int]] | None = None
    help_message: str | None = DEFAULT_HELP_MESSAGE
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    starting_cursor: int = 0
    starting_filter_input: str | None = None
    filter_input_enabled: bool = True
    keep_filter: bool = True
    reset_cursor: bool = True
    scorer: Scorer[T] = fuzzy_scorer
    formatter: Formatter[Sequence[CountedListOption[T]]] = format_counted_options
    validators: list[Validator[list[ListOption[T]]]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> MultiCountPrompt[T]:
        return MultiCountPrompt(self)

    def _unwrap(self, answer: list[CountedListOption[T]]) -> list[tuple[int, T]]:
        return [(option.count, option.value) for option in answer]
