"""Multiple-choice list prompt with checkboxes and a fuzzy filter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE
from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.formatter import Formatter, format_options
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.prompts.select import check_options
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.scoring import Scorer, ScoredView, adjust_cursor, fuzzy_scorer
from pi.inquire.utils import paginate
from pi.inquire.validator import Invalid, Validator, run_validators

T = TypeVar("T")

DEFAULT_HELP_MESSAGE = (
    "↑↓ to move, space to select one, → to all, ← to none, type to filter"
)


class SelectionAction(enum.Enum):
    TOGGLE_CURRENT_OPTION = "toggleCurrentOption"
    SELECT_ALL = "selectAll"
    CLEAR_SELECTIONS = "clearSelections"


MultiSelectAction = ListAction | SelectionAction | InputAction


@dataclass(frozen=True)
class MultiSelectConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    page_size: int = DEFAULT_PAGE_SIZE
    keep_filter: bool = True
    reset_cursor: bool = True
    filter_input_enabled: bool = True


def multiselect_action_from_key(
    key: Key, config: MultiSelectConfig
) -> MultiSelectAction | None:
    action = list_action_from_key(key, config.vim_mode)
    if action is not None:
        return action

    if config.vim_mode and not config.filter_input_enabled:
        if key.is_char("h"):
            return SelectionAction.CLEAR_SELECTIONS
        if key.is_char("l"):
            return SelectionAction.SELECT_ALL

    plain = key.modifiers == KeyModifiers.NONE
    if key.is_char(" "):
        return SelectionAction.TOGGLE_CURRENT_OPTION
    if key.kind is KeyKind.RIGHT and plain:
        return SelectionAction.SELECT_ALL
    if key.kind is KeyKind.LEFT and plain:
        return SelectionAction.CLEAR_SELECTIONS

    if config.filter_input_enabled:
        return input_action_from_key(key)
    return None


class MultiSelectPrompt(Prompt[MultiSelectAction, list[ListOption[T]]]):
    def __init__(self, multiselect: MultiSelect[T]) -> None:
        options = multiselect.options
        check_options(options, multiselect.starting_cursor)
        for index in multiselect.default or ():
            if not 0 <= index < len(options):
                raise InvalidConfigurationError(
                    f"Index {index} is out-of-bounds for length {len(options)} of options"
                )

        self.message = multiselect.message
        self.config = MultiSelectConfig(
            vim_mode=multiselect.vim_mode,
            page_size=multiselect.page_size,
            keep_filter=multiselect.keep_filter,
            reset_cursor=multiselect.reset_cursor,
            filter_input_enabled=multiselect.filter_input_enabled,
        )
        self.options = list(options)
        self.help_message = multiselect.help_message
        self.formatter = multiselect.formatter
        self.validators = list(multiselect.validators)
        self.cursor = multiselect.starting_cursor
        self.checked: set[int] = set(multiselect.default or ())
        self.input: Input | None = (
            Input(multiselect.starting_filter_input or "")
            if multiselect.filter_input_enabled
            else None
        )
        self.view: ScoredView[T] = ScoredView(
            self.options, [str(option) for option in self.options], multiselect.scorer
        )
        self.error: Invalid | None = None

    def _run_scorer(self) -> None:
        filter_text = self.input.content if self.input is not None else ""
        if self.view.refresh(filter_text):
            self.cursor = adjust_cursor(self.cursor, len(self.view), self.config.reset_cursor)

    def _selection_changed(self) -> ActionResult:
        if not self.config.keep_filter and self.input is not None and not self.input.is_empty():
            self.input.clear()
            self._run_scorer()
        return ActionResult.NEEDS_REDRAW

    def _toggle_current(self) -> ActionResult:
        if self.cursor >= len(self.view):
            return ActionResult.CLEAN
        index = self.view[self.cursor]
        if index in self.checked:
            self.checked.remove(index)
        else:
            self.checked.add(index)
        return self._selection_changed()

    def _checked_options(self) -> list[ListOption[T]]:
        return [ListOption(i, self.options[i]) for i in sorted(self.checked)]

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> MultiSelectAction | None:
        return multiselect_action_from_key(key, self.config)

    def setup(self) -> None:
        self._run_scorer()

    def submit(self) -> list[ListOption[T]] | None:
        answer = self._checked_options()
        validation = run_validators(self.validators, answer)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: MultiSelectAction) -> ActionResult:
        if isinstance(action, ListAction):
            position = navigate(action, self.cursor, len(self.view), self.config.page_size)
            if position == self.cursor:
                return ActionResult.CLEAN
            self.cursor = position
            return ActionResult.NEEDS_REDRAW

        if action is SelectionAction.TOGGLE_CURRENT_OPTION:
            return self._toggle_current()
        if action is SelectionAction.SELECT_ALL:
            self.checked = set(self.view.indices)
            return self._selection_changed()
        if action is SelectionAction.CLEAR_SELECTIONS:
            self.checked.clear()
            return self._selection_changed()

        if self.input is None:
            return ActionResult.CLEAN
        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._run_scorer()
        return ActionResult.from_input(result)

    def format_answer(self, answer: list[ListOption[T]]) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_select_prompt(self.message, self.input)

        choices = [ListOption(i, self.options[i]) for i in self.view.indices]
        page = paginate(self.config.page_size, choices, self.cursor)
        backend.render_options(page, self.checked)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class MultiSelect(PromptBuilder[list[T]], Generic[T]):
    """Let the user check any number of options.

    The answer keeps the original option order regardless of the order in
    which options were checked.
    """

    message: str
    options: Sequence[T]
    default: Sequence[int] | None = None
    help_message: str | None = DEFAULT_HELP_MESSAGE
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    starting_cursor: int = 0
    starting_filter_input: str | None = None
    filter_input_enabled: bool = True
    keep_filter: bool = True
    reset_cursor: bool = True
    scorer: Scorer[T] = fuzzy_scorer
    formatter: Formatter[Sequence[ListOption[T]]] = format_options
    validators: list[Validator[list[ListOption[T]]]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> MultiSelectPrompt[T]:
        return MultiSelectPrompt(self)

    def _unwrap(self, answer: list[ListOption[T]]) -> list[T]:
        return [option.value for option in answer]
