"""Single-choice list prompt with a fuzzy filter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE
from pi.inquire.errors import InvalidConfigurationError
from pi.inquire.formatter import Formatter, format_option
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.list_navigation import ListAction, list_action_from_key, navigate
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.scoring import Scorer, ScoredView, adjust_cursor, fuzzy_scorer
from pi.inquire.utils import paginate

T = TypeVar("T")

DEFAULT_HELP_MESSAGE = "↑↓ to move, enter to select, type to filter"

SelectAction = ListAction | InputAction


@dataclass(frozen=True)
class SelectConfig:
    vim_mode: bool = DEFAULT_VIM_MODE
    page_size: int = DEFAULT_PAGE_SIZE
    reset_cursor: bool = True
    filter_input_enabled: bool = True


def select_action_from_key(key: Key, config: SelectConfig) -> SelectAction | None:
    action = list_action_from_key(key, config.vim_mode)
    if action is not None:
        return action
    if config.filter_input_enabled:
        return input_action_from_key(key)
    return None


def check_options(options: Sequence[Any], starting_cursor: int) -> None:
    """Reject an empty option list or an out-of-range starting cursor."""
    if not options:
        raise InvalidConfigurationError("Available options can not be empty")
    if not 0 <= starting_cursor < len(options):
        raise InvalidConfigurationError(
            f"Starting cursor index {starting_cursor} is out-of-bounds "
            f"for length {len(options)} of options"
        )


class SelectPrompt(Prompt[SelectAction, ListOption[T]]):
    def __init__(self, select: Select[T]) -> None:
        check_options(select.options, select.starting_cursor)

        self.message = select.message
        self.config = SelectConfig(
            vim_mode=select.vim_mode,
            page_size=select.page_size,
            reset_cursor=select.reset_cursor,
            filter_input_enabled=select.filter_input_enabled,
        )
        self.options = list(select.options)
        self.help_message = select.help_message
        self.formatter = select.formatter
        self.cursor = select.starting_cursor
        self.input: Input | None = (
            Input(select.starting_filter_input or "") if select.filter_input_enabled else None
        )
        self.view: ScoredView[T] = ScoredView(
            self.options, [str(option) for option in self.options], select.scorer
        )

    def _run_scorer(self) -> None:
        filter_text = self.input.content if self.input is not None else ""
        if self.view.refresh(filter_text):
            self.cursor = adjust_cursor(self.cursor, len(self.view), self.config.reset_cursor)

    def _update_cursor(self, position: int) -> ActionResult:
        if position == self.cursor:
            return ActionResult.CLEAN
        self.cursor = position
        return ActionResult.NEEDS_REDRAW

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> SelectAction | None:
        return select_action_from_key(key, self.config)

    def setup(self) -> None:
        self._run_scorer()

    def submit(self) -> ListOption[T] | None:
        if self.cursor >= len(self.view):
            return None
        index = self.view[self.cursor]
        return ListOption(index, self.options[index])

    def handle(self, action: SelectAction) -> ActionResult:
        if isinstance(action, ListAction):
            position = navigate(action, self.cursor, len(self.view), self.config.page_size)
            return self._update_cursor(position)

        if self.input is None:
            return ActionResult.CLEAN
        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._run_scorer()
        return ActionResult.from_input(result)

    def format_answer(self, answer: ListOption[T]) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        backend.render_select_prompt(self.message, self.input)

        choices = [ListOption(i, self.options[i]) for i in self.view.indices]
        page = paginate(self.config.page_size, choices, self.cursor)
        backend.render_options(page)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class Select(PromptBuilder[T], Generic[T]):
    """Let the user pick one option from a list.

    ``prompt()`` returns the chosen value, ``raw_prompt()`` the
    :class:`~pi.inquire.list_option.ListOption` with its original index.
    """

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
    formatter: Formatter[ListOption[T]] = format_option
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> SelectPrompt[T]:
        return SelectPrompt(self)

    def _unwrap(self, answer: ListOption[T]) -> T:
        return answer.value
