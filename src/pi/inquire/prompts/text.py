"""Single-line text prompt with optional autocompletion."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from pi.inquire.autocompletion import Autocomplete
from pi.inquire.backend import Backend
from pi.inquire.config import DEFAULT_PAGE_SIZE
from pi.inquire.errors import CustomUserError
from pi.inquire.formatter import Formatter, format_string
from pi.inquire.input import Input, InputAction, InputActionResult, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.list_option import ListOption
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.utils import paginate
from pi.inquire.validator import Invalid, Validator, run_validators

DEFAULT_HELP_MESSAGE_WITH_AUTOCOMPLETE = "↑↓ to move, tab to autocomplete, enter to submit"


class SuggestionAction(enum.Enum):
    MOVE_UP = "moveToSuggestionAbove"
    MOVE_DOWN = "moveToSuggestionBelow"
    PAGE_UP = "moveToSuggestionPageUp"
    PAGE_DOWN = "moveToSuggestionPageDown"
    USE_CURRENT = "useCurrentSuggestion"


TextAction = SuggestionAction | InputAction


@dataclass(frozen=True)
class TextConfig:
    page_size: int = DEFAULT_PAGE_SIZE


def text_action_from_key(key: Key, _config: TextConfig) -> TextAction | None:
    plain = key.modifiers == KeyModifiers.NONE
    if key.kind is KeyKind.UP and plain:
        return SuggestionAction.MOVE_UP
    if key.kind is KeyKind.DOWN and plain:
        return SuggestionAction.MOVE_DOWN
    if key.kind is KeyKind.PAGE_UP:
        return SuggestionAction.PAGE_UP
    if key.kind is KeyKind.PAGE_DOWN:
        return SuggestionAction.PAGE_DOWN
    if key.kind is KeyKind.TAB and plain:
        return SuggestionAction.USE_CURRENT
    return input_action_from_key(key)


class TextPrompt(Prompt[TextAction, str]):
    def __init__(self, text: Text) -> None:
        self.message = text.message
        self.config = TextConfig(page_size=text.page_size)
        self.default = text.default
        self.formatter = text.formatter
        self.validators = list(text.validators)
        self.autocompleter = text.autocompleter

        self.help_message = text.help_message
        if self.help_message is None and text.autocompleter is not None:
            self.help_message = DEFAULT_HELP_MESSAGE_WITH_AUTOCOMPLETE

        self.input = Input(text.initial_value or "", text.placeholder)
        self.suggestions: list[str] = []
        # None while the typed text is selected rather than a suggestion.
        self.suggestion_cursor: int | None = None
        self.error: Invalid | None = None

    # -- suggestions --------------------------------------------------------

    def _update_suggestions(self) -> None:
        if self.autocompleter is None:
            return
        try:
            self.suggestions = list(self.autocompleter.get_suggestions(self.input.content))
        except Exception as exc:
            raise CustomUserError(exc) from exc
        self.suggestion_cursor = None

    def _highlighted_suggestion(self) -> str | None:
        if self.suggestion_cursor is None:
            return None
        return self.suggestions[self.suggestion_cursor]

    def _move_up(self, qty: int) -> ActionResult:
        cursor = self.suggestion_cursor
        if cursor is None or cursor < qty:
            new_cursor = None
        else:
            new_cursor = cursor - qty
        return self._update_suggestion_cursor(new_cursor)

    def _move_down(self, qty: int) -> ActionResult:
        if not self.suggestions:
            return self._update_suggestion_cursor(None)
        last = len(self.suggestions) - 1
        if self.suggestion_cursor is None:
            new_cursor = min(qty - 1, last)
        else:
            new_cursor = min(self.suggestion_cursor + qty, last)
        return self._update_suggestion_cursor(new_cursor)

    def _update_suggestion_cursor(self, position: int | None) -> ActionResult:
        if position == self.suggestion_cursor:
            return ActionResult.CLEAN
        self.suggestion_cursor = position
        return ActionResult.NEEDS_REDRAW

    def _use_current_suggestion(self) -> ActionResult:
        if self.autocompleter is None:
            return ActionResult.CLEAN
        try:
            replacement = self.autocompleter.get_completion(
                self.input.content, self._highlighted_suggestion()
            )
        except Exception as exc:
            raise CustomUserError(exc) from exc
        if replacement is None:
            return ActionResult.CLEAN

        self.input = Input(replacement, self.input.placeholder)
        self._update_suggestions()
        return ActionResult.NEEDS_REDRAW

    def _current_answer(self) -> str:
        suggestion = self._highlighted_suggestion()
        if suggestion is not None:
            return suggestion
        if self.input.is_empty() and self.default is not None:
            return self.default
        return self.input.content

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> TextAction | None:
        return text_action_from_key(key, self.config)

    def setup(self) -> None:
        self._update_suggestions()

    def submit(self) -> str | None:
        answer = self._current_answer()
        validation = run_validators(self.validators, answer)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: TextAction) -> ActionResult:
        if action is SuggestionAction.MOVE_UP:
            return self._move_up(1)
        if action is SuggestionAction.MOVE_DOWN:
            return self._move_down(1)
        if action is SuggestionAction.PAGE_UP:
            return self._move_up(self.config.page_size)
        if action is SuggestionAction.PAGE_DOWN:
            return self._move_down(self.config.page_size)
        if action is SuggestionAction.USE_CURRENT:
            return self._use_current_suggestion()

        result = self.input.handle(action)
        if result is InputActionResult.CONTENT_CHANGED:
            self._update_suggestions()
        return ActionResult.from_input(result)

    def format_answer(self, answer: str) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_prompt(self.message, self.default, self.input)

        choices = [ListOption(i, value) for i, value in enumerate(self.suggestions)]
        page = paginate(self.config.page_size, choices, self.suggestion_cursor)
        backend.render_suggestions(page)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class Text(PromptBuilder[str]):
    """Ask for a line of free text.

    With an ``autocompleter`` the prompt lists suggestions below the input;
    Up/Down highlight one and Tab asks the autocompleter for a completion.
    """

    message: str
    default: str | None = None
    initial_value: str | None = None
    placeholder: str | None = None
    help_message: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    autocompleter: Autocomplete | None = None
    formatter: Formatter[str] = format_string
    validators: list[Validator[str]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> TextPrompt:
        return TextPrompt(self)
