"""Prompt that parses the typed text into an arbitrary type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.input import Input, InputAction, input_action_from_key
from pi.inquire.keys import Key
from pi.inquire.parser import Parser
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.validator import Invalid, Validator, run_validators

T = TypeVar("T")

DEFAULT_ERROR_MESSAGE = "Invalid input"


class CustomTypePrompt(Prompt[InputAction, T]):
    def __init__(self, custom_type: CustomType[T]) -> None:
        self.message = custom_type.message
        self.default = custom_type.default
        self.parser = custom_type.parser
        self.formatter = custom_type.formatter
        self.default_value_formatter = custom_type.default_value_formatter
        self.error_message = custom_type.error_message
        self.help_message = custom_type.help_message
        self.validators = list(custom_type.validators)
        self.input = Input(custom_type.starting_input or "", custom_type.placeholder)
        self.error: Invalid | None = None

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> InputAction | None:
        return input_action_from_key(key)

    def submit(self) -> T | None:
        if self.input.is_empty() and self.default is not None:
            answer = self.default
        else:
            try:
                answer = self.parser(self.input.content)
            except ValueError:
                self.error = Invalid(self.error_message)
                return None

        validation = run_validators(self.validators, answer)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: InputAction) -> ActionResult:
        return ActionResult.from_input(self.input.handle(action))

    def format_answer(self, answer: T) -> str:
        return self.formatter(answer)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        default = (
            self.default_value_formatter(self.default) if self.default is not None else None
        )
        backend.render_prompt(self.message, default, self.input)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class CustomType(PromptBuilder[T], Generic[T]):
    """Ask for text and convert it with ``parser``.

    The parser raises ``ValueError`` for text it cannot convert; the prompt
    then shows ``error_message`` and keeps running.
    """

    message: str
    parser: Parser[T]
    default: T | None = None
    help_message: str | None = None
    placeholder: str | None = None
    starting_input: str | None = None
    formatter: Callable[[T], str] = str
    default_value_formatter: Callable[[T], str] = str
    error_message: str = DEFAULT_ERROR_MESSAGE
    validators: list[Validator[T]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> CustomTypePrompt[T]:
        return CustomTypePrompt(self)
