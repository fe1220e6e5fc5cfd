"""Password prompt with optional confirmation and display toggle."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from pi.inquire.backend import Backend
from pi.inquire.formatter import Formatter, format_masked
from pi.inquire.input import Input, InputAction, input_action_from_key
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.validator import Invalid, Validator, run_validators

DEFAULT_CONFIRMATION_MESSAGE = "Confirmation:"
DEFAULT_CONFIRMATION_ERROR_MESSAGE = "The answers don't match."


class PasswordDisplayMode(enum.Enum):
    """How typed characters are echoed."""

    HIDDEN = "hidden"
    MASKED = "masked"
    FULL = "full"


class ToggleDisplayMode(enum.Enum):
    TOGGLE = "toggleDisplayMode"


PasswordAction = ToggleDisplayMode | InputAction


@dataclass(frozen=True)
class PasswordConfig:
    display_mode: PasswordDisplayMode = PasswordDisplayMode.HIDDEN
    enable_display_toggle: bool = False
    enable_confirmation: bool = True


def password_action_from_key(key: Key, config: PasswordConfig) -> PasswordAction | None:
    if (
        config.enable_display_toggle
        and key.kind is KeyKind.CHAR
        and key.char in ("r", "R")
        and key.has(KeyModifiers.CONTROL)
    ):
        return ToggleDisplayMode.TOGGLE
    return input_action_from_key(key)


class PasswordPrompt(Prompt[PasswordAction, str]):
    """Two-stage state machine: entry, then (optionally) confirmation."""

    def __init__(self, password: Password) -> None:
        self.message = password.message
        self.config = PasswordConfig(
            display_mode=password.display_mode,
            enable_display_toggle=password.enable_display_toggle,
            enable_confirmation=password.enable_confirmation,
        )
        self.help_message = password.help_message
        self.formatter = password.formatter
        self.validators = list(password.validators)
        self.confirmation_message = password.confirmation_message
        self.confirmation_error_message = password.confirmation_error_message

        self.current_mode = password.display_mode
        self.input = Input()
        self.confirmation_input = Input()
        self.confirmation_stage = False
        self.error: Invalid | None = None

    def _active_input(self) -> Input:
        return self.confirmation_input if self.confirmation_stage else self.input

    def _toggle_display_mode(self) -> ActionResult:
        if self.current_mode is PasswordDisplayMode.FULL:
            new_mode = self.config.display_mode
        else:
            new_mode = PasswordDisplayMode.FULL

        if new_mode is self.current_mode:
            return ActionResult.CLEAN
        self.current_mode = new_mode
        return ActionResult.NEEDS_REDRAW

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> PasswordAction | None:
        return password_action_from_key(key, self.config)

    def pre_cancel(self) -> bool:
        if not self.confirmation_stage:
            return True
        if self.current_mode is PasswordDisplayMode.HIDDEN:
            self.input.clear()
        self.confirmation_input.clear()
        self.error = None
        self.confirmation_stage = False
        return False

    def submit(self) -> str | None:
        if not self.confirmation_stage:
            validation = run_validators(self.validators, self.input.content)
            if isinstance(validation, Invalid):
                self.error = validation
                return None
            if not self.config.enable_confirmation:
                return self.input.content

            self.confirmation_input.clear()
            self.error = None
            self.confirmation_stage = True
            return None

        if self.confirmation_input.content == self.input.content:
            return self.confirmation_input.content

        self.confirmation_input.clear()
        self.error = Invalid(self.confirmation_error_message)
        self.confirmation_stage = False
        return None

    def handle(self, action: PasswordAction) -> ActionResult:
        if action is ToggleDisplayMode.TOGGLE:
            return self._toggle_display_mode()
        return ActionResult.from_input(self._active_input().handle(action))

    def format_answer(self, answer: str) -> str:
        return self.formatter(answer)

    def _render_input(self, backend: Backend, message: str, input: Input) -> None:
        if self.current_mode is PasswordDisplayMode.HIDDEN:
            backend.render_password_prompt(message)
        elif self.current_mode is PasswordDisplayMode.MASKED:
            backend.render_prompt_with_masked_input(message, input)
        else:
            backend.render_prompt_with_full_input(message, input)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        self._render_input(backend, self.message, self.input)
        if self.confirmation_stage:
            self._render_input(backend, self.confirmation_message, self.confirmation_input)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class Password(PromptBuilder[str]):
    """Ask for a secret.

    By default nothing is echoed and the user is asked to type the value a
    second time; Ctrl+R reveals the input when ``enable_display_toggle`` is
    set.
    """

    message: str
    help_message: str | None = None
    display_mode: PasswordDisplayMode = PasswordDisplayMode.HIDDEN
    enable_display_toggle: bool = False
    enable_confirmation: bool = True
    confirmation_message: str = DEFAULT_CONFIRMATION_MESSAGE
    confirmation_error_message: str = DEFAULT_CONFIRMATION_ERROR_MESSAGE
    formatter: Formatter[str] = format_masked
    validators: list[Validator[str]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> PasswordPrompt:
        return PasswordPrompt(self)
