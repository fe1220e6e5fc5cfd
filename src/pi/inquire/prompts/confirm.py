"""Yes/no prompt built on :class:`~pi.inquire.prompts.custom_type.CustomType`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pi.inquire.formatter import format_bool, format_bool_default
from pi.inquire.parser import Parser, parse_bool
from pi.inquire.prompts.custom_type import CustomType, CustomTypePrompt
from pi.inquire.prompts.prompt import PromptBuilder
from pi.inquire.render_config import RenderConfig, get_global_render_config

DEFAULT_ERROR_MESSAGE = "Invalid answer, try typing 'y' for yes or 'n' for no"


@dataclass
class Confirm(PromptBuilder[bool]):
    """Ask a yes/no question; ``y``/``yes``/``n``/``no`` in any case."""

    message: str
    default: bool | None = None
    help_message: str | None = None
    placeholder: str | None = None
    starting_input: str | None = None
    parser: Parser[bool] = parse_bool
    formatter: Callable[[bool], str] = format_bool
    default_value_formatter: Callable[[bool], str] = format_bool_default
    error_message: str = DEFAULT_ERROR_MESSAGE
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def as_custom_type(self) -> CustomType[bool]:
        return CustomType(
            message=self.message,
            parser=self.parser,
            default=self.default,
            help_message=self.help_message,
            placeholder=self.placeholder,
            starting_input=self.starting_input,
            formatter=self.formatter,
            default_value_formatter=self.default_value_formatter,
            error_message=self.error_message,
            render_config=self.render_config,
        )

    def _build(self) -> CustomTypePrompt[bool]:
        return CustomTypePrompt(self.as_custom_type())
