"""Prompt types."""

from pi.inquire.prompts.confirm import Confirm
from pi.inquire.prompts.custom_type import CustomType
from pi.inquire.prompts.dateselect import DateSelect
from pi.inquire.prompts.editor import Editor
from pi.inquire.prompts.multicount import MultiCount
from pi.inquire.prompts.multiselect import MultiSelect
from pi.inquire.prompts.one_liners import (
    prompt_confirm,
    prompt_date,
    prompt_float,
    prompt_int,
    prompt_secret,
    prompt_text,
)
from pi.inquire.prompts.password import Password, PasswordDisplayMode
from pi.inquire.prompts.path_select import (
    PathEntry,
    PathSelect,
    PathSelectionMode,
    PathSortingMode,
    accept_extensions,
)
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder, run_prompt
from pi.inquire.prompts.reorder import Reorder
from pi.inquire.prompts.select import Select
from pi.inquire.prompts.text import Text

__all__ = [
    "ActionResult",
    "Confirm",
    "CustomType",
    "DateSelect",
    "Editor",
    "MultiCount",
    "MultiSelect",
    "Password",
    "PasswordDisplayMode",
    "PathEntry",
    "PathSelect",
    "PathSelectionMode",
    "PathSortingMode",
    "Prompt",
    "PromptBuilder",
    "Reorder",
    "Select",
    "Text",
    "accept_extensions",
    "prompt_confirm",
    "prompt_date",
    "prompt_float",
    "prompt_int",
    "prompt_secret",
    "prompt_text",
    "run_prompt",
]
