"""pi-inquire: interactive terminal prompts."""

# Autocompletion
from pi.inquire.autocompletion import Autocomplete, StaticAutocomplete

# Frame rendering and prompt backend
from pi.inquire.backend import Backend

# Defaults
from pi.inquire.config import DEFAULT_PAGE_SIZE, DEFAULT_VIM_MODE

# Errors
from pi.inquire.errors import (
    CustomUserError,
    InquireError,
    InvalidConfigurationError,
    NotTTYError,
    OperationCanceledError,
    OperationInterruptedError,
)
from pi.inquire.frame import FrameRenderer

# Callbacks
from pi.inquire.formatter import (
    format_bool,
    format_counted_options,
    format_date,
    format_option,
    format_options,
    format_string,
)

# Fuzzy matching and scoring
from pi.inquire.fuzzy import FuzzyMatch, fuzzy_match, fuzzy_score

# Text input buffer
from pi.inquire.input import (
    Delete,
    Input,
    InputActionResult,
    LineDirection,
    Magnitude,
    MoveCursor,
    Write,
)

# Keyboard input
from pi.inquire.keys import Key, KeyKind, KeyModifiers, parse_key
from pi.inquire.list_option import CountedListOption, ListOption
from pi.inquire.parser import parse_bool, parse_number

# Prompts
from pi.inquire.prompts import (
    Confirm,
    CustomType,
    DateSelect,
    Editor,
    MultiCount,
    MultiSelect,
    Password,
    PasswordDisplayMode,
    PathEntry,
    PathSelect,
    PathSelectionMode,
    PathSortingMode,
    Reorder,
    Select,
    Text,
    accept_extensions,
    prompt_confirm,
    prompt_date,
    prompt_float,
    prompt_int,
    prompt_secret,
    prompt_text,
)

# Render configuration
from pi.inquire.render_config import (
    CalendarRenderConfig,
    ErrorMessageRenderConfig,
    IndexPrefix,
    RenderConfig,
    get_global_render_config,
    reset_global_render_config,
    set_global_render_config,
)
from pi.inquire.scoring import Scorer, fuzzy_scorer, substring_scorer
from pi.inquire.style import Attributes, Color, StyleSheet, Styled

# Terminal interface and implementation
from pi.inquire.terminal import ProcessTerminal, Terminal

# Utilities
from pi.inquire.utils import Page, paginate, visible_width
from pi.inquire.validator import (
    Invalid,
    Valid,
    Validation,
    Validator,
    exact_length,
    max_length,
    min_length,
    required,
)

__all__ = [
    # Autocompletion
    "Autocomplete",
    "StaticAutocomplete",
    # Rendering
    "Backend",
    "FrameRenderer",
    # Defaults
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_VIM_MODE",
    # Errors
    "CustomUserError",
    "InquireError",
    "InvalidConfigurationError",
    "NotTTYError",
    "OperationCanceledError",
    "OperationInterruptedError",
    # Formatters and parsers
    "format_bool",
    "format_counted_options",
    "format_date",
    "format_option",
    "format_options",
    "format_string",
    "parse_bool",
    "parse_number",
    # Fuzzy
    "FuzzyMatch",
    "fuzzy_match",
    "fuzzy_score",
    "Scorer",
    "fuzzy_scorer",
    "substring_scorer",
    # Input
    "Delete",
    "Input",
    "InputActionResult",
    "LineDirection",
    "Magnitude",
    "MoveCursor",
    "Write",
    # Keys
    "Key",
    "KeyKind",
    "KeyModifiers",
    "parse_key",
    # Prompts
    "Confirm",
    "CustomType",
    "DateSelect",
    "CountedListOption",
    "Editor",
    "ListOption",
    "MultiCount",
    "MultiSelect",
    "Password",
    "PasswordDisplayMode",
    "PathEntry",
    "PathSelect",
    "PathSelectionMode",
    "PathSortingMode",
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
    # Render configuration
    "Attributes",
    "CalendarRenderConfig",
    "Color",
    "ErrorMessageRenderConfig",
    "IndexPrefix",
    "RenderConfig",
    "StyleSheet",
    "Styled",
    "get_global_render_config",
    "reset_global_render_config",
    "set_global_render_config",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "Page",
    "paginate",
    "visible_width",
    # Validation
    "Invalid",
    "Valid",
    "Validation",
    "Validator",
    "exact_length",
    "max_length",
    "min_length",
    "required",
]
