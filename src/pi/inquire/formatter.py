"""Default answer formatters.

A formatter turns a submitted answer into the text shown on the final
"answered" line.
"""

from __future__ import annotations

import datetime
from typing import Callable, Sequence, TypeVar

from pi.inquire.date_utils import month_name
from pi.inquire.list_option import CountedListOption, ListOption

T = TypeVar("T")

Formatter = Callable[[T], str]


def format_string(value: str) -> str:
    return value


def format_bool(value: bool) -> str:
    return "Yes" if value else "No"


def format_bool_default(value: bool) -> str:
    """Hint shown next to a confirm prompt's default value."""
    return "Y/n" if value else "y/N"


def format_date(value: datetime.date) -> str:
    """Format like ``July 25, 2021`` without a zero-padded day."""
    return f"{month_name(value.month)} {value.day}, {value.year}"


def format_option(option: ListOption[T]) -> str:
    return str(option.value)


def format_options(options: Sequence[ListOption[T]]) -> str:
    return ", ".join(str(option.value) for option in options)


def format_counted_options(options: Sequence[CountedListOption[T]]) -> str:
    """Format like ``2x apple, 1x pear``."""
    return ", ".join(f"{option.count}x {option.value}" for option in options)


def format_masked(_value: str) -> str:
    return "********"
