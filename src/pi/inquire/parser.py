"""Parsers used by custom-type prompts.

A parser receives the raw input and returns the typed value, raising
``ValueError`` when the text cannot be converted.
"""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")

Parser = Callable[[str], T]


def parse_bool(text: str) -> bool:
    """Accept ``y``/``yes``/``n``/``no`` in any case."""
    answer = text.lower()
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    raise ValueError(f"not a yes/no answer: {text!r}")


def parse_number(number_type: Callable[[str], T]) -> Parser[T]:
    """Build a parser for a numeric type such as ``int`` or ``float``.

    Surrounding whitespace is ignored.
    """

    def parse(text: str) -> T:
        return number_type(text.strip())

    return parse
